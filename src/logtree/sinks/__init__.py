"""
logtree Sinks Module - Where entries end up.

Components:
    - HumanSink: Human readable entries, colored on terminals
    - JSONSink: One JSON object per line
    - CaptureSink: In-memory entries for tests
    - SyncWriter: Serialized writes to a shared stream
    - make_from_settings: A logger configured from Settings
"""

from logtree.sinks.capture import CapturedEntry, CaptureSink
from logtree.sinks.factory import make_from_settings, make_sink
from logtree.sinks.human_sink import HumanSink, format_entry, should_color
from logtree.sinks.json_sink import JSONSink, entry_value
from logtree.sinks.syncwriter import SyncWriter

__all__ = [
    "CaptureSink",
    "CapturedEntry",
    "HumanSink",
    "JSONSink",
    "SyncWriter",
    "entry_value",
    "format_entry",
    "make_from_settings",
    "make_sink",
    "should_color",
]
