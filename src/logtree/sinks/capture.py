"""
A sink keeping entries in memory, for tests.
"""

import threading
from dataclasses import dataclass
from typing import List as PyList, Optional, Tuple

from logtree.encoding.encoder import Encoder, default_encoder
from logtree.logger.entry import Level, Sink, SinkEntry
from logtree.rendering.human_renderer import render
from logtree.value.model import Map


@dataclass(frozen=True)
class CapturedEntry:
    """
    An entry together with its encoded and rendered fields.

    Fields are encoded when the entry is logged, so later changes to the
    logged objects don't show up in the capture.
    """

    entry: SinkEntry
    fields: Map
    text: str

    @property
    def level(self) -> Level:
        return self.entry.level

    @property
    def message(self) -> str:
        return self.entry.message


class CaptureSink(Sink):
    """
    Records every entry it receives.

    Example:
        >>> sink = CaptureSink()
        >>> make(sink).info("hello", F("who", "world"))
        >>> sink.messages()
        ['hello']
        >>> sink.entries[0].text
        'who: world'
    """

    def __init__(self, encoder: Optional[Encoder] = None) -> None:
        self.encoder = encoder or default_encoder
        self.entries: PyList[CapturedEntry] = []
        self.syncs = 0
        self._lock = threading.Lock()

    def log_entry(self, entry: SinkEntry) -> None:
        fields = self.encoder.encode_fields(entry.fields)
        captured = CapturedEntry(entry=entry, fields=fields, text=render(fields))
        with self._lock:
            self.entries.append(captured)

    def sync(self) -> None:
        with self._lock:
            self.syncs += 1

    def messages(self) -> PyList[str]:
        return [c.message for c in self.entries]

    def levels(self) -> Tuple[Level, ...]:
        return tuple(c.level for c in self.entries)

    def clear(self) -> None:
        with self._lock:
            self.entries.clear()
            self.syncs = 0
