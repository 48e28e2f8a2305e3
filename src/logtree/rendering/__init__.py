"""
logtree Rendering Module - Value trees to text.

Components:
    - render: YAML-like human readable format
    - render_json: Compact or indented JSON, field order preserved
    - quote / quote_key / unquote_key: Single-line quoting of map keys
"""

from logtree.rendering.human_renderer import (
    format_float,
    quote,
    quote_key,
    render,
    unquote_key,
)
from logtree.rendering.json_renderer import render_json

__all__ = [
    "render",
    "render_json",
    "format_float",
    "quote",
    "quote_key",
    "unquote_key",
]
