"""
Sink writing entries in a human readable format.

Each entry starts with a header line:

    2024-05-01 12:00:00.000 [info]  worker: job done  <jobs.py:42>

followed by the entry's fields rendered with the human renderer, every line
indented by four spaces:

    2024-05-01 12:00:00.000 [erro]  worker: job failed  <jobs.py:57>
        job: nightly
        error:
          - msg: load failed
            fun: app.jobs.run
            loc: /srv/app/jobs.py:55
          - EOF

A message spanning several lines is replaced by "..." in the header and
logged as the first field, msg.
"""

import os
import sys
from typing import Optional, TextIO

from rich.color import ColorSystem
from rich.style import Style

from logtree.encoding.encoder import Encoder, default_encoder
from logtree.logger.entry import Level, Sink, SinkEntry
from logtree.rendering.human_renderer import quote_key, render
from logtree.sinks.syncwriter import SyncWriter
from logtree.value.fields import F, M

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
FIELD_INDENT = "    "

TIME_STYLE = Style(color="#606366")
LOCATION_STYLE = Style(color="#606366")
LEVEL_STYLES = {
    Level.DEBUG: TIME_STYLE,
    Level.INFO: Style(color="#0091FF"),
    Level.WARN: Style(color="#FFCF0D"),
    Level.ERROR: Style(color="#FF5A0D"),
    Level.CRITICAL: Style(color="#FF5A0D", bold=True),
    Level.FATAL: Style(color="#FF5A0D", bold=True),
}


def is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        # No isatty, or the stream is already closed.
        return False


def should_color(stream: TextIO) -> bool:
    """Color output for terminals, or anywhere when FORCE_COLOR is set."""
    return is_tty(stream) or bool(os.environ.get("FORCE_COLOR"))


def _styled(text: str, style: Style, color: bool) -> str:
    if not color:
        return text
    return style.render(text, color_system=ColorSystem.TRUECOLOR)


def format_timestamp(entry: SinkEntry) -> str:
    t = entry.time
    return t.strftime(TIME_FORMAT) + ".%03d" % (t.microsecond // 1000)


def format_entry(
    entry: SinkEntry,
    color: bool = False,
    encoder: Optional[Encoder] = None,
) -> str:
    """
    Format an entry without indentation and without a trailing newline.

    Args:
        entry: The entry to format
        color: Add ANSI color sequences to the header
        encoder: Encoder for the entry's fields

    Returns:
        str: The header line followed by the rendered fields, if any
    """
    encoder = encoder or default_encoder

    header = _styled(format_timestamp(entry) + " ", TIME_STYLE, color)
    level = "[" + str(entry.level).lower()[:4] + "]"
    header += _styled(level, LEVEL_STYLES.get(entry.level, TIME_STYLE), color)
    header += "  "

    if entry.logger_names:
        header += quote_key(entry.logger_name) + ": "

    fields = entry.fields
    msg = entry.message.strip()
    if "\n" in msg:
        fields = M(F("msg", msg)).combine(fields)
        msg = "..."
    header += msg

    if entry.file:
        loc = "<%s:%d>" % (os.path.basename(entry.file), entry.line)
        header += "  " + _styled(loc, LOCATION_STYLE, color)

    encoded = encoder.encode_fields(fields)
    if not encoded.fields:
        return header
    return header + "\n" + render(encoded)


def indent_fields(text: str) -> str:
    """Indent every non-empty line but the first by four spaces."""
    lines = text.split("\n")
    return "\n".join(
        [lines[0]] + [FIELD_INDENT + line if line else line for line in lines[1:]]
    )


class HumanSink(Sink):
    """
    Writes human readable entries to a stream.

    Args:
        stream: Destination, stderr by default
        color: Force color on or off. Detected from the stream and the
            FORCE_COLOR environment variable when None.
        encoder: Encoder for entry fields
        close_stream: Close the stream when the sink is closed
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        color: Optional[bool] = None,
        encoder: Optional[Encoder] = None,
        close_stream: bool = False,
    ) -> None:
        stream = stream if stream is not None else sys.stderr
        self.writer = SyncWriter(stream, owns_stream=close_stream)
        self.color = should_color(stream) if color is None else color
        self.encoder = encoder or default_encoder

    def log_entry(self, entry: SinkEntry) -> None:
        text = format_entry(entry, color=self.color, encoder=self.encoder)
        self.writer.write(indent_fields(text) + "\n")

    def sync(self) -> None:
        self.writer.sync()

    def close(self) -> None:
        self.writer.close()
