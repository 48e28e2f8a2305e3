"""
Sink writing one JSON object per entry and line.

    {"ts":"2024-05-01T12:00:00.000000Z","level":"ERROR","msg":"job failed",
     "caller":"/srv/app/jobs.py:57","func":"app.jobs.run",
     "logger_names":["worker"],"fields":{"job":"nightly"}}

logger_names and fields are left out when empty.
"""

import sys
from typing import Optional, TextIO

from logtree.encoding.encoder import Encoder, default_encoder
from logtree.logger.entry import Sink, SinkEntry
from logtree.rendering.json_renderer import render_json
from logtree.sinks.syncwriter import SyncWriter
from logtree.value.model import List, Map, String

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def entry_value(entry: SinkEntry, encoder: Optional[Encoder] = None) -> Map:
    """Build the Map a JSON line is rendered from."""
    encoder = encoder or default_encoder
    m = Map.from_pairs(
        [
            ("ts", String(entry.time.strftime(TIME_FORMAT))),
            ("level", String(str(entry.level))),
            ("msg", String(entry.message)),
        ]
    )
    if entry.file:
        m = m.append("caller", String(f"{entry.file}:{entry.line}"))
    if entry.func:
        m = m.append("func", String(entry.func))
    if entry.logger_names:
        m = m.append("logger_names", List(tuple(String(n) for n in entry.logger_names)))

    fields = encoder.encode_fields(entry.fields)
    if fields.fields:
        m = m.append("fields", fields)
    return m


class JSONSink(Sink):
    """
    Writes entries as JSON lines to a stream, stderr by default.

    The stream is closed with the sink only when close_stream is set.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        encoder: Optional[Encoder] = None,
        close_stream: bool = False,
    ) -> None:
        self.writer = SyncWriter(
            stream if stream is not None else sys.stderr, owns_stream=close_stream
        )
        self.encoder = encoder or default_encoder

    def log_entry(self, entry: SinkEntry) -> None:
        line = render_json(entry_value(entry, self.encoder)).decode("utf-8")
        self.writer.write(line + "\n")

    def sync(self) -> None:
        self.writer.sync()

    def close(self) -> None:
        self.writer.close()
