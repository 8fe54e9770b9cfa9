"""Streaming scanner for OpenClaw JSONL transcripts."""

import logging
import threading
from pathlib import Path
from typing import Iterator

import orjson

from antenna.types import MessageEvent
from antenna.utils.timestamps import parse_iso_timestamp_ms

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024

MESSAGE_TYPE = "message"


class TranscriptScan:
    """Restartable iterable of MessageEvents for one transcript file.

    Each call to ``iter()`` re-opens the file and streams it from the start.
    """

    def __init__(self, file_path: str | Path, cancel: threading.Event | None = None):
        self.path = Path(file_path)
        self._cancel = cancel

    def __iter__(self) -> Iterator[MessageEvent]:
        return iter_message_events(self.path, cancel=self._cancel)

    def __repr__(self):
        return f"TranscriptScan({str(self.path)!r})"


def scan_transcript(file_path: str | Path, cancel: threading.Event | None = None) -> TranscriptScan:
    return TranscriptScan(file_path, cancel=cancel)


def iter_message_events(
    file_path: str | Path,
    cancel: threading.Event | None = None,
) -> Iterator[MessageEvent]:
    """Stream MessageEvents from a transcript, one line at a time.

    Empty, oversized and malformed lines are skipped. A file that cannot be
    opened yields nothing. If ``cancel`` is set the stream stops before the
    next line.
    """
    path = Path(file_path)
    try:
        f = open(path, "rb")
    except OSError as e:
        logger.debug("Transcript not readable: %s (%s)", path, e)
        return

    with f:
        line_num = 0
        for line in f:
            if cancel is not None and cancel.is_set():
                logger.debug("Scan of %s cancelled at line %d", path.name, line_num)
                return
            line_num += 1

            if len(line) > MAX_LINE_SIZE:
                logger.warning(
                    "Line %d in %s exceeds %dMB, skipping",
                    line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
                )
                continue

            event = parse_transcript_line(line)
            if event is None:
                continue
            yield event


def parse_transcript_line(line: bytes | str) -> MessageEvent | None:
    """Parse one transcript line into a MessageEvent.

    Returns None for anything that is not a well-formed message entry:
    blank lines, invalid JSON, non-objects, and other entry types are all
    discarded rather than reported.
    """
    line = line.strip()
    if not line:
        return None

    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError:
        logger.debug("Discarding malformed transcript line")
        return None

    if not isinstance(raw, dict) or raw.get("type") != MESSAGE_TYPE:
        return None

    message = raw.get("message")
    if not isinstance(message, dict):
        return None

    timestamp = _extract_timestamp(message.get("timestamp"))
    if timestamp == 0:
        timestamp = parse_iso_timestamp_ms(raw.get("timestamp"))

    return MessageEvent(timestamp=timestamp, cost=extract_cost(message))


def extract_cost(message: dict) -> float:
    """Read ``usage.cost.total`` from a message body; 0.0 when absent."""
    usage = message.get("usage")
    if not isinstance(usage, dict):
        return 0.0
    cost = usage.get("cost")
    if not isinstance(cost, dict):
        return 0.0
    total = cost.get("total")
    if isinstance(total, bool) or not isinstance(total, (int, float)):
        return 0.0
    return max(float(total), 0.0)


def _extract_timestamp(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(int(value), 0)
