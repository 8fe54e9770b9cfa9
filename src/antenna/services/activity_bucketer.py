"""Trailing 24-hour message/cost histogram across all transcripts."""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from antenna.services.scan_pool import DEFAULT_MAX_WORKERS, run_scans
from antenna.services.transcript_scanner import iter_message_events
from antenna.types import HourlyBucket, MessageEvent
from antenna.utils.timestamps import (
    MS_PER_HOUR,
    format_hour_label,
    from_epoch_ms,
    to_epoch_ms,
)

logger = logging.getLogger(__name__)

BUCKET_COUNT = 24
WINDOW_MS = BUCKET_COUNT * MS_PER_HOUR


class _Partial:
    """Per-file slot counts, reduced into the final buckets after all scans finish."""

    __slots__ = ("messages", "costs")

    def __init__(self):
        self.messages = [0] * BUCKET_COUNT
        self.costs = [0.0] * BUCKET_COUNT


def bucket_index(timestamp_ms: int, now_ms: int) -> int | None:
    """Slot index for a timestamp, or None if outside ``(now - 24h, now]``."""
    cutoff_ms = now_ms - WINDOW_MS
    if timestamp_ms <= 0 or timestamp_ms <= cutoff_ms or timestamp_ms > now_ms:
        return None
    return min((timestamp_ms - cutoff_ms) // MS_PER_HOUR, BUCKET_COUNT - 1)


def empty_buckets(now: datetime) -> list[HourlyBucket]:
    """24 zeroed buckets labelled with each slot's upper edge."""
    cutoff_ms = to_epoch_ms(now) - WINDOW_MS
    return [
        HourlyBucket(hour=format_hour_label(from_epoch_ms(cutoff_ms + (i + 1) * MS_PER_HOUR)))
        for i in range(BUCKET_COUNT)
    ]


def bucket_events(events: Iterable[MessageEvent], now_ms: int) -> _Partial:
    partial = _Partial()
    for event in events:
        idx = bucket_index(event.timestamp, now_ms)
        if idx is None:
            continue
        partial.messages[idx] += 1
        partial.costs[idx] += event.cost
    return partial


def build_hourly_activity(
    transcripts: Sequence[Path],
    now: datetime,
    max_workers: int = DEFAULT_MAX_WORKERS,
    deadline: float | None = None,
    cancel: threading.Event | None = None,
) -> list[HourlyBucket]:
    """Scan every transcript and bucket its messages into the trailing 24h window."""
    now_ms = to_epoch_ms(now)

    def scan(path: Path, cancel_event: threading.Event) -> _Partial:
        return bucket_events(iter_message_events(path, cancel=cancel_event), now_ms)

    partials = run_scans(scan, transcripts, max_workers=max_workers, deadline=deadline, cancel=cancel)

    buckets = empty_buckets(now)
    for partial in partials:
        for i, bucket in enumerate(buckets):
            bucket.messages += partial.messages[i]
            bucket.cost += partial.costs[i]
    logger.debug(
        "Bucketed %d messages from %d transcripts",
        sum(b.messages for b in buckets), len(transcripts),
    )
    return buckets
