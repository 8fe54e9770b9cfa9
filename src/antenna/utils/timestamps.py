"""Epoch-millisecond helpers.

All "now" values are timezone-naive local datetimes; day boundaries are
process-local midnight.
"""

from datetime import datetime, timedelta

MS_PER_SECOND = 1000
MS_PER_HOUR = 3600 * MS_PER_SECOND


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * MS_PER_SECOND)


def from_epoch_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / MS_PER_SECOND)


def start_of_today_ms(now: datetime) -> int:
    """Epoch ms of local midnight on the day of ``now``."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return to_epoch_ms(midnight)


def is_within(updated_at_ms: int, now: datetime, window: timedelta) -> bool:
    """True if ``updated_at_ms`` lies less than ``window`` before ``now``."""
    return to_epoch_ms(now) - updated_at_ms < window.total_seconds() * MS_PER_SECOND


def parse_iso_timestamp_ms(value) -> int:
    """Parse an ISO-8601 string ("2026-02-13T12:00:00.000Z") to epoch ms, or 0."""
    if not isinstance(value, str) or not value:
        return 0
    try:
        return to_epoch_ms(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except (ValueError, OverflowError, OSError):
        return 0


def format_short_datetime(ms: int) -> str:
    """Short date/time such as "Oct 18 09:05"."""
    dt = from_epoch_ms(ms)
    return f"{dt.strftime('%b')} {dt.day} {dt.strftime('%H:%M')}"


def format_hour_label(dt: datetime) -> str:
    return dt.strftime("%H:%M")
