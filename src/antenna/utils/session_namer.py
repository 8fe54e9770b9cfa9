"""Resolve display names for sessions."""

from antenna.types import SessionKey, SessionKind
from antenna.utils.timestamps import format_short_datetime

FALLBACK_NAME = "session"


def resolve_session_name(
    session_id: str,
    key: SessionKey | None,
    label: str = "",
    cron_names: dict[str, str] | None = None,
    updated_at_ms: int = 0,
) -> str:
    """Pick a display name: explicit label, then cron job name, then a synthesized one.

    Always returns a non-empty string.
    """
    if label:
        return label

    kind = key.kind if key is not None else SessionKind.MAIN

    if kind is SessionKind.CRON and key.cron_job_id and cron_names:
        name = cron_names.get(key.cron_job_id, "")
        if name:
            return name

    return _synthesize_name(session_id, kind, updated_at_ms) or session_id or FALLBACK_NAME


def _synthesize_name(session_id: str, kind: SessionKind, updated_at_ms: int) -> str:
    if kind is SessionKind.MAIN:
        try:
            return format_short_datetime(updated_at_ms)
        except (OverflowError, OSError, ValueError):
            return session_id[:12]
    if kind is SessionKind.CRON:
        return f"cron-{session_id[:8]}"
    return session_id[:12]
