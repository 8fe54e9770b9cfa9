"""Type definitions for Antenna."""

from antenna.types.messages import MessageEvent, DisplayMessage
from antenna.types.sessions import (
    SessionKind,
    SessionKey,
    SessionMetadataEntry,
    SessionRecord,
    DashboardSnapshot,
    SessionDetail,
)
from antenna.types.activity import HourlyBucket

__all__ = [
    "MessageEvent",
    "DisplayMessage",
    "SessionKind",
    "SessionKey",
    "SessionMetadataEntry",
    "SessionRecord",
    "DashboardSnapshot",
    "SessionDetail",
    "HourlyBucket",
]
