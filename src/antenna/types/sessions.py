"""Session, index and snapshot types."""

from dataclasses import dataclass, field
from enum import Enum


class SessionKind(str, Enum):
    MAIN = "main"
    SUBAGENT = "subagent"
    CRON = "cron"


@dataclass(frozen=True)
class SessionKey:
    """A parsed composite session key (e.g. ``agent:main:cron:<jobId>``)."""
    raw: str
    kind: SessionKind = SessionKind.MAIN
    cron_job_id: str = ""  # Only set for cron keys


@dataclass(frozen=True)
class SessionMetadataEntry:
    """One row of sessions.json, keyed by the embedded session id."""
    key: SessionKey
    session_id: str
    label: str = ""
    model: str = ""
    updated_at: int = 0  # epoch ms, 0 = unknown
    channel: str = ""
    total_tokens: int = 0


@dataclass
class SessionRecord:
    session_id: str
    name: str
    kind: SessionKind
    model: str = ""
    message_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0
    updated_at: int = 0  # epoch ms
    is_active: bool = False
    key: str = ""
    channel: str = ""
    total_tokens: int = 0

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "name": self.name,
            "kind": self.kind.value,
            "model": self.model,
            "messageCount": self.message_count,
            "totalCost": self.total_cost,
            "todayCost": self.today_cost,
            "updatedAt": self.updated_at,
            "isActive": self.is_active,
        }


@dataclass
class DashboardSnapshot:
    sessions: list[SessionRecord] = field(default_factory=list)
    total_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0

    def to_dict(self) -> dict:
        return {
            "sessions": [s.to_dict() for s in self.sessions],
            "totalCount": self.total_count,
            "totalCost": self.total_cost,
            "todayCost": self.today_cost,
        }


@dataclass
class SessionDetail:
    """Header information for a single session's transcript view."""
    session_id: str
    key: str = ""
    name: str = ""
    kind: SessionKind = SessionKind.MAIN
    model: str = ""
    provider: str = ""
    cwd: str = ""
    message_count: int = 0
    total_tokens: int = 0
    total_cost: float = 0.0
