"""Split a snapshot into dashboard sections."""

from dataclasses import dataclass, field

from antenna.types import SessionKind, SessionRecord

KIND_BADGES = {
    SessionKind.MAIN: ("MAIN", "cyan"),
    SessionKind.SUBAGENT: ("SUB", "purple"),
    SessionKind.CRON: ("CRON", "orange"),
}


@dataclass
class SessionGroups:
    active: list[SessionRecord] = field(default_factory=list)
    idle: list[SessionRecord] = field(default_factory=list)
    subagents: list[SessionRecord] = field(default_factory=list)
    cron_jobs: list[SessionRecord] = field(default_factory=list)

    @property
    def active_count(self) -> int:
        return len(self.active)

    @property
    def subagent_count(self) -> int:
        return len(self.subagents)

    @property
    def cron_count(self) -> int:
        return len(self.cron_jobs)


def kind_badge(kind: SessionKind) -> tuple[str, str]:
    """Return the (badge text, color) pair for a session kind."""
    return KIND_BADGES.get(kind, KIND_BADGES[SessionKind.MAIN])


def group_sessions(records: list[SessionRecord]) -> SessionGroups:
    """Group records by kind, splitting main sessions on the activity flag.

    Order within each group follows the input order.
    """
    groups = SessionGroups()
    for record in records:
        if record.kind is SessionKind.SUBAGENT:
            groups.subagents.append(record)
        elif record.kind is SessionKind.CRON:
            groups.cron_jobs.append(record)
        elif record.is_active:
            groups.active.append(record)
        else:
            groups.idle.append(record)
    return groups
