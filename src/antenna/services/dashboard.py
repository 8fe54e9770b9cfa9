"""Assemble the dashboard snapshot from the session store."""

import logging
import threading
from datetime import datetime, timedelta
from pathlib import Path

from antenna.services.activity_bucketer import build_hourly_activity
from antenna.services.cost_aggregator import aggregate_events
from antenna.services.metadata_index import load_cron_job_names, load_session_index
from antenna.services.scan_pool import DEFAULT_MAX_WORKERS, run_scans
from antenna.services.session_store import SessionStore, session_id_for
from antenna.services.transcript_detail import load_session_detail
from antenna.services.transcript_scanner import scan_transcript
from antenna.types import (
    DashboardSnapshot,
    DisplayMessage,
    HourlyBucket,
    SessionDetail,
    SessionKind,
    SessionMetadataEntry,
    SessionRecord,
)
from antenna.utils.session_namer import resolve_session_name
from antenna.utils.timestamps import is_within, start_of_today_ms

logger = logging.getLogger(__name__)

ACTIVE_WINDOW = timedelta(minutes=30)


class DashboardAssembler:
    """Computes snapshots on demand; holds configuration only, never results.

    Every call re-reads the index, the cron registry and all transcripts, so
    concurrent or repeated calls are independent.
    """

    def __init__(
        self,
        openclaw_dir: str | Path | None = None,
        active_window: timedelta = ACTIVE_WINDOW,
        max_workers: int = DEFAULT_MAX_WORKERS,
        deadline: float | None = None,
    ):
        self._store = SessionStore(openclaw_dir)
        self._active_window = active_window
        self._max_workers = max_workers
        self._deadline = deadline

    @property
    def store(self) -> SessionStore:
        return self._store

    def get_dashboard(
        self,
        now: datetime | None = None,
        cancel: threading.Event | None = None,
    ) -> DashboardSnapshot:
        """Build one snapshot: every transcript as a record, newest first, with grand totals."""
        if now is None:
            now = datetime.now()

        transcripts = self._store.list_transcripts()
        index = load_session_index(self._store.sessions_dir)
        cron_names = load_cron_job_names(self._store.openclaw_dir)
        today_start = start_of_today_ms(now)

        def build(path: Path, cancel_event: threading.Event) -> SessionRecord | None:
            return build_session_record(
                path, index, cron_names, now, today_start,
                active_window=self._active_window, cancel=cancel_event,
            )

        records = [
            r for r in run_scans(
                build, transcripts,
                max_workers=self._max_workers, deadline=self._deadline, cancel=cancel,
            )
            if r is not None
        ]
        return assemble_snapshot(records)

    def get_hourly_activity(
        self,
        now: datetime | None = None,
        cancel: threading.Event | None = None,
    ) -> list[HourlyBucket]:
        if now is None:
            now = datetime.now()
        return build_hourly_activity(
            self._store.list_transcripts(), now,
            max_workers=self._max_workers, deadline=self._deadline, cancel=cancel,
        )

    def get_session_detail(self, session_id: str) -> tuple[SessionDetail, list[DisplayMessage]]:
        cron_names = load_cron_job_names(self._store.openclaw_dir)
        return load_session_detail(self._store, session_id, cron_names=cron_names)


def build_session_record(
    path: Path,
    index: dict[str, SessionMetadataEntry],
    cron_names: dict[str, str],
    now: datetime,
    today_start_ms: int,
    active_window: timedelta = ACTIVE_WINDOW,
    cancel: threading.Event | None = None,
) -> SessionRecord | None:
    """Build the record for one transcript, or None if the file vanished."""
    session_id = session_id_for(path)
    try:
        mtime = path.stat().st_mtime
    except OSError:
        logger.debug("Transcript disappeared before stat: %s", path)
        return None

    updated_at = int(mtime * 1000)
    entry = index.get(session_id)
    if entry is not None and entry.updated_at > 0:
        updated_at = entry.updated_at

    key = entry.key if entry is not None else None
    kind = key.kind if key is not None else SessionKind.MAIN
    name = resolve_session_name(
        session_id,
        key,
        label=entry.label if entry is not None else "",
        cron_names=cron_names,
        updated_at_ms=updated_at,
    )
    totals = aggregate_events(scan_transcript(path, cancel=cancel), today_start_ms)

    return SessionRecord(
        session_id=session_id,
        name=name,
        kind=kind,
        model=entry.model if entry is not None else "",
        message_count=totals.message_count,
        total_cost=totals.total_cost,
        today_cost=totals.today_cost,
        updated_at=updated_at,
        is_active=is_within(updated_at, now, active_window),
        key=key.raw if key is not None else "",
        channel=entry.channel if entry is not None else "",
        total_tokens=entry.total_tokens if entry is not None else 0,
    )


def assemble_snapshot(records: list[SessionRecord]) -> DashboardSnapshot:
    """Sort records newest first (stable on ties) and total their costs."""
    ordered = sorted(records, key=lambda r: r.updated_at, reverse=True)
    total_cost = 0.0
    today_cost = 0.0
    for record in ordered:
        total_cost += record.total_cost
        today_cost += record.today_cost
    return DashboardSnapshot(
        sessions=ordered,
        total_count=len(ordered),
        total_cost=total_cost,
        today_cost=today_cost,
    )
