"""Services for Antenna.

Qt-backed services (SessionMonitor, FileWatcher, ConfigManager) are imported
from their modules directly so the aggregation engine stays usable headless.
"""

from antenna.services.dashboard import DashboardAssembler, assemble_snapshot, build_session_record
from antenna.services.activity_bucketer import build_hourly_activity
from antenna.services.cost_aggregator import SessionTotals, aggregate_events
from antenna.services.metadata_index import load_cron_job_names, load_session_index
from antenna.services.session_store import SessionStore
from antenna.services.transcript_detail import load_session_detail
from antenna.services.transcript_scanner import (
    TranscriptScan,
    iter_message_events,
    parse_transcript_line,
    scan_transcript,
)

__all__ = [
    "DashboardAssembler",
    "assemble_snapshot",
    "build_session_record",
    "build_hourly_activity",
    "SessionTotals",
    "aggregate_events",
    "load_cron_job_names",
    "load_session_index",
    "SessionStore",
    "load_session_detail",
    "TranscriptScan",
    "iter_message_events",
    "parse_transcript_line",
    "scan_transcript",
]
