"""Load the session metadata index and the cron job name registry."""

import logging
from pathlib import Path

import orjson

from antenna.types import SessionMetadataEntry
from antenna.utils.session_key import parse_session_key

logger = logging.getLogger(__name__)

SESSIONS_INDEX_FILE = "sessions.json"
CRON_JOBS_FILE = Path("cron") / "jobs.json"


def _read_json(path: Path):
    """Read and parse a JSON document, returning None if missing or invalid."""
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        logger.debug("Optional file not found: %s", path)
        return None
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return None

    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        logger.warning("Could not parse %s: %s", path, e)
        return None


def load_session_index(sessions_dir: str | Path) -> dict[str, SessionMetadataEntry]:
    """Load sessions.json as a mapping of session id -> metadata entry.

    The file maps composite keys to entries; the result is re-keyed by each
    entry's embedded ``sessionId``. If two keys share a session id the later
    one wins.
    """
    raw = _read_json(Path(sessions_dir) / SESSIONS_INDEX_FILE)
    if not isinstance(raw, dict):
        return {}

    index: dict[str, SessionMetadataEntry] = {}
    for key, entry in raw.items():
        if not isinstance(entry, dict):
            continue
        session_id = entry.get("sessionId")
        if not isinstance(session_id, str) or not session_id:
            continue

        index[session_id] = SessionMetadataEntry(
            key=parse_session_key(key),
            session_id=session_id,
            label=_str_field(entry, "label"),
            model=_str_field(entry, "model"),
            updated_at=_int_field(entry, "updatedAt"),
            channel=_str_field(entry, "channel"),
            total_tokens=_int_field(entry, "totalTokens"),
        )
    return index


def load_cron_job_names(openclaw_dir: str | Path) -> dict[str, str]:
    """Load cron/jobs.json as a mapping of job id -> display name."""
    raw = _read_json(Path(openclaw_dir) / CRON_JOBS_FILE)
    if not isinstance(raw, dict):
        return {}
    jobs = raw.get("jobs")
    if not isinstance(jobs, list):
        return {}

    names = {}
    for job in jobs:
        if not isinstance(job, dict):
            continue
        job_id = job.get("id")
        if isinstance(job_id, str) and job_id:
            names[job_id] = _str_field(job, "name")
    logger.debug("Loaded %d cron job names", len(names))
    return names


def _str_field(obj: dict, name: str) -> str:
    value = obj.get(name)
    return value if isinstance(value, str) else ""


def _int_field(obj: dict, name: str) -> int:
    value = obj.get(name)
    # bool is an int subclass; treat it as garbage
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)
