"""Parse OpenClaw composite session keys.

Keys are colon-delimited, e.g.::

    agent:main:main
    agent:main:subagent:7f3c...
    agent:main:cron:<jobId>

The third segment selects the session kind; for cron keys the fourth
segment is the cron job id.
"""

from antenna.types import SessionKey, SessionKind

KEY_DELIMITER = ":"

_KIND_SEGMENTS = {
    "cron": SessionKind.CRON,
    "subagent": SessionKind.SUBAGENT,
}


def classify_key(key: str) -> SessionKind:
    """Return the session kind encoded in a composite key.

    Keys with fewer than three segments, or an unrecognised third segment,
    are MAIN.
    """
    parts = key.split(KEY_DELIMITER)
    if len(parts) < 3:
        return SessionKind.MAIN
    return _KIND_SEGMENTS.get(parts[2], SessionKind.MAIN)


def parse_session_key(key: str) -> SessionKey:
    """Parse a composite key into a SessionKey."""
    kind = classify_key(key)
    cron_job_id = ""
    if kind is SessionKind.CRON:
        parts = key.split(KEY_DELIMITER)
        if len(parts) >= 4:
            cron_job_id = parts[3]
    return SessionKey(raw=key, kind=kind, cron_job_id=cron_job_id)
