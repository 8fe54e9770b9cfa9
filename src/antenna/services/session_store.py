"""Read-only view of an OpenClaw session store on disk."""

import logging
import os
import re
from pathlib import Path

from antenna.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_OPENCLAW_DIR = Path.home() / ".openclaw"
SESSIONS_SUBDIR = Path("agents") / "main" / "sessions"
TRANSCRIPT_SUFFIX = ".jsonl"

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class SessionStore:
    """Locates the sessions directory, index and transcripts under an OpenClaw root."""

    def __init__(self, openclaw_dir: str | Path | None = None):
        root = Path(openclaw_dir).expanduser() if openclaw_dir else DEFAULT_OPENCLAW_DIR
        self.openclaw_dir = root
        self.sessions_dir = root / SESSIONS_SUBDIR

    def transcript_path(self, session_id: str) -> Path:
        """Path of a session's transcript. Rejects ids that are not plain file stems."""
        if not is_valid_session_id(session_id):
            raise ValueError(f"Invalid session id: {session_id!r}")
        return self.sessions_dir / f"{session_id}{TRANSCRIPT_SUFFIX}"

    def list_transcripts(self) -> list[Path]:
        """List transcript files, sorted by name.

        Raises StoreUnavailableError if the sessions directory is missing or
        cannot be listed. An empty directory is not an error.
        """
        try:
            entries = list(os.scandir(self.sessions_dir))
        except FileNotFoundError:
            raise StoreUnavailableError(self.sessions_dir, "not found") from None
        except NotADirectoryError:
            raise StoreUnavailableError(self.sessions_dir, "not a directory") from None
        except OSError as e:
            raise StoreUnavailableError(self.sessions_dir, e.strerror or str(e)) from e

        paths = []
        for entry in entries:
            if not entry.name.endswith(TRANSCRIPT_SUFFIX):
                continue
            try:
                if not entry.is_file():
                    continue
            except OSError:
                continue
            paths.append(Path(entry.path))
        paths.sort(key=lambda p: p.name)
        return paths


def session_id_for(path: Path) -> str:
    return path.name[: -len(TRANSCRIPT_SUFFIX)]


def is_valid_session_id(session_id: str) -> bool:
    return bool(session_id) and _SESSION_ID_RE.match(session_id) is not None
