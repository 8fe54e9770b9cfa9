"""Shared test helpers."""

import json
import os
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from antenna.utils.timestamps import to_epoch_ms


def message_line(timestamp_ms: int | None = None, cost: float | None = None, **message) -> str:
    """A transcript line of type "message"."""
    body = dict(message)
    if timestamp_ms is not None:
        body["timestamp"] = timestamp_ms
    if cost is not None:
        body["usage"] = {"cost": {"total": cost}}
    return json.dumps({"type": "message", "message": body})


def write_transcript(
    sessions_dir: Path,
    session_id: str,
    lines: list[str],
    mtime: datetime | None = None,
) -> Path:
    path = sessions_dir / f"{session_id}.jsonl"
    path.write_text("".join(line + "\n" for line in lines))
    if mtime is not None:
        set_mtime(path, mtime)
    return path


def set_mtime(path: Path, when: datetime):
    ts = when.timestamp()
    os.utime(path, (ts, ts))


def write_index(sessions_dir: Path, entries: dict[str, dict]) -> Path:
    path = sessions_dir / "sessions.json"
    path.write_text(json.dumps(entries))
    return path


def write_cron_jobs(openclaw_dir: Path, jobs: dict[str, str]) -> Path:
    path = openclaw_dir / "cron" / "jobs.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({
        "version": 1,
        "jobs": [{"id": job_id, "name": name, "enabled": True} for job_id, name in jobs.items()],
    }))
    return path


def ms(dt: datetime) -> int:
    return to_epoch_ms(dt)


def wait_for_worker(monitor, rounds: int = 10):
    """Wait for background snapshot workers to finish and deliver their signals."""
    for _ in range(rounds):
        worker = monitor._worker
        if worker is not None:
            worker.wait(5000)
        QCoreApplication.processEvents()
        if monitor._worker is None:
            return
