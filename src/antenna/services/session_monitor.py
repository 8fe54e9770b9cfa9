"""Polling driver that recomputes dashboard snapshots in the background."""

import logging
import threading
from datetime import datetime

from PySide6.QtCore import QObject, Signal, Slot, Property, QTimer, QThread

from antenna.errors import AntennaError
from antenna.services.dashboard import DashboardAssembler
from antenna.services.file_watcher import FileWatcher
from antenna.services.metadata_index import CRON_JOBS_FILE, SESSIONS_INDEX_FILE

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 5000


class _SnapshotWorker(QThread):
    """Background thread running one aggregation pass."""

    result_ready = Signal(int, dict, list, str)  # generation, dashboard, activity, error

    def __init__(self, generation: int, assembler: DashboardAssembler, parent=None):
        super().__init__(parent)
        self._generation = generation
        self._assembler = assembler
        self._cancel = threading.Event()

    def cancel(self):
        self._cancel.set()

    def run(self):
        now = datetime.now()
        try:
            dashboard = self._assembler.get_dashboard(now=now, cancel=self._cancel)
            activity = self._assembler.get_hourly_activity(now=now, cancel=self._cancel)
        except AntennaError as e:
            logger.warning("Snapshot pass failed: %s", e)
            self.result_ready.emit(self._generation, {}, [], str(e))
            return
        except Exception as e:
            logger.exception("Worker failed to build snapshot")
            self.result_ready.emit(self._generation, {}, [], f"Unexpected error: {e}")
            return
        self.result_ready.emit(
            self._generation,
            dashboard.to_dict(),
            [b.to_dict() for b in activity],
            "",
        )


class SessionMonitor(QObject):
    """Refreshes snapshots on a timer and whenever the store changes."""

    snapshot_ready = Signal(dict)
    activity_ready = Signal(list)
    error_occurred = Signal(str)
    loading_changed = Signal()

    def __init__(
        self,
        assembler: DashboardAssembler | None = None,
        parent=None,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        watch: bool = True,
    ):
        super().__init__(parent)
        self._assembler = assembler or DashboardAssembler()
        self._loading = False
        self._generation = 0
        self._pending = False
        self._worker: _SnapshotWorker | None = None
        self._last_snapshot: dict = {}
        self._last_activity: list = []

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(poll_interval_ms)
        self._poll_timer.timeout.connect(self.refresh)

        self._watcher = FileWatcher(self) if watch else None
        if self._watcher is not None:
            self._watcher.store_changed.connect(self.refresh)

    def _get_loading(self) -> bool:
        return self._loading

    def _set_loading(self, value: bool):
        if self._loading != value:
            self._loading = value
            self.loading_changed.emit()

    loading = Property(bool, _get_loading, notify=loading_changed)

    @property
    def last_snapshot(self) -> dict:
        return self._last_snapshot

    @property
    def last_activity(self) -> list:
        return self._last_activity

    @Slot()
    def start(self):
        """Start polling and watching, and kick off an immediate refresh."""
        self._watch_store()
        self._poll_timer.start()
        self.refresh()

    @Slot()
    def refresh(self):
        """Start a pass, or queue one if a pass is already running."""
        if self._worker is not None and self._worker.isRunning():
            self._pending = True
            return

        self._generation += 1
        self._set_loading(True)
        worker = _SnapshotWorker(self._generation, self._assembler, self)
        worker.result_ready.connect(self._on_result_ready)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()

    def set_assembler(self, assembler: DashboardAssembler):
        """Point the monitor at a different store; in-flight results are discarded."""
        self._cancel_worker()
        self._assembler = assembler
        self._watch_store()
        self.refresh()

    def _watch_store(self):
        if self._watcher is None:
            return
        store = self._assembler.store
        self._watcher.start(
            str(store.sessions_dir),
            [
                str(store.sessions_dir / SESSIONS_INDEX_FILE),
                str(store.openclaw_dir / CRON_JOBS_FILE),
            ],
        )

    def _on_result_ready(self, generation: int, dashboard: dict, activity: list, error: str):
        """Callback when the background worker finishes."""
        if generation != self._generation:
            # Stale result from a cancelled pass
            return
        self._worker = None

        if error:
            self.error_occurred.emit(error)
        else:
            self._last_snapshot = dashboard
            self._last_activity = activity
            self.snapshot_ready.emit(dashboard)
            self.activity_ready.emit(activity)
        self._set_loading(False)

        if self._pending:
            self._pending = False
            self.refresh()

    def _cancel_worker(self):
        """Cancel any in-flight pass."""
        self._pending = False
        if self._worker is not None and self._worker.isRunning():
            self._worker.result_ready.disconnect(self._on_result_ready)
            self._worker.cancel()
            self._worker.wait(2000)
        self._worker = None
        self._generation += 1
        self._set_loading(False)

    def cleanup(self):
        """Clean up resources."""
        self._poll_timer.stop()
        if self._watcher is not None:
            self._watcher.stop()
        self._cancel_worker()
