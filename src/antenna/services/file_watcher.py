"""Watch a session store for changes with a debounced signal."""

import logging
import os

from PySide6.QtCore import QObject, Signal, QFileSystemWatcher, QTimer

logger = logging.getLogger(__name__)

DEBOUNCE_MS = 250


class FileWatcher(QObject):
    """Watches the sessions directory and index files of a session store."""

    store_changed = Signal()

    def __init__(self, parent=None, debounce_ms: int = DEBOUNCE_MS):
        super().__init__(parent)
        self._watcher = QFileSystemWatcher(self)
        self._files: set[str] = set()
        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(debounce_ms)
        self._debounce.timeout.connect(self.store_changed.emit)

        self._watcher.fileChanged.connect(self._on_file_changed)
        self._watcher.directoryChanged.connect(self._on_directory_changed)

    def start(self, directory: str, files: list[str] | None = None):
        """Watch a directory plus any of the given files that exist."""
        self.stop()
        if os.path.isdir(directory):
            self._watcher.addPath(directory)
        else:
            logger.debug("Not watching missing directory: %s", directory)
        for path in files or []:
            self._files.add(path)
            if os.path.exists(path):
                self._watcher.addPath(path)

    def stop(self):
        """Stop all file watching."""
        if self._watcher.files():
            self._watcher.removePaths(self._watcher.files())
        if self._watcher.directories():
            self._watcher.removePaths(self._watcher.directories())
        self._files.clear()
        self._debounce.stop()

    def watched_paths(self) -> list[str]:
        return list(self._watcher.directories()) + list(self._watcher.files())

    def _on_file_changed(self, path: str):
        # Qt drops files that were replaced (atomic rename); re-add them
        if path in self._files and os.path.exists(path) and path not in self._watcher.files():
            self._watcher.addPath(path)
        self._debounce.start()

    def _on_directory_changed(self, path: str):
        # Index files may have been created since start()
        for f in self._files:
            if os.path.exists(f) and f not in self._watcher.files():
                self._watcher.addPath(f)
        self._debounce.start()
