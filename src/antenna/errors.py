"""Exceptions surfaced by the aggregation engine."""


class AntennaError(Exception):
    """Base class for engine errors."""


class StoreUnavailableError(AntennaError):
    """The sessions directory is missing or cannot be listed."""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        msg = f"Session store unavailable: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ScanTimeoutError(AntennaError):
    """An aggregation pass ran past its deadline or was cancelled."""

    def __init__(self, deadline: float | None = None):
        self.deadline = deadline
        if deadline is None:
            super().__init__("Aggregation pass cancelled")
        else:
            super().__init__(f"Aggregation pass exceeded {deadline:g}s deadline")
