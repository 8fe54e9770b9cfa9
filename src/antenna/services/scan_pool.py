"""Bounded, cancellable fan-out of per-file scans."""

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Sequence, TypeVar

from antenna.errors import ScanTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS = 4


def run_scans(
    func: Callable[[T, threading.Event], R],
    items: Sequence[T],
    max_workers: int = DEFAULT_MAX_WORKERS,
    deadline: float | None = None,
    cancel: threading.Event | None = None,
) -> list[R]:
    """Apply ``func(item, cancel)`` to every item and return results in input order.

    At most ``max_workers`` scans run at once; ``max_workers <= 1`` runs them
    serially on the calling thread. When ``deadline`` (seconds) expires, or
    ``cancel`` is set by the caller, in-flight scans stop between lines and
    ScanTimeoutError is raised instead of returning partial results.
    """
    if cancel is None:
        cancel = threading.Event()
    if not items:
        return []

    if max_workers <= 1 or len(items) == 1:
        return _run_serial(func, items, deadline, cancel)

    pool = ThreadPoolExecutor(
        max_workers=min(max_workers, len(items)),
        thread_name_prefix="antenna-scan",
    )
    try:
        futures = [pool.submit(func, item, cancel) for item in items]
        done, not_done = wait(futures, timeout=deadline, return_when=FIRST_EXCEPTION)
        for future in done:
            if future.exception() is not None:
                cancel.set()
                raise future.exception()
        if not_done:
            cancel.set()
            logger.warning(
                "Scan pass timed out with %d of %d files pending",
                len(not_done), len(items),
            )
            raise ScanTimeoutError(deadline)
        if cancel.is_set():
            raise ScanTimeoutError(deadline)
        return [f.result() for f in futures]
    finally:
        pool.shutdown(wait=True, cancel_futures=True)


def _run_serial(func, items, deadline, cancel):
    timer = None
    if deadline is not None:
        timer = threading.Timer(deadline, cancel.set)
        timer.daemon = True
        timer.start()
    try:
        results = []
        for item in items:
            if cancel.is_set():
                raise ScanTimeoutError(deadline)
            results.append(func(item, cancel))
        if cancel.is_set():
            raise ScanTimeoutError(deadline)
        return results
    finally:
        if timer is not None:
            timer.cancel()
