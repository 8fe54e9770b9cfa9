"""Fold a session's message events into message and cost totals."""

from dataclasses import dataclass
from typing import Iterable

from antenna.types import MessageEvent


@dataclass
class SessionTotals:
    message_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0


def aggregate_events(events: Iterable[MessageEvent], today_start_ms: int) -> SessionTotals:
    """Count messages and sum costs in file order.

    Costs count toward ``today_cost`` only when the event timestamp is
    strictly after ``today_start_ms``.
    """
    totals = SessionTotals()
    for event in events:
        totals.message_count += 1
        if not event.cost:
            continue
        totals.total_cost += event.cost
        if event.timestamp > today_start_ms:
            totals.today_cost += event.cost
    return totals
