"""Histogram types for the trailing 24h activity view."""

from dataclasses import dataclass


@dataclass
class HourlyBucket:
    hour: str        # Slot end time, "HH:MM"
    messages: int = 0
    cost: float = 0.0

    def to_dict(self) -> dict:
        return {"hour": self.hour, "messages": self.messages, "cost": self.cost}
