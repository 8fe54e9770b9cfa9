"""Message-level types for parsed transcript lines."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MessageEvent:
    """A single ``type == "message"`` transcript line, reduced to what aggregation needs."""
    timestamp: int = 0  # epoch ms, 0 when absent
    cost: float = 0.0


@dataclass
class DisplayMessage:
    role: str = ""
    content: str = ""
    timestamp: Optional[datetime] = None
    model: str = ""
    tokens: int = 0
    cost: float = 0.0
    is_error: bool = False
    error_message: str = ""
    tool_calls: list[str] = field(default_factory=list)
    has_thinking: bool = False
