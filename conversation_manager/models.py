"""Conversation state model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Phase(str, Enum):
    """Coarse progress marker of a tracked conversation."""

    IDLE = "idle"
    DEFINING_GOAL = "defining_goal"
    EXPLORING = "exploring"
    SUMMARIZING = "summarizing"


@dataclass
class ConversationState:
    """Tracked state of a single conversation.

    Attributes:
        id: Conversation identity, the key in the store
        goal: Current objective, None until set
        summary: Latest generated summary, None until generated
        key_points: Recorded takeaways in insertion order, no duplicates
        phase: Current phase
    """

    id: str
    goal: str | None = None
    summary: str | None = None
    key_points: list[str] = field(default_factory=list)
    phase: Phase = Phase.IDLE

    def add_key_point(self, point: str) -> bool:
        """Append a key point unless the exact text is already recorded.

        Returns:
            True if the point was appended, False if it was a duplicate
        """
        if point in self.key_points:
            return False
        self.key_points.append(point)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using the wire field names."""
        return {
            "id": self.id,
            "goal": self.goal,
            "summary": self.summary,
            "keyPoints": list(self.key_points),
            "phase": self.phase.value,
        }
