"""Read-only conversation aspects.

Served under ``conversation://{conversationId}/{aspect}`` as plain text.
"""

import re
from collections.abc import Callable

from conversation_manager.config import Config
from conversation_manager.errors import InvalidParamsError
from conversation_manager.identity import ExplicitId, resolve_conversation_id
from conversation_manager.log_config import get_logger
from conversation_manager.models import ConversationState
from conversation_manager.store import ConversationStore

log = get_logger("resources")

URI_TEMPLATE = "conversation://{conversationId}/{aspect}"
# Same matching rule FastMCP applies to the template: one path segment per variable
URI_PATTERN = re.compile(r"conversation://(?P<conversationId>[^/]+)/(?P<aspect>[^/]+)")

GOAL_NOT_SET = "No conversation goal has been set yet."
SUMMARY_NOT_AVAILABLE = "No summary is currently available for this conversation."
NO_KEY_POINTS = "No key points have been recorded yet."


def render_goal(state: ConversationState) -> str:
    return state.goal if state.goal is not None else GOAL_NOT_SET


def render_summary(state: ConversationState) -> str:
    return state.summary if state.summary is not None else SUMMARY_NOT_AVAILABLE


def render_state(state: ConversationState) -> str:
    return f"The conversation is currently in the '{state.phase.value}' phase."


def render_key_points(state: ConversationState) -> str:
    if not state.key_points:
        return NO_KEY_POINTS
    return "\n".join(f"- {point}" for point in state.key_points)


ASPECT_RENDERERS: dict[str, Callable[[ConversationState], str]] = {
    "goal": render_goal,
    "summary": render_summary,
    "state": render_state,
    "keyPoints": render_key_points,
}

ASPECTS = tuple(ASPECT_RENDERERS)


def aspect_renderer(aspect: str) -> Callable[[ConversationState], str]:
    """Renderer for a known aspect.

    Raises:
        InvalidParamsError: Unknown aspect
    """
    renderer = ASPECT_RENDERERS.get(aspect)
    if renderer is None:
        raise InvalidParamsError(f"Unknown conversation aspect requested: {aspect}")
    return renderer


class ResourceReader:
    """Render conversation aspects from a shared store."""

    def __init__(self, store: ConversationStore, config: Config | None = None):
        self.store = store
        self.config = config or Config()

    def read(self, conversation_id: ExplicitId, aspect: str, session_id: str | None = None) -> str:
        """Render one aspect of a conversation.

        Reading a never-seen identity creates its state and renders the
        "not set" texts. An unknown aspect is rejected before the store is
        consulted, so it never creates state.

        Raises:
            InvalidParamsError: Unknown aspect
        """
        renderer = aspect_renderer(aspect)

        resolved = resolve_conversation_id(
            conversation_id,
            session_id,
            default=self.config.default_conversation_id,
            strict=self.config.strict_conversation_ids,
        )
        log.info(f"Resource request: conversation://{resolved}/{aspect}")
        return renderer(self.store.get(resolved))

    def complete_aspect(self, prefix: str = "") -> list[str]:
        """Aspect names starting with ``prefix``, for argument completion."""
        return [aspect for aspect in ASPECTS if aspect.startswith(prefix)]
