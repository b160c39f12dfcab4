"""Conversation tool operations.

Each operation resolves the conversation identity, loads (or lazily
creates) the conversation state, and applies exactly one effect. All
mutation is synchronous, so a handler never leaves a partially updated
state behind for another request to see.
"""

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from conversation_manager.config import Config
from conversation_manager.errors import InvalidParamsError
from conversation_manager.identity import ExplicitId, resolve_conversation_id
from conversation_manager.log_config import get_logger, log_timing
from conversation_manager.models import ConversationState
from conversation_manager.phases import Operation, apply, suggest
from conversation_manager.schemas import (
    RecordKeyPointRequest,
    SetGoalRequest,
    SuggestNextStepRequest,
    SummarizeRequest,
    ToolRequest,
)
from conversation_manager.store import ConversationStore
from conversation_manager.summarizer import Summarizer, make_truncating_summarizer

log = get_logger("dispatch")

TOOL_DESCRIPTIONS: dict[Operation, str] = {
    Operation.SET_GOAL: (
        "Sets or updates the primary objective for the current conversation. "
        "This helps keep the dialogue focused."
    ),
    Operation.SUMMARIZE: (
        "Generates and stores a concise summary of the provided text, "
        "typically the recent conversation history."
    ),
    Operation.SUGGEST_NEXT_STEP: (
        "Analyzes the current conversation state (goal, phase) and suggests a logical "
        "next step or topic to keep the conversation productive and on track."
    ),
    Operation.RECORD_KEY_POINT: (
        "Records a significant takeaway, decision, or action item identified during the conversation."
    ),
}

ALREADY_RECORDED_REPLY = "That point seems to be already recorded."
SUMMARY_UPDATED_REPLY = "OK, I've updated the conversation summary."


class ConversationTools:
    """Tool handlers bound to one conversation store.

    Args:
        store: Store shared with the resource reader
        summarizer: ``(text) -> summary``; defaults to the truncating summarizer
        config: Identity fallback, strict mode and summarizer settings
    """

    def __init__(
        self,
        store: ConversationStore,
        summarizer: Summarizer | None = None,
        config: Config | None = None,
    ):
        self.store = store
        self.config = config or Config()
        self.summarizer = summarizer or make_truncating_summarizer(
            max_chars=self.config.summary_max_chars,
            label=self.config.summary_label,
        )
        self._operations: dict[str, tuple[type[ToolRequest], Callable[[Any, str | None], str]]] = {
            Operation.SET_GOAL.value: (
                SetGoalRequest,
                lambda req, sid: self.set_goal(req.goalDescription, req.conversationId, sid),
            ),
            Operation.RECORD_KEY_POINT.value: (
                RecordKeyPointRequest,
                lambda req, sid: self.record_key_point(req.keyPoint, req.conversationId, sid),
            ),
            Operation.SUMMARIZE.value: (
                SummarizeRequest,
                lambda req, sid: self.summarize(req.textToSummarize, req.conversationId, sid),
            ),
            Operation.SUGGEST_NEXT_STEP.value: (
                SuggestNextStepRequest,
                lambda req, sid: self.suggest_next_step(req.conversationId, sid),
            ),
        }

    @property
    def operation_names(self) -> list[str]:
        """Names of all dispatchable operations."""
        return list(self._operations)

    def state_for(self, conversation_id: ExplicitId = None, session_id: str | None = None) -> ConversationState:
        """Resolve the identity and return its (possibly new) state."""
        resolved = resolve_conversation_id(
            conversation_id,
            session_id,
            default=self.config.default_conversation_id,
            strict=self.config.strict_conversation_ids,
        )
        return self.store.get(resolved)

    def set_goal(
        self,
        goal_description: str,
        conversation_id: ExplicitId = None,
        session_id: str | None = None,
    ) -> str:
        """Store the goal verbatim and move to the exploring phase."""
        state = self.state_for(conversation_id, session_id)
        state.goal = goal_description
        apply(Operation.SET_GOAL, state)
        log.info(f"[{state.id}] Goal updated: {goal_description}")
        return f'Conversation goal has been set to: "{goal_description}"'

    def record_key_point(
        self,
        key_point: str,
        conversation_id: ExplicitId = None,
        session_id: str | None = None,
    ) -> str:
        """Append a key point unless the exact text is already recorded."""
        state = self.state_for(conversation_id, session_id)
        if not state.add_key_point(key_point):
            log.info(f"[{state.id}] Key point already recorded: {key_point}")
            return ALREADY_RECORDED_REPLY
        apply(Operation.RECORD_KEY_POINT, state)
        log.info(f"[{state.id}] Key point recorded: {key_point}")
        return f'Noted. Key point recorded: "{key_point}"'

    def summarize(
        self,
        text_to_summarize: str,
        conversation_id: ExplicitId = None,
        session_id: str | None = None,
    ) -> str:
        """Replace the stored summary and move to the summarizing phase."""
        state = self.state_for(conversation_id, session_id)
        log.debug(f"[{state.id}] Summarizing {len(text_to_summarize)} characters")
        # Summarize before touching state so a failing summarizer leaves it intact
        summary = self.summarizer(text_to_summarize)
        state.summary = summary
        apply(Operation.SUMMARIZE, state)
        log.info(f"[{state.id}] Summary updated")
        return SUMMARY_UPDATED_REPLY

    def suggest_next_step(
        self,
        conversation_id: ExplicitId = None,
        session_id: str | None = None,
    ) -> str:
        """Return guidance for the current goal and phase, steering the phase."""
        state = self.state_for(conversation_id, session_id)
        suggestion = suggest(state)
        state.phase = suggestion.phase
        log.info(f"[{state.id}] Suggesting next step: {suggestion.text}")
        return suggestion.text

    def dispatch(self, name: str, arguments: dict[str, Any] | None = None, session_id: str | None = None) -> str:
        """Validate arguments and run the named operation.

        Raises:
            InvalidParamsError: Unknown operation or arguments failing validation.
                Raised before any state is read or created.
        """
        entry = self._operations.get(name)
        if entry is None:
            raise InvalidParamsError(f"Unknown conversation operation requested: {name}")
        model, handler = entry

        try:
            request = model.model_validate(arguments or {})
        except ValidationError as e:
            log.warning(f"Rejected {name} call: {e.error_count()} validation error(s)")
            raise InvalidParamsError(f"Invalid arguments for {name}: {e}") from e

        with log_timing(f"Operation {name}", log):
            return handler(request, session_id)
