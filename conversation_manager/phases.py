"""Phase state machine for tracked conversations.

The machine is advisory: every operation is legal in every phase. Phases
only steer the guidance returned by ``suggest_next_step``.

Transitions:
    set goal           any phase        -> exploring
    summarize          any phase        -> summarizing
    record key point   any phase        -> unchanged
    suggest next step  no goal          -> defining_goal
    suggest next step  goal, idle       -> defining_goal
    suggest next step  goal, otherwise  -> unchanged
"""

from dataclasses import dataclass
from enum import Enum

from conversation_manager.models import ConversationState, Phase


class Operation(str, Enum):
    """Operations that can move a conversation between phases."""

    SET_GOAL = "set_conversation_goal"
    RECORD_KEY_POINT = "record_key_point"
    SUMMARIZE = "summarize_conversation"
    SUGGEST_NEXT_STEP = "suggest_next_step"


# Fixed targets; None means the phase is left alone
_FIXED_TRANSITIONS: dict[Operation, Phase | None] = {
    Operation.SET_GOAL: Phase.EXPLORING,
    Operation.SUMMARIZE: Phase.SUMMARIZING,
    Operation.RECORD_KEY_POINT: None,
}

NO_GOAL_SUGGESTION = (
    "We haven't set a goal yet. Let's define the main objective using the "
    "'set_conversation_goal' tool."
)

# Guidance per phase once a goal exists; {goal} is the goal text verbatim
_GOAL_SUGGESTIONS: dict[Phase, str] = {
    Phase.DEFINING_GOAL: (
        'Now that the goal is set to "{goal}", maybe we can start exploring options '
        "or gathering information related to it?"
    ),
    Phase.EXPLORING: (
        'Continuing towards the goal "{goal}", what specific aspect should we focus on '
        "next? Or perhaps we should record some key points?"
    ),
    Phase.SUMMARIZING: (
        'I\'ve just updated the summary. Based on that and our goal "{goal}", '
        "what's the next priority?"
    ),
    Phase.IDLE: (
        'Let\'s get started on the goal "{goal}". We should confirm it or refine it '
        "using 'set_conversation_goal' before exploring further."
    ),
}


@dataclass(frozen=True)
class Suggestion:
    """Guidance text and the phase the conversation moves to."""

    text: str
    phase: Phase


def next_phase(operation: Operation, state: ConversationState) -> Phase:
    """Phase a conversation ends up in after ``operation``."""
    if operation is Operation.SUGGEST_NEXT_STEP:
        return suggest(state).phase
    target = _FIXED_TRANSITIONS[operation]
    return state.phase if target is None else target


def suggest(state: ConversationState) -> Suggestion:
    """Pick the next-step guidance for a conversation.

    Pure: the caller applies the returned phase.
    """
    if not state.goal:
        return Suggestion(NO_GOAL_SUGGESTION, Phase.DEFINING_GOAL)

    text = _GOAL_SUGGESTIONS[state.phase].format(goal=state.goal)
    if state.phase is Phase.IDLE:
        return Suggestion(text, Phase.DEFINING_GOAL)
    return Suggestion(text, state.phase)


def apply(operation: Operation, state: ConversationState) -> Phase:
    """Move ``state`` to the phase ``operation`` leads to and return it."""
    state.phase = next_phase(operation, state)
    return state.phase
