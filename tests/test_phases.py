"""Tests for the phase state machine."""

import pytest

from conversation_manager.models import ConversationState, Phase
from conversation_manager.phases import NO_GOAL_SUGGESTION, Operation, apply, next_phase, suggest

ALL_PHASES = list(Phase)


class TestFixedTransitions:
    """set goal and summarize jump to fixed phases; record key point stays."""

    @pytest.mark.parametrize("phase", ALL_PHASES)
    def test_set_goal_moves_to_exploring(self, phase):
        state = ConversationState(id="c", phase=phase)
        assert next_phase(Operation.SET_GOAL, state) is Phase.EXPLORING

    @pytest.mark.parametrize("phase", ALL_PHASES)
    def test_summarize_moves_to_summarizing(self, phase):
        state = ConversationState(id="c", phase=phase)
        assert next_phase(Operation.SUMMARIZE, state) is Phase.SUMMARIZING

    @pytest.mark.parametrize("phase", ALL_PHASES)
    def test_record_key_point_keeps_phase(self, phase):
        state = ConversationState(id="c", phase=phase)
        assert next_phase(Operation.RECORD_KEY_POINT, state) is phase

    def test_apply_mutates_state(self):
        state = ConversationState(id="c")
        assert apply(Operation.SET_GOAL, state) is Phase.EXPLORING
        assert state.phase is Phase.EXPLORING


class TestSuggest:
    """suggest_next_step guidance and steering."""

    @pytest.mark.parametrize("phase", ALL_PHASES)
    def test_no_goal_prompts_for_goal(self, phase):
        state = ConversationState(id="c", phase=phase)
        suggestion = suggest(state)

        assert suggestion.phase is Phase.DEFINING_GOAL
        assert suggestion.text == NO_GOAL_SUGGESTION
        assert "set_conversation_goal" in suggestion.text

    @pytest.mark.parametrize("phase", [Phase.DEFINING_GOAL, Phase.EXPLORING, Phase.SUMMARIZING])
    def test_goal_keeps_phase(self, phase):
        state = ConversationState(id="c", goal="Plan a trip", phase=phase)
        suggestion = suggest(state)

        assert suggestion.phase is phase
        assert '"Plan a trip"' in suggestion.text

    def test_goal_while_idle_moves_to_defining_goal(self):
        state = ConversationState(id="c", goal="Plan a trip", phase=Phase.IDLE)
        suggestion = suggest(state)

        assert suggestion.phase is Phase.DEFINING_GOAL
        assert "Plan a trip" in suggestion.text

    def test_texts_differ_per_phase(self):
        texts = {
            suggest(ConversationState(id="c", goal="Plan a trip", phase=phase)).text
            for phase in ALL_PHASES
        }
        assert len(texts) == len(ALL_PHASES)

    def test_suggest_is_pure(self):
        state = ConversationState(id="c")
        suggest(state)
        assert state.phase is Phase.IDLE

    def test_apply_suggest(self):
        state = ConversationState(id="c")
        assert apply(Operation.SUGGEST_NEXT_STEP, state) is Phase.DEFINING_GOAL
