"""Tests for the conversation state model."""

from conversation_manager.models import ConversationState, Phase


class TestPhase:
    """Test the Phase enum."""

    def test_values(self):
        """Phase values are the wire names."""
        assert [p.value for p in Phase] == ["idle", "defining_goal", "exploring", "summarizing"]

    def test_is_str(self):
        """Phase members compare equal to their names."""
        assert Phase.EXPLORING == "exploring"


class TestConversationState:
    """Test ConversationState dataclass."""

    def test_default_values(self):
        """New state is empty and idle."""
        state = ConversationState(id="conv1")

        assert state.id == "conv1"
        assert state.goal is None
        assert state.summary is None
        assert state.key_points == []
        assert state.phase is Phase.IDLE

    def test_key_points_not_shared(self):
        """Each state gets its own key point list."""
        a = ConversationState(id="a")
        b = ConversationState(id="b")
        a.add_key_point("Visit Paris")

        assert b.key_points == []

    def test_add_key_point_rejects_duplicates(self):
        """Exact duplicates are not appended."""
        state = ConversationState(id="conv1")

        assert state.add_key_point("Visit Paris") is True
        assert state.add_key_point("Visit Paris") is False
        assert state.key_points == ["Visit Paris"]

    def test_add_key_point_is_case_sensitive(self):
        """Only exact text matches count as duplicates."""
        state = ConversationState(id="conv1")
        state.add_key_point("Visit Paris")
        state.add_key_point("visit paris")

        assert state.key_points == ["Visit Paris", "visit paris"]

    def test_to_dict(self):
        """to_dict uses wire field names and phase values."""
        state = ConversationState(id="conv1", goal="Plan a trip", phase=Phase.EXPLORING)
        state.add_key_point("Visit Paris")

        assert state.to_dict() == {
            "id": "conv1",
            "goal": "Plan a trip",
            "summary": None,
            "keyPoints": ["Visit Paris"],
            "phase": "exploring",
        }

    def test_to_dict_copies_key_points(self):
        """Mutating the serialized list leaves the state alone."""
        state = ConversationState(id="conv1")
        state.to_dict()["keyPoints"].append("Sneaky")

        assert state.key_points == []
