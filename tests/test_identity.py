"""Tests for conversation identity resolution."""

import pytest

from conversation_manager.errors import InvalidParamsError
from conversation_manager.identity import DEFAULT_CONVERSATION_ID, resolve_conversation_id


class TestResolutionOrder:
    """Explicit id, then list shim, then session id, then default."""

    def test_explicit_id_wins(self):
        assert resolve_conversation_id("conv1", "session-1") == "conv1"

    def test_session_id_fallback(self):
        assert resolve_conversation_id(None, "session-1") == "session-1"

    def test_default_fallback(self):
        assert resolve_conversation_id(None, None) == DEFAULT_CONVERSATION_ID == "default"

    def test_custom_default(self):
        assert resolve_conversation_id(None, None, default="fallback") == "fallback"

    def test_empty_explicit_id_treated_as_absent(self):
        """An empty id never becomes an identity."""
        assert resolve_conversation_id("", "session-1") == "session-1"
        assert resolve_conversation_id("", None) == "default"

    def test_deterministic(self):
        """Identical inputs resolve identically."""
        assert resolve_conversation_id(None, "s") == resolve_conversation_id(None, "s")


class TestListValuedIds:
    """Compatibility shim for list-valued ids."""

    def test_first_element_used(self):
        assert resolve_conversation_id(["conv1", "conv2"], "session-1") == "conv1"

    def test_tuple_accepted(self):
        assert resolve_conversation_id(("conv1",), None) == "conv1"

    def test_empty_list_falls_through(self):
        assert resolve_conversation_id([], "session-1") == "session-1"
        assert resolve_conversation_id([], None) == "default"

    def test_strict_mode_rejects_list(self):
        with pytest.raises(InvalidParamsError, match="Expected a single string"):
            resolve_conversation_id(["conv1"], None, strict=True)

    def test_strict_mode_allows_string(self):
        assert resolve_conversation_id("conv1", None, strict=True) == "conv1"
