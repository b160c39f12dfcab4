"""Shared pytest fixtures for Conversation Manager tests."""

from __future__ import annotations

import pytest

from conversation_manager.config import Config
from conversation_manager.dispatcher import ConversationTools
from conversation_manager.resources import ResourceReader
from conversation_manager.store import ConversationStore


@pytest.fixture
def config(monkeypatch):
    """Config built from defaults, ignoring any CONVERSATION_MANAGER_* in the environment."""
    for key in (
        "SERVER_NAME",
        "DEFAULT_CONVERSATION_ID",
        "SUMMARY_MAX_CHARS",
        "SUMMARY_LABEL",
        "STRICT_CONVERSATION_IDS",
        "TRANSPORT",
        "HOST",
        "PORT",
    ):
        monkeypatch.delenv(f"CONVERSATION_MANAGER_{key}", raising=False)
    return Config()


@pytest.fixture
def store():
    """Fresh, empty conversation store."""
    return ConversationStore()


@pytest.fixture
def tools(store, config):
    """Tool handlers bound to the shared store."""
    return ConversationTools(store, config=config)


@pytest.fixture
def reader(store, config):
    """Resource reader bound to the shared store."""
    return ResourceReader(store, config=config)


@pytest.fixture
def long_text():
    """Source text longer than the default summary limit."""
    return (
        "A very long piece of text exceeding one hundred fifty characters, describing "
        "the plan to visit Paris, the museums worth seeing, the budget for the trip, "
        "and the dates that work best for everyone involved."
    )
