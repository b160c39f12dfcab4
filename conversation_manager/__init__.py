"""Conversation Manager - Conversation tracking MCP server.

Tracks per-conversation goals, summaries, key points and phase with:
- FastMCP tools to set a goal, record key points, summarize, and suggest a next step
- A conversation://{conversationId}/{aspect} resource template for reads
- An in-memory store that lives as long as the process
"""

__version__ = "1.0.0"

from conversation_manager.config import Config
from conversation_manager.dispatcher import ConversationTools
from conversation_manager.errors import InvalidParamsError
from conversation_manager.models import ConversationState, Phase
from conversation_manager.resources import ResourceReader
from conversation_manager.store import ConversationStore

__all__ = [
    "Config",
    "ConversationState",
    "ConversationStore",
    "ConversationTools",
    "InvalidParamsError",
    "Phase",
    "ResourceReader",
]
