"""Request models for the conversation tools.

Field names match the MCP tool arguments. Length constraints are the
preconditions each operation relies on.
"""

from pydantic import BaseModel, ConfigDict, Field

MIN_GOAL_LENGTH = 5
MIN_KEY_POINT_LENGTH = 5
MIN_SUMMARY_SOURCE_LENGTH = 10

CONVERSATION_ID_DESCRIPTION = "Optional ID for the conversation; uses the current session ID if omitted."


class ToolRequest(BaseModel):
    """Fields shared by every conversation tool."""

    model_config = ConfigDict(extra="forbid")

    conversationId: str | list[str] | None = Field(default=None, description=CONVERSATION_ID_DESCRIPTION)


class SetGoalRequest(ToolRequest):
    """Input for set_conversation_goal."""

    goalDescription: str = Field(
        ...,
        min_length=MIN_GOAL_LENGTH,
        description="A clear, concise description of the conversation's desired outcome or objective.",
    )


class RecordKeyPointRequest(ToolRequest):
    """Input for record_key_point."""

    keyPoint: str = Field(
        ...,
        min_length=MIN_KEY_POINT_LENGTH,
        description="The key point, decision, or action item to record.",
    )


class SummarizeRequest(ToolRequest):
    """Input for summarize_conversation."""

    textToSummarize: str = Field(
        ...,
        min_length=MIN_SUMMARY_SOURCE_LENGTH,
        description="The text content (e.g., recent transcript segment) to be summarized.",
    )


class SuggestNextStepRequest(ToolRequest):
    """Input for suggest_next_step."""
