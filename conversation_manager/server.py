"""MCP Server for Conversation Manager.

Exposes conversation tracking via MCP protocol with tools, a resource
template, and argument completions.
"""

import sys
from collections.abc import Iterable
from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Completion, CompletionArgument, CompletionContext, PromptReference, ResourceTemplateReference
from pydantic import AnyUrl, Field

from conversation_manager import __version__
from conversation_manager.config import Config
from conversation_manager.dispatcher import TOOL_DESCRIPTIONS, ConversationTools
from conversation_manager.log_config import get_logger
from conversation_manager.phases import Operation
from conversation_manager.resources import URI_PATTERN, URI_TEMPLATE, ResourceReader, aspect_renderer
from conversation_manager.schemas import (
    CONVERSATION_ID_DESCRIPTION,
    MIN_GOAL_LENGTH,
    MIN_KEY_POINT_LENGTH,
    MIN_SUMMARY_SOURCE_LENGTH,
)
from conversation_manager.store import ConversationStore
from conversation_manager.summarizer import Summarizer

log = get_logger("server")

INSTRUCTIONS = (
    "This server assists in managing conversations. Use its tools to set goals, "
    "summarize progress, record key points, and suggest next steps to stay on track."
)

ConversationIdArg = Annotated[str | None, Field(description=CONVERSATION_ID_DESCRIPTION)]


def session_id_from(ctx: Context | None) -> str | None:
    """Transport session id of the current request, if the transport has one.

    Streamable HTTP sends it in the ``mcp-session-id`` header, SSE as the
    ``session_id`` query parameter. stdio has none.
    """
    if ctx is None:
        return None
    try:
        request_context = ctx.request_context
    except ValueError:
        # Called outside a live MCP request (direct invocation)
        return None
    request = request_context.request
    if request is None:
        return None
    headers = getattr(request, "headers", None)
    if headers is not None and headers.get("mcp-session-id"):
        return headers.get("mcp-session-id")
    query_params = getattr(request, "query_params", None)
    if query_params is not None:
        return query_params.get("session_id")
    return None


class ConversationMCP(FastMCP):
    """FastMCP app whose resource reads keep the invalid-parameters error code.

    FastMCP rewraps anything raised inside a resource template as a plain
    ValueError, which reaches the client as an internal error. Unknown
    aspects are therefore rejected here, before the template is rendered.
    """

    async def read_resource(self, uri: AnyUrl | str) -> Iterable[ReadResourceContents]:
        match = URI_PATTERN.fullmatch(str(uri))
        if match is not None:
            aspect_renderer(match.group("aspect"))
        return await super().read_resource(uri)


def create_server(
    config: Config | None = None,
    store: ConversationStore | None = None,
    summarizer: Summarizer | None = None,
) -> ConversationMCP:
    """Build the MCP server around one conversation store.

    Args:
        config: Server configuration (default: from environment)
        store: Conversation store; a fresh one is created if omitted
        summarizer: Optional replacement for the truncating summarizer

    Returns:
        Configured FastMCP application
    """
    config = config or Config()
    store = store if store is not None else ConversationStore()
    tools = ConversationTools(store, summarizer=summarizer, config=config)
    reader = ResourceReader(store, config=config)

    mcp = ConversationMCP(
        config.server_name,
        instructions=INSTRUCTIONS,
        host=config.host,
        port=config.port,
    )
    # serverInfo.version, otherwise the SDK reports its own version
    mcp._mcp_server.version = __version__

    # ═══════════════════════════════════════════════════════════════════════════
    # TOOLS
    # ═══════════════════════════════════════════════════════════════════════════

    @mcp.tool(name=Operation.SET_GOAL.value, description=TOOL_DESCRIPTIONS[Operation.SET_GOAL])
    async def set_conversation_goal(
        goalDescription: Annotated[
            str,
            Field(
                min_length=MIN_GOAL_LENGTH,
                description="A clear, concise description of the conversation's desired outcome or objective.",
            ),
        ],
        ctx: Context,
        conversationId: ConversationIdArg = None,
    ) -> str:
        log.debug("Tool: set_conversation_goal called")
        return tools.dispatch(
            Operation.SET_GOAL.value,
            {"goalDescription": goalDescription, "conversationId": conversationId},
            session_id=session_id_from(ctx),
        )

    @mcp.tool(name=Operation.SUMMARIZE.value, description=TOOL_DESCRIPTIONS[Operation.SUMMARIZE])
    async def summarize_conversation(
        textToSummarize: Annotated[
            str,
            Field(
                min_length=MIN_SUMMARY_SOURCE_LENGTH,
                description="The text content (e.g., recent transcript segment) to be summarized.",
            ),
        ],
        ctx: Context,
        conversationId: ConversationIdArg = None,
    ) -> str:
        log.debug("Tool: summarize_conversation called")
        return tools.dispatch(
            Operation.SUMMARIZE.value,
            {"textToSummarize": textToSummarize, "conversationId": conversationId},
            session_id=session_id_from(ctx),
        )

    @mcp.tool(name=Operation.SUGGEST_NEXT_STEP.value, description=TOOL_DESCRIPTIONS[Operation.SUGGEST_NEXT_STEP])
    async def suggest_next_step(ctx: Context, conversationId: ConversationIdArg = None) -> str:
        log.debug("Tool: suggest_next_step called")
        return tools.dispatch(
            Operation.SUGGEST_NEXT_STEP.value,
            {"conversationId": conversationId},
            session_id=session_id_from(ctx),
        )

    @mcp.tool(name=Operation.RECORD_KEY_POINT.value, description=TOOL_DESCRIPTIONS[Operation.RECORD_KEY_POINT])
    async def record_key_point(
        keyPoint: Annotated[
            str,
            Field(
                min_length=MIN_KEY_POINT_LENGTH,
                description="The key point, decision, or action item to record.",
            ),
        ],
        ctx: Context,
        conversationId: ConversationIdArg = None,
    ) -> str:
        log.debug("Tool: record_key_point called")
        return tools.dispatch(
            Operation.RECORD_KEY_POINT.value,
            {"keyPoint": keyPoint, "conversationId": conversationId},
            session_id=session_id_from(ctx),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # RESOURCES
    # ═══════════════════════════════════════════════════════════════════════════

    @mcp.resource(
        URI_TEMPLATE,
        name="conversationAspect",
        description=(
            "Provides read-only access to aspects of a conversation like its goal, "
            "summary, key points, or current phase."
        ),
        mime_type="text/plain",
    )
    def conversation_aspect(conversationId: str, aspect: str, ctx: Context) -> str:
        return reader.read(conversationId, aspect, session_id=session_id_from(ctx))

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPLETIONS
    # ═══════════════════════════════════════════════════════════════════════════

    @mcp.completion()
    async def complete_conversation_argument(
        ref: PromptReference | ResourceTemplateReference,
        argument: CompletionArgument,
        context: CompletionContext | None,
    ) -> Completion | None:
        if not isinstance(ref, ResourceTemplateReference) or ref.uri != URI_TEMPLATE:
            return None
        if argument.name == "aspect":
            values = reader.complete_aspect(argument.value)
        elif argument.name == "conversationId":
            values = [cid for cid in store.ids() if cid.startswith(argument.value)]
        else:
            return None
        return Completion(values=values, total=len(values), hasMore=False)

    log.info(f"Server '{config.server_name}' created with tools: {', '.join(tools.operation_names)}")
    return mcp


# ═══════════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════


def run_server(config: Config | None = None) -> None:
    """Build and run the MCP server; exit with status 1 if it cannot start."""
    config = config or Config()
    mcp = create_server(config)
    log.info(f"Starting MCP server on {config.transport}")
    try:
        mcp.run(transport=config.transport)
    except Exception:
        log.exception("Failed to start server")
        sys.exit(1)
    log.info("MCP server stopped")


def main():
    """Run the MCP server."""
    run_server()


if __name__ == "__main__":
    main()
