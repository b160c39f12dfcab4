"""Error types for Conversation Manager."""

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData


class InvalidParamsError(McpError):
    """Request rejected before any conversation state was touched.

    Raised for unknown resource aspects, unknown operations, payloads that
    fail their length preconditions, and (in strict mode) list-valued
    conversation ids. Carries the JSON-RPC INVALID_PARAMS code. A resource
    read answers with that code on the wire; inside a tool call FastMCP
    reports it as an ``isError`` tool result carrying the message.
    """

    def __init__(self, message: str):
        super().__init__(ErrorData(code=INVALID_PARAMS, message=message))
        self.message = message
