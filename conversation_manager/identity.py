"""Conversation identity resolution.

Every tool call and resource read resolves its conversation identity
independently, in this order:

1. The explicit ``conversationId`` when it is a non-empty string
2. The first element when the explicit id arrived as a list (URI template
   quirk; rejected instead when strict mode is on)
3. The transport session id
4. The configured fallback identity
"""

from collections.abc import Sequence

from conversation_manager.errors import InvalidParamsError
from conversation_manager.log_config import get_logger

log = get_logger("identity")

DEFAULT_CONVERSATION_ID = "default"

ExplicitId = str | Sequence[str] | None


def resolve_conversation_id(
    explicit_id: ExplicitId,
    session_id: str | None = None,
    default: str = DEFAULT_CONVERSATION_ID,
    strict: bool = False,
) -> str:
    """Resolve the conversation identity for one request.

    Args:
        explicit_id: Caller-supplied id, possibly a list from template matching
        session_id: Transport session id, if the transport has one
        default: Fallback identity when nothing else is available
        strict: Raise InvalidParamsError for list-valued ids

    Returns:
        A non-empty identity string
    """
    if isinstance(explicit_id, str):
        if explicit_id:
            return explicit_id
    elif explicit_id is not None:
        values = list(explicit_id)
        if strict:
            raise InvalidParamsError(
                f"Expected a single string for conversationId, but received a list: {values!r}"
            )
        # Compatibility shim: take the first usable element
        if values and isinstance(values[0], str) and values[0]:
            log.warning(f"Unexpected list received for conversationId: {values!r}. Using the first element.")
            return values[0]

    if session_id:
        log.trace(f"No conversationId given, using session id {session_id}")
        return session_id

    log.trace(f"No conversationId or session id, using '{default}'")
    return default
