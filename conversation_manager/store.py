"""In-memory conversation store.

State lives for the lifetime of the process. All mutation happens
synchronously inside a single handler on the event loop, so a request never
observes another request's partial update. A multi-threaded host would need
a per-conversation lock around read-mutate-write.
"""

from collections.abc import Iterator

from conversation_manager.log_config import get_logger
from conversation_manager.models import ConversationState

log = get_logger("store")


class ConversationStore:
    """Mapping from conversation identity to its state.

    Entries are created lazily on first lookup and never evicted.

    Example:
        >>> store = ConversationStore()
        >>> state = store.get("conv1")
        >>> state is store.get("conv1")
        True
    """

    def __init__(self):
        self._states: dict[str, ConversationState] = {}
        log.info("ConversationStore initialized")

    def get(self, conversation_id: str) -> ConversationState:
        """Return the state for an identity, creating it on first access."""
        state = self._states.get(conversation_id)
        if state is None:
            log.info(f"Initializing new state for conversation: {conversation_id}")
            state = ConversationState(id=conversation_id)
            self._states[conversation_id] = state
        return state

    def ids(self) -> list[str]:
        """Identities currently tracked, in creation order."""
        return list(self._states)

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[ConversationState]:
        return iter(self._states.values())
