"""Configuration for Conversation Manager.

Simple dataclass-based configuration with sensible defaults.
Override via environment variables with CONVERSATION_MANAGER_ prefix.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from conversation_manager.log_config import get_logger

log = get_logger("config")

# Look for .env in package directory and parent
_pkg_dir = Path(__file__).parent.parent
_env_loaded = load_dotenv(_pkg_dir / ".env") or load_dotenv(_pkg_dir.parent / ".env")
log.debug(f"Loaded .env file: {_env_loaded}")

TRANSPORTS = ("stdio", "sse", "streamable-http")


def _get_env(key: str, default: str) -> str:
    """Get environment variable with CONVERSATION_MANAGER_ prefix."""
    return os.getenv(f"CONVERSATION_MANAGER_{key}", default)


def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean environment variable."""
    val = os.getenv(f"CONVERSATION_MANAGER_{key}")
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Conversation Manager configuration.

    Attributes:
        server_name: Name advertised to MCP clients (default: ConversationManager)
        default_conversation_id: Identity used when neither an explicit id nor
            a session id is available (default: default)
        summary_max_chars: Characters of source text kept by the default
            summarizer (default: 150)
        summary_label: Prefix of every generated summary
        strict_conversation_ids: Reject list-valued conversation ids instead
            of using their first element (default: False)
        transport: MCP transport, one of stdio, sse, streamable-http
        host: Bind address for the HTTP based transports
        port: Bind port for the HTTP based transports
    """

    server_name: str = field(
        default_factory=lambda: _get_env("SERVER_NAME", "ConversationManager")
    )
    default_conversation_id: str = field(
        default_factory=lambda: _get_env("DEFAULT_CONVERSATION_ID", "default")
    )
    summary_max_chars: int = field(
        default_factory=lambda: int(_get_env("SUMMARY_MAX_CHARS", "150"))
    )
    summary_label: str = field(
        default_factory=lambda: _get_env("SUMMARY_LABEL", "Summary based on text provided: ")
    )
    strict_conversation_ids: bool = field(
        default_factory=lambda: _get_env_bool("STRICT_CONVERSATION_IDS", False)
    )

    # Transport settings
    transport: str = field(
        default_factory=lambda: _get_env("TRANSPORT", "stdio")
    )
    host: str = field(
        default_factory=lambda: _get_env("HOST", "127.0.0.1")
    )
    port: int = field(
        default_factory=lambda: int(_get_env("PORT", "8000"))
    )

    def __post_init__(self):
        """Validate settings and log the effective configuration."""
        log.trace("Initializing Config")

        if self.transport not in TRANSPORTS:
            raise ValueError(
                f"Invalid transport '{self.transport}'. Must be one of: {', '.join(TRANSPORTS)}"
            )
        if self.summary_max_chars <= 0:
            raise ValueError(f"summary_max_chars must be positive, got {self.summary_max_chars}")
        if not self.default_conversation_id:
            raise ValueError("default_conversation_id must not be empty")

        log.debug(f"server_name={self.server_name}")
        log.debug(f"default_conversation_id={self.default_conversation_id}")
        log.debug(f"summary_max_chars={self.summary_max_chars}")
        log.debug(f"strict_conversation_ids={self.strict_conversation_ids}")
        log.debug(f"transport={self.transport}, host={self.host}, port={self.port}")
        log.info(f"Config initialized: server={self.server_name}, transport={self.transport}")
