"""loguru setup shared by every Conversation Manager module.

Two sinks are installed at import time:
- stderr, filtered by the global level and per-component overrides
  (stdout is reserved for the MCP stdio transport)
- a daily DEBUG file under ~/.conversation_manager/logs/, rotated at
  10 MB, zipped, and kept for a week

Levels are read from the environment:
- CONVERSATION_MANAGER_LOG_LEVEL: level for everything (default: INFO)
- CONVERSATION_MANAGER_LOG_DISPATCH: override for the operation dispatcher
- CONVERSATION_MANAGER_LOG_STORE: override for the conversation store
- CONVERSATION_MANAGER_LOG_DIR: where the file sink writes
"""

import os
import sys
from contextlib import contextmanager
from pathlib import Path
from time import perf_counter

from loguru import logger

_global_log_level = os.getenv("CONVERSATION_MANAGER_LOG_LEVEL", "INFO").upper()

# Keyed by a substring of the bound logger name
_component_log_levels: dict[str, str] = {
    "dispatch": os.getenv("CONVERSATION_MANAGER_LOG_DISPATCH", "").upper(),
    "store": os.getenv("CONVERSATION_MANAGER_LOG_STORE", "").upper(),
}


def _level_passes(record, level: str) -> bool:
    return record["level"].no >= logger.level(level).no


def _log_filter(record) -> bool:
    """Decide whether a record reaches stderr.

    A component override wins over the global level. Unrecognised level
    names are ignored for overrides and let everything through globally.
    """
    name = record["extra"].get("name", "")

    for component, level in _component_log_levels.items():
        if not level or component not in name:
            continue
        try:
            return _level_passes(record, level)
        except ValueError:
            break

    try:
        return _level_passes(record, _global_log_level)
    except ValueError:
        return True


logger.remove()

_log_dir = Path(
    os.getenv("CONVERSATION_MANAGER_LOG_DIR", str(Path.home() / ".conversation_manager" / "logs"))
)
_log_dir.mkdir(parents=True, exist_ok=True)

logger.add(
    sys.stderr,
    level=0,
    filter=_log_filter,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    colorize=True,
)

logger.add(
    _log_dir / "conversation_manager_{time:YYYY-MM-DD}.log",
    level="DEBUG",
    format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} | {message}",
    rotation="10 MB",
    retention="7 days",
    compression="zip",
    enqueue=True,
)

# Both formats reference extra[name], so unbound records need a fallback
logger.configure(extra={"name": "conversation_manager"})


def get_logger(name: str):
    """Package logger tagged with a component name (e.g. ``"dispatch"``)."""
    return logger.bind(name=name)


@contextmanager
def log_timing(operation: str, log_instance=None, level: str = "debug"):
    """Log how long the enclosed block took, in milliseconds.

    The yielded dict gets its ``elapsed_ms`` entry filled in once the
    block exits, whether or not it raised::

        with log_timing("set_conversation_goal", log) as timing:
            reply = tools.set_goal(...)
        timing["elapsed_ms"]
    """
    log_fn = log_instance or logger
    timing = {"elapsed_ms": 0.0}
    start = perf_counter()
    try:
        yield timing
    finally:
        timing["elapsed_ms"] = (perf_counter() - start) * 1000
        getattr(log_fn, level)(f"{operation}: {timing['elapsed_ms']:.1f}ms")


__all__ = ["logger", "get_logger", "log_timing"]
