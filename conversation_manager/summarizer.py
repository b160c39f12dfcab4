"""Pluggable summarization.

A summarizer is any callable ``(text) -> summary``. The default keeps the
head of the text behind a fixed label; swap in a real implementation via
``create_server(summarizer=...)`` or ``ConversationTools(summarizer=...)``.
"""

from collections.abc import Callable

Summarizer = Callable[[str], str]

DEFAULT_SUMMARY_LABEL = "Summary based on text provided: "
DEFAULT_SUMMARY_MAX_CHARS = 150
ELLIPSIS = "..."


def make_truncating_summarizer(
    max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
    label: str = DEFAULT_SUMMARY_LABEL,
) -> Summarizer:
    """Build the placeholder summarizer.

    Args:
        max_chars: Characters of the source text to keep
        label: Prefix of every summary

    Returns:
        Summarizer that truncates, adding an ellipsis only when text was cut
    """

    def summarize(text: str) -> str:
        suffix = ELLIPSIS if len(text) > max_chars else ""
        return f"{label}{text[:max_chars]}{suffix}"

    return summarize


truncating_summarizer = make_truncating_summarizer()
