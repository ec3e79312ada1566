"""Markup stripping applied to free text before it is stored or compared."""

from __future__ import annotations

import re
from typing import Any

from qdrant_memory.core.logger import get_logger

logger = get_logger(__name__)

# Order matters: code is dropped before comments so inline ``//`` inside code
# spans never reaches the comment rule, and URLs lose their scheme before the
# line-comment rule runs.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"`.*?`"), ""),
    (re.compile(r"#{1,6}\s*(.*)"), r"\1"),
    (re.compile(r"!\[(.*?)\]\(.*?\)"), r"\1"),
    (re.compile(r"\[(.*?)\]\(.*?\)"), r"\1"),
    (re.compile(r"(https?://)?(www\.)?([^\s]+\.[^\s]+)"), r"\3"),
    (re.compile(r"<@[!&]?\d+>"), ""),
    (re.compile(r"<[^>]*>"), ""),
    (re.compile(r"^\s*[-*_]{3,}\s*$", re.MULTILINE), ""),
    (re.compile(r"/\*[\s\S]*?\*/"), ""),
    (re.compile(r"//.*"), ""),
    (re.compile(r"\s+"), " "),
    (re.compile(r"\n{3,}"), "\n\n"),
    (re.compile(r"[^a-zA-Z0-9\s\-_./:?=&]"), ""),
)


def _apply_rules(text: str) -> str:
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def normalize_content(text: Any) -> str:
    """Return ``text`` reduced to canonical plain text.

    Dropping disallowed characters can expose new markup (``/!/x`` becomes a
    line comment), so the rules are re-applied until the output is stable.
    Every rule only removes characters or replaces whitespace, which bounds
    the number of passes.
    """
    if not text or not isinstance(text, str):
        logger.warning("Invalid input for preprocessing: %s", type(text).__name__)
        return ""

    current = _apply_rules(text)
    while True:
        following = _apply_rules(current)
        if following == current:
            return current
        current = following


__all__ = ["normalize_content"]
