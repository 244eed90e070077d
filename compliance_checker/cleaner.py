"""Normalisation of rendered page text before it is sent to the LLM."""
from __future__ import annotations

import re

# Applied in order: later rules expect the output of the earlier ones.
_CLEANUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\n{2,}"), "\n"),
    (re.compile(r"\s+"), " "),
    # Re-introduce line structure lost when whitespace was collapsed.
    (re.compile(r"([.!?])\s+"), r"\1\n"),
    # Page numbers, pagination widgets and phone-like digit noise.
    (re.compile(r"\b(?:[0-9]{1,2}\s?){3,}\b ?"), ""),
    (re.compile(r"[\t\r]"), ""),
)


def clean_webpage_content(raw_text: str) -> str:
    """Return ``raw_text`` with whitespace normalised and one sentence per line."""

    text = raw_text
    for pattern, replacement in _CLEANUP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()
