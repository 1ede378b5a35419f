"""Paragraph splitting for rebuttal documents (one annotation query per paragraph)."""

import re

_BLANK_LINE = re.compile(r"\n\s*\n")


def split_paragraphs(document: str) -> list[str]:
    """Split on blank lines; strip each paragraph and drop empty ones."""
    normalized = document.replace("\r\n", "\n")
    return [p.strip() for p in _BLANK_LINE.split(normalized) if p.strip()]
