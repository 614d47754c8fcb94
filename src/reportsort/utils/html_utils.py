"""HTML helper utilities for cell text cleanup."""

from __future__ import annotations

import re
import unicodedata

BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
NBSP_RE = re.compile(r"&nbsp;?|\u00a0", re.IGNORECASE)
LINEBREAK_RE = re.compile(r"\r\n|\r|\n")
WS_RE = re.compile(r"\s+")


def collapse_breaks(text: str) -> str:
    """Turn markup line breaks, newlines and non-breaking spaces into plain spaces."""
    text = BR_RE.sub(" ", text)
    text = LINEBREAK_RE.sub(" ", text)
    return NBSP_RE.sub(" ", text)


def strip_whitespace(text: str) -> str:
    return WS_RE.sub("", text)


def strip_currency(text: str) -> str:
    return "".join(ch for ch in text if unicodedata.category(ch) != "Sc")
