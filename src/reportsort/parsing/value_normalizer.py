"""Cell value normalization into comparable strings and numbers.

Every data marker's raw text runs through :func:`normalize` once at scan
time, using the marker's declared type:

 - all types: markup line breaks, newlines and non-breaking spaces collapse
   to a single space, the value is lower-cased and trimmed
 - ``text``: all internal whitespace is removed, so spacing never affects
   text ordering
 - ``number``: thousands commas, percent signs and currency symbols are
   removed; digits, sign and decimal point stay
 - ``date``: nothing further; parsing happens at comparison time

Columns holding several data markers join the normalized values with
``", "`` and always compare as text.
"""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from reportsort.domain.models import TEXT, ValueType
from reportsort.utils import html_utils

__all__ = ["normalize", "normalize_many", "parse_number"]

# Leading numeric prefix, as a browser's parseFloat reads it
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:infinity|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)")


def normalize(raw: str | None, value_type: ValueType | str = TEXT) -> str:
    if not isinstance(value_type, ValueType):
        value_type = ValueType.parse(value_type)
    value = html_utils.collapse_breaks(raw or "").lower().strip()
    if value_type.is_text:
        value = html_utils.strip_whitespace(value)
    elif value_type.is_number:
        value = html_utils.strip_currency(value.replace(",", "").replace("%", "")).strip()
    return value


def normalize_many(items: Iterable[Tuple[str | None, ValueType]]) -> Tuple[str, ValueType]:
    """Normalize each (raw, type) pair and join them into one column value.

    Returns the joined value and the column's effective type: the single
    item's type, or text when there are zero or several items.
    """
    parts = []
    types = []
    for raw, value_type in items:
        parts.append(normalize(raw, value_type))
        types.append(value_type)
    effective = types[0] if len(types) == 1 else TEXT
    return ", ".join(parts), effective


def parse_number(value: str | None) -> float | None:
    """Parse the leading number in ``value``; None when there is none."""
    if not value:
        return None
    m = _FLOAT_PREFIX_RE.match(value.lstrip().lower())
    if not m:
        return None
    token = m.group(0)
    if token.lstrip("+-") == "infinity":
        return float("-inf") if token.startswith("-") else float("inf")
    return float(token)
