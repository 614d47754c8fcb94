"""Type-aware ordering of row groups by one column.

Comparison is resolved per pair of operands:

 - ``number``: both values parse as floats; if either fails the pair is
   compared as text
 - ``date[-format]``: blanks become the sentinel date, both values parse with
   the column format (or the default), with ``DD``/``MM`` also accepting a
   single digit; if either fails the pair is compared as text
 - ``text``: lower-cased lexicographic comparison

A downgrade only affects the comparison it happened in; column types are
never rewritten. Descending order is the ascending result reversed, so
runs of equal keys come out reversed as well.
"""

from __future__ import annotations

import logging
import re
from functools import cmp_to_key
from typing import List, Optional, Sequence

import arrow
from arrow.parser import ParserError

from reportsort.config import settings
from reportsort.domain.models import TEXT, Direction, RowColumn, RowGroup, ValueType
from reportsort.parsing.value_normalizer import parse_number

__all__ = ["sort", "has_column", "compare_columns", "sentinel_date"]

_log = logging.getLogger(__name__)

_DAY_RE = re.compile(r"(?<!D)DD(?!D)")
_MONTH_RE = re.compile(r"(?<!M)MM(?!M)")


def has_column(groups: Sequence[RowGroup], column_id: str) -> bool:
    return any(g.column(column_id) is not None for g in groups)


def sentinel_date(date_format: str) -> str:
    """The blank-date placeholder rendered in ``date_format``."""
    return arrow.get(settings.SENTINEL_DATE, settings.SENTINEL_DATE_FORMAT).format(date_format)


def _three_way(a, b) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _lenient_format(date_format: str) -> str:
    """Let two-digit day and month tokens also match a single digit."""
    return _MONTH_RE.sub("M", _DAY_RE.sub("D", date_format))


def _parse_date(value: str, date_format: str) -> Optional[arrow.Arrow]:
    try:
        return arrow.get(value, date_format)
    except (ParserError, ValueError, TypeError):
        pass
    lenient = _lenient_format(date_format)
    if lenient == date_format:
        return None
    try:
        return arrow.get(value, lenient)
    except (ParserError, ValueError, TypeError):
        return None


def compare_columns(
    a: Optional[RowColumn],
    b: Optional[RowColumn],
    date_format: str = settings.DEFAULT_DATE_FORMAT,
) -> int:
    """Three-way comparison of two column cells (None = blank cell)."""
    type_a: ValueType = a.type if a is not None else (b.type if b is not None else TEXT)
    type_b: ValueType = b.type if b is not None else type_a
    value_a = a.value if a is not None else ""
    value_b = b.value if b is not None else ""

    if type_a != type_b:
        return _three_way(value_a.lower(), value_b.lower())

    if type_a.is_number:
        num_a, num_b = parse_number(value_a), parse_number(value_b)
        if num_a is not None and num_b is not None:
            return _three_way(num_a, num_b)
        _log.debug("number downgrade to text: %r vs %r", value_a, value_b)
    elif type_a.is_date:
        fmt = type_a.date_format or date_format
        if not value_a:
            value_a = sentinel_date(fmt)
        if not value_b:
            value_b = sentinel_date(fmt)
        date_a, date_b = _parse_date(value_a, fmt), _parse_date(value_b, fmt)
        if date_a is not None and date_b is not None:
            return _three_way(date_a, date_b)
        _log.debug("date downgrade to text: %r vs %r (%s)", value_a, value_b, fmt)

    return _three_way(value_a.lower(), value_b.lower())


def sort(
    groups: List[RowGroup],
    column_id: str,
    direction: Direction | str = Direction.ASC,
    *,
    date_format: str = settings.DEFAULT_DATE_FORMAT,
) -> List[RowGroup]:
    """Reorder ``groups`` in place by ``column_id`` and return the same list.

    Unknown columns leave the list untouched.
    """
    if not has_column(groups, column_id):
        _log.debug("no row carries column %r; order unchanged", column_id)
        return groups

    def _cmp(left: RowGroup, right: RowGroup) -> int:
        return compare_columns(left.column(column_id), right.column(column_id), date_format)

    groups.sort(key=cmp_to_key(_cmp))
    if Direction.coerce(direction) is Direction.DESC:
        groups.reverse()
    return groups
