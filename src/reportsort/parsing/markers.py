"""Marker descriptors: class tokens parsed once into typed annotations.

The scanner reads marker classes off each element a single time and keeps
the resulting :class:`MarkerDescriptor` in the host side table, so later
lookups never re-parse class strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from reportsort.config import settings
from reportsort.domain.models import ValueType
from reportsort.host.host_tree import HostTree

__all__ = ["MarkerDescriptor", "parse_markers", "descriptor_for", "DESCRIPTOR_KEY"]

DESCRIPTOR_KEY = "reportsort.markers"


@dataclass(frozen=True, slots=True)
class MarkerDescriptor:
    header_id: Optional[str] = None
    row_index: Optional[int] = None
    column_id: Optional[str] = None
    data_type: Optional[ValueType] = None

    @property
    def is_header(self) -> bool:
        return self.header_id is not None

    @property
    def is_row(self) -> bool:
        return self.row_index is not None

    @property
    def is_column(self) -> bool:
        return self.column_id is not None

    @property
    def is_data(self) -> bool:
        return self.data_type is not None


def _row_index(suffix: str) -> int:
    # sort-row, sort-row-2; anything unparseable counts as the first member
    if not suffix.startswith("-"):
        return 1
    try:
        return int(suffix[1:])
    except ValueError:
        return 1


def parse_markers(tokens: Iterable[str]) -> MarkerDescriptor:
    """Build a descriptor from an element's class tokens (first match per role wins)."""
    header_id = row_index = column_id = data_type = None
    for token in tokens:
        if header_id is None and token.startswith(settings.HEADER_MARKER):
            header_id = token[len(settings.HEADER_MARKER):]
        elif column_id is None and token.startswith(settings.COLUMN_MARKER):
            column_id = token[len(settings.COLUMN_MARKER):]
        elif row_index is None and token.startswith(settings.ROW_MARKER):
            row_index = _row_index(token[len(settings.ROW_MARKER):])
        elif data_type is None and token.startswith(settings.DATA_MARKER):
            suffix = token[len(settings.DATA_MARKER):]
            data_type = ValueType.parse(suffix[1:] if suffix.startswith("-") else suffix)
    return MarkerDescriptor(
        header_id=header_id, row_index=row_index, column_id=column_id, data_type=data_type
    )


def descriptor_for(tree: HostTree, element: Any, *, refresh: bool = False) -> MarkerDescriptor:
    """Cached descriptor for ``element``; ``refresh`` re-parses the class tokens."""
    cached = None if refresh else tree.get_data(element, DESCRIPTOR_KEY)
    if cached is None:
        cached = parse_markers(tree.markers(element))
        tree.set_data(element, DESCRIPTOR_KEY, cached)
    return cached
