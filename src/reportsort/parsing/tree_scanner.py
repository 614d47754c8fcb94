"""Discovery of headers, row groups and typed column values from marker tags.

The scanner walks the host tree once and builds a :class:`ReportModel`; it
holds no sorting logic. Headers receive a clickable affordance child.

Rows are grouped into spans of N consecutive rows. N comes from the index
suffixes of the first run of rows (``sort-row-1``, ``sort-row-2`` ...):
the running maximum until an index fails to exceed it. Within a span the
row holding column markers is the data row; the others are separators,
placed before (``pre``) or after (``post``) it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from reportsort.config import settings
from reportsort.config.options import SortOptions
from reportsort.domain.models import (
    TEXT,
    DataRow,
    HeaderColumn,
    ReportModel,
    RowColumn,
    RowGroup,
    SeparatorRow,
)
from reportsort.host.host_tree import HostTree
from reportsort.parsing.markers import descriptor_for
from reportsort.parsing.value_normalizer import normalize_many

__all__ = ["scan", "scan_headers", "scan_rows", "group_span", "AFFORDANCE_KEY"]

_log = logging.getLogger(__name__)

AFFORDANCE_KEY = "reportsort.affordance"


def scan(root: Any, tree: HostTree, options: Optional[SortOptions] = None) -> ReportModel:
    options = options or SortOptions()
    headers = scan_headers(root, tree, options)
    groups, span = scan_rows(root, tree)
    _log.debug("scanned %d headers, %d row groups (span %d)", len(headers), len(groups), span)
    return ReportModel(headers=headers, groups=groups, group_span=span)


def scan_headers(root: Any, tree: HostTree, options: SortOptions) -> List[HeaderColumn]:
    """Create a HeaderColumn and affordance per header marker, last marker first."""
    headers: List[HeaderColumn] = []
    seen: set[str] = set()
    for element in reversed(tree.find_marked(root, settings.HEADER_MARKER)):
        header_id = descriptor_for(tree, element, refresh=True).header_id or ""
        if header_id in seen:
            _log.warning("duplicate header id %r ignored", header_id)
            continue
        seen.add(header_id)

        previous = tree.get_data(element, AFFORDANCE_KEY)
        if previous is not None:
            tree.detach(previous)
        affordance = tree.create_child(
            element,
            "div",
            {
                "id": f"{settings.AFFORDANCE_ID_PREFIX}{header_id}",
                "class": options.affordance_marker,
                "data-order": options.order.value,
                "data-order-id": header_id,
                "column-order": options.order.value,
            },
        )
        tree.set_data(element, AFFORDANCE_KEY, affordance)
        tree.mark_positioned(element)
        headers.append(
            HeaderColumn(element=element, id=header_id, order=options.order, affordance=affordance)
        )
    return headers


def group_span(indices: Iterable[int]) -> int:
    """Rows per group: running maximum of the first strictly increasing run."""
    maximum = 0
    for index in indices:
        if index > maximum:
            maximum = index
        else:
            break
    return max(maximum, 1)


def scan_rows(root: Any, tree: HostTree) -> tuple[List[RowGroup], int]:
    rows = tree.find_marked(root, settings.ROW_MARKER)
    if not rows:
        return [], 1
    span = group_span(descriptor_for(tree, r, refresh=True).row_index or 1 for r in rows)
    groups: List[RowGroup] = []
    for start in range(0, len(rows), span):
        groups.append(_build_group(len(groups), rows[start : start + span], tree))
    return groups, span


def _build_group(group_id: int, rows: Sequence[Any], tree: HostTree) -> RowGroup:
    group = RowGroup(group_id=group_id)
    for row in rows:
        columns = _top_level_columns(row, tree)
        if not columns:
            position = "post" if group.data_row is not None else "pre"
            group.separators.append(SeparatorRow(element=row, position=position))
            continue
        if group.data_row is not None:
            # Last data row wins; everything ahead of it now renders before it
            _log.warning("group %d has more than one data row; keeping the last", group_id)
            pre = [s for s in group.separators if s.position == "pre"]
            post = [s for s in group.separators if s.position == "post"]
            demoted = SeparatorRow(element=group.data_row.element, position="pre")
            group.separators = pre + [demoted] + [SeparatorRow(s.element, "pre") for s in post]
        group.data_row = DataRow(element=row, columns=[_build_column(c, tree) for c in columns])
    return group


def _top_level_columns(row: Any, tree: HostTree) -> List[Any]:
    candidates = tree.find_marked(row, settings.COLUMN_MARKER)
    if len(candidates) < 2:
        return candidates
    marked = {id(c) for c in candidates}
    out = []
    for column in candidates:
        node = tree.parent(column)
        nested = False
        while node is not None and node is not row:
            if id(node) in marked:
                nested = True
                break
            node = tree.parent(node)
        if not nested:
            out.append(column)
    return out


def _build_column(column: Any, tree: HostTree) -> RowColumn:
    descriptor = descriptor_for(tree, column, refresh=True)
    data_elements = tree.find_marked(column, settings.DATA_MARKER)
    if not data_elements and descriptor.is_data:
        data_elements = [column]
    items = []
    for element in data_elements:
        value_type = descriptor_for(tree, element, refresh=True).data_type or TEXT
        items.append((tree.read_value(element), value_type))
    value, value_type = normalize_many(items)
    return RowColumn(element=column, id=descriptor.column_id or "", value=value, type=value_type)
