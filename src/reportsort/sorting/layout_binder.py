"""Re-attach sorted row groups into the host tree."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from reportsort.domain.models import RowGroup
from reportsort.host.host_tree import HostTree

__all__ = ["render"]

_log = logging.getLogger(__name__)


def _group_parent(group: RowGroup, tree: HostTree) -> Optional[Any]:
    for element in group.elements():
        parent = tree.parent(element)
        if parent is not None:
            return parent
    return None


def render(
    groups: Sequence[RowGroup],
    tree: HostTree,
    *,
    alternating_marker: Optional[str] = None,
) -> None:
    """Move every group's rows to the end of its container, in ``groups`` order.

    Pre separators, the data row and post separators keep their relative
    order. Data rows at odd render positions carry ``alternating_marker``.
    """
    for position, group in enumerate(groups):
        parent = _group_parent(group, tree)
        if parent is None:
            _log.warning("group %d has no attached rows; skipped", group.group_id)
            continue

        for sep in group.pre_separators:
            tree.detach(sep.element)
            tree.append(parent, sep.element)

        if group.data_row is not None:
            row = group.data_row.element
            if alternating_marker:
                tree.remove_marker(row, alternating_marker)
                if position % 2 != 0:
                    tree.add_marker(row, alternating_marker)
            tree.detach(row)
            tree.append(parent, row)

        for sep in group.post_separators:
            tree.detach(sep.element)
            tree.append(parent, sep.element)
