"""One-shot sorting of report HTML strings."""

from __future__ import annotations

from typing import Any

from reportsort.config.options import SortOptions
from reportsort.domain.models import Direction
from reportsort.host.soup_tree import SoupTree
from reportsort.sorting.interaction_controller import SortController
from reportsort.utils.debounce import ManualScheduler

__all__ = ["sort_report_html"]


def sort_report_html(
    html: str,
    column_id: str,
    direction: Direction | str = Direction.ASC,
    *,
    root_selector: str | None = None,
    parser: str = "html.parser",
    **options: Any,
) -> str:
    """Parse ``html``, sort the report under ``root_selector`` and return the new markup.

    Header affordances are included in the output with the sorted column's
    direction. An unknown ``column_id`` leaves the rows where they were.
    """
    tree = SoupTree.from_html(html, parser)
    root = tree.select_root(root_selector)
    controller = SortController(
        root, tree, SortOptions.from_mapping(options), scheduler=ManualScheduler()
    ).init()
    controller.sort_column(column_id, direction)
    return tree.render()
