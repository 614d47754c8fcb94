"""Make marker-annotated reports sortable by any column.

Typical use on a parsed HTML report:

    from reportsort import SoupTree, sortable

    tree = SoupTree.from_html(html)
    controller = sortable(tree.select_root("#report"), tree, orderID="name")
    controller.activate("amount")
    controller.flush()
    html = tree.render()
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from reportsort.config.options import SortOptions
from reportsort.domain.models import Direction, ValueType
from reportsort.host.host_tree import HostTree
from reportsort.host.soup_tree import SoupTree
from reportsort.parsing.errors import ConfigurationError, HostTreeError, ReportSortError
from reportsort.services.controller_registry import ControllerRegistry, controllers
from reportsort.services.html_report import sort_report_html
from reportsort.sorting.interaction_controller import SortController
from reportsort.utils.debounce import DebounceSlot, ManualScheduler, Scheduler

__all__ = [
    "sortable",
    "sort_report_html",
    "SortController",
    "SortOptions",
    "SoupTree",
    "HostTree",
    "Direction",
    "ValueType",
    "ControllerRegistry",
    "controllers",
    "DebounceSlot",
    "ManualScheduler",
    "Scheduler",
    "ReportSortError",
    "ConfigurationError",
    "HostTreeError",
]


def sortable(
    root: Any,
    tree: HostTree,
    options: SortOptions | Mapping[str, Any] | None = None,
    *,
    scheduler: Optional[Scheduler] = None,
    registry: Optional[ControllerRegistry] = None,
    **overrides: Any,
) -> SortController:
    """Return the controller for ``root``, creating and initializing it on first use."""
    if isinstance(options, SortOptions):
        opts = options.merged(**overrides) if overrides else options
    else:
        opts = SortOptions.from_mapping(options, **overrides)
    target = registry if registry is not None else controllers
    return target.get_or_create(root, tree, opts, scheduler=scheduler)
