"""Per-report sort state, activation debouncing and the scan/sort/render cycle.

Each header affordance cycles through ``none -> default order``,
``asc -> desc`` and ``desc -> asc``; activating one column resets every
other column to ``none``. The new direction is computed and stored when
the activation happens, so repeated activations inside the debounce window
accumulate and the single deferred sort uses the latest direction.

Firing order: loading marker cleared, ``on_pre_sort()``, sort + render,
``on_post_sort()``. Hook exceptions are not caught.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, List, Optional

from reportsort.config import settings
from reportsort.config.options import SortOptions
from reportsort.domain.models import Direction, HeaderColumn, ReportModel, RowGroup
from reportsort.host.host_tree import HostTree
from reportsort.parsing.markers import DESCRIPTOR_KEY
from reportsort.parsing.tree_scanner import AFFORDANCE_KEY, scan
from reportsort.sorting import layout_binder, sort_engine
from reportsort.utils.debounce import DebounceSlot, Scheduler, default_scheduler

__all__ = ["SortController"]

_log = logging.getLogger(__name__)

_MARKER_PREFIXES = (
    settings.HEADER_MARKER,
    settings.ROW_MARKER,
    settings.COLUMN_MARKER,
    settings.DATA_MARKER,
)


class SortController:
    """Owns the report model and column directions for one root element.

    Usage:
        controller = SortController(root, tree, SortOptions(order_id="name")).init()
        controller.activate("amount")   # debounced, fires hooks
        controller.sort_data("amount", "desc")  # immediate, no hooks
    """

    def __init__(
        self,
        root: Any,
        tree: HostTree,
        options: Optional[SortOptions] = None,
        *,
        scheduler: Optional[Scheduler] = None,
    ):
        self.root = root
        self.tree = tree
        self.options = options or SortOptions()
        self._scheduler = scheduler if scheduler is not None else default_scheduler()
        self._slot = DebounceSlot(self._scheduler, self.options.debounce_ms)
        self.model: ReportModel = ReportModel.empty()
        self.states: Dict[str, Direction] = {}

    # Lifecycle ---------------------------------------------------------
    def init(self) -> "SortController":
        """Discard any previous model, rescan the tree and wire affordances."""
        self._slot.cancel()
        self._unbind_affordances()
        self.model = scan(self.root, self.tree, self.options)
        self.states = {h.id: Direction.NONE for h in self.model.headers}
        for header in self.model.headers:
            self.tree.on_activate(header.affordance, partial(self.activate, header.id))
        self._sync_affordances()
        if self.options.order_id is not None:
            self.sort_column(self.options.order_id)
        return self

    def teardown(self) -> None:
        """Cancel pending work and remove affordances; the tree keeps its current order."""
        self._slot.cancel()
        self._unbind_affordances()
        for header in self.model.headers:
            if header.affordance is not None:
                self.tree.detach(header.affordance)
            self.tree.clear_data(header.element, AFFORDANCE_KEY)
        for prefix in _MARKER_PREFIXES:
            for element in self.tree.find_marked(self.root, prefix):
                self.tree.clear_data(element, DESCRIPTOR_KEY)
        self.model = ReportModel.empty()
        self.states = {}

    # Introspection -----------------------------------------------------
    @property
    def headers(self) -> List[HeaderColumn]:
        return self.model.headers

    @property
    def groups(self) -> List[RowGroup]:
        return self.model.groups

    @property
    def pending(self) -> bool:
        return self._slot.pending

    def direction(self, column_id: str) -> Direction:
        return self.states.get(column_id, Direction.NONE)

    def next_direction(self, column_id: str) -> Direction:
        current = self.direction(column_id)
        if current is Direction.NONE:
            return self.options.order
        return Direction.DESC if current is Direction.ASC else Direction.ASC

    # Activation --------------------------------------------------------
    def activate(self, column_id: str) -> Direction:
        """Advance the column's direction and (re)arm the deferred sort."""
        direction = self.next_direction(column_id)
        self._set_state(column_id, direction)
        self._set_loading(column_id)
        self._slot.arm(self._execute, column_id, direction)
        _log.debug("activation %r -> %s (armed %d ms)", column_id, direction.value, self._slot.delay_ms)
        return direction

    def flush(self) -> bool:
        """Run a pending activation immediately."""
        return self._slot.flush()

    def _execute(self, column_id: str, direction: Direction) -> None:
        self._set_loading(None)
        self.options.on_pre_sort()
        self.sort_data(column_id, direction)
        self.options.on_post_sort()

    # Sorting -----------------------------------------------------------
    def sort_column(self, column_id: str, direction: Direction | str | None = None) -> bool:
        """Sort now and reflect the direction on the affordances (no hooks)."""
        resolved = Direction.coerce(direction, self.options.order)
        self._set_state(column_id, resolved)
        return self.sort_data(column_id, resolved)

    def sort_data(self, column_id: Optional[str] = None, direction: Direction | str | None = None) -> bool:
        """Sort groups by ``column_id`` and re-render. Returns False for a no-op.

        Defaults come from the ``order_id`` and ``order`` options. A column no
        row carries leaves the tree untouched.
        """
        if column_id is None:
            column_id = self.options.order_id
        resolved = Direction.coerce(direction, self.options.order)
        if column_id is None or not sort_engine.has_column(self.model.groups, column_id):
            _log.debug("sort on unresolved column %r skipped", column_id)
            return False
        sort_engine.sort(
            self.model.groups, column_id, resolved, date_format=self.options.date_format
        )
        layout_binder.render(
            self.model.groups, self.tree, alternating_marker=self.options.alternating_row_marker
        )
        _log.debug("sorted %d groups by %r %s", len(self.model.groups), column_id, resolved.value)
        return True

    # Affordances -------------------------------------------------------
    def _set_state(self, column_id: str, direction: Direction) -> None:
        for key in self.states:
            self.states[key] = Direction.NONE
        self.states[column_id] = direction
        self._sync_affordances()

    def _sync_affordances(self) -> None:
        for header in self.model.headers:
            state = self.states.get(header.id, Direction.NONE)
            header.order = state
            if header.affordance is None:
                continue
            self.tree.set_attr(header.affordance, "data-order", state.value)
            self.tree.set_attr(header.affordance, "column-order", state.value)

    def _set_loading(self, column_id: Optional[str]) -> None:
        marker = self.options.affordance_loading_marker
        if not marker:
            return
        for header in self.model.headers:
            if header.affordance is None:
                continue
            if header.id == column_id:
                self.tree.add_marker(header.affordance, marker)
            else:
                self.tree.remove_marker(header.affordance, marker)

    def _unbind_affordances(self) -> None:
        for header in self.model.headers:
            if header.affordance is not None:
                self.tree.off_activate(header.affordance)
