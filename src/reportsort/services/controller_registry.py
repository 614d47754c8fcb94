"""Process-wide registry of sort controllers, one per report root.

Making a root sortable twice returns the controller created the first
time instead of scanning again; ``teardown`` drops it so the next call
starts fresh.

Usage pattern:
    from reportsort.services.controller_registry import controllers
    controller = controllers.get_or_create(root, tree, options)
    controllers.teardown(root)

Design notes:
- Keys are root identities; the registry keeps the root referenced so the
  identity stays valid for the entry's lifetime.
- Thread-safety: a simple RLock protects the registry.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Dict, Iterable, Optional, Tuple

from reportsort.config.options import SortOptions
from reportsort.host.host_tree import HostTree
from reportsort.sorting.interaction_controller import SortController
from reportsort.utils.debounce import Scheduler

__all__ = ["ControllerRegistry", "ControllerAlreadyRegisteredError", "controllers"]

_log = logging.getLogger(__name__)


class ControllerAlreadyRegisteredError(RuntimeError):
    """Raised when registering a root that already has a controller."""


class ControllerRegistry:
    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[int, Tuple[Any, SortController]] = {}

    def get(self, root: Any) -> Optional[SortController]:
        with self._lock:
            entry = self._entries.get(id(root))
            return entry[1] if entry else None

    def register(self, root: Any, controller: SortController, *, allow_override: bool = False) -> None:
        with self._lock:
            if id(root) in self._entries and not allow_override:
                raise ControllerAlreadyRegisteredError("Root already has a sort controller")
            self._entries[id(root)] = (root, controller)

    def get_or_create(
        self,
        root: Any,
        tree: HostTree,
        options: Optional[SortOptions] = None,
        *,
        scheduler: Optional[Scheduler] = None,
    ) -> SortController:
        with self._lock:
            existing = self.get(root)
            if existing is not None:
                _log.debug("root already sortable; returning existing controller")
                return existing
            controller = SortController(root, tree, options, scheduler=scheduler).init()
            self._entries[id(root)] = (root, controller)
            return controller

    def teardown(self, root: Any) -> bool:
        with self._lock:
            entry = self._entries.pop(id(root), None)
        if entry is None:
            return False
        entry[1].teardown()
        return True

    def clear(self) -> None:
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for _, controller in entries:
            controller.teardown()

    def roots(self) -> Iterable[Any]:
        with self._lock:
            return [root for root, _ in self._entries.values()]

    def __contains__(self, root: Any) -> bool:
        with self._lock:
            return id(root) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Global instance
controllers = ControllerRegistry()
