"""Host tree contract consumed by the scanner, binder and controller.

Any element tree can be made sortable by implementing this protocol; the
core never touches elements directly. ``SoupTree`` is the bundled
BeautifulSoup implementation.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Protocol

__all__ = ["HostTree", "ActivationHandler"]

ActivationHandler = Callable[[], None]


class HostTree(Protocol):  # noqa: D401 - structural contract
    # Query --------------------------------------------------------------
    def find_marked(self, root: Any, prefix: str) -> List[Any]: ...

    def markers(self, element: Any) -> List[str]: ...

    def parent(self, element: Any) -> Optional[Any]: ...

    def read_value(self, element: Any) -> str: ...

    def get_attr(self, element: Any, name: str, default: Any = None) -> Any: ...

    # Mutation -----------------------------------------------------------
    def add_marker(self, element: Any, marker: str) -> None: ...

    def remove_marker(self, element: Any, marker: str) -> None: ...

    def detach(self, element: Any) -> None: ...

    def append(self, parent: Any, element: Any) -> None: ...

    def create_child(self, parent: Any, tag: str, attrs: Mapping[str, str]) -> Any: ...

    def set_attr(self, element: Any, name: str, value: str) -> None: ...

    def mark_positioned(self, element: Any) -> None: ...

    # Events -------------------------------------------------------------
    def on_activate(self, element: Any, handler: ActivationHandler) -> None: ...

    def off_activate(self, element: Any) -> None: ...

    def activate(self, element: Any) -> None: ...

    # Side table ---------------------------------------------------------
    def set_data(self, element: Any, key: str, value: Any) -> None: ...

    def get_data(self, element: Any, key: str, default: Any = None) -> Any: ...

    def clear_data(self, element: Any, key: str | None = None) -> None: ...
