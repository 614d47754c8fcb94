"""BeautifulSoup-backed host tree.

Markers are the element's ``class`` tokens. Activation listeners and the
per-element side table live on the adapter (keyed by element identity),
since parsed HTML has no event system of its own; ``activate(element)``
dispatches a click the way a browser would.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag  # type: ignore

from reportsort.host.host_tree import ActivationHandler
from reportsort.parsing.errors import HostTreeError

__all__ = ["SoupTree"]

_log = logging.getLogger(__name__)


def _classes(tag: Tag) -> List[str]:
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _require_tag(element: Any) -> Tag:
    if not isinstance(element, Tag):
        raise HostTreeError(
            "Element does not belong to a BeautifulSoup tree",
            context={"element": type(element).__name__},
        )
    return element


class SoupTree:
    """HostTree implementation over a parsed ``BeautifulSoup`` document."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup
        self._handlers: Dict[int, Tuple[Tag, ActivationHandler]] = {}
        self._data: Dict[int, Tuple[Tag, Dict[str, Any]]] = {}

    @classmethod
    def from_html(cls, html: str, parser: str = "html.parser") -> "SoupTree":
        return cls(BeautifulSoup(html, parser))

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def select_root(self, selector: str | None = None) -> Tag:
        """Return the element matching ``selector`` (the whole document if None)."""
        if selector is None:
            return self._soup
        found = self._soup.select_one(selector)
        if found is None:
            raise HostTreeError(f"No element matches {selector!r}", context={"selector": selector})
        return found

    def render(self) -> str:
        return str(self._soup)

    # Query -------------------------------------------------------------
    def find_marked(self, root: Tag, prefix: str) -> List[Tag]:
        return root.find_all(lambda tag: any(c.startswith(prefix) for c in _classes(tag)))

    def markers(self, element: Tag) -> List[str]:
        return _classes(element)

    def parent(self, element: Tag) -> Optional[Tag]:
        return element.parent

    def read_value(self, element: Tag) -> str:
        """Text content with ``<br>`` as a newline; the value attribute for empty inputs."""
        parts: List[str] = []
        for node in element.descendants:
            if isinstance(node, Tag):
                if node.name == "br":
                    parts.append("\n")
            elif isinstance(node, NavigableString) and not isinstance(node, Comment):
                parts.append(str(node))
        text = "".join(parts)
        if not text.strip() and element.has_attr("value"):
            return str(element["value"])
        return text

    def get_attr(self, element: Tag, name: str, default: Any = None) -> Any:
        return element.get(name, default)

    # Mutation ----------------------------------------------------------
    def add_marker(self, element: Tag, marker: str) -> None:
        classes = _classes(element)
        if marker not in classes:
            classes.append(marker)
            element["class"] = classes

    def remove_marker(self, element: Tag, marker: str) -> None:
        classes = _classes(element)
        if marker not in classes:
            return
        remaining = [c for c in classes if c != marker]
        if remaining:
            element["class"] = remaining
        else:
            del element["class"]

    def detach(self, element: Tag) -> None:
        element.extract()

    def append(self, parent: Tag, element: Tag) -> None:
        parent.append(element)

    def create_child(self, parent: Tag, tag: str, attrs: Mapping[str, str]) -> Tag:
        attributes: Dict[str, Any] = dict(attrs)
        if isinstance(attributes.get("class"), str):
            attributes["class"] = attributes["class"].split()
        child = self._soup.new_tag(tag, attrs=attributes)
        parent.append(child)
        return child

    def set_attr(self, element: Tag, name: str, value: str) -> None:
        element[name] = value

    def mark_positioned(self, element: Tag) -> None:
        rules: Dict[str, str] = {}
        for chunk in str(element.get("style", "")).split(";"):
            if ":" in chunk:
                key, val = chunk.split(":", 1)
                rules[key.strip().lower()] = val.strip()
        if rules.get("position") == "relative":
            return
        rules["position"] = "relative"
        element["style"] = "; ".join(f"{k}: {v}" for k, v in rules.items())

    # Events ------------------------------------------------------------
    def on_activate(self, element: Tag, handler: ActivationHandler) -> None:
        _require_tag(element)
        self._handlers[id(element)] = (element, handler)

    def off_activate(self, element: Tag) -> None:
        self._handlers.pop(id(element), None)

    def activate(self, element: Tag) -> None:
        entry = self._handlers.get(id(element))
        if entry is None:
            _log.debug("activation on element without listener: %s", element.name)
            return
        entry[1]()

    # Side table --------------------------------------------------------
    def set_data(self, element: Tag, key: str, value: Any) -> None:
        _require_tag(element)
        entry = self._data.get(id(element))
        if entry is None:
            entry = (element, {})
            self._data[id(element)] = entry
        entry[1][key] = value

    def get_data(self, element: Tag, key: str, default: Any = None) -> Any:
        entry = self._data.get(id(element))
        if entry is None:
            return default
        return entry[1].get(key, default)

    def clear_data(self, element: Tag, key: str | None = None) -> None:
        if key is None:
            self._data.pop(id(element), None)
            return
        entry = self._data.get(id(element))
        if entry is not None:
            entry[1].pop(key, None)
            if not entry[1]:
                del self._data[id(element)]
