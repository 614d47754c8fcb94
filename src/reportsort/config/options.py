"""Sort options and their validation.

``SortOptions.from_mapping`` accepts both the snake_case field names and
the camelCase names used by report templates (``orderID``,
``cssAlternatingClass``, ``onpresort`` ...), so existing report markup
configuration can be passed through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

from reportsort.config import settings
from reportsort.domain.models import Direction
from reportsort.parsing.errors import ConfigurationError

__all__ = ["SortOptions", "Hook"]

Hook = Callable[[], Any]


def _noop() -> None:
    return None


_ALIASES = {
    "order": "order",
    "orderid": "order_id",
    "order_id": "order_id",
    "dateformat": "date_format",
    "date_format": "date_format",
    "alternatingrowmarker": "alternating_row_marker",
    "alternating_row_marker": "alternating_row_marker",
    "cssalternatingclass": "alternating_row_marker",
    "affordancemarker": "affordance_marker",
    "affordance_marker": "affordance_marker",
    "cssarrowclass": "affordance_marker",
    "affordanceloadingmarker": "affordance_loading_marker",
    "affordance_loading_marker": "affordance_loading_marker",
    "cssarrowloadingclass": "affordance_loading_marker",
    "onpresort": "on_pre_sort",
    "on_pre_sort": "on_pre_sort",
    "onpostsort": "on_post_sort",
    "on_post_sort": "on_post_sort",
    "debouncems": "debounce_ms",
    "debounce_ms": "debounce_ms",
}


@dataclass
class SortOptions:
    order: Direction = Direction(settings.DEFAULT_ORDER)
    order_id: Optional[str] = None
    date_format: str = settings.DEFAULT_DATE_FORMAT
    alternating_row_marker: Optional[str] = settings.DEFAULT_ALTERNATING_MARKER
    affordance_marker: str = settings.DEFAULT_AFFORDANCE_MARKER
    affordance_loading_marker: str = settings.DEFAULT_AFFORDANCE_LOADING_MARKER
    on_pre_sort: Hook = field(default=_noop)
    on_post_sort: Hook = field(default=_noop)
    debounce_ms: int = settings.DEBOUNCE_MS

    def __post_init__(self) -> None:
        try:
            self.order = Direction.coerce(self.order)
        except ValueError:
            raise ConfigurationError(
                f"Invalid default order {self.order!r}", context={"order": self.order}
            ) from None
        if self.order is Direction.NONE:
            raise ConfigurationError("Default order must be 'asc' or 'desc'", context={"order": "none"})
        for name in ("on_pre_sort", "on_post_sort"):
            hook = getattr(self, name)
            if hook is None:
                setattr(self, name, _noop)
            elif not callable(hook):
                raise ConfigurationError(f"{name} must be callable", context={name: hook})
        if not self.date_format:
            self.date_format = settings.DEFAULT_DATE_FORMAT
        try:
            self.debounce_ms = int(self.debounce_ms)
        except (TypeError, ValueError):
            raise ConfigurationError(
                "debounce_ms must be an integer", context={"debounce_ms": self.debounce_ms}
            ) from None
        if self.debounce_ms < 0:
            raise ConfigurationError(
                "debounce_ms must not be negative", context={"debounce_ms": self.debounce_ms}
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None, **overrides: Any) -> "SortOptions":
        values: dict[str, Any] = {}
        for source in (mapping or {}, overrides):
            for key, value in source.items():
                target = _ALIASES.get(key.lower())
                if target is None:
                    raise ConfigurationError(f"Unknown sort option {key!r}", context={"option": key})
                values[target] = value
        return cls(**values)

    def merged(self, **changes: Any) -> "SortOptions":
        """Copy with ``changes`` applied (camelCase names allowed)."""
        renamed: dict[str, Any] = {}
        for key, value in changes.items():
            target = _ALIASES.get(key.lower())
            if target is None:
                raise ConfigurationError(f"Unknown sort option {key!r}", context={"option": key})
            renamed[target] = value
        return replace(self, **renamed)

    @property
    def alternating_enabled(self) -> bool:
        return bool(self.alternating_row_marker)
