"""Domain models for sortable reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

__all__ = [
    "Direction",
    "ValueType",
    "HeaderColumn",
    "RowColumn",
    "DataRow",
    "SeparatorRow",
    "RowGroup",
    "ReportModel",
]


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"
    NONE = "none"

    @classmethod
    def coerce(cls, value: "str | Direction | None", default: "Direction | None" = None) -> "Direction":
        if isinstance(value, Direction):
            return value
        if value is None or value == "":
            return default if default is not None else cls.ASC
        return cls(str(value).strip().lower())


@dataclass(frozen=True, slots=True)
class ValueType:
    """Declared type of a cell value: ``text``, ``number`` or ``date[-format]``."""

    kind: str = "text"
    date_format: Optional[str] = None

    KINDS = ("text", "number", "date")

    @classmethod
    def parse(cls, token: str | None) -> "ValueType":
        """Parse a marker type suffix (``date-DD/MM/YYYY_HH:mm`` etc).

        Underscores in a date format stand for a literal space. Unknown tags
        fall back to text.
        """
        token = (token or "").strip()
        if not token:
            return TEXT
        if token.startswith("date"):
            rest = token[4:]
            if rest.startswith("-") and len(rest) > 1:
                return cls("date", rest[1:].replace("_", " "))
            if not rest:
                return cls("date")
        if token in ("text", "number"):
            return cls(token)
        return TEXT

    @property
    def is_text(self) -> bool:
        return self.kind == "text"

    @property
    def is_number(self) -> bool:
        return self.kind == "number"

    @property
    def is_date(self) -> bool:
        return self.kind == "date"

    def __str__(self) -> str:
        if self.is_date and self.date_format:
            return f"date-{self.date_format}"
        return self.kind


TEXT = ValueType("text")


@dataclass(slots=True)
class HeaderColumn:
    element: Any
    id: str
    order: Direction = Direction.NONE
    affordance: Any = None


@dataclass(slots=True)
class RowColumn:
    element: Any
    id: str
    value: str
    type: ValueType = TEXT


@dataclass(slots=True)
class DataRow:
    element: Any
    columns: List[RowColumn] = field(default_factory=list)

    def column(self, column_id: str) -> Optional[RowColumn]:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None


@dataclass(slots=True)
class SeparatorRow:
    element: Any
    position: str  # "pre" or "post"


@dataclass(slots=True)
class RowGroup:
    group_id: int
    data_row: Optional[DataRow] = None
    separators: List[SeparatorRow] = field(default_factory=list)

    @property
    def pre_separators(self) -> List[SeparatorRow]:
        return [s for s in self.separators if s.position == "pre"]

    @property
    def post_separators(self) -> List[SeparatorRow]:
        return [s for s in self.separators if s.position == "post"]

    def column(self, column_id: str) -> Optional[RowColumn]:
        return self.data_row.column(column_id) if self.data_row else None

    def elements(self) -> List[Any]:
        """All elements owned by this group in render order."""
        out = [s.element for s in self.pre_separators]
        if self.data_row is not None:
            out.append(self.data_row.element)
        out.extend(s.element for s in self.post_separators)
        return out


@dataclass(slots=True)
class ReportModel:
    headers: List[HeaderColumn] = field(default_factory=list)
    groups: List[RowGroup] = field(default_factory=list)
    group_span: int = 1

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.groups

    def header(self, column_id: str) -> Optional[HeaderColumn]:
        for h in self.headers:
            if h.id == column_id:
                return h
        return None

    @classmethod
    def empty(cls) -> "ReportModel":
        return cls(headers=[], groups=[], group_span=1)
