"""Per-sheet structural expectations and their builder."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from ..workbook.model import CellType


class TypeStrictness(str, Enum):
    """How many sampled values must match a column's expected type.

    ``strict`` requires every non-empty value to match; ``lenient`` requires
    at least the configured threshold (half, by default).
    """

    strict = "strict"
    lenient = "lenient"


def _unique(names: Any) -> tuple[str, ...]:
    """De-duplicate names, keeping the first occurrence."""
    return tuple(dict.fromkeys(names))


class SheetSchema(BaseModel):
    """Expectations for one sheet's table.

    Construct directly or through ``SchemaBuilder``. ``min_rows > max_rows`` is
    normalized by swapping the two bounds, so a schema never carries a
    contradictory range.

    Example:
        SheetSchema(
            required_columns=["Name", "Value"],
            column_types={"Value": CellType.number},
            min_rows=1,
            max_rows=100,
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    table_name: Optional[str] = None
    required_columns: Tuple[str, ...] = ()
    optional_columns: Tuple[str, ...] = ()
    column_types: Mapping[str, CellType] = Field(default_factory=dict, validate_default=True)
    type_strictness: TypeStrictness = TypeStrictness.strict
    expect_order: bool = False
    strict_columns: bool = False
    min_rows: int = Field(default=0, ge=0)
    max_rows: Optional[int] = Field(default=None, ge=0)
    allow_empty: bool = False

    @field_validator("required_columns", "optional_columns", mode="before")
    @classmethod
    def _dedupe_columns(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return _unique(value)
        return value

    @field_validator("column_types", mode="after")
    @classmethod
    def _freeze_types(cls, value: Mapping[str, CellType]) -> Mapping[str, CellType]:
        return MappingProxyType(dict(value))

    @field_serializer("column_types")
    def _dump_types(self, value: Mapping[str, CellType]) -> Dict[str, CellType]:
        return dict(value)

    @model_validator(mode="before")
    @classmethod
    def _normalize_bounds(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        min_rows = data.get("min_rows")
        max_rows = data.get("max_rows")
        if (
            isinstance(min_rows, int)
            and isinstance(max_rows, int)
            and min_rows > max_rows
        ):
            data = {**data, "min_rows": max_rows, "max_rows": min_rows}
        return data

    @property
    def known_columns(self) -> frozenset[str]:
        """Required and optional column names."""
        return frozenset(self.required_columns) | frozenset(self.optional_columns)

    def accepts_row_count(self, count: int) -> bool:
        if count == 0 and self.allow_empty:
            return True
        if count < self.min_rows:
            return False
        return self.max_rows is None or count <= self.max_rows


class SchemaBuilder:
    """Accumulates schema options and freezes them with ``build()``.

    Every option returns the builder itself so calls can be chained::

        schema = (
            new_schema()
            .require_columns("Name", "Value")
            .column_type("Value", CellType.number)
            .type_strictness(TypeStrictness.lenient)
            .row_count(1, 100)
            .build()
        )
    """

    def __init__(self) -> None:
        self._table_name: str | None = None
        self._required: list[str] = []
        self._optional: list[str] = []
        self._types: dict[str, CellType] = {}
        self._strictness = TypeStrictness.strict
        self._expect_order = False
        self._strict_columns = False
        self._min_rows = 0
        self._max_rows: int | None = None
        self._allow_empty = False

    def table(self, name: str) -> "SchemaBuilder":
        """Target the table called ``name`` instead of the sheet's first table."""
        self._table_name = name
        return self

    def require_columns(self, *names: str) -> "SchemaBuilder":
        self._required.extend(names)
        return self

    def optional_columns(self, *names: str) -> "SchemaBuilder":
        self._optional.extend(names)
        return self

    def column_type(self, name: str, cell_type: CellType | str) -> "SchemaBuilder":
        """Record the expected type of ``name``; the column need not be declared."""
        self._types[name] = CellType(cell_type)
        return self

    def type_strictness(self, level: TypeStrictness | str) -> "SchemaBuilder":
        self._strictness = TypeStrictness(level)
        return self

    def expect_order(self) -> "SchemaBuilder":
        self._expect_order = True
        return self

    def strict_columns(self) -> "SchemaBuilder":
        self._strict_columns = True
        return self

    def row_count(self, min_rows: int, max_rows: int | None = None) -> "SchemaBuilder":
        """Set inclusive row bounds; ``max_rows=None`` leaves the upper bound open."""
        self._min_rows = min_rows
        self._max_rows = max_rows
        return self

    def allow_empty(self) -> "SchemaBuilder":
        self._allow_empty = True
        return self

    def build(self) -> SheetSchema:
        return SheetSchema(
            table_name=self._table_name,
            required_columns=list(self._required),
            optional_columns=list(self._optional),
            column_types=dict(self._types),
            type_strictness=self._strictness,
            expect_order=self._expect_order,
            strict_columns=self._strict_columns,
            min_rows=self._min_rows,
            max_rows=self._max_rows,
            allow_empty=self._allow_empty,
        )


def new_schema() -> SchemaBuilder:
    """Start building a ``SheetSchema``."""
    return SchemaBuilder()
