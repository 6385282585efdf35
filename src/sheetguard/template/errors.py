"""Validation error kinds reported inside a ``ValidationResult``.

Each kind is its own frozen dataclass carrying only the fields it needs.
All of them expose ``type``, ``message``, ``expected``, ``actual`` and
``to_dict()`` so callers can render any error uniformly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from ..workbook.model import CellType


class ErrorType(str, Enum):
    """Kinds of structural mismatch."""

    missing_sheet = "missing_sheet"
    unexpected_sheet = "unexpected_sheet"
    missing_table = "missing_table"
    missing_column = "missing_column"
    unexpected_column = "unexpected_column"
    column_order = "column_order"
    column_type = "column_type"
    row_count = "row_count"

    def __str__(self) -> str:
        """Render as the display name, e.g. ``MissingColumn``."""
        return "".join(part.capitalize() for part in self.value.split("_"))


class _ErrorBase:
    type: ClassVar[ErrorType]

    @property
    def message(self) -> str:
        raise NotImplementedError

    @property
    def expected(self) -> str | None:
        return None

    @property
    def actual(self) -> str | None:
        return None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)  # type: ignore[call-overload]
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return {
            "type": self.type.value,
            "message": self.message,
            "expected": self.expected,
            "actual": self.actual,
            **data,
        }


def _where(sheet: str, table: str | None) -> str:
    return f"'{sheet}/{table}'" if table else f"'{sheet}'"


@dataclass(frozen=True)
class MissingSheet(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.missing_sheet

    sheet: str

    @property
    def message(self) -> str:
        if not self.sheet:
            return "workbook has no sheets"
        return f"required sheet '{self.sheet}' not found"


@dataclass(frozen=True)
class UnexpectedSheet(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.unexpected_sheet

    sheet: str

    @property
    def message(self) -> str:
        return f"unexpected sheet '{self.sheet}'"


@dataclass(frozen=True)
class MissingTable(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.missing_table

    sheet: str
    table: str | None = None  # None when the first table was requested

    @property
    def message(self) -> str:
        if self.table is None:
            return f"sheet '{self.sheet}' has no tables"
        return f"table '{self.table}' not found in sheet '{self.sheet}'"


@dataclass(frozen=True)
class MissingColumn(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.missing_column

    sheet: str
    table: str
    column: str

    @property
    def message(self) -> str:
        return f"required column '{self.column}' not found in {_where(self.sheet, self.table)}"


@dataclass(frozen=True)
class UnexpectedColumn(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.unexpected_column

    sheet: str
    table: str
    column: str

    @property
    def message(self) -> str:
        return f"unexpected column '{self.column}' in {_where(self.sheet, self.table)}"


@dataclass(frozen=True)
class ColumnOrder(_ErrorBase):
    """Required columns appear out of order; ``position`` is the first mismatch."""

    type: ClassVar[ErrorType] = ErrorType.column_order

    sheet: str
    table: str
    position: int
    expected_column: str
    actual_column: str

    @property
    def expected(self) -> str:
        return self.expected_column

    @property
    def actual(self) -> str:
        return self.actual_column

    @property
    def message(self) -> str:
        return (
            f"column order mismatch in {_where(self.sheet, self.table)} at position "
            f"{self.position}: expected '{self.expected_column}', found '{self.actual_column}'"
        )


@dataclass(frozen=True)
class ColumnType(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.column_type

    sheet: str
    table: str
    column: str
    expected_type: CellType
    actual_type: CellType
    ratio: float  # fraction of sampled values matching expected_type

    @property
    def expected(self) -> str:
        return self.expected_type.value

    @property
    def actual(self) -> str:
        return self.actual_type.value

    @property
    def message(self) -> str:
        return (
            f"column '{self.column}' in {_where(self.sheet, self.table)} expected type "
            f"{self.expected_type.value}, found {self.actual_type.value} "
            f"({self.ratio:.0%} matching)"
        )


@dataclass(frozen=True)
class RowCount(_ErrorBase):
    type: ClassVar[ErrorType] = ErrorType.row_count

    sheet: str
    table: str
    min_rows: int
    max_rows: int | None
    count: int

    @property
    def expected(self) -> str:
        upper = "*" if self.max_rows is None else str(self.max_rows)
        return f"[{self.min_rows},{upper}]"

    @property
    def actual(self) -> str:
        return str(self.count)

    @property
    def message(self) -> str:
        return (
            f"{_where(self.sheet, self.table)} has {self.count} data row(s), "
            f"expected {self.expected}"
        )


ValidationError = Union[
    MissingSheet,
    UnexpectedSheet,
    MissingTable,
    MissingColumn,
    UnexpectedColumn,
    ColumnOrder,
    ColumnType,
    RowCount,
]
"""Any structural mismatch reported by the engine."""
