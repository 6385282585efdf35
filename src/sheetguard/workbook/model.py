"""In-memory workbook model consumed by the template engine.

A ``Workbook`` is an ordered collection of ``Sheet`` objects, each holding
zero or more ``Table`` objects (a header row plus typed data rows). The
model is produced by a parser (see ``sheetguard.workbook.loaders`` for the
bundled one) and treated as read-only by everything downstream.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Sequence


class CellType(str, Enum):
    """Inferred type of a cell or column."""

    string = "string"
    number = "number"
    boolean = "boolean"
    date = "date"
    empty = "empty"  # blank or unknown

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Cell:
    """A single typed cell value."""

    value: Any
    type: CellType = CellType.empty

    @property
    def is_empty(self) -> bool:
        return self.type == CellType.empty


def _dominant_type(cells: Sequence[Cell]) -> CellType:
    counts = Counter(cell.type for cell in cells if not cell.is_empty)
    if not counts:
        return CellType.empty
    return counts.most_common(1)[0][0]


@dataclass(frozen=True)
class Table:
    """A header row plus typed data rows.

    Attributes:
        name: Table name, unique by convention only
        headers: Column names in sheet order (duplicates allowed)
        rows: Data rows; a row shorter than ``headers`` is padded with empty cells on read
        column_types: Per-column inferred type, derived from ``rows`` when omitted
    """

    name: str
    headers: tuple[str, ...] = ()
    rows: tuple[tuple[Cell, ...], ...] = ()
    column_types: tuple[CellType, ...] = field(default=())

    def __post_init__(self):
        # Accept lists from callers but store tuples
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))

        if not self.column_types:
            inferred = tuple(
                _dominant_type(self.column_cells(index)) for index in range(len(self.headers))
            )
            object.__setattr__(self, "column_types", inferred)
        else:
            object.__setattr__(self, "column_types", tuple(self.column_types))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column_index(self, name: str) -> int | None:
        """Return the index of the first header equal to ``name``, or None."""
        try:
            return self.headers.index(name)
        except ValueError:
            return None

    def column_cells(self, index: int) -> list[Cell]:
        """Return the cells of column ``index``, padding short rows with empty cells."""
        return [row[index] if index < len(row) else Cell(None) for row in self.rows]

    def column_values(self, name: str) -> list[Cell]:
        """Return the cells under the first header named ``name`` (empty list if absent)."""
        index = self.column_index(name)
        if index is None:
            return []
        return self.column_cells(index)

    def column_type(self, name: str) -> CellType | None:
        index = self.column_index(name)
        if index is None:
            return None
        return self.column_types[index]


@dataclass(frozen=True)
class Sheet:
    """A named page containing zero or more tables."""

    name: str
    tables: tuple[Table, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "tables", tuple(self.tables))

    @property
    def first_table(self) -> Table | None:
        return self.tables[0] if self.tables else None

    def get_table(self, name: str) -> Table | None:
        """Return the first table named ``name``."""
        return next((table for table in self.tables if table.name == name), None)


@dataclass(frozen=True)
class Workbook:
    """Ordered collection of sheets.

    Sheet names are not required to be unique; lookups by name return the
    first match.
    """

    sheets: tuple[Sheet, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sheets", tuple(self.sheets))

    def __iter__(self) -> Iterator[Sheet]:
        return iter(self.sheets)

    def __len__(self) -> int:
        return len(self.sheets)

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]

    def get_sheet(self, name: str) -> Sheet | None:
        """Return the first sheet named ``name``."""
        return next((sheet for sheet in self.sheets if sheet.name == name), None)
