"""Shared fixtures for building in-memory workbooks."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest
import structlog

from sheetguard.workbook import Sheet, Table, Workbook, infer_cell_type
from sheetguard.workbook.model import Cell


def _cells(values: Sequence[Any]) -> tuple[Cell, ...]:
    return tuple(Cell(value=v, type=infer_cell_type(v)) for v in values)


@pytest.fixture
def make_table() -> Callable[..., Table]:
    """Factory: ``make_table(headers, rows, name="Table1")`` with inferred cell types."""

    def factory(
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]] = (),
        name: str = "Table1",
    ) -> Table:
        return Table(name=name, headers=tuple(headers), rows=tuple(_cells(r) for r in rows))

    return factory


@pytest.fixture
def make_workbook(make_table) -> Callable[..., Workbook]:
    """Factory: ``make_workbook({"Sheet1": [["A", "B"], [1, 2]]})``.

    Each sheet maps to a header row followed by data rows (one table), to a
    list of ``Table`` objects, or to ``None`` for a sheet without tables.
    """

    def factory(sheets: dict[str, Any]) -> Workbook:
        built = []
        for name, content in sheets.items():
            if content is None:
                built.append(Sheet(name=name, tables=()))
            elif content and isinstance(content[0], Table):
                built.append(Sheet(name=name, tables=tuple(content)))
            else:
                headers, *rows = content
                built.append(Sheet(name=name, tables=(make_table(headers, rows),)))
        return Workbook(sheets=tuple(built))

    return factory


@pytest.fixture
def sample_workbook(make_workbook) -> Workbook:
    """Two sheets: ``Sheet1`` (Name/Value, 3 rows) and ``Notes`` (Text, 1 row)."""
    return make_workbook(
        {
            "Sheet1": [
                ["Name", "Value"],
                ["alpha", 1],
                ["beta", 2.5],
                ["gamma", 3],
            ],
            "Notes": [["Text"], ["remember"]],
        }
    )


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
