"""Workbook model and the bundled CSV/XLSX loader."""

from __future__ import annotations

from .loaders import TabularFormat, infer_cell_type, load_workbook
from .model import Cell, CellType, Sheet, Table, Workbook

__all__ = [
    "Cell",
    "CellType",
    "Sheet",
    "Table",
    "TabularFormat",
    "Workbook",
    "infer_cell_type",
    "load_workbook",
]
