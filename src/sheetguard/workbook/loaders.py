"""Build a ``Workbook`` model from CSV or XLSX files.

This is a small reference parser: one table per sheet, headers taken from a
single row, and cell types inferred from the Python values openpyxl returns
(or from the text itself for CSV).
"""

from __future__ import annotations

import csv
import io
import re
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Iterable, TextIO

import structlog

from ..exceptions import WorkbookLoadError
from .model import Cell, CellType, Sheet, Table, Workbook

logger = structlog.get_logger()

DEFAULT_TABLE_NAME = "Table1"

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_TRUE_STRINGS = frozenset({"true", "yes"})
_FALSE_STRINGS = frozenset({"false", "no"})


class TabularFormat(str, Enum):
    """Supported workbook formats."""

    auto = "auto"
    csv = "csv"
    xlsx = "xlsx"


def _is_iso_date(text: str) -> bool:
    try:
        datetime.fromisoformat(text)
    except ValueError:
        return False
    return True


def infer_cell_type(value: Any) -> CellType:
    """Infer the ``CellType`` of a raw cell value.

    - ``None`` and blank strings are empty
    - ``bool`` is checked before numbers (``bool`` is an ``int`` subclass)
    - Strings are sniffed for numbers, ``true``/``false`` and ISO dates
    """
    if value is None:
        return CellType.empty
    if isinstance(value, bool):
        return CellType.boolean
    if isinstance(value, (int, float, Decimal)):
        return CellType.number
    if isinstance(value, (datetime, date, time)):
        return CellType.date
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return CellType.empty
        if _NUMBER_RE.match(text):
            return CellType.number
        if text.lower() in _TRUE_STRINGS or text.lower() in _FALSE_STRINGS:
            return CellType.boolean
        if _is_iso_date(text):
            return CellType.date
        return CellType.string
    return CellType.string


def _make_cell(value: Any) -> Cell:
    if isinstance(value, str):
        value = value.strip()
    return Cell(value=value, type=infer_cell_type(value))


def _build_table(header_values: Iterable[Any], data_rows: Iterable[Iterable[Any]]) -> Table:
    headers = tuple("" if value is None else str(value).strip() for value in header_values)
    # Drop trailing blank header cells (openpyxl pads to the sheet's max column)
    while headers and not headers[-1]:
        headers = headers[:-1]

    rows = []
    for raw in data_rows:
        values = list(raw)[: len(headers)]
        if all(infer_cell_type(v) == CellType.empty for v in values):
            continue
        cells = [_make_cell(v) for v in values]
        cells.extend(Cell(None) for _ in range(len(headers) - len(cells)))
        rows.append(tuple(cells))

    return Table(name=DEFAULT_TABLE_NAME, headers=headers, rows=tuple(rows))


def _detect_format(fp: BinaryIO | TextIO, file_name: str | None = None) -> TabularFormat:
    """Detect workbook format from file name or content."""
    if file_name:
        lower = file_name.lower()
        if lower.endswith((".xlsx", ".xlsm")):
            return TabularFormat.xlsx
        if lower.endswith(".csv"):
            return TabularFormat.csv

    if isinstance(fp, io.TextIOBase):
        return TabularFormat.csv

    # XLSX files are ZIP archives: PK\x03\x04
    position = fp.tell()
    sample = fp.read(4)
    fp.seek(position)
    if isinstance(sample, bytes) and sample[:4] == b"PK\x03\x04":
        return TabularFormat.xlsx
    return TabularFormat.csv


def _read_csv(
    fp: BinaryIO | TextIO,
    *,
    sheet_name: str,
    header_row: int,
    delimiter: str,
) -> Workbook:
    if not isinstance(fp, io.TextIOBase):
        content = fp.read()
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise WorkbookLoadError(f"CSV file is not valid UTF-8: {e}") from e
        fp = io.StringIO(content)

    try:
        lines = list(csv.reader(fp, delimiter=delimiter))
    except csv.Error as e:
        raise WorkbookLoadError(f"Failed to parse CSV: {e}") from e

    if len(lines) < header_row:
        return Workbook(sheets=(Sheet(name=sheet_name, tables=()),))

    table = _build_table(lines[header_row - 1], lines[header_row:])
    return Workbook(sheets=(Sheet(name=sheet_name, tables=(table,)),))


def _read_xlsx(fp: BinaryIO, *, header_row: int) -> Workbook:
    from openpyxl import load_workbook as openpyxl_load_workbook

    if isinstance(fp, io.TextIOBase):
        raise WorkbookLoadError("XLSX files require binary input")

    try:
        wb = openpyxl_load_workbook(fp, read_only=True, data_only=True)
    except Exception as e:
        raise WorkbookLoadError(f"Failed to open XLSX workbook: {e}") from e

    sheets = []
    try:
        for ws in wb.worksheets:
            header_cells = list(
                ws.iter_rows(min_row=header_row, max_row=header_row, values_only=True)
            )
            if not header_cells or all(v is None for v in header_cells[0]):
                sheets.append(Sheet(name=ws.title, tables=()))
                continue
            table = _build_table(
                header_cells[0],
                ws.iter_rows(min_row=header_row + 1, values_only=True),
            )
            sheets.append(Sheet(name=ws.title, tables=(table,)))
    finally:
        wb.close()

    return Workbook(sheets=tuple(sheets))


def load_workbook(
    source: str | Path | BinaryIO | TextIO,
    *,
    file_name: str | None = None,
    format: TabularFormat = TabularFormat.auto,
    header_row: int = 1,
    delimiter: str = ",",
) -> Workbook:
    """Load a CSV or XLSX file into a ``Workbook``.

    Args:
        source: Path or file-like object
        file_name: Optional file name used for format detection and CSV sheet naming
        format: Force a format instead of auto-detecting
        header_row: 1-based row holding the column names
        delimiter: CSV delimiter

    Raises:
        WorkbookLoadError: If the file cannot be read or parsed
    """
    if header_row < 1:
        raise ValueError("header_row must be >= 1")

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            with path.open("rb") as fp:
                return load_workbook(
                    fp,
                    file_name=file_name or path.name,
                    format=format,
                    header_row=header_row,
                    delimiter=delimiter,
                )
        except OSError as e:
            raise WorkbookLoadError(f"Cannot read {path}: {e}") from e

    fmt = format if format != TabularFormat.auto else _detect_format(source, file_name)
    sheet_name = Path(file_name).stem if file_name else "Sheet1"

    if fmt == TabularFormat.xlsx:
        workbook = _read_xlsx(source, header_row=header_row)
    else:
        workbook = _read_csv(
            source, sheet_name=sheet_name, header_row=header_row, delimiter=delimiter
        )

    logger.debug(
        "workbook_loaded",
        format=fmt.value,
        file_name=file_name,
        sheets=workbook.sheet_names,
    )
    return workbook
