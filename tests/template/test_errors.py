"""Tests for error kinds and their rendering."""

import pytest

from sheetguard.template import (
    ColumnOrder,
    ColumnType,
    ErrorType,
    MissingColumn,
    MissingSheet,
    MissingTable,
    RowCount,
    UnexpectedColumn,
    UnexpectedSheet,
)
from sheetguard.workbook import CellType


class TestErrorType:
    @pytest.mark.parametrize(
        "error_type, display",
        [
            (ErrorType.missing_sheet, "MissingSheet"),
            (ErrorType.unexpected_column, "UnexpectedColumn"),
            (ErrorType.column_type, "ColumnType"),
            (ErrorType.row_count, "RowCount"),
        ],
    )
    def test_display_name(self, error_type, display):
        assert str(error_type) == display

    def test_string_enum(self):
        assert ErrorType.column_order == "column_order"


class TestMessages:
    def test_missing_sheet(self):
        assert MissingSheet(sheet="Totals").message == "required sheet 'Totals' not found"
        assert MissingSheet(sheet="").message == "workbook has no sheets"

    def test_unexpected_sheet(self):
        assert str(UnexpectedSheet(sheet="Scratch")) == "unexpected sheet 'Scratch'"

    def test_missing_table(self):
        assert MissingTable(sheet="S", table="T").message == "table 'T' not found in sheet 'S'"

    def test_columns(self):
        assert (
            MissingColumn(sheet="S", table="T", column="Id").message
            == "required column 'Id' not found in 'S/T'"
        )
        assert UnexpectedColumn(sheet="S", table="T", column="X").message == "unexpected column 'X' in 'S/T'"

    def test_column_type(self):
        error = ColumnType(
            sheet="S",
            table="T",
            column="Amount",
            expected_type=CellType.number,
            actual_type=CellType.string,
            ratio=0.25,
        )
        assert error.message == "column 'Amount' in 'S/T' expected type number, found string (25% matching)"

    def test_row_count(self):
        error = RowCount(sheet="S", table="T", min_rows=1, max_rows=None, count=0)
        assert error.message == "'S/T' has 0 data row(s), expected [1,*]"


class TestVariants:
    def test_only_relevant_fields(self):
        assert not hasattr(MissingSheet(sheet="S"), "column")
        assert MissingSheet(sheet="S").expected is None
        assert MissingSheet(sheet="S").actual is None

    def test_type_is_class_level(self):
        assert MissingColumn.type == ErrorType.missing_column
        assert ColumnOrder.type == ErrorType.column_order

    def test_frozen_and_hashable(self):
        error = MissingSheet(sheet="S")
        with pytest.raises(AttributeError):
            error.sheet = "other"
        assert {error, MissingSheet(sheet="S")} == {error}


class TestToDict:
    def test_column_type(self):
        data = ColumnType(
            sheet="S",
            table="T",
            column="V",
            expected_type=CellType.date,
            actual_type=CellType.number,
            ratio=0.5,
        ).to_dict()

        assert data == {
            "type": "column_type",
            "message": "column 'V' in 'S/T' expected type date, found number (50% matching)",
            "expected": "date",
            "actual": "number",
            "sheet": "S",
            "table": "T",
            "column": "V",
            "expected_type": "date",
            "actual_type": "number",
            "ratio": 0.5,
        }

    def test_missing_sheet(self):
        assert MissingSheet(sheet="S").to_dict() == {
            "type": "missing_sheet",
            "message": "required sheet 'S' not found",
            "expected": None,
            "actual": None,
            "sheet": "S",
        }
