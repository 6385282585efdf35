"""Tests for the in-memory workbook model."""

import dataclasses

import pytest

from sheetguard.workbook.model import Cell, CellType, Sheet, Table, Workbook


class TestCellType:
    def test_values(self):
        assert CellType.number.value == "number"
        assert CellType.empty.value == "empty"

    def test_string_enum(self):
        assert isinstance(CellType.date, str)
        assert CellType.date == "date"
        assert str(CellType.boolean) == "boolean"


class TestCell:
    def test_default_type_is_empty(self):
        assert Cell(None).is_empty

    def test_typed_cell_not_empty(self):
        assert not Cell(3, CellType.number).is_empty


class TestTable:
    def test_lists_are_stored_as_tuples(self):
        table = Table(name="T", headers=["A", "B"], rows=[[Cell(1, CellType.number)]])
        assert table.headers == ("A", "B")
        assert isinstance(table.rows[0], tuple)

    def test_frozen(self):
        table = Table(name="T", headers=("A",))
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.name = "other"

    def test_column_index_first_occurrence(self):
        table = Table(name="T", headers=("A", "B", "A"))
        assert table.column_index("A") == 0
        assert table.column_index("missing") is None

    def test_column_values_pads_short_rows(self, make_table):
        table = Table(
            name="T",
            headers=("A", "B"),
            rows=((Cell(1, CellType.number),), (Cell(2, CellType.number), Cell("x", CellType.string))),
        )
        values = table.column_values("B")
        assert values[0].is_empty
        assert values[1].value == "x"
        assert table.column_values("C") == []

    def test_column_types_inferred_from_rows(self, make_table):
        table = make_table(
            ["Name", "Value", "Blank"],
            [["a", 1, None], ["b", "oops", None], ["c", 3, None]],
        )
        assert table.column_types == (CellType.string, CellType.number, CellType.empty)
        assert table.column_type("Value") == CellType.number
        assert table.column_type("Nope") is None

    def test_explicit_column_types_kept(self):
        table = Table(name="T", headers=("A",), column_types=[CellType.date])
        assert table.column_types == (CellType.date,)

    def test_row_count(self, make_table):
        assert make_table(["A"], [[1], [2]]).row_count == 2
        assert make_table(["A"]).row_count == 0


class TestSheet:
    def test_first_table(self, make_table):
        first = make_table(["A"], name="First")
        second = make_table(["B"], name="Second")
        sheet = Sheet(name="S", tables=[first, second])
        assert sheet.first_table is first
        assert sheet.get_table("Second") is second
        assert sheet.get_table("Third") is None

    def test_no_tables(self):
        assert Sheet(name="S").first_table is None

    def test_get_table_first_match(self, make_table):
        one = make_table(["A"], name="Dup")
        two = make_table(["B"], name="Dup")
        assert Sheet(name="S", tables=(one, two)).get_table("Dup") is one


class TestWorkbook:
    def test_get_sheet_first_match_wins(self):
        first = Sheet(name="Data")
        second = Sheet(name="Data", tables=())
        workbook = Workbook(sheets=[first, Sheet(name="Other"), second])
        assert workbook.get_sheet("Data") is first
        assert workbook.get_sheet("data") is None

    def test_sheet_names_and_iteration(self):
        workbook = Workbook(sheets=(Sheet(name="A"), Sheet(name="B")))
        assert workbook.sheet_names == ["A", "B"]
        assert [s.name for s in workbook] == ["A", "B"]
        assert len(workbook) == 2

    def test_empty_workbook(self):
        workbook = Workbook()
        assert workbook.sheets == ()
        assert workbook.get_sheet("Sheet1") is None
