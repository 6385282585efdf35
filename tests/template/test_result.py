"""Tests for ValidationResult."""

from sheetguard.template import ErrorType, MissingColumn, MissingSheet, ValidationResult


class TestValidationResult:
    def test_empty_is_valid(self):
        result = ValidationResult(template_name="Orders")
        assert result.valid
        assert result.summary() == "template Orders: valid"

    def test_summary_counts_errors(self):
        result = ValidationResult(template_name="Orders")
        result.add_error(MissingSheet(sheet="A"))
        result.add_error(MissingSheet(sheet="B"))
        assert not result.valid
        assert result.summary() == "template Orders: 2 error(s)"

    def test_errors_of(self):
        result = ValidationResult(template_name="T")
        sheet_error = MissingSheet(sheet="A")
        column_error = MissingColumn(sheet="B", table="T1", column="C")
        result.add_error(sheet_error)
        result.add_error(column_error)

        assert result.errors_of(ErrorType.missing_column) == [column_error]
        assert result.errors_of(ErrorType.row_count) == []

    def test_marks_are_deduplicated_in_order(self):
        result = ValidationResult(template_name="T")
        for name in ("B", "A", "B"):
            result.mark_sheet(name)
        result.mark_table("B/T1")
        result.mark_table("B/T1")

        assert result.sheets_validated == ["B", "A"]
        assert result.tables_validated == ["B/T1"]

    def test_to_dict(self):
        result = ValidationResult(template_name="T")
        result.add_error(MissingSheet(sheet="A"))
        result.mark_sheet("B")

        data = result.to_dict()
        assert data["template"] == "T"
        assert data["valid"] is False
        assert data["summary"] == "template T: 1 error(s)"
        assert data["errors"][0]["type"] == "missing_sheet"
        assert data["sheets_validated"] == ["B"]
        assert data["tables_validated"] == []

    def test_results_do_not_share_state(self):
        first = ValidationResult(template_name="T")
        first.add_error(MissingSheet(sheet="A"))
        assert ValidationResult(template_name="T").errors == []
