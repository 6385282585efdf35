"""Template validation engine.

Walks a ``Workbook`` against a ``Template`` and reports every structural
mismatch as data. No check short-circuits another: a missing sheet or table
only skips the checks that need it, so callers see all problems in one pass.

The engine is synchronous and keeps no state between calls; workbooks and
templates are read, never modified.
"""

from __future__ import annotations

from collections import Counter

import structlog

from ..config import ValidatorSettings
from ..exceptions import InvalidInputError
from ..workbook.model import Sheet, Table, Workbook
from .errors import (
    ColumnOrder,
    ColumnType,
    MissingColumn,
    MissingSheet,
    MissingTable,
    RowCount,
    UnexpectedColumn,
    UnexpectedSheet,
)
from .result import ValidationResult
from .schema import SheetSchema, TypeStrictness
from .template import Template

logger = structlog.get_logger()

QUICK_TEMPLATE_NAME = "quick"


def validate_columns(table: Table, *column_names: str) -> list[str]:
    """Return the names in ``column_names`` missing from ``table.headers``, in input order."""
    headers = set(table.headers)
    return [name for name in column_names if name not in headers]


def _check_workbook(workbook: object) -> None:
    if not isinstance(workbook, Workbook):
        raise InvalidInputError(
            f"workbook must be a Workbook instance, got {type(workbook).__name__}"
        )


def _check_inputs(workbook: object, template: object) -> None:
    _check_workbook(workbook)
    if not isinstance(template, Template):
        raise InvalidInputError(
            f"template must be a Template instance, got {type(template).__name__}"
        )


def _resolve_table(
    sheet: Sheet, schema: SheetSchema, result: ValidationResult
) -> Table | None:
    if schema.table_name is not None:
        table = sheet.get_table(schema.table_name)
    else:
        table = sheet.first_table

    if table is None:
        result.add_error(MissingTable(sheet=sheet.name, table=schema.table_name))
    return table


def _check_required_columns(
    sheet: str, table: Table, schema: SheetSchema, result: ValidationResult
) -> None:
    for name in validate_columns(table, *schema.required_columns):
        result.add_error(MissingColumn(sheet=sheet, table=table.name, column=name))


def _check_order(sheet: str, table: Table, schema: SheetSchema, result: ValidationResult) -> None:
    required = set(schema.required_columns)
    # First occurrence of each required header, in sheet order
    seen = list(dict.fromkeys(h for h in table.headers if h in required))
    present = set(seen)
    expected = [name for name in schema.required_columns if name in present]

    for position, (want, got) in enumerate(zip(expected, seen)):
        if want != got:
            result.add_error(
                ColumnOrder(
                    sheet=sheet,
                    table=table.name,
                    position=position,
                    expected_column=want,
                    actual_column=got,
                )
            )
            return


def _check_strict_columns(
    sheet: str, table: Table, schema: SheetSchema, result: ValidationResult
) -> None:
    known = schema.known_columns
    for header in table.headers:
        if header not in known:
            result.add_error(UnexpectedColumn(sheet=sheet, table=table.name, column=header))


def _check_column_types(
    sheet: str,
    table: Table,
    schema: SheetSchema,
    settings: ValidatorSettings,
    result: ValidationResult,
) -> None:
    if schema.type_strictness == TypeStrictness.strict:
        threshold = 1.0
    else:
        threshold = settings.lenient_threshold

    for column, expected in schema.column_types.items():
        if table.column_index(column) is None:
            continue

        cells = table.column_values(column)
        if settings.type_sample_size is not None:
            cells = cells[: settings.type_sample_size]
        sampled = [cell for cell in cells if not cell.is_empty]
        if not sampled:
            continue

        mismatches = Counter(cell.type for cell in sampled if cell.type != expected)
        ratio = (len(sampled) - sum(mismatches.values())) / len(sampled)
        if ratio >= threshold:
            continue

        result.add_error(
            ColumnType(
                sheet=sheet,
                table=table.name,
                column=column,
                expected_type=expected,
                actual_type=mismatches.most_common(1)[0][0],
                ratio=ratio,
            )
        )


def _check_row_count(
    sheet: str, table: Table, schema: SheetSchema, result: ValidationResult
) -> None:
    count = table.row_count
    if schema.accepts_row_count(count):
        return
    result.add_error(
        RowCount(
            sheet=sheet,
            table=table.name,
            min_rows=schema.min_rows,
            max_rows=schema.max_rows,
            count=count,
        )
    )


def validate_table(
    sheet: str,
    table: Table,
    schema: SheetSchema,
    result: ValidationResult,
    *,
    settings: ValidatorSettings | None = None,
) -> None:
    """Run the schema checks for one resolved table, appending errors to ``result``.

    Checks run in a fixed order: required columns, column order, unexpected
    columns, column types, row count.
    """
    settings = settings or ValidatorSettings()

    _check_required_columns(sheet, table, schema, result)
    if schema.expect_order:
        _check_order(sheet, table, schema, result)
    if schema.strict_columns:
        _check_strict_columns(sheet, table, schema, result)
    _check_column_types(sheet, table, schema, settings, result)
    _check_row_count(sheet, table, schema, result)


def validate_template(
    workbook: Workbook,
    template: Template,
    *,
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """Validate ``workbook`` against ``template``.

    Args:
        workbook: Parsed workbook; never modified
        template: Expected structure
        settings: Engine tunables; defaults to ``ValidatorSettings()``

    Returns:
        A new ``ValidationResult``

    Raises:
        InvalidInputError: If ``workbook`` or ``template`` is missing or of the wrong type
    """
    _check_inputs(workbook, template)
    settings = settings or ValidatorSettings()
    result = ValidationResult(template_name=template.name)

    # 1) Required sheets
    for name in template.required_sheets:
        if workbook.get_sheet(name) is None:
            result.add_error(MissingSheet(sheet=name))
        else:
            result.mark_sheet(name)

    # 2) Unexpected sheets
    if template.strict_sheets:
        known = template.known_sheets
        for sheet in workbook.sheets:
            if sheet.name not in known:
                result.add_error(UnexpectedSheet(sheet=sheet.name))

    # 3) Schemas: required sheets first, then the remaining schema keys
    required = set(template.required_sheets)
    ordered = list(template.required_sheets) + [
        name for name in template.sheet_schemas if name not in required
    ]
    for name in ordered:
        schema = template.sheet_schemas.get(name)
        if schema is None:
            continue
        sheet = workbook.get_sheet(name)
        if sheet is None:
            # Already reported when required; optional sheets may be absent
            continue

        result.mark_sheet(sheet.name)
        table = _resolve_table(sheet, schema, result)
        if table is None:
            continue
        result.mark_table(f"{sheet.name}/{table.name}")
        validate_table(sheet.name, table, schema, result, settings=settings)

    logger.debug(
        "template_validated",
        template=template.name,
        valid=result.valid,
        errors=len(result.errors),
        sheets=result.sheets_validated,
    )
    return result


def quick_validate(
    workbook: Workbook,
    *column_names: str,
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """Check that the first table of the first sheet has ``column_names``.

    Equivalent to a template named ``"quick"`` with no required sheets and a
    single schema, keyed by the first sheet, requiring the given columns.
    """
    _check_workbook(workbook)

    if not workbook.sheets:
        result = ValidationResult(template_name=QUICK_TEMPLATE_NAME)
        result.add_error(MissingSheet(sheet=""))
        return result

    template = Template(
        name=QUICK_TEMPLATE_NAME,
        sheet_schemas={
            workbook.sheets[0].name: SheetSchema(required_columns=list(column_names))
        },
    )
    return validate_template(workbook, template, settings=settings)
