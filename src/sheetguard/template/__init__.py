"""Template and schema model plus the validation engine."""

from __future__ import annotations

from .definition import load_template, template_from_dict
from .engine import quick_validate, validate_columns, validate_table, validate_template
from .errors import (
    ColumnOrder,
    ColumnType,
    ErrorType,
    MissingColumn,
    MissingSheet,
    MissingTable,
    RowCount,
    UnexpectedColumn,
    UnexpectedSheet,
    ValidationError,
)
from .result import ValidationResult
from .schema import SchemaBuilder, SheetSchema, TypeStrictness, new_schema
from .template import Template, TemplateBuilder, new_template

__all__ = [
    "ColumnOrder",
    "ColumnType",
    "ErrorType",
    "MissingColumn",
    "MissingSheet",
    "MissingTable",
    "RowCount",
    "SchemaBuilder",
    "SheetSchema",
    "Template",
    "TemplateBuilder",
    "TypeStrictness",
    "UnexpectedColumn",
    "UnexpectedSheet",
    "ValidationError",
    "ValidationResult",
    "load_template",
    "new_schema",
    "new_template",
    "quick_validate",
    "template_from_dict",
    "validate_columns",
    "validate_table",
    "validate_template",
]
