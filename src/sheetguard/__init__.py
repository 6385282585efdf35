from ._version import __version__
from .exceptions import InvalidInputError, SheetguardError
from .template import (
    ErrorType,
    SheetSchema,
    Template,
    TypeStrictness,
    ValidationResult,
    new_schema,
    new_template,
    quick_validate,
    validate_columns,
    validate_template,
)
from .workbook import Cell, CellType, Sheet, Table, Workbook, load_workbook

__all__ = [
    "__version__",
    "Cell",
    "CellType",
    "ErrorType",
    "InvalidInputError",
    "Sheet",
    "SheetSchema",
    "SheetguardError",
    "Table",
    "Template",
    "TypeStrictness",
    "ValidationResult",
    "Workbook",
    "load_workbook",
    "new_schema",
    "new_template",
    "quick_validate",
    "validate_columns",
    "validate_template",
]
