"""Exceptions raised by sheetguard.

Structural mismatches between a workbook and a template are never raised;
they are reported as entries of a ``ValidationResult``. The exceptions here
signal problems with the inputs themselves.
"""

from __future__ import annotations

from typing import Any, Mapping


class SheetguardError(Exception):
    """Base exception for sheetguard."""


class InvalidInputError(SheetguardError):
    """Raised when the engine is handed something that is not a workbook or template."""


class WorkbookLoadError(SheetguardError):
    """Raised when a file cannot be parsed into a ``Workbook``."""


class TemplateDefinitionError(SheetguardError):
    """Raised when a template definition file is malformed."""

    def __init__(self, message: str, errors: list[Mapping[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []
