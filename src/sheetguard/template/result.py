"""Aggregated outcome of a template validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ErrorType, ValidationError


@dataclass
class ValidationResult:
    """Errors and coverage for one validation call.

    Attributes:
        template_name: Name of the template that was applied
        errors: Mismatches in detection order
        sheets_validated: Sheets that were located and checked
        tables_validated: Tables that were located and checked, as ``"<sheet>/<table>"``
    """

    template_name: str
    errors: list[ValidationError] = field(default_factory=list)
    sheets_validated: list[str] = field(default_factory=list)
    tables_validated: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        """One-line summary, e.g. ``template Orders: 2 error(s)``."""
        if self.valid:
            return f"template {self.template_name}: valid"
        return f"template {self.template_name}: {len(self.errors)} error(s)"

    def errors_of(self, error_type: ErrorType) -> list[ValidationError]:
        """Get the errors of a single kind, in detection order."""
        return [error for error in self.errors if error.type == error_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.template_name,
            "valid": self.valid,
            "summary": self.summary(),
            "errors": [error.to_dict() for error in self.errors],
            "sheets_validated": list(self.sheets_validated),
            "tables_validated": list(self.tables_validated),
        }

    # -- engine helpers -----------------------------------------------------

    def add_error(self, error: ValidationError) -> None:
        self.errors.append(error)

    def mark_sheet(self, name: str) -> None:
        if name not in self.sheets_validated:
            self.sheets_validated.append(name)

    def mark_table(self, identifier: str) -> None:
        if identifier not in self.tables_validated:
            self.tables_validated.append(identifier)
