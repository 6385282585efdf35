"""Workbook-level template and its builder."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .schema import SheetSchema, _unique


class Template(BaseModel):
    """Named collection of sheet requirements.

    Attributes:
        name: Used in summaries and log events only
        required_sheets: Sheets that must exist, in check order
        strict_sheets: Report workbook sheets that are neither required nor described
        sheet_schemas: Sheet name -> ``SheetSchema``; a required sheet without an
            entry only has to exist

    Example:
        Template(
            name="Orders",
            required_sheets=["Orders"],
            sheet_schemas={"Orders": SheetSchema(required_columns=["Id"], min_rows=1)},
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ""
    required_sheets: Tuple[str, ...] = ()
    strict_sheets: bool = False
    sheet_schemas: Mapping[str, SheetSchema] = Field(default_factory=dict, validate_default=True)

    @field_validator("required_sheets", mode="before")
    @classmethod
    def _dedupe_sheets(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return _unique(value)
        return value

    @field_validator("sheet_schemas", mode="after")
    @classmethod
    def _freeze_schemas(cls, value: Mapping[str, SheetSchema]) -> Mapping[str, SheetSchema]:
        return MappingProxyType(dict(value))

    @field_serializer("sheet_schemas")
    def _dump_schemas(self, value: Mapping[str, SheetSchema]) -> Dict[str, Any]:
        return dict(value)

    @property
    def known_sheets(self) -> frozenset[str]:
        """Required sheet names and schema keys."""
        return frozenset(self.required_sheets) | frozenset(self.sheet_schemas)


class TemplateBuilder:
    """Accumulates template options and freezes them with ``build()``."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._required: list[str] = []
        self._strict_sheets = False
        self._schemas: dict[str, SheetSchema] = {}

    def require_sheets(self, *names: str) -> "TemplateBuilder":
        self._required.extend(names)
        return self

    def sheet(self, name: str, schema: SheetSchema) -> "TemplateBuilder":
        """Attach ``schema`` to sheet ``name``, replacing any earlier one."""
        self._schemas[name] = schema
        return self

    def strict_sheets(self) -> "TemplateBuilder":
        self._strict_sheets = True
        return self

    def build(self) -> Template:
        return Template(
            name=self._name,
            required_sheets=list(self._required),
            strict_sheets=self._strict_sheets,
            sheet_schemas=dict(self._schemas),
        )


def new_template(name: str) -> TemplateBuilder:
    """Start building a ``Template``."""
    return TemplateBuilder(name)
