"""Load templates from JSON definitions.

A definition mirrors the builder options::

    {
        "name": "Orders",
        "required_sheets": ["Orders"],
        "strict_sheets": true,
        "sheets": {
            "Orders": {
                "required_columns": ["Id", "Amount"],
                "column_types": {"Amount": "number"},
                "type_strictness": "lenient",
                "min_rows": 1
            }
        }
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import TemplateDefinitionError
from ..workbook.model import CellType
from .schema import SheetSchema, TypeStrictness, new_schema
from .template import Template, new_template


class SchemaDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    table: Optional[str] = None
    required_columns: List[str] = Field(default_factory=list)
    optional_columns: List[str] = Field(default_factory=list)
    column_types: Dict[str, CellType] = Field(default_factory=dict)
    type_strictness: TypeStrictness = TypeStrictness.strict
    expect_order: bool = False
    strict_columns: bool = False
    min_rows: int = Field(default=0, ge=0)
    max_rows: Optional[int] = Field(default=None, ge=0)
    allow_empty: bool = False

    def to_schema(self) -> SheetSchema:
        builder = (
            new_schema()
            .require_columns(*self.required_columns)
            .optional_columns(*self.optional_columns)
            .type_strictness(self.type_strictness)
            .row_count(self.min_rows, self.max_rows)
        )
        if self.table is not None:
            builder.table(self.table)
        for column, cell_type in self.column_types.items():
            builder.column_type(column, cell_type)
        if self.expect_order:
            builder.expect_order()
        if self.strict_columns:
            builder.strict_columns()
        if self.allow_empty:
            builder.allow_empty()
        return builder.build()


class TemplateDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    required_sheets: List[str] = Field(default_factory=list)
    strict_sheets: bool = False
    sheets: Dict[str, SchemaDefinition] = Field(default_factory=dict)

    def to_template(self) -> Template:
        builder = new_template(self.name).require_sheets(*self.required_sheets)
        for sheet_name, schema in self.sheets.items():
            builder.sheet(sheet_name, schema.to_schema())
        if self.strict_sheets:
            builder.strict_sheets()
        return builder.build()


def _format_errors(err: ValidationError) -> str:
    lines = []
    for error in err.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        if location:
            lines.append(f"• {location}: {error.get('msg')}")
        else:
            lines.append(f"• {error.get('msg')}")
    return "\n".join(lines) if lines else str(err)


def template_from_dict(data: Mapping[str, Any]) -> Template:
    """Build a ``Template`` from a parsed definition.

    Raises:
        TemplateDefinitionError: If the definition does not match the expected shape
    """
    try:
        definition = TemplateDefinition.model_validate(data)
    except ValidationError as err:
        raise TemplateDefinitionError(
            f"Invalid template definition:\n{_format_errors(err)}", err.errors()
        ) from err
    return definition.to_template()


def load_template(path: str | Path) -> Template:
    """Read a JSON template definition from ``path``.

    Raises:
        TemplateDefinitionError: If the file cannot be read, is not JSON or is malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise TemplateDefinitionError(f"Cannot read template {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TemplateDefinitionError(f"Template {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise TemplateDefinitionError(f"Template {path} must contain a JSON object")
    return template_from_dict(data)
