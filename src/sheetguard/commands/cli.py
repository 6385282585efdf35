"""Command line entry point: ``sheetguard validate`` and ``sheetguard columns``."""

from __future__ import annotations

import json
import sys

import click
import structlog
from pydantic import ValidationError as PydanticValidationError

from .._logging import LOG_LEVELS, setup_logging
from ..config import ValidatorSettings
from ..exceptions import SheetguardError
from ..template import ValidationResult, load_template, quick_validate, validate_template
from ..workbook import Workbook, load_workbook

logger = structlog.get_logger()

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(EXIT_ERROR)


def _load_settings() -> ValidatorSettings:
    try:
        return ValidatorSettings.load()
    except PydanticValidationError as e:
        _fail(f"invalid validation settings: {e}")
    except SheetguardError as e:
        _fail(str(e))


def _load(path: str, header_row: int, delimiter: str) -> Workbook:
    try:
        return load_workbook(path, header_row=header_row, delimiter=delimiter)
    except SheetguardError as e:
        _fail(str(e))


def _report(result: ValidationResult, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(result.summary())
        for error in result.errors:
            click.echo(f"  - [{error.type}] {error.message}")
    sys.exit(EXIT_VALID if result.valid else EXIT_INVALID)


def _workbook_options(f):
    f = click.option(
        "--header-row",
        type=click.IntRange(min=1),
        default=1,
        show_default=True,
        help="1-based row holding the column names",
    )(f)
    f = click.option(
        "--delimiter", default=",", show_default=True, help="CSV delimiter"
    )(f)
    f = click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")(f)
    return f


@click.group("sheetguard")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: SHEETGUARD_LOG_LEVEL or warning)",
)
@click.option(
    "--log-json/--no-log-json",
    default=None,
    help="Emit JSON log lines on stderr",
)
def sheetguard_group(log_level: str | None, log_json: bool | None) -> None:
    """Validate workbook structure against templates."""
    try:
        setup_logging(log_level, log_json)
    except (SheetguardError, ValueError) as e:
        _fail(f"invalid logging settings: {e}")


@sheetguard_group.command("validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--template",
    "-t",
    "template_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON template definition",
)
@_workbook_options
def validate_cli(
    file: str, template_path: str, header_row: int, delimiter: str, as_json: bool
) -> None:
    """Validate FILE (CSV or XLSX) against a JSON template.

    Examples:\n
        sheetguard validate orders.xlsx -t orders-template.json\n
        sheetguard validate export.csv -t export.json --json\n
    """
    try:
        template = load_template(template_path)
    except SheetguardError as e:
        _fail(str(e))

    settings = _load_settings()
    workbook = _load(file, header_row, delimiter)
    _report(validate_template(workbook, template, settings=settings), as_json)


@sheetguard_group.command("columns")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("names", nargs=-1, required=True)
@_workbook_options
def columns_cli(
    file: str, names: tuple[str, ...], header_row: int, delimiter: str, as_json: bool
) -> None:
    """Check that the first table of FILE has the columns NAMES.

    Examples:\n
        sheetguard columns orders.xlsx Id Amount Customer\n
    """
    settings = _load_settings()
    workbook = _load(file, header_row, delimiter)
    _report(quick_validate(workbook, *names, settings=settings), as_json)


def main() -> None:
    sheetguard_group()
