"""``blinds validate``: check a product configuration file before it is used."""

from pathlib import Path
from typing import Annotated, Any

import typer

from blinds.application.config import (
    ConfigError,
    ValidationResult,
    config_to_product,
    load_config,
    validate_config,
)

# Heading shown for each kind of load failure
_LOAD_FAILURES = {
    "file_not_found": "File not found",
    "permission_denied": "Permission denied",
    "file_read_error": "Could not read file",
    "json_parse": "Invalid JSON syntax",
    "validation": "Schema errors",
}


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Product configuration file to check"),
    ],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat warnings as failures"),
    ] = False,
) -> None:
    """Check a product configuration file.

    Beyond the schema, selections are checked against the catalog, every
    category needs exactly one default, dimension ranges must be ordered and
    surcharges must respect the policy floor.

    Exits 0 when the file is clean, 1 on errors and 2 when there are only
    warnings (1 with --strict).

    Example:
        blinds validate roller-shade.json
    """
    typer.echo(f"Checking {config_file}")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _report_load_failure(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    product = None
    if result.is_valid:
        try:
            product = config_to_product(config)
        except ConfigError as e:
            result.add_error(path="(configuration)", message=e.message)

    _report(result)
    if product is not None:
        offered = sum(1 for _ in product.iter_selections())
        typer.echo(f"{config.product.name or config.product.id}: {offered} option(s) offered")

    code = result.exit_code
    if strict and code == 2:
        code = 1
    raise typer.Exit(code=code)


def _report_load_failure(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    heading = _LOAD_FAILURES.get(error.error_type)
    if heading is None:
        typer.echo(f"  {error.message}", err=True)
    elif not error.details:
        typer.echo(f"  {heading}: {error.path}", err=True)
    else:
        typer.echo(f"  {heading}", err=True)
        for detail in error.details:
            typer.echo(f"    {_describe(detail)}", err=True)
    typer.echo()
    typer.echo("Validation failed.", err=True)


def _describe(detail: dict[str, Any]) -> str:
    if "line" in detail:
        return f"Line {detail['line']}, column {detail['column']}: {detail['message']}"
    text = f"{detail['path']}: {detail['message']}"
    value = detail.get("value")
    if value is not None and not isinstance(value, (dict, list)):
        text += f" (got {value!r})"
    return text


def _report(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            line = f"  {error.path}: {error.message}"
            if error.value is not None:
                line += f" (got {error.value!r})"
            typer.echo(line, err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    errors, warnings = len(result.errors), len(result.warnings)
    if errors:
        typer.echo(f"Validation failed: {errors} error(s), {warnings} warning(s)", err=True)
    elif warnings:
        typer.echo(f"Validation passed with {warnings} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")
