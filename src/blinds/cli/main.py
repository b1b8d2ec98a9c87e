"""Typer CLI for quoting, validating and stocking configurable blinds."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from blinds.application import QuoteInput, get_factory
from blinds.application.config import ConfigError, load_config
from blinds.cli.commands import templates_app, validate_command
from blinds.domain import CategoryKind, ConfiguratorError
from blinds.domain.services import SORT_COLUMNS

app = typer.Typer(
    name="blinds",
    help="Price, validate and stock configurable window blinds.",
)

# Register validate command
app.command(name="validate")(validate_command)

# Register templates subcommand group
app.add_typer(templates_app, name="templates")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Price, validate and stock configurable window blinds."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _parse_pairs(pairs: list[str] | None, flag: str) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a dict.

    Repeating a key appends to its value with a comma, so
    ``--choose specialty=a --choose specialty=b`` reads as ``a,b``.
    """
    parsed: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip() or not value.strip():
            typer.echo(f"Error: {flag} expects key=value, got '{pair}'", err=True)
            raise typer.Exit(code=1)
        key, value = key.strip(), value.strip()
        parsed[key] = f"{parsed[key]},{value}" if key in parsed else value
    return parsed


def _load(config_file: Path):
    try:
        return load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def quote(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the product configuration file"),
    ],
    width: Annotated[float, typer.Option("--width", "-w", help="Blind width in inches")],
    height: Annotated[float, typer.Option("--height", "-h", help="Blind height in inches")],
    choose: Annotated[
        list[str] | None,
        typer.Option(
            "--choose",
            "-c",
            help="Category choice as kind=value_id (e.g. control_type=motorized); repeatable",
        ),
    ] = None,
    option: Annotated[
        list[str] | None,
        typer.Option(
            "--option",
            help='Coarse option as "Name=Value" (e.g. "Opacity=Blackout"); repeatable',
        ),
    ] = None,
    defaults: Annotated[
        bool,
        typer.Option("--defaults", help="Price unchosen categories at their default value"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
) -> None:
    """Price a blind at a given size with the chosen options.

    Examples:
        blinds quote roller-shade.json -w 36 -h 48 -c control_type=motorized
        blinds quote roller-shade.json -w 36 -h 48 --option "Opacity=Blackout"
    """
    if output_format not in ("text", "json"):
        typer.echo(f"Error: Unknown format '{output_format}'. Use text or json.", err=True)
        raise typer.Exit(code=1)

    quote_input = QuoteInput(
        width=width,
        height=height,
        choices=_parse_pairs(choose, "--choose"),
        coarse_options=_parse_pairs(option, "--option"),
        apply_defaults=defaults,
    )

    config = _load(config_file)
    factory = get_factory()
    try:
        command = factory.create_quote_command(config)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    result = command.execute(quote_input)
    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    formatter = factory.get_price_formatter()
    if output_format == "json":
        typer.echo(formatter.format_json(result.breakdown))
    else:
        title = f"PRICE BREAKDOWN: {config.product.name or config.product.id}"
        typer.echo(formatter.format(result.breakdown, title=title))


@app.command()
def inventory(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the product configuration file"),
    ],
    low_stock: Annotated[
        bool,
        typer.Option("--low-stock", help="Only list items at or below their minimum level"),
    ] = False,
    search: Annotated[
        str | None,
        typer.Option("--search", "-s", help="Filter by name or type"),
    ] = None,
    category: Annotated[
        str | None,
        typer.Option("--category", help="Filter by option category (e.g. fabric)"),
    ] = None,
    sort_by: Annotated[
        str,
        typer.Option("--sort", help=f"Sort column: {', '.join(SORT_COLUMNS)}"),
    ] = "name",
    descending: Annotated[
        bool,
        typer.Option("--desc", help="Sort in descending order"),
    ] = False,
    csv_output: Annotated[
        bool,
        typer.Option("--csv", help="Print CSV instead of a table"),
    ] = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write CSV to this file"),
    ] = None,
) -> None:
    """List the inventory rows generated for a product.

    Examples:
        blinds inventory roller-shade.json --low-stock
        blinds inventory roller-shade.json --csv -o stock.csv
    """
    config = _load(config_file)
    factory = get_factory()

    try:
        kind = CategoryKind.parse(category) if category else None
        ledger = factory.create_inventory_ledger(config)
        items = ledger.query(
            text=search,
            category=kind,
            low_stock_only=low_stock,
            sort_by=sort_by,
            descending=descending,
        )
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)
    except (ConfiguratorError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_file is not None:
        factory.get_inventory_csv_exporter().export(items, output_file)
        typer.echo(f"Exported {len(items)} rows to {output_file}")
    elif csv_output:
        typer.echo(factory.get_inventory_csv_exporter().export_string(items), nl=False)
    else:
        typer.echo(factory.get_inventory_formatter().format(items))


if __name__ == "__main__":
    app()
