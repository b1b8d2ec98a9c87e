"""``blinds templates``: the bundled starter configurations."""

from pathlib import Path
from typing import Annotated, NoReturn

import typer

from blinds.application.templates import TemplateManager, TemplateNotFoundError

templates_app = typer.Typer(
    name="templates",
    help="Starter product configuration files.",
)


def _fail(*lines: str) -> NoReturn:
    for line in lines:
        typer.echo(line, err=True)
    raise typer.Exit(code=1)


@templates_app.command(name="list")
def list_templates() -> None:
    """Show the bundled starter configurations."""
    templates = TemplateManager().list_templates()

    typer.echo("Available templates:")
    width = max((len(name) for name, _ in templates), default=0)
    for name, description in templates:
        typer.echo(f"  {name.ljust(width)}  {description}")
    typer.echo()
    typer.echo("Start from one with: blinds templates init <name>")


@templates_app.command(name="init")
def init_template(
    name: Annotated[
        str,
        typer.Argument(help="Template to copy, e.g. roller-shade"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Where to write it (default: ./<name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Replace an existing file"),
    ] = False,
) -> None:
    """Write a starter configuration to disk.

    Examples:
        blinds templates init roller-shade
        blinds templates init faux-wood -o kitchen.json --force
    """
    manager = TemplateManager()
    target = output or Path(f"{name}.json")

    if not manager.template_exists(name):
        names = ", ".join(n for n, _ in manager.list_templates())
        _fail(f"Error: Template not found: {name}", f"Available templates: {names}")
    if target.exists() and not force:
        _fail(f"Error: {target} already exists (pass --force to replace it)")

    try:
        manager.init_template(name, target)
    except (TemplateNotFoundError, OSError) as e:
        _fail(f"Error: {e}")
    typer.echo(f"Created: {target}")
