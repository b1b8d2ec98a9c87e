"""CLI commands for the blinds configurator."""

from blinds.cli.commands.templates import templates_app
from blinds.cli.commands.validate import validate_command

__all__ = ["validate_command", "templates_app"]
