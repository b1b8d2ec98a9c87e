"""Template manager for bundled product configuration templates.

Templates are complete, valid configuration files for common blind types.
They ship as package data and are read with ``importlib.resources``.
"""

import json
from importlib import resources
from pathlib import Path

from blinds.application.config import ProductConfigurationFile, load_config_from_dict


class TemplateNotFoundError(Exception):
    """No bundled template has this name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")


# Bundled templates and the one-line blurb `blinds templates list` shows
TEMPLATE_METADATA: dict[str, str] = {
    "roller-shade": "Roller shade with light filtering and blackout fabrics",
    "cellular-shade": "Single and double cell honeycomb shade",
    "faux-wood": "Faux wood blind with valance and tilt options",
}


class TemplateManager:
    """Lists, reads and copies the bundled templates.

    Example:
        manager = TemplateManager()
        for name, description in manager.list_templates():
            print(f"{name}: {description}")

        manager.init_template("roller-shade", Path("my-roller.json"))
    """

    def __init__(self) -> None:
        self._data_package = "blinds.application.templates.data"

    def list_templates(self) -> list[tuple[str, str]]:
        """(name, description) for each bundled template."""
        return list(TEMPLATE_METADATA.items())

    def template_exists(self, name: str) -> bool:
        return name in TEMPLATE_METADATA

    def get_template(self, name: str) -> str:
        """Raw JSON text of a template.

        Raises:
            TemplateNotFoundError: If no bundled template has this name.
        """
        if not self.template_exists(name):
            raise TemplateNotFoundError(name)
        try:
            template_file = resources.files(self._data_package).joinpath(f"{name}.json")
            return template_file.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateNotFoundError(name) from e

    def load_template(self, name: str) -> ProductConfigurationFile:
        """Parse and validate a template.

        Raises:
            TemplateNotFoundError: If no bundled template has this name.
            ConfigError: If the bundled file does not match the schema.
        """
        return load_config_from_dict(json.loads(self.get_template(name)))

    def init_template(self, name: str, output_path: Path) -> None:
        """Write a template to ``output_path``, replacing any existing file.

        Raises:
            TemplateNotFoundError: If no bundled template has this name.
        """
        output_path.write_text(self.get_template(name), encoding="utf-8")
