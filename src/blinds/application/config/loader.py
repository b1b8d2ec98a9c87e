"""Reading product configuration files.

``load_config`` reads a JSON file and checks it against
``ProductConfigurationFile``. Every failure surfaces as ``ConfigError``;
its ``error_type`` says whether the file was missing or unreadable, was not
JSON, or did not fit the schema.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from blinds.application.config.schema import ProductConfigurationFile

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A configuration file could not be turned into a usable product.

    Attributes:
        message: One-line summary, or a summary followed by one line per
            schema problem
        error_type: file_not_found, permission_denied, file_read_error,
            json_parse, validation or domain
        path: The file involved, when there is one
        details: ``line``/``column``/``message`` for JSON syntax errors;
            ``path``/``message``/``value``/``error_type`` per schema error
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = list(details) if details else []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location the way the file is addressed.

    >>> json_path(("selections", "fabric", 0, "value"))
    'selections.fabric[0].value'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _schema_problems(error: PydanticValidationError) -> list[dict[str, Any]]:
    problems = []
    for item in error.errors():
        problems.append(
            {
                "path": json_path(item["loc"]),
                "message": item["msg"],
                "value": item.get("input"),
                "error_type": item["type"],
            }
        )
    return problems


def _summarize(problems: list[dict[str, Any]]) -> str:
    lines = [f"Configuration has {len(problems)} schema error(s):"]
    for problem in problems:
        line = f"  - {problem['path']}: {problem['message']}"
        value = problem["value"]
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(
            message=f"Configuration file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    except PermissionError:
        raise ConfigError(
            message=f"No permission to read {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Could not read {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _parse(data: Any, path: Path | None) -> ProductConfigurationFile:
    try:
        config = ProductConfigurationFile.model_validate(data)
    except PydanticValidationError as e:
        problems = _schema_problems(e)
        raise ConfigError(
            message=_summarize(problems),
            error_type="validation",
            path=path,
            details=problems,
        )
    source = f" from {path}" if path is not None else ""
    logger.debug(f"Loaded product '{config.product.id}'{source}")
    return config


def load_config(path: Path) -> ProductConfigurationFile:
    """Read and check a configuration file.

    Raises:
        ConfigError: If the file is missing or unreadable, is not JSON, or
            does not fit the schema.

    Example:
        >>> try:
        ...     config = load_config(Path("roller-shade.json"))
        ... except ConfigError as e:
        ...     print(e.error_type, e.message)
    """
    return _parse(_read_json(path), path)


def load_config_from_dict(data: dict[str, Any]) -> ProductConfigurationFile:
    """Check an already-parsed configuration, e.g. a bundled template.

    Raises:
        ConfigError: If the data does not fit the schema.
    """
    return _parse(data, None)
