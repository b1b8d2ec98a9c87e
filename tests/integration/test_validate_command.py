"""End-to-end runs of `blinds validate` against fixture files.

Covers exit codes 0, 1 and 2 and the error and warning listings.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from blinds.cli.main import app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_config(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "valid.json")])
        assert result.exit_code == 0
        assert "Validation passed. Configuration is valid." in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "nonexistent.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "invalid_json.json")])
        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Line 4" in result.output
        assert "Validation failed" in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "unknown_field.json")])
        assert result.exit_code == 1
        assert "product.color" in result.output

    def test_valid_config_with_warnings(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "with_warnings.json")])
        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "Base price is zero" in result.output
        assert "Suggestion:" in result.output
        assert "Validation passed with 6 warning(s)" in result.output

    def test_selection_errors(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "bad_defaults.json")])
        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "Exactly one control type must be marked default (found 2)" in result.output
        assert "'day-night' does not exist in the catalog" in result.output
        assert "Validation failed: 4 error(s)" in result.output

    def test_bundled_template_is_valid(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "cellular.json"
        init = runner.invoke(app, ["templates", "init", "cellular-shade", "-o", str(output)])
        assert init.exit_code == 0

        result = runner.invoke(app, ["validate", str(output)])
        assert result.exit_code == 0

    def test_strict_fails_on_warnings(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["validate", "--strict", str(FIXTURES_PATH / "with_warnings.json")]
        )
        assert result.exit_code == 1
        assert "Validation passed with 6 warning(s)" in result.output

    def test_reports_offered_options(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "valid.json")])
        assert "Roller Shade: 12 option(s) offered" in result.output
