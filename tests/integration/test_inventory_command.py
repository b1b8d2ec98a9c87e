"""Integration tests for the inventory CLI command."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from blinds.cli.main import app
from blinds.infrastructure import INVENTORY_CSV_HEADERS

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"
VALID = str(FIXTURES_PATH / "valid.json")

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestInventoryCommand:
    """Tests for the inventory command."""

    def test_table(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["inventory", VALID])
        assert result.exit_code == 0
        assert "INVENTORY" in result.output
        assert "White (Linen)" in result.output
        assert "12 items" in result.output

    def test_low_stock_only(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["inventory", VALID, "--low-stock"])
        assert result.exit_code == 0
        assert "Motorized" in result.output
        assert "Cordless" not in result.output
        assert "White (Linen)" not in result.output

    def test_category_filter(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["inventory", VALID, "--category", "fabric"])
        assert result.exit_code == 0
        assert "2 items" in result.output
        assert "Beige (Linen)" in result.output

    def test_csv(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["inventory", VALID, "--csv", "--sort", "available_stock", "--desc"]
        )
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == ",".join(INVENTORY_CSV_HEADERS)
        assert lines[1].startswith("White (Linen),Fabric,40,40,10,")

    def test_csv_to_file(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "stock.csv"
        result = runner.invoke(app, ["inventory", VALID, "-o", str(output)])
        assert result.exit_code == 0
        assert "Exported 12 rows" in result.output
        assert output.read_text().startswith("Name,Type")

    def test_unknown_sort_column(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["inventory", VALID, "--sort", "price"])
        assert result.exit_code == 1
        assert "Unknown sort column" in result.output

    def test_unknown_category(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["inventory", VALID, "--category", "valance"])
        assert result.exit_code == 1
        assert "Unknown option category" in result.output
