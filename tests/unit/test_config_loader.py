"""Unit tests for configuration loading.

These tests verify:
- Valid files load into ProductConfigurationFile
- Missing files, bad JSON and schema violations raise ConfigError
- Error details carry JSON paths
"""

import json
from pathlib import Path

import pytest

from blinds.application.config import (
    ConfigError,
    ProductConfigurationFile,
    load_config,
    load_config_from_dict,
)
from blinds.domain.value_objects import CategoryKind, OptionsCompletion

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


def _minimal(**overrides) -> dict:
    data = {
        "schema_version": "1.0",
        "product": {"id": "roller", "base_price": 100},
        "dimensions": {"min_width": 24, "max_width": 72, "min_height": 36, "max_height": 96},
    }
    data.update(overrides)
    return data


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_valid_file(self) -> None:
        config = load_config(FIXTURES_PATH / "valid.json")
        assert isinstance(config, ProductConfigurationFile)
        assert config.product.id == "roller"
        assert len(config.catalog.fabrics[0].colors) == 2
        assert config.inventory.min_stock_levels == {CategoryKind.CONTROL_TYPE: 4}

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found") as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigError, match="Invalid JSON") as exc_info:
            load_config(FIXTURES_PATH / "invalid_json.json")
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 4

    def test_unknown_field(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "unknown_field.json")
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "product.color"

    def test_reads_written_file(self, tmp_path: Path) -> None:
        path = tmp_path / "shade.json"
        path.write_text(json.dumps(_minimal()))
        assert load_config(path).dimensions.max_height == 96


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict and schema rules."""

    def test_defaults(self) -> None:
        config = load_config_from_dict(_minimal())
        assert config.policy.price_adjustment_floor == 0.0
        assert config.policy.size_rate_per_foot == 0.10
        assert config.policy.options_completion is OptionsCompletion.ANY_PICK
        assert config.coarse_options is None
        assert config.dimensions.width_increment == 0.125

    def test_negative_base_price(self) -> None:
        data = _minimal(product={"id": "roller", "base_price": -1})
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(data)
        assert exc_info.value.details[0]["path"] == "product.base_price"

    def test_nested_list_path(self) -> None:
        data = _minimal(selections={"control_type": [{"value": "cordless"}, {"default": True}]})
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(data)
        assert exc_info.value.details[0]["path"] == "selections.control_type[1].value"

    def test_unknown_room(self) -> None:
        data = _minimal(room_recommendations=[{"room": "garage", "level": 3}])
        with pytest.raises(ConfigError, match="room_recommendations"):
            load_config_from_dict(data)

    def test_recommendation_level_out_of_range(self) -> None:
        data = _minimal(room_recommendations=[{"room": "bedroom", "level": 7}])
        with pytest.raises(ConfigError, match="level"):
            load_config_from_dict(data)

    def test_negative_stock(self) -> None:
        data = _minimal(inventory={"stock": {"control_cordless": -2}})
        with pytest.raises(ConfigError, match="cannot be negative"):
            load_config_from_dict(data)

    def test_newer_minor_version_accepted(self) -> None:
        assert load_config_from_dict(_minimal(schema_version="1.4")).schema_version == "1.4"

    def test_unsupported_major_version(self) -> None:
        with pytest.raises(ConfigError, match="Unsupported schema version"):
            load_config_from_dict(_minimal(schema_version="2.0"))

    def test_malformed_version(self) -> None:
        with pytest.raises(ConfigError, match="schema_version"):
            load_config_from_dict(_minimal(schema_version="v1"))

    def test_missing_dimensions(self) -> None:
        data = _minimal()
        del data["dimensions"]
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(data)
        assert exc_info.value.details[0]["path"] == "dimensions"

    def test_values_for_fabric_is_empty(self) -> None:
        config = load_config(FIXTURES_PATH / "valid.json")
        assert config.catalog.values_for(CategoryKind.FABRIC) == []
        assert [v.id for v in config.catalog.values_for(CategoryKind.HEADRAIL)] == [
            "open-roll",
            "cassette",
        ]
