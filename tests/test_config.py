"""Unit tests for genomenav.utils.config."""

import json

import pytest
import yaml

from genomenav.core.exceptions import ConfigurationError, ContextConstructionError
from genomenav.utils.config import (
    create_default_configuration, load_configuration, save_configuration, merge_configurations,
    validate_configuration_schema, build_features, build_navigation_context
)


REGIONS = [
    {"name": "geneA", "chr": "chr1", "start": 0, "end": 100},
    {"name": "spacer", "gap": 50},
    {"name": "geneB", "chr": "chr2", "start": 10, "end": 60, "strand": "-"},
]


class TestDefaults:
    """Tests for the default configuration."""

    def test_default_is_valid(self):
        result = validate_configuration_schema(create_default_configuration())
        assert result.is_valid
        assert result.details["n_regions"] == 3

    def test_default_layout(self):
        assert create_default_configuration()["layout"]["num_rows"] == 10


class TestValidation:
    """Tests for validate_configuration_schema."""

    def config_with(self, regions):
        config = create_default_configuration()
        config["context"]["regions"] = regions
        return config

    def test_inverted_region(self):
        result = validate_configuration_schema(self.config_with([{"name": "x", "chr": "chr1", "start": 10, "end": 5}]))
        assert not result.is_valid

    def test_missing_key(self):
        result = validate_configuration_schema(self.config_with([{"name": "x", "chr": "chr1"}]))
        assert not result.is_valid
        assert "missing" in result.errors[0]

    def test_missing_chromosome_is_not_a_gap(self):
        result = validate_configuration_schema(self.config_with([{"name": "geneA", "start": 100, "end": 200}]))
        assert not result.is_valid
        assert "'chr'" in result.errors[0]

    def test_duplicate_names(self):
        result = validate_configuration_schema(self.config_with([REGIONS[0], REGIONS[0]]))
        assert not result.is_valid

    def test_null_width(self):
        config = self.config_with(REGIONS)
        config["view"]["width"] = None
        result = validate_configuration_schema(config)
        assert not result.is_valid
        assert "'view.width' must be a number" in result.errors

    def test_string_padding(self):
        config = self.config_with(REGIONS)
        config["layout"]["padding"] = "5"
        result = validate_configuration_schema(config)
        assert not result.is_valid
        assert "'layout.padding' must be a number" in result.errors

    @pytest.mark.parametrize("key", ["start", "end"])
    def test_non_integer_view_bounds(self, key):
        config = self.config_with(REGIONS)
        config["view"][key] = "10"
        result = validate_configuration_schema(config)
        assert not result.is_valid
        assert f"'view.{key}' must be an integer or null" in result.errors

    def test_null_view_bounds(self):
        config = self.config_with(REGIONS)
        config["view"].update({"start": None, "end": None})
        assert validate_configuration_schema(config).is_valid

    def test_empty_regions_warns(self):
        result = validate_configuration_schema(self.config_with([]))
        assert result.is_valid
        assert result.warnings


class TestLoadSave:
    """Tests for configuration files."""

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = create_default_configuration()
        config["context"]["regions"] = REGIONS
        save_configuration(config, path)
        assert load_configuration(path)["context"]["regions"] == REGIONS

    def test_json_partial_config_gets_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"context": {"name": "mine", "regions": REGIONS[:1]}}))
        config = load_configuration(path)
        assert config["context"]["regions"] == REGIONS[:1]
        assert config["layout"]["num_rows"] == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_configuration(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.txt"
        path.write_text("context: {}")
        with pytest.raises(ConfigurationError):
            load_configuration(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("context: [unclosed")
        with pytest.raises(ConfigurationError):
            load_configuration(path)

    def test_invalid_region_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"context": {"regions": [{"name": "x", "chr": "c", "start": 5, "end": 1}]}}))
        with pytest.raises(ConfigurationError):
            load_configuration(path)

    def test_save_unsupported_format(self, tmp_path):
        with pytest.raises(ConfigurationError):
            save_configuration(create_default_configuration(), tmp_path / "config.ini")


class TestMerge:
    """Tests for merge_configurations."""

    def test_nested_merge(self):
        merged = merge_configurations(create_default_configuration(), {"layout": {"padding": 3}})
        assert merged["layout"] == {"num_rows": 10, "padding": 3}

    def test_lists_replaced(self):
        merged = merge_configurations(create_default_configuration(), {"context": {"regions": REGIONS[:1]}})
        assert merged["context"]["regions"] == REGIONS[:1]

    def test_base_not_modified(self):
        base = create_default_configuration()
        merge_configurations(base, {"layout": {"padding": 3}})
        assert base["layout"]["padding"] == 0


class TestBuild:
    """Tests for building features and contexts from configuration."""

    def test_build_features(self):
        features = build_features(REGIONS)
        assert [f.name for f in features] == ["geneA", "spacer", "geneB"]
        assert [f.is_gap for f in features] == [False, True, False]
        assert features[2].is_reverse_strand()

    def test_empty_chromosome_is_gap(self):
        features = build_features([{"name": "g", "chr": "", "start": 0, "end": 7}])
        assert features[0].is_gap
        assert features[0].get_length() == 7

    def test_build_navigation_context(self):
        context = build_navigation_context({"context": {"name": "ctx", "regions": REGIONS}})
        assert context.get_name() == "ctx"
        assert context.get_total_bases() == 200
        assert context.to_gapless_coordinate(175) == 125

    def test_duplicate_region_names(self):
        with pytest.raises(ContextConstructionError):
            build_navigation_context({"context": {"regions": [REGIONS[0], REGIONS[0]]}})
