"""Tests for RunConfig dataclass."""

import json

import pytest
import yaml

from csv_merge.data_prep import CategoryLabel
from csv_merge.exceptions import ConfigError
from csv_merge.pipeline import RunConfig


class TestRunConfigInit:
    """Test RunConfig initialization and validation."""

    def test_default_values(self):
        """Test RunConfig uses the documented defaults."""
        config = RunConfig()

        assert config.input_dir == "Input Folder", "Default input dir"
        assert config.output_dir == "Output Folder", "Default output dir"
        assert config.entries_per_file == 500, "Default entries per file should be 500"
        assert config.output_base == "ShuffledCSV", "Default output base"
        assert config.add_category is False, "Labeling off without a category base"
        assert config.random_seed is None, "Default shuffle is unseeded"

    def test_string_entries_converted(self):
        """Test a numeric string chunk size is converted to int."""
        config = RunConfig(entries_per_file=" 250 ")

        assert config.entries_per_file == 250, "Should parse the integer"

    @pytest.mark.parametrize("value", [0, -1, "abc", "", "1.5", 2.0, None, True])
    def test_invalid_entries(self, value):
        """Test invalid chunk sizes raise ConfigError."""
        with pytest.raises(ConfigError, match="Invalid number for entries per file"):
            RunConfig(entries_per_file=value)

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_output_base(self, value):
        """Test a blank output base raises ConfigError."""
        with pytest.raises(ConfigError, match="Output base filename cannot be empty"):
            RunConfig(output_base=value)

    def test_strings_are_trimmed(self):
        """Test text fields are trimmed and blank dirs fall back to defaults."""
        config = RunConfig(input_dir="  ", output_base=" Part ", category_base=" Batch3 ")

        assert config.input_dir == "Input Folder", "Blank dir should use the default"
        assert config.output_base == "Part", "Output base should be trimmed"
        assert config.category_base == "Batch3", "Category base should be trimmed"

    def test_category_label(self):
        """Test the category base is parsed into a label."""
        config = RunConfig(category_base="Batch3")

        assert config.add_category is True, "Labeling on with a category base"
        assert config.category_label == CategoryLabel("Batch", 3), "Should parse prefix and number"


class TestRunConfigSerialization:
    """Test RunConfig save/load."""

    def test_save_load_json(self, tmp_path):
        """Test JSON round trip keeps all values."""
        config = RunConfig(
            input_dir="in", output_dir="out", entries_per_file=10, category_base="X2",
            output_base="Part", random_seed=5, show_progress=False,
        )
        path = tmp_path / "nested" / "config.json"

        config.save(path)
        loaded = RunConfig.load(path)

        assert json.loads(path.read_text(encoding="utf-8"))["entries_per_file"] == 10, "JSON"
        assert loaded == config, "Loaded config should equal the saved one"

    def test_load_yaml(self, tmp_path):
        """Test YAML config files are read with safe_load."""
        path = tmp_path / "run.yaml"
        path.write_text(
            yaml.safe_dump({"input_dir": "in", "entries_per_file": 3, "category_base": "G"}),
            encoding="utf-8",
        )

        config = RunConfig.load(path)

        assert config.entries_per_file == 3, "Should read entries_per_file"
        assert config.category_label == CategoryLabel("G", 1), "Should read category base"

    def test_load_missing(self, tmp_path):
        """Test loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            RunConfig.load(tmp_path / "nope.json")

    def test_unknown_keys(self):
        """Test unknown keys raise ConfigError."""
        with pytest.raises(ConfigError, match="Unknown config keys"):
            RunConfig.from_dict({"entries": 5})

    def test_non_mapping(self):
        """Test a non-mapping payload raises ConfigError."""
        with pytest.raises(ConfigError, match="Config must be a mapping"):
            RunConfig.from_dict(["input_dir"])

    def test_to_dict(self):
        """Test to_dict() returns every field."""
        data = RunConfig().to_dict()

        assert set(data) == {
            "input_dir", "output_dir", "entries_per_file", "category_base",
            "output_base", "random_seed", "show_progress",
        }, "Should contain all fields"

    def test_load_invalid_yaml(self, tmp_path):
        """Test an unparseable YAML file raises ConfigError."""
        path = tmp_path / "bad.yml"
        path.write_text("input_dir: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Could not parse config file"):
            RunConfig.load(path)


class TestRunConfigFileValues:
    """Test values as YAML and JSON parsers produce them."""

    def test_numeric_category_base(self, tmp_path):
        """Test an int category base from YAML is accepted as text."""
        path = tmp_path / "run.yaml"
        path.write_text("category_base: 7\n", encoding="utf-8")

        config = RunConfig.load(path)

        assert config.category_base == "7", "Int should become text"
        assert config.category_label == CategoryLabel("", 7), "Digits-only base starts at 7"

    def test_numeric_output_base(self):
        """Test an int output base is accepted as text."""
        config = RunConfig(output_base=2024)

        assert config.output_base == "2024", "Int should become text"

    def test_null_input_dir(self, tmp_path):
        """Test a null input dir falls back to the default directory."""
        path = tmp_path / "run.yaml"
        path.write_text("input_dir: null\noutput_dir: null\n", encoding="utf-8")

        config = RunConfig.load(path)

        assert config.input_dir == "Input Folder", "Null should use the default, not 'None'"
        assert config.output_dir == "Output Folder", "Null should use the default, not 'None'"

    @pytest.mark.parametrize("field_name", ["input_dir", "category_base", "output_base"])
    @pytest.mark.parametrize("value", [["a"], {"a": 1}, 1.5, True])
    def test_non_text_values(self, field_name, value):
        """Test lists, mappings, floats and bools are rejected for text fields."""
        with pytest.raises(ConfigError, match=f"{field_name} must be a string"):
            RunConfig(**{field_name: value})


class TestRunConfigSeed:
    """Test random_seed validation."""

    @pytest.mark.parametrize("value", ["abc", "", 1.5, True, -1, [1, 2]])
    def test_invalid_seed(self, value):
        """Test bad seeds raise ConfigError at construction."""
        with pytest.raises(ConfigError, match="Invalid random seed"):
            RunConfig(random_seed=value)

    def test_numeric_string_seed(self):
        """Test a numeric string seed is converted."""
        config = RunConfig(random_seed=" 42 ")

        assert config.random_seed == 42, "Should parse the integer"

    def test_invalid_seed_from_yaml(self, tmp_path):
        """Test a bad seed in a YAML file raises ConfigError on load."""
        path = tmp_path / "run.yaml"
        path.write_text("random_seed: abc\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid random seed"):
            RunConfig.load(path)
