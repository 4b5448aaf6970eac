"""Tests for expansion options and config files."""

import tempfile
from pathlib import Path

import pytest

from ssinclude import DEFAULT_FILE_TYPE_MAP, ConfigError, SsiOptions, load_config


class TestSsiOptions:
    """Test option construction and validation."""

    def test_defaults(self) -> None:
        """Test the default settings."""
        options = SsiOptions()
        assert options.max_depth == 10
        assert options.include_file_types == ()
        assert options.file_type_map["html"] == (".html", ".htm", ".shtml")

    def test_create_with_none(self) -> None:
        """Test that None falls back to defaults."""
        assert SsiOptions.create(max_depth=None, include_file_types=None) == SsiOptions()

    def test_include_types_become_tuple(self) -> None:
        """Test that any iterable of names is accepted."""
        options = SsiOptions.create(include_file_types=["html", "css"])
        assert options.include_file_types == ("html", "css")

    @pytest.mark.parametrize("max_depth", [0, -1, True, "3", 2.5])
    def test_invalid_max_depth(self, max_depth) -> None:
        """Test that non-positive or non-integer depths are rejected."""
        with pytest.raises(ConfigError):
            SsiOptions(max_depth=max_depth)

    @pytest.mark.parametrize("types", ["html", 5, ["html", ""], ["html", None]])
    def test_invalid_include_types(self, types) -> None:
        """Test that include types must be a list of names."""
        with pytest.raises(ConfigError):
            SsiOptions.create(include_file_types=types)

    @pytest.mark.parametrize(
        "table",
        [["html"], {"html": ".html"}, {"html": ["html"]}, {1: [".x"]}],
    )
    def test_invalid_file_type_map(self, table) -> None:
        """Test file type table validation."""
        with pytest.raises(ConfigError):
            SsiOptions.create(file_type_map=table)

    def test_file_type_map_override_does_not_touch_default(self) -> None:
        """Test that overrides build a separate table."""
        options = SsiOptions.create(file_type_map={"html": [".page"], "Partial": [".INC"]})

        assert options.file_type_map["html"] == (".page",)
        assert options.file_type_map["partial"] == (".inc",)
        assert options.file_type_map["css"] == DEFAULT_FILE_TYPE_MAP["css"]
        assert DEFAULT_FILE_TYPE_MAP["html"] == (".html", ".htm", ".shtml")
        assert "partial" not in DEFAULT_FILE_TYPE_MAP

    def test_from_mapping_camel_case(self) -> None:
        """Test camelCase keys."""
        options = SsiOptions.from_mapping(
            {"maxDepth": 4, "includeFileTypes": ["html"], "fileTypeMap": {"tpl": [".tpl"]}}
        )
        assert options.max_depth == 4
        assert options.include_file_types == ("html",)
        assert options.file_type_map["tpl"] == (".tpl",)

    def test_from_mapping_unknown_key(self) -> None:
        """Test that unknown keys are reported with their source."""
        with pytest.raises(ConfigError, match="site.yaml: unknown option 'depth'") as excinfo:
            SsiOptions.from_mapping({"depth": 3}, source="site.yaml")
        assert excinfo.value.source == "site.yaml"

    def test_from_mapping_invalid_value_names_source(self) -> None:
        """Test that validation errors carry the source."""
        with pytest.raises(ConfigError, match="^site.yaml: max_depth"):
            SsiOptions.from_mapping({"max_depth": 0}, source="site.yaml")

    def test_evolve(self) -> None:
        """Test overriding single settings."""
        base = SsiOptions.create(max_depth=5, include_file_types=["html"])
        changed = base.evolve(max_depth=None, include_file_types=["css"])

        assert changed.max_depth == 5
        assert changed.include_file_types == ("css",)
        assert base.include_file_types == ("html",)

    def test_evolve_validates(self) -> None:
        """Test that evolve applies validation."""
        with pytest.raises(ConfigError):
            SsiOptions().evolve(max_depth=0)

    def test_to_dict(self) -> None:
        """Test the plain representation."""
        data = SsiOptions.create(max_depth=3, include_file_types=["html"]).to_dict()
        assert data["max_depth"] == 3
        assert data["include_file_types"] == ["html"]
        assert data["file_type_map"]["html"] == [".html", ".htm", ".shtml"]

    def test_options_are_frozen(self) -> None:
        """Test immutability."""
        options = SsiOptions()
        with pytest.raises(AttributeError):
            options.max_depth = 3


class TestLoadConfig:
    """Test YAML config files."""

    def _write(self, tmpdir, text):
        path = Path(tmpdir) / "ssinclude.yaml"
        path.write_text(text)
        return path

    def test_load_yaml(self) -> None:
        """Test a full config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write(
                tmpdir,
                "max_depth: 6\n"
                "include_file_types:\n"
                "  - html\n"
                "  - partial\n"
                "file_type_map:\n"
                "  partial: [.inc, .part]\n",
            )
            options = load_config(path)

            assert options.max_depth == 6
            assert options.include_file_types == ("html", "partial")
            assert options.file_type_map["partial"] == (".inc", ".part")

    def test_empty_file(self) -> None:
        """Test that an empty config gives the defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config(self._write(tmpdir, "")) == SsiOptions()

    def test_not_a_mapping(self) -> None:
        """Test a top-level list."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError, match="must be a mapping"):
                load_config(self._write(tmpdir, "- html\n"))

    def test_invalid_yaml(self) -> None:
        """Test malformed YAML."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError, match="invalid YAML"):
                load_config(self._write(tmpdir, "max_depth: [1, 2\n"))

    def test_missing_file(self) -> None:
        """Test a config path that does not exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError, match="cannot read config file"):
                load_config(Path(tmpdir) / "absent.yaml")
