#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_cli_config.py
"""Unit tests for configuration file discovery and loading."""

import json

import pytest

from mdterm.cli.config import (
    discover_config_file,
    find_config_in_parents,
    flatten_config,
    load_config_file,
    load_config_with_priority,
)
from mdterm.exceptions import ConfigurationError


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Tests for loading the supported formats."""

    def test_toml(self, tmp_path) -> None:
        path = tmp_path / ".mdterm.toml"
        path.write_text('backend = "ansi"\n\n[markdown]\nparse_tables = true\n')
        assert load_config_file(path) == {"backend": "ansi", "markdown": {"parse_tables": True}}

    def test_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("backend: none\nbaud_rate: 9600\n")
        assert load_config_file(str(path)) == {"backend": "none", "baud_rate": 9600}

    def test_empty_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"term": "xterm"}))
        assert load_config_file(path) == {"term": "xterm"}

    def test_pyproject_section(self, tmp_path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdterm]\nbackend = "ansi"\n')
        assert load_config_file(path) == {"backend": "ansi"}

    def test_pyproject_without_section(self, tmp_path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config_file(path) == {}

    @pytest.mark.parametrize(
        "filename,content,message",
        [
            ("bad.toml", "backend = ", "Invalid TOML"),
            ("bad.json", "{", "Invalid JSON"),
            ("list.json", "[1, 2]", "must contain an object"),
            ("bad.yaml", "a: [", "Invalid YAML"),
            ("list.yaml", "- a\n- b\n", "must contain a mapping"),
            ("config.ini", "[x]", "Unsupported config file format"),
        ],
    )
    def test_invalid_files(self, tmp_path, filename, content, message) -> None:
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(ConfigurationError, match=message):
            load_config_file(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_directory(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
@pytest.mark.cli
class TestDiscovery:
    """Tests for locating a configuration file."""

    def test_found_in_start_dir(self, tmp_path) -> None:
        path = tmp_path / ".mdterm.yaml"
        path.write_text("backend: ansi\n")
        assert find_config_in_parents(tmp_path) == path

    def test_found_in_parent(self, tmp_path) -> None:
        path = tmp_path / ".mdterm.toml"
        path.write_text("")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config_in_parents(child) == path

    def test_dedicated_file_preferred_over_pyproject(self, tmp_path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.mdterm]\nbackend = "none"\n')
        dedicated = tmp_path / ".mdterm.json"
        dedicated.write_text("{}")
        assert find_config_in_parents(tmp_path) == dedicated

    def test_pyproject_without_section_is_skipped(self, clean_env) -> None:
        (clean_env / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config_in_parents(clean_env) is None

    def test_unreadable_pyproject_is_skipped(self, clean_env) -> None:
        (clean_env / "pyproject.toml").write_text("[tool.mdterm\n")
        assert find_config_in_parents(clean_env) is None

    def test_home_fallback(self, clean_env, tmp_path) -> None:
        home_config = tmp_path / "home" / ".mdterm.toml"
        home_config.write_text('backend = "ansi"\n')
        assert discover_config_file() == home_config

    def test_nothing_found(self, clean_env) -> None:
        assert discover_config_file() is None


@pytest.mark.unit
@pytest.mark.cli
class TestPriority:
    """Tests for choosing between explicit, environment and discovered files."""

    def test_flatten(self) -> None:
        config = {
            "backend": "ansi",
            "terminal": {"backend": "none", "baud_rate": 300},
            "markdown": {"parse_tables": True},
        }
        assert flatten_config(config) == {"backend": "ansi", "baud_rate": 300, "parse_tables": True}

    def test_flatten_rejects_non_table_section(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a table"):
            flatten_config({"markdown": "yes"})

    def test_explicit_path_wins(self, clean_env, tmp_path) -> None:
        (clean_env / ".mdterm.toml").write_text('backend = "none"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('backend = "ansi"\n')
        env_file = tmp_path / "env.toml"
        env_file.write_text('backend = "terminfo"\n')
        assert load_config_with_priority(str(explicit), str(env_file)) == {"backend": "ansi"}

    def test_env_path_beats_discovery(self, clean_env, tmp_path) -> None:
        (clean_env / ".mdterm.toml").write_text('backend = "none"\n')
        env_file = tmp_path / "env.toml"
        env_file.write_text('backend = "ansi"\n')
        assert load_config_with_priority(None, str(env_file)) == {"backend": "ansi"}

    def test_discovered(self, clean_env) -> None:
        (clean_env / ".mdterm.toml").write_text('[terminal]\nbackend = "none"\n')
        assert load_config_with_priority() == {"backend": "none"}

    def test_no_config(self, clean_env) -> None:
        assert load_config_with_priority() == {}

    def test_missing_explicit_file(self, clean_env) -> None:
        with pytest.raises(ConfigurationError):
            load_config_with_priority("missing.toml")
