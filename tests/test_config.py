"""
Tests for updatewatch.config module.

Tests watch file loading including:
- YAML file loading
- Default merging (built-in and file defaults)
- Resource normalization (string versions, resolver shorthand, ids)
- Error handling
"""

from __future__ import annotations

from pathlib import Path

import pytest

from updatewatch.config import BUILTIN_DEFAULTS, load_watch_config
from updatewatch.config.loader import _deep_merge_dicts
from updatewatch.exceptions import ConfigError

pytestmark = pytest.mark.unit


class TestDeepMerge:
    """Tests for _deep_merge_dicts helper."""

    def test_nested_dicts_merge(self):
        """Test that nested dicts are merged key by key."""
        base = {"resolver": {"name": "spigot", "resource_id": 1}, "timeout": 10}
        overlay = {"resolver": {"resource_id": 2}}
        merged = _deep_merge_dicts(base, overlay)
        assert merged == {"resolver": {"name": "spigot", "resource_id": 2}, "timeout": 10}

    def test_lists_replace(self):
        """Test that lists are replaced, not concatenated."""
        merged = _deep_merge_dicts({"tags": ["a", "b"]}, {"tags": ["c"]})
        assert merged["tags"] == ["c"]

    def test_inputs_not_mutated(self):
        """Test that neither input dict is modified."""
        base = {"resolver": {"name": "spigot"}}
        overlay = {"resolver": {"resource_id": 5}}
        _deep_merge_dicts(base, overlay)
        assert base == {"resolver": {"name": "spigot"}}
        assert overlay == {"resolver": {"resource_id": 5}}


class TestLoadWatchConfig:
    """Tests for load_watch_config function."""

    def test_load_sample(self, create_yaml_file, sample_watch_data):
        """Test loading a complete watch file."""
        path = create_yaml_file("watch.yaml", sample_watch_data)
        config = load_watch_config(path)

        assert config["apiVersion"] == "updatewatch/v1"
        assert [r["id"] for r in config["resources"]] == [
            "spigot-plugin",
            "polymart-plugin",
            "songoda-plugin",
        ]

    def test_file_defaults_override_builtin(self, create_yaml_file, sample_watch_data):
        """Test that file defaults win over built-in defaults."""
        path = create_yaml_file("watch.yaml", sample_watch_data)
        config = load_watch_config(path)

        resource = config["resources"][0]
        assert resource["timeout"] == 5
        assert resource["interval"] == 3600
        assert resource["repeating"] is True
        assert config["defaults"] == {"timeout": 5, "interval": 3600, "repeating": True}

    def test_resource_overrides_defaults(self, create_yaml_file):
        """Test that resource values win over defaults."""
        path = create_yaml_file(
            "watch.yaml",
            {
                "defaults": {"timeout": 5},
                "resources": [
                    {
                        "id": "a",
                        "current_version": "1.0.0",
                        "timeout": 30,
                        "repeating": False,
                        "resolver": {"name": "spigot", "resource_id": 1},
                    }
                ],
            },
        )
        resource = load_watch_config(path)["resources"][0]
        assert resource["timeout"] == 30
        assert resource["repeating"] is False
        assert resource["interval"] == BUILTIN_DEFAULTS["interval"]

    def test_builtin_defaults_without_defaults_section(self, create_yaml_file):
        """Test that built-in defaults apply when the file has none."""
        path = create_yaml_file(
            "watch.yaml",
            {
                "resources": [
                    {
                        "id": "a",
                        "current_version": "1.0.0",
                        "resolver": {"name": "spigot", "resource_id": 1},
                    }
                ]
            },
        )
        resource = load_watch_config(path)["resources"][0]
        assert resource["timeout"] == 10
        assert resource["interval"] == 7200
        assert resource["repeating"] is True

    def test_resolver_defaults_merge(self, create_yaml_file):
        """Test that a shared resolver block merges into each resource."""
        path = create_yaml_file(
            "watch.yaml",
            {
                "defaults": {"resolver": {"name": "spigot"}},
                "resources": [
                    {"id": "a", "current_version": "1.0.0", "resolver": {"resource_id": 1}},
                    {"id": "b", "current_version": "2.0.0", "resolver": {"resource_id": 2}},
                ],
            },
        )
        resources = load_watch_config(path)["resources"]
        assert resources[0]["resolver"] == {"name": "spigot", "resource_id": 1}
        assert resources[1]["resolver"] == {"name": "spigot", "resource_id": 2}

    def test_numeric_version_becomes_string(self, tmp_test_dir: Path):
        """Test that YAML numbers in current_version are kept as strings."""
        path = tmp_test_dir / "watch.yaml"
        path.write_text(
            "resources:\n"
            "  - id: a\n"
            "    current_version: 1.2\n"
            "    resolver: {name: spigot, resource_id: 1}\n",
            encoding="utf-8",
        )
        resource = load_watch_config(path)["resources"][0]
        assert resource["current_version"] == "1.2"

    def test_resolver_shorthand(self, create_yaml_file):
        """Test that 'resolver: name' expands to a mapping."""
        path = create_yaml_file(
            "watch.yaml",
            {"resources": [{"id": "a", "current_version": "1.0", "resolver": "spigot"}]},
        )
        resource = load_watch_config(path)["resources"][0]
        assert resource["resolver"] == {"name": "spigot"}

    def test_id_derived_from_name(self, create_yaml_file):
        """Test that a missing id is derived from the display name."""
        path = create_yaml_file(
            "watch.yaml",
            {
                "resources": [
                    {"name": "My Plugin", "current_version": "1.0", "resolver": "spigot"}
                ]
            },
        )
        resource = load_watch_config(path)["resources"][0]
        assert resource["id"] == "my-plugin"


class TestLoadWatchConfigErrors:
    """Tests for load_watch_config error handling."""

    def test_missing_file(self, tmp_test_dir: Path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Watch file not found"):
            load_watch_config(tmp_test_dir / "missing.yaml")

    def test_invalid_yaml(self, tmp_test_dir: Path):
        """Test that invalid YAML raises ConfigError."""
        path = tmp_test_dir / "bad.yaml"
        path.write_text("resources: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_watch_config(path)

    def test_empty_file(self, tmp_test_dir: Path):
        """Test that an empty file raises ConfigError."""
        path = tmp_test_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="YAML file is empty"):
            load_watch_config(path)

    def test_top_level_list(self, create_yaml_file):
        """Test that a non-mapping document raises ConfigError."""
        path = create_yaml_file("list.yaml", ["a", "b"])
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_watch_config(path)

    def test_no_resources(self, create_yaml_file):
        """Test that a file without resources raises ConfigError."""
        path = create_yaml_file("watch.yaml", {"apiVersion": "updatewatch/v1"})
        with pytest.raises(ConfigError, match="No resources defined"):
            load_watch_config(path)

    def test_empty_resources(self, create_yaml_file):
        """Test that an empty resources list raises ConfigError."""
        path = create_yaml_file("watch.yaml", {"resources": []})
        with pytest.raises(ConfigError, match="No resources defined"):
            load_watch_config(path)

    def test_resource_without_id_or_name(self, create_yaml_file):
        """Test that a resource with no id and no name raises ConfigError."""
        path = create_yaml_file(
            "watch.yaml",
            {"resources": [{"current_version": "1.0.0", "resolver": "spigot"}]},
        )
        with pytest.raises(ConfigError, match=r"resources\[0\]: Missing required field: id"):
            load_watch_config(path)

    def test_defaults_not_mapping(self, create_yaml_file):
        """Test that a non-mapping defaults section raises ConfigError."""
        path = create_yaml_file(
            "watch.yaml", {"defaults": ["x"], "resources": [{"id": "a"}]}
        )
        with pytest.raises(ConfigError, match="'defaults' must be a mapping"):
            load_watch_config(path)

    def test_resource_not_mapping(self, create_yaml_file):
        """Test that a non-mapping resource raises ConfigError."""
        path = create_yaml_file("watch.yaml", {"resources": ["spigot"]})
        with pytest.raises(ConfigError, match=r"resources\[0\] must be a mapping"):
            load_watch_config(path)
