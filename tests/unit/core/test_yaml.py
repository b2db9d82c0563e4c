"""Unit tests for core.yaml module."""

import pytest
import yaml

from powstr.core import ConfigurationError, load_yaml


class TestLoadYaml:
    """YAML loading."""

    def test_mapping(self, tmp_path):
        path = tmp_path / "powstr.yaml"
        path.write_text("miner:\n  max_attempts: 5\n")
        assert load_yaml(str(path)) == {"miner": {"max_attempts": 5}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_yaml(str(tmp_path / "missing.yaml"))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_yaml(str(path))

    def test_invalid_syntax(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml(str(path))

    def test_no_python_tags(self, tmp_path):
        path = tmp_path / "unsafe.yaml"
        path.write_text("x: !!python/object/apply:os.system ['true']\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml(str(path))
