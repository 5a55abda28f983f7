"""Tests for configuration loading and models."""

import tomllib

import pytest
from pydantic import ValidationError

from typedgraph.config import ConfigError, GraphConfig, get_default_config, load_config


class TestGraphConfig:
    """Tests for GraphConfig model."""

    def test_defaults(self):
        config = GraphConfig()
        assert config.atomic_mutual is True
        assert config.edge_id_prefix == "e-"
        assert config.node_id_prefix == ""
    def test_invalid_prefix_type(self):
        with pytest.raises(ValidationError):
            GraphConfig(edge_id_prefix=3)


class TestLoadConfig:
    """Tests for TOML loading."""

    def test_explicit_file(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("""
[graph]
atomic_mutual = false
edge_id_prefix = "rel-"
""")
        config = load_config(config_file)
        assert config.atomic_mutual is False
        assert config.edge_id_prefix == "rel-"

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.toml")

    def test_invalid_toml(self, tmp_path):
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("this is not valid toml [[[")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(invalid_file)

    def test_invalid_config_values(self, tmp_path):
        invalid_config = tmp_path / "invalid_config.toml"
        invalid_config.write_text("""
[graph]
atomic_mutual = "sometimes"
""")
        with pytest.raises(ValidationError):
            load_config(invalid_config)

    def test_graph_must_be_table(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text('graph = "yes"\n')
        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_missing_section_uses_defaults(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[other]\nkey = 1\n")
        assert load_config(config_file) == GraphConfig()

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == GraphConfig()

    def test_cwd_file(self, tmp_path, monkeypatch):
        (tmp_path / "typedgraph.toml").write_text('[graph]\nnode_id_prefix = "n-"\n')
        monkeypatch.chdir(tmp_path)
        assert load_config().node_id_prefix == "n-"

    def test_env_config_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "elsewhere.toml"
        config_file.write_text("[graph]\natomic_mutual = false\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TYPEDGRAPH_CONFIG", str(config_file))
        assert load_config().atomic_mutual is False



class TestGetDefaultConfig:
    def test_returns_valid_config(self):
        assert get_default_config() == GraphConfig()
