"""
Tests for Config — Layered parse settings

These tests validate:
- ParseConfig validation
- Config hierarchy (env > project > user > defaults)
- get/set on dotted keys
- Malformed files are skipped, not fatal

No grammars required.
"""

import logging

import pytest

from arbor.config import (
    DEFAULT_LANGUAGE,
    Config,
    ConfigManager,
    ParseConfig,
)
from arbor.core.parser import ENGINE_MAX_SOURCE_BYTES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ARBOR_* variables from the developer's shell out of the tests."""
    for name in ("ARBOR_DEFAULT_LANGUAGE", "ARBOR_MAX_SOURCE_BYTES", "ARBOR_STRICT_VERSION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def manager(tmp_path):
    """ConfigManager with isolated project and user directories."""
    project = tmp_path / "project"
    home = tmp_path / "home"
    project.mkdir()
    home.mkdir()
    return ConfigManager(project, user_dir=home)


def write_yaml(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestParseConfig:
    """Parse settings validation."""

    def test_defaults(self):
        config = ParseConfig()
        assert config.default_language == DEFAULT_LANGUAGE
        assert config.max_source_bytes == ENGINE_MAX_SOURCE_BYTES
        assert config.strict_version is True
        assert config.validate() is None

    def test_empty_language_invalid(self):
        error = ParseConfig(default_language="").validate()
        assert error is not None
        assert "default_language" in error

    def test_limit_bounds(self):
        assert ParseConfig(max_source_bytes=0).validate() is not None
        assert ParseConfig(max_source_bytes=ENGINE_MAX_SOURCE_BYTES + 1).validate() is not None
        assert ParseConfig(max_source_bytes=1).validate() is None

    def test_limit_must_be_integer(self):
        assert ParseConfig(max_source_bytes="big").validate() is not None
        assert ParseConfig(max_source_bytes=True).validate() is not None

    def test_dict_round_trip(self):
        config = Config(parse=ParseConfig(default_language="python", max_source_bytes=1024, strict_version=False))
        assert Config.from_dict(config.to_dict()) == config

    def test_from_empty_dict(self):
        assert Config.from_dict({}) == Config()
        assert Config.from_dict({"parse": None}) == Config()


class TestConfigManager:
    """Configuration loading and saving."""

    def test_load_defaults(self, manager):
        """Loads defaults when no config files exist."""
        assert manager.load() == Config()

    def test_save_and_load_project(self, manager):
        manager.save_project(Config(parse=ParseConfig(default_language="python")))

        reloaded = ConfigManager(manager.project_dir, user_dir=manager.user_dir)
        assert reloaded.load().parse.default_language == "python"

    def test_project_overrides_user(self, manager):
        """Project config takes priority over user config."""
        write_yaml(manager.user_config_path, "parse:\n  default_language: css\n  max_source_bytes: 100\n")
        write_yaml(manager.project_config_path, "parse:\n  default_language: html\n")

        config = manager.load()

        assert config.parse.default_language == "html"
        assert config.parse.max_source_bytes == 100  # merged from user layer

    def test_environment_overrides_files(self, manager, monkeypatch):
        write_yaml(manager.project_config_path, "parse:\n  default_language: html\n  strict_version: true\n")
        monkeypatch.setenv("ARBOR_DEFAULT_LANGUAGE", "python")
        monkeypatch.setenv("ARBOR_STRICT_VERSION", "no")
        monkeypatch.setenv("ARBOR_MAX_SOURCE_BYTES", "2048")

        config = manager.load()

        assert config.parse.default_language == "python"
        assert config.parse.strict_version is False
        assert config.parse.max_source_bytes == 2048

    def test_bad_env_integer_ignored(self, manager, monkeypatch, caplog):
        monkeypatch.setenv("ARBOR_MAX_SOURCE_BYTES", "lots")

        with caplog.at_level(logging.WARNING, logger="arbor.config"):
            config = manager.load()

        assert config.parse.max_source_bytes == ENGINE_MAX_SOURCE_BYTES
        assert "ARBOR_MAX_SOURCE_BYTES" in caplog.text

    def test_malformed_file_skipped(self, manager, caplog):
        """Unparseable YAML is logged and skipped."""
        write_yaml(manager.project_config_path, "parse: [unclosed\n")

        with caplog.at_level(logging.WARNING, logger="arbor.config"):
            config = manager.load()

        assert config == Config()
        assert "Skipping config file" in caplog.text

    def test_non_mapping_file_skipped(self, manager):
        write_yaml(manager.project_config_path, "- just\n- a list\n")
        assert manager.load() == Config()

    def test_invalid_values_fall_back_to_defaults(self, manager, caplog):
        write_yaml(manager.project_config_path, "parse:\n  max_source_bytes: -5\n")

        with caplog.at_level(logging.WARNING, logger="arbor.config"):
            config = manager.load()

        assert config == Config()
        assert "Invalid parse config" in caplog.text

    def test_invalid_value_keeps_other_settings(self, manager, monkeypatch, caplog):
        """Only the failing setting reverts; valid layers still apply."""
        write_yaml(manager.user_config_path, "parse:\n  strict_version: false\n")
        write_yaml(manager.project_config_path, "parse:\n  default_language: python\n")
        monkeypatch.setenv("ARBOR_MAX_SOURCE_BYTES", "0")

        with caplog.at_level(logging.WARNING, logger="arbor.config"):
            config = manager.load()

        assert config.parse.max_source_bytes == ENGINE_MAX_SOURCE_BYTES
        assert config.parse.default_language == "python"
        assert config.parse.strict_version is False
        assert "max_source_bytes" in caplog.text

    def test_set_valid_value(self, manager):
        assert manager.set("parse.default_language", "python") is None
        assert manager.get("parse.default_language") == "python"
        assert manager.project_config_path.exists()

    def test_set_user_scope(self, manager):
        assert manager.set("parse.max_source_bytes", "4096", scope="user") is None
        assert manager.user_config_path.exists()
        assert manager.get("parse.max_source_bytes") == "4096"

    def test_set_strict_version(self, manager):
        assert manager.set("parse.strict_version", "false") is None
        assert manager.get("parse.strict_version") == "false"

    def test_set_invalid_value(self, manager):
        error = manager.set("parse.max_source_bytes", "0")
        assert error is not None
        assert manager.get("parse.max_source_bytes") == str(ENGINE_MAX_SOURCE_BYTES)

    def test_set_non_integer(self, manager):
        error = manager.set("parse.max_source_bytes", "ten")
        assert "integer" in error

    def test_set_invalid_key_format(self, manager):
        error = manager.set("invalid", "value")
        assert "Invalid key format" in error

    def test_set_unknown_section_and_setting(self, manager):
        assert "Unknown section" in manager.set("display.format", "json")
        assert "Unknown parse setting" in manager.set("parse.colour", "red")

    def test_get_unknown_key(self, manager):
        assert manager.get("parse.colour") is None
        assert manager.get("nope") is None
