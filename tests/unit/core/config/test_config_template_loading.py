"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    parse_config_text,
    substitute_env_vars,
)

PROJECT_ROOT = Path(__file__).resolve().parents[4]


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "9010"}):
            result = substitute_env_vars("http://${HOST}:${PORT}/book/")
            assert result == "http://localhost:9010/book/"

    def test_default_used_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-fallback}") == "fallback"

    def test_default_ignored_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual"}):
            assert substitute_env_vars("${PRESENT_VAR:-fallback}") == "actual"

    def test_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_required_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_required_with_custom_error(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable DB_PASS: needed for MySQL",
            ):
                substitute_env_vars("${DB_PASS:?needed for MySQL}")

    def test_text_without_placeholders_is_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestEnvironmentOverrides:
    """Test cases for environment-prefixed overrides."""

    def test_prefixed_variables_replace_plain_ones(self):
        with patch.dict(
            os.environ,
            {"DATABASE_URL": "sqlite:///dev.db", "TEST_DATABASE_URL": "sqlite://"},
            clear=True,
        ):
            apply_environment_overrides("test")

            assert os.environ["DATABASE_URL"] == "sqlite://"

    def test_other_environments_are_ignored(self):
        with patch.dict(
            os.environ,
            {"DATABASE_URL": "sqlite:///dev.db", "PRODUCTION_DATABASE_URL": "mysql://"},
            clear=True,
        ):
            apply_environment_overrides("test")

            assert os.environ["DATABASE_URL"] == "sqlite:///dev.db"


class TestParseConfigText:
    """Test cases for parsing config documents."""

    def test_minimal_document_uses_defaults(self):
        config = parse_config_text("config: {}\n")

        assert config == ConfigData()

    def test_values_are_typed(self):
        content = """
config:
  app:
    port: ${PORT_UNDER_TEST:-9999}
    docs_enabled: "true"
  database:
    url: sqlite://
    echo: true
"""
        with patch.dict(os.environ, {}, clear=True):
            config = parse_config_text(content)

        assert config.app.port == 9999
        assert config.app.docs_enabled is True
        assert config.database.url == "sqlite://"
        assert config.database.echo is True

    def test_empty_document(self):
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            parse_config_text("")

    def test_invalid_yaml(self):
        with pytest.raises(ValueError, match="Error parsing YAML"):
            parse_config_text("config: [unclosed\n")

    def test_non_mapping_root(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            parse_config_text("- one\n- two\n")

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="Invalid configuration"):
            parse_config_text("config:\n  app:\n    port: not-a-port\n")

    def test_invalid_log_format(self):
        with pytest.raises(ValueError, match="Invalid configuration"):
            parse_config_text("config:\n  logging:\n    format: xml\n")


class TestLoadTemplatedYaml:
    """Test cases for loading config files from disk."""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")

    def test_load_with_environment_override(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n  database:\n    url: ${DATABASE_URL:-sqlite:///./default.db}\n"
        )

        with patch.dict(
            os.environ,
            {"APP_ENVIRONMENT": "test", "TEST_DATABASE_URL": "sqlite:///./test.db"},
            clear=True,
        ):
            config = load_templated_yaml(config_file)

        assert config.database.url == "sqlite:///./test.db"

    def test_shipped_config_file_loads_with_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(PROJECT_ROOT / "config.yaml")

        assert config.app.environment == "development"
        assert config.app.host == "localhost"
        assert config.app.port == 9010
        assert config.app.docs_enabled is False
        assert config.database.url == "sqlite:///./bookstore.db"
        assert config.logging.file is None
