"""Unit tests for the configuration context manager."""

import pytest

from src.bookstore.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
)
from src.bookstore.runtime.context import (
    AppContext,
    get_config,
    get_context,
    merge_configs,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)
        assert context.config is get_config()

    def test_override_reverts_on_exit(self):
        original_config = get_config()

        override = ConfigData()
        override.app.host = "custom_host"

        with with_context(override):
            assert get_config().app.host == "custom_host"
            assert get_config() is not original_config

        assert get_config() is original_config

    def test_unset_fields_are_inherited(self):
        original_config = get_config()

        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            config = get_config()
            assert config.database.url == "sqlite://"
            assert config.database.pool_size == original_config.database.pool_size
            assert config.app == original_config.app
            assert config.logging == original_config.logging

    def test_nested_overrides(self):
        with with_context(ConfigData(app=AppConfig(port=8001))):
            with with_context(ConfigData(app=AppConfig(host="inner"))):
                assert get_config().app.port == 8001
                assert get_config().app.host == "inner"
            assert get_config().app.port == 8001
            assert get_config().app.host != "inner"

    def test_reverts_after_exception(self):
        original_config = get_config()

        with pytest.raises(RuntimeError):
            with with_context(ConfigData(app=AppConfig(port=1))):
                raise RuntimeError("boom")

        assert get_config() is original_config

    def test_none_is_a_no_op(self):
        original_config = get_config()

        with with_context(None):
            assert get_config() is original_config

    def test_rejects_other_types(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"app": {"port": 1}}):
                pass


class TestMergeConfigs:
    def test_explicit_values_win(self):
        base = ConfigData(app=AppConfig(host="base", port=1000))
        override = ConfigData(app=AppConfig(port=2000))

        merged = merge_configs(base, override)

        assert merged.app.host == "base"
        assert merged.app.port == 2000

    def test_default_valued_override_is_still_applied_when_set(self):
        base = ConfigData(app=AppConfig(docs_enabled=True))
        override = ConfigData(app=AppConfig(docs_enabled=False))

        assert merge_configs(base, override).app.docs_enabled is False

    def test_empty_override_keeps_base(self):
        base = ConfigData(database=DatabaseConfig(url="sqlite://", echo=True))

        assert merge_configs(base, ConfigData()) == base
