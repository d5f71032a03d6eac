from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel

from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.config.config_template import load_templated_yaml
from src.bookstore.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load the config file named by BOOKSTORE_CONFIG_FILE (default ``config.yaml``).

    Variables from a local .env file are exported first (without overriding
    the real environment) so they take part in placeholder substitution.
    Falls back to the model defaults when the file does not exist.
    """
    load_dotenv(override=False)
    env = EnvironmentVariables()
    if not env.config_file.exists():
        logger.warning(
            "Configuration file {} not found; using built-in defaults", env.config_file
        )
        return ConfigData()
    return load_templated_yaml(env.config_file)


_default_context = AppContext(config=load_default_config())

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _dump_explicitly_set(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, at every nesting level."""
    result = {}
    for field_name in model.__class__.model_fields:
        field_value = getattr(model, field_name)
        if isinstance(field_value, BaseModel):
            nested = _dump_explicitly_set(field_value)
            if nested:
                result[field_name] = nested
            elif field_name in model.model_fields_set:
                result[field_name] = field_value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = field_value
    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    result = base_dict.copy()
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value
    return result


def merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge ``override_config`` over ``base_config``.

    Only fields explicitly set on the override (at any depth) replace values
    from the base; everything else is inherited.
    """
    merged = _recursive_dict_merge(
        base_config.model_dump(), _dump_explicitly_set(override_config)
    )
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Example:
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            assert get_config().database.url == "sqlite://"
            # app, logging and other database fields are inherited
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
