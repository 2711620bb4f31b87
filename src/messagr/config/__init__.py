"""Configuration system for Messagr."""

from messagr.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    clear_config_cache,
    get_config,
    load_config,
    load_yaml_file,
)
from messagr.config.merger import deep_merge, get_nested_value, set_nested_value
from messagr.config.schema import (
    Config,
    MessagesConfig,
    PresentationConfig,
    SearchConfig,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "MessagesConfig",
    "PresentationConfig",
    "SearchConfig",
    "apply_env_overrides",
    "clear_config_cache",
    "deep_merge",
    "get_config",
    "get_nested_value",
    "load_config",
    "load_yaml_file",
    "set_nested_value",
]
