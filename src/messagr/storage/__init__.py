"""Storage utilities for Messagr."""

from messagr.storage.paths import (
    find_project_config,
    get_global_config_path,
    get_messagr_home,
)

__all__ = [
    "find_project_config",
    "get_global_config_path",
    "get_messagr_home",
]
