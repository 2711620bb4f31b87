"""
Path utilities for Messagr.

Provides consistent path resolution for configuration files.
"""

import os
from pathlib import Path


def get_messagr_home() -> Path:
    """
    Get the Messagr home directory.

    Resolution order:
    1. MESSAGR_HOME environment variable
    2. Default: ~/.messagr

    Returns:
        Path to the Messagr home directory.
    """
    env_home = os.environ.get("MESSAGR_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".messagr"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.messagr/config.yaml
    """
    return get_messagr_home() / "config.yaml"


def find_project_config(start_path: Path | None = None) -> Path | None:
    """
    Find the project configuration file by traversing up the directory tree.

    Looks for .messagr/project.yaml starting from the given path
    (or current directory) and moving up to the root.

    Args:
        start_path: Starting directory to search from. Defaults to cwd.

    Returns:
        Path to the project config if found, None otherwise.
    """
    if start_path is None:
        start_path = Path.cwd()
    else:
        start_path = Path(start_path).resolve()

    current = start_path
    while current != current.parent:
        project_config = current / ".messagr" / "project.yaml"
        if project_config.exists():
            return project_config
        current = current.parent

    project_config = current / ".messagr" / "project.yaml"
    if project_config.exists():
        return project_config

    return None
