"""Path management for KeyCat."""

import os
from pathlib import Path

from keycat.defaults import CONFIG_FILE_NAME, DEFAULT_DIR_ROOT, DEFAULT_SUBDIR_CONFIG, ENV_CONFIG_DIR, LOG_FILE_NAME


def resolve_config_dir(config_dir: Path | None = None) -> Path:
    """Resolve the configuration directory.

    The resolution order is:
    1. Explicitly provided argument
    2. The KEYCAT_CONFIG_DIR environment variable
    3. Default value (current directory with the standard subdirectory)

    Args:
    ----
        config_dir: Optional path to configuration directory

    Returns:
    -------
        Configuration directory as a Path object

    """
    if config_dir:
        return Path(config_dir)
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir:
        return Path(env_dir)
    return DEFAULT_DIR_ROOT / DEFAULT_SUBDIR_CONFIG


def get_config_file_path(config_dir: Path) -> Path:
    """Get the path to the configuration file."""
    return config_dir / CONFIG_FILE_NAME


def get_log_path(config_dir: Path) -> Path:
    """Get the path to the default log file."""
    return config_dir / LOG_FILE_NAME
