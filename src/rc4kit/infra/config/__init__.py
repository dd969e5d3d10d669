"""
Settings files: lookup, parsing, and typed access.
"""

__all__ = [
    "LOG_LEVELS",
    "ConfigAdapter",
    "copy_default_config",
    "find_config_file",
    "load_config",
    "save_config",
    "save_config_file",
    "validate_settings",
]

from .adapter import LOG_LEVELS, ConfigAdapter
from .file_io import (
    copy_default_config,
    find_config_file,
    load_config,
    save_config,
    save_config_file,
    validate_settings,
)
