"""
Utilities module for trackrdf.

ConfigManager lives in ``trackrdf.utils.config_manager``; it depends on the
core and io packages, which themselves use these helpers.
"""

from .helpers import (
    update_dict_recursively,
    ensure_directory,
    validate_array_shape,
    safe_divide
)

__all__ = [
    'update_dict_recursively',
    'ensure_directory',
    'validate_array_shape',
    'safe_divide'
]
