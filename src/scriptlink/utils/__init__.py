"""
Utility modules for ScriptLink.
"""

from .arguments import ArgumentStringParser, parse_arguments
from .colors import get_available_colors, get_color_png_path, is_color_available
from .errors import (
    ConfigurationError,
    ScriptExecutionError,
    ScriptLinkError,
    ScriptOutputError,
    error_boundary,
    safe_execute,
)

__all__ = [
    "ArgumentStringParser",
    "parse_arguments",
    "get_available_colors",
    "get_color_png_path",
    "is_color_available",
    "ScriptLinkError",
    "ConfigurationError",
    "ScriptExecutionError",
    "ScriptOutputError",
    "error_boundary",
    "safe_execute",
]
