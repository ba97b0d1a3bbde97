"""
Configuration loading for ScriptLink
"""

from .loader import ConfigLoader

__all__ = ["ConfigLoader"]
