"""
Script execution and output handling
"""

from .display import DisplaySettings
from .runner import ScriptRunner

__all__ = ["DisplaySettings", "ScriptRunner"]
