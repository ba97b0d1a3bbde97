"""
Action system for ScriptLink
"""

from .base import ActionContext, BaseAction
from .registry import registry
from .run_interval import RunIntervalAction
from .run_script import RunScriptAction

__all__ = [
    "BaseAction",
    "ActionContext",
    "registry",
    "RunScriptAction",
    "RunIntervalAction",
]
