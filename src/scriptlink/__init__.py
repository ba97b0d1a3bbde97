"""
ScriptLink - Stream Deck buttons driven by user scripts
"""

__version__ = "0.3.0"

from .controller import ScriptLinkController
from .utils.arguments import ArgumentStringParser

__all__ = ["ScriptLinkController", "ArgumentStringParser"]
