"""
Stream Deck device management
"""

from .manager import DeviceManager
from .renderer import ButtonRenderer

__all__ = ['DeviceManager', 'ButtonRenderer']
