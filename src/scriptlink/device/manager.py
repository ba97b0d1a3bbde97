"""
Stream Deck device management.

Enumeration, connection, disconnection and liveness checks for the
physical device.
"""

import logging
from typing import Any, Optional

from StreamDeck.DeviceManager import DeviceManager as StreamDeckManager

logger = logging.getLogger(__name__)


class DeviceManager:
    """
    Manages Stream Deck device connections.

    Args:
        serial: Serial number of the device to use. When None, the first
            device with keys that can display images is used.
    """

    def __init__(self, serial: Optional[str] = None):
        self.serial = serial
        self._stream_deck_manager = StreamDeckManager()

    def connect(self) -> Optional[Any]:
        """
        Open the configured Stream Deck.

        Devices are re-enumerated on each call so newly plugged devices
        are found.

        Returns:
            StreamDeck object if connection successful, None otherwise.
        """
        try:
            available_decks = self._stream_deck_manager.enumerate()
            if not available_decks:
                logger.debug("No Stream Deck devices detected during enumeration")
                return None

            for deck in available_decks:
                deck.open()
                if self._matches(deck):
                    deck.reset()
                    logger.info(
                        f"Successfully connected to Stream Deck: "
                        f"{deck.deck_type()} ({deck.key_count()} keys)"
                    )
                    return deck
                deck.close()

            logger.warning(f"No matching Stream Deck found (serial={self.serial})")
            return None

        except OSError as e:
            logger.error(f"USB communication error during Stream Deck connection: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error connecting to Stream Deck: {e}")
            return None

    def _matches(self, deck) -> bool:
        if not deck.is_visual():
            return False
        if self.serial is None:
            return True
        return deck.get_serial_number() == self.serial

    def disconnect(self, deck) -> bool:
        """
        Reset and close a Stream Deck device.

        Errors are logged, the device may already be unplugged.

        Returns:
            True if disconnection was clean, False if errors occurred.
        """
        if not deck:
            return True

        disconnect_clean = True

        try:
            deck.reset()
        except Exception as e:
            logger.debug(f"Could not reset Stream Deck (may be unplugged): {e}")
            disconnect_clean = False

        try:
            deck.close()
        except Exception as e:
            logger.debug(f"Could not close Stream Deck connection: {e}")
            disconnect_clean = False

        if disconnect_clean:
            logger.info("Stream Deck disconnected cleanly")
        else:
            logger.info("Stream Deck disconnected (device was already unavailable)")

        return disconnect_clean

    def is_connected(self, deck) -> bool:
        """Check if a Stream Deck device is still connected and responsive."""
        if not deck:
            return False

        try:
            return bool(deck.connected())
        except OSError as e:
            logger.debug(f"Stream Deck connection lost (USB disconnected): {type(e).__name__}")
            return False
        except Exception as e:
            logger.debug(f"Stream Deck not responsive: {type(e).__name__}: {e}")
            return False
