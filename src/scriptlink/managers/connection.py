"""
Connection management for Stream Deck devices.

Keeps a device connected across USB hot-plug events and tells the
controller when buttons appear and disappear as a result.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

from ..device.manager import DeviceManager

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages Stream Deck device connection lifecycle.

    Responsibilities:
    - Device connection and disconnection
    - Connection health monitoring on a background thread
    - Automatic reconnection when a device is plugged back in
    """

    RECONNECT_INTERVAL = 2.0  # Seconds between reconnection attempts
    CONNECTION_CHECK_INTERVAL = 0.5  # Seconds between health checks

    def __init__(
        self,
        device_manager: DeviceManager,
        on_connected: Optional[Callable[[Any], None]] = None,
        on_disconnected: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the connection manager.

        Args:
            device_manager: Device manager for low-level operations
            on_connected: Callback when device connects (receives deck object)
            on_disconnected: Callback when device disconnects
        """
        self.device_manager = device_manager
        self.on_connected = on_connected
        self.on_disconnected = on_disconnected

        self.deck: Optional[Any] = None
        self.running = False
        self.shutting_down = False

        self._monitor_thread: Optional[threading.Thread] = None
        self._last_reconnect_attempt = 0.0

    def connect(self) -> bool:
        """
        Connect to a Stream Deck and notify the controller.

        Returns:
            True if connection successful, False otherwise.
        """
        self.deck = self.device_manager.connect()
        if not self.deck:
            logger.debug("No Stream Deck device available")
            return False

        if self.on_connected:
            try:
                self.on_connected(self.deck)
            except Exception as e:
                logger.error(f"Error setting up Stream Deck: {e}", exc_info=True)

        return True

    def disconnect(self) -> None:
        """
        Disconnect from the current device.

        The disconnect callback runs before the device is released so
        buttons can still be cleaned up. The deck reference is always cleared.
        """
        if not self.deck:
            return

        if self.on_disconnected:
            try:
                self.on_disconnected()
            except Exception as e:
                logger.error(f"Error during disconnect callback: {e}", exc_info=True)

        self.device_manager.disconnect(self.deck)
        self.deck = None

    def is_connected(self) -> bool:
        if not self.deck:
            return False
        return self.device_manager.is_connected(self.deck)

    def start_monitoring(self) -> None:
        """Start the background thread that watches for unplug and replug."""
        if self._monitor_thread and self._monitor_thread.is_alive():
            logger.warning("Connection monitoring already running")
            return

        self.running = True
        self._monitor_thread = threading.Thread(
            target=self._monitor_loop, daemon=True, name="ConnectionMonitor"
        )
        self._monitor_thread.start()
        logger.debug("Connection monitoring started")

    def stop_monitoring(self) -> None:
        """Stop the connection monitoring thread."""
        self.running = False
        self.shutting_down = True

        if self._monitor_thread:
            self._monitor_thread.join(timeout=3)
            self._monitor_thread = None

        logger.debug("Connection monitoring stopped")

    def check_connection(self, current_time: float) -> None:
        """
        Drop a device that stopped responding and try to reconnect.

        Args:
            current_time: Current timestamp for throttling reconnection
        """
        if self.deck and not self.is_connected():
            logger.info("Stream Deck disconnected (device removed)")
            self.disconnect()
            self._last_reconnect_attempt = 0.0

        if self.deck or self.shutting_down:
            return

        if current_time - self._last_reconnect_attempt >= self.RECONNECT_INTERVAL:
            logger.debug("Checking for Stream Deck devices...")
            if self.connect():
                logger.info("Stream Deck connected and configured")
            self._last_reconnect_attempt = current_time

    def _monitor_loop(self) -> None:
        while self.running:
            try:
                self.check_connection(time.time())
                time.sleep(self.CONNECTION_CHECK_INTERVAL)
            except Exception as e:
                logger.error(f"Error in connection monitor: {e}", exc_info=True)
                time.sleep(1)
