"""
Main controller for ScriptLink.
"""

import logging
import os
import threading
import time
from typing import Any, Dict, Iterator, Optional, Tuple

from .actions.base import ActionContext, BaseAction
from .actions.registry import registry
from .config.loader import ConfigLoader
from .device.manager import DeviceManager
from .device.renderer import ButtonRenderer
from .managers import ConnectionManager, IntervalManager
from .scripts.runner import ScriptRunner
from .utils.colors import generate_color_pngs
from .utils.errors import error_boundary, safe_execute

logger = logging.getLogger(__name__)

_UNSET = object()


class ScriptLinkController:
    """
    Main controller wiring configuration, device and button actions together.

    Button lifecycle events are delivered to the configured actions:
    - on_will_appear when a device connects or a button is added
    - on_did_receive_settings when a button's configuration changes
    - on_will_disappear when the device goes away, a button is removed,
      or on shutdown
    - on_key_down when a key is pressed
    """

    CONFIG_CHECK_INTERVAL = 1.0  # Seconds between config file change checks

    def __init__(self, config_path: str) -> None:
        """
        Initialize the controller.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path: str = config_path
        self.config: Optional[Dict[str, Any]] = None
        self.running: bool = False

        self.config_loader: ConfigLoader = ConfigLoader()
        self.device_manager: DeviceManager = DeviceManager()
        self.button_renderer: ButtonRenderer = ButtonRenderer()
        self.script_runner: ScriptRunner = ScriptRunner()
        self.interval_manager: IntervalManager = IntervalManager()
        self.connection_manager = ConnectionManager(
            device_manager=self.device_manager,
            on_connected=self._on_device_connected,
            on_disconnected=self._on_device_disconnected,
        )

        # {key_index: {"title": str, "image": Optional[str]}}
        self.button_states: Dict[int, Dict[str, Any]] = {}
        self._render_lock = threading.RLock()
        self._config_mtime: Optional[float] = None
        self._last_config_check = 0.0

        registry.auto_discover()
        logger.info(f"Registered actions: {registry.list_actions()}")

    @property
    def deck(self) -> Optional[Any]:
        """Get current deck reference from connection manager."""
        return self.connection_manager.deck

    @property
    def shutting_down(self) -> bool:
        return self.connection_manager.shutting_down

    @shutting_down.setter
    def shutting_down(self, value: bool) -> None:
        self.connection_manager.shutting_down = value

    def load_config(self) -> bool:
        """
        Load configuration from file and apply its global settings.

        Returns:
            True if successful, False otherwise
        """
        try:
            config = self.config_loader.load(self.config_path)
        except Exception as e:
            logger.error(f"Failed to load config: {e}")
            return False

        self.config = config
        self._config_mtime = self._read_config_mtime()

        assets_dir = os.path.expanduser(config["paths"]["assets"])
        self.button_renderer.asset_dirs = [assets_dir]
        self.script_runner.timeout = config["scripts"]["timeout"]
        self.device_manager.serial = config["device"].get("serial")

        try:
            generate_color_pngs(assets_dir)
        except OSError as e:
            logger.warning(f"Could not generate color images in {assets_dir}: {e}")

        for number, button_config in config["buttons"].items():
            action = registry.get_action(button_config["action"]["type"])
            if not action:
                logger.error(f"Unknown action type for button {number}: {button_config['action']['type']}")
            elif not action.validate_config(button_config["action"]):
                logger.warning(f"Invalid configuration for button {number}")

        return True

    def connect(self) -> bool:
        return self.connection_manager.connect()

    def iter_buttons(self) -> Iterator[Tuple[int, Dict[str, Any]]]:
        """Yield (key_index, button_config) for configured buttons that exist on the deck."""
        if not self.config:
            return
        key_count = self.deck.key_count() if self.deck else None

        for number, button_config in sorted(self.config["buttons"].items()):
            key_index = number - 1
            if key_count is not None and key_index >= key_count:
                logger.warning(f"Button {number} does not exist on this device ({key_count} keys)")
                continue
            yield key_index, button_config

    def get_button_config(self, key_index: int) -> Optional[Dict[str, Any]]:
        if not self.config:
            return None
        return self.config["buttons"].get(key_index + 1)

    def update_button(self, key_index: int, title: Any = _UNSET, image: Any = _UNSET) -> bool:
        """
        Change what a key shows and re-render it.

        Thread-safe; interval runs update keys from worker threads.

        Args:
            key_index: Zero-based key index
            title: New title, unchanged when omitted
            image: New background image path or data URI, unchanged when omitted

        Returns:
            True if the key was rendered on the device
        """
        with self._render_lock:
            state = self.button_states.setdefault(key_index, {"title": "", "image": None})
            if title is not _UNSET:
                state["title"] = title
            if image is not _UNSET:
                state["image"] = image
            return self._render_key(key_index)

    @error_boundary(default_return=False)
    def _render_key(self, key_index: int) -> bool:
        deck = self.deck
        if not deck:
            return False

        button_config = self.get_button_config(key_index) or {}
        styles = self.config.get("styles", {})
        style = styles.get(button_config.get("style", "default"), styles.get("default"))
        state = self.button_states.get(key_index, {})

        image = self.button_renderer.render_button(
            deck, state.get("title", ""), state.get("image"), style
        )
        with deck:
            deck.set_key_image(key_index, image)
        return True

    @error_boundary(default_return=False, log_level=logging.WARNING)
    def _clear_key(self, key_index: int) -> bool:
        deck = self.deck
        with self._render_lock:
            self.button_states.pop(key_index, None)
            if not deck or key_index >= deck.key_count():
                return False
            with deck:
                deck.set_key_image(key_index, self.button_renderer.render_blank(deck))
        return True

    def _fire(self, hook: str, key_index: int, button_config: Dict[str, Any]) -> None:
        """Call a lifecycle hook of the button's action."""
        action_type = button_config.get("action", {}).get("type")
        action: Optional[BaseAction] = registry.get_action(action_type)
        if not action:
            logger.error(f"Unknown action type: {action_type}")
            return

        context = ActionContext(controller=self, button_config=button_config, key_index=key_index)
        logger.debug(f"{hook} for button {key_index + 1} ({action_type})")
        safe_execute(lambda: getattr(action, hook)(context), f"{hook} for button {key_index + 1}")

    def _on_device_connected(self, deck: Any) -> None:
        """Configure a newly connected device and show all buttons."""
        brightness = self.config.get("device", {}).get("brightness", 100)
        deck.set_brightness(brightness)
        logger.debug(f"Stream Deck brightness set to {brightness}%")

        deck.set_key_callback(self._key_callback)

        with self._render_lock:
            self.button_states.clear()
            for key_index, button_config in self.iter_buttons():
                self.button_states[key_index] = {"title": "", "image": None}
                self._fire("on_will_appear", key_index, button_config)

    def _on_device_disconnected(self) -> None:
        for key_index, button_config in self.iter_buttons():
            self._fire("on_will_disappear", key_index, button_config)
        self.interval_manager.clear_all()
        self.button_states.clear()

    def _key_callback(self, deck: Any, key: int, state: bool) -> None:
        """
        Handle key events from the device.

        Runs on the device's reader thread, so the action is handed off to
        a worker thread.
        """
        if not state:
            return

        logger.info(f"Button {key + 1} pressed")
        threading.Thread(
            target=self.handle_key_down, args=(key,), daemon=True, name=f"KeyDown-{key + 1}"
        ).start()

    def handle_key_down(self, key_index: int) -> None:
        button_config = self.get_button_config(key_index)
        if not button_config:
            logger.debug(f"No configuration for button {key_index + 1}")
            return
        self._fire("on_key_down", key_index, button_config)

    def _read_config_mtime(self) -> Optional[float]:
        try:
            return os.path.getmtime(os.path.expanduser(self.config_path))
        except OSError:
            return None

    def check_config_changed(self) -> bool:
        """
        Reload the configuration if the file changed on disk.

        Returns:
            True if a new configuration was applied
        """
        mtime = self._read_config_mtime()
        if mtime is None or mtime == self._config_mtime:
            return False

        logger.info("Configuration file changed, reloading")
        return self.reload_config()

    def reload_config(self) -> bool:
        """
        Load the configuration again and notify affected buttons.

        An invalid new configuration is ignored and the old one stays active.
        """
        old_buttons = dict(self.config["buttons"]) if self.config else {}
        old_mtime = self._config_mtime

        if not self.load_config():
            # Don't retry the same broken file on every check
            self._config_mtime = self._read_config_mtime() or old_mtime
            return False

        if not self.deck:
            return True

        new_buttons = self.config["buttons"]

        for number, old_config in old_buttons.items():
            new_config = new_buttons.get(number)
            if new_config is None or new_config["action"]["type"] != old_config["action"]["type"]:
                self._fire("on_will_disappear", number - 1, old_config)
                self._clear_key(number - 1)

        for key_index, new_config in self.iter_buttons():
            old_config = old_buttons.get(key_index + 1)
            if old_config is None or new_config["action"]["type"] != old_config["action"]["type"]:
                self._fire("on_will_appear", key_index, new_config)
            elif new_config != old_config:
                self._fire("on_did_receive_settings", key_index, new_config)
            else:
                # Style changes are picked up on re-render
                self._render_key(key_index)

        return True

    def run(self) -> None:
        """
        Main application run loop.

        Connects to the device (now or when it is plugged in), watches the
        configuration file and shuts down cleanly.
        """
        if not self.load_config():
            logger.error("Cannot start without valid configuration")
            return

        if not self.connect():
            logger.info("Starting without Stream Deck - will connect when available")

        self.running = True
        self.connection_manager.start_monitoring()
        logger.info("ScriptLink is running. Press Ctrl+C to exit.")

        try:
            while self.running:
                current_time = time.time()
                if current_time - self._last_config_check >= self.CONFIG_CHECK_INTERVAL:
                    self._last_config_check = current_time
                    self.check_config_changed()
                time.sleep(0.05)

        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        except Exception as e:
            logger.error(f"Unexpected error in main loop: {e}", exc_info=True)
        finally:
            logger.info("Shutting down ScriptLink...")
            self.running = False
            self.connection_manager.stop_monitoring()
            if self.deck:
                self.connection_manager.disconnect()
            self.interval_manager.clear_all()
