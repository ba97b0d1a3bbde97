"""
Configuration loader for ScriptLink
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..device.renderer import DEFAULT_STYLE
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_ASSETS_DIR = "~/.scriptlink"
DEFAULT_SCRIPT_TIMEOUT = 30


class ConfigLoader:
    """Loads and validates YAML configuration files"""

    def load(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Validated configuration dictionary with defaults applied

        Raises:
            ConfigurationError: If the file is missing, unreadable, too large or invalid
        """
        resolved_path = Path(config_path).expanduser().resolve()

        if not resolved_path.exists():
            raise ConfigurationError(f"Configuration file not found: {resolved_path}")
        if resolved_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {resolved_path}")
        if resolved_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {resolved_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}") from e

        self.validate(config)
        config = self.apply_defaults(config)

        logger.info(f"Loaded configuration from {resolved_path}")
        return config

    def validate(self, config: Any) -> None:
        """
        Validate configuration structure.

        Raises:
            ConfigurationError: Describing the first problem found
        """
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        if "buttons" not in config:
            raise ConfigurationError("Configuration must have 'buttons' section")

        buttons = config["buttons"]
        if not isinstance(buttons, dict) or not buttons:
            raise ConfigurationError("'buttons' must be a non-empty dictionary")

        for button_number, button_config in buttons.items():
            if not isinstance(button_number, int) or isinstance(button_number, bool) or button_number < 1:
                raise ConfigurationError(
                    f"Button keys must be positive integers, got {button_number!r}"
                )
            if not isinstance(button_config, dict):
                raise ConfigurationError(f"Button {button_number} must be a dictionary")

            action = button_config.get("action")
            if not isinstance(action, dict) or not action.get("type"):
                raise ConfigurationError(f"Button {button_number} needs an 'action' with a 'type'")

            for key in ("script_arguments", "interval_script_arguments"):
                value = action.get(key)
                if value is not None and not isinstance(value, str):
                    raise ConfigurationError(
                        f"Button {button_number}: '{key}' must be a string, "
                        f"quote it in YAML if needed"
                    )

        for section in ("device", "paths", "scripts", "styles"):
            if section in config and not isinstance(config[section], dict):
                raise ConfigurationError(f"'{section}' must be a dictionary")

        for style_name, style in config.get("styles", {}).items():
            if not isinstance(style, dict):
                raise ConfigurationError(f"Style '{style_name}' must be a dictionary")

        brightness = config.get("device", {}).get("brightness")
        if brightness is not None and (not isinstance(brightness, int) or not 0 <= brightness <= 100):
            raise ConfigurationError(f"Invalid brightness value: {brightness} (must be 0-100)")

        timeout = config.get("scripts", {}).get("timeout")
        if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ConfigurationError(f"Invalid script timeout: {timeout} (must be positive)")

    def apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply default values to configuration"""
        config.setdefault("device", {}).setdefault("brightness", 100)
        config.setdefault("paths", {}).setdefault("assets", DEFAULT_ASSETS_DIR)
        config.setdefault("scripts", {}).setdefault("timeout", DEFAULT_SCRIPT_TIMEOUT)

        styles = config.setdefault("styles", {})
        styles["default"] = {**DEFAULT_STYLE, **styles.get("default", {})}

        return config
