"""
Base action class for all Stream Deck button actions
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ActionContext:
    """
    Context passed to actions for one button.

    Gives actions the button's settings and a way to change what the key
    shows. Title and image updates are re-rendered by the controller.

    Attributes:
        controller: Reference to the ScriptLinkController instance
        button_config: Full configuration dictionary for the button
        key_index: Zero-based index of the button

    Example:
        >>> context = ActionContext(
        ...     controller=my_controller,
        ...     button_config={"action": {"type": "script", "script_path": "~/bin/ping"}},
        ...     key_index=0
        ... )
        >>> context.set_title("OK")
    """

    def __init__(self, controller, button_config: Dict[str, Any], key_index: int):
        self.controller = controller
        self.button_config = button_config
        self.key_index = key_index

    @property
    def settings(self) -> Dict[str, Any]:
        """The button's action settings."""
        return self.button_config.get("action", {})

    def set_title(self, title: str) -> None:
        self.controller.update_button(self.key_index, title=title)

    def set_image(self, image: Optional[str]) -> None:
        """Set the background image (file path or data URI, None to clear)."""
        self.controller.update_button(self.key_index, image=image)


class BaseAction(ABC):
    """
    Base class for all Stream Deck button action types.

    The controller calls the lifecycle hooks as buttons come and go:
    on_will_appear when the device connects, on_did_receive_settings after
    the configuration is reloaded, on_will_disappear on disconnect or
    shutdown, and on_key_down when the key is pressed.

    Class Attributes:
        action_type: Unique identifier used in configuration (e.g., "script")
        uuid: Stream Deck action UUID, accepted as an alias for action_type

    Example:
        >>> class MyAction(BaseAction):
        ...     action_type = "my_action"
        ...
        ...     def on_key_down(self, context):
        ...         context.set_title("Pressed")
    """

    action_type: str = None

    uuid: Optional[str] = None

    def __init__(self):
        """
        Raises:
            ValueError: If action_type is not defined
        """
        if not self.action_type:
            raise ValueError(f"{self.__class__.__name__} must define action_type")

    def on_will_appear(self, context: ActionContext) -> None:
        """Show the configured default title."""
        context.set_title(context.settings.get("default_title") or "")

    def on_will_disappear(self, context: ActionContext) -> None:
        pass

    def on_did_receive_settings(self, context: ActionContext) -> None:
        """Keep the display in sync with changed settings."""
        context.set_title(context.settings.get("default_title") or "")

    @abstractmethod
    def on_key_down(self, context: ActionContext) -> None:
        """
        Handle a key press.

        Args:
            context: Context of the pressed button
        """
        pass

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate action configuration

        Checks that every required parameter is present and non-empty.
        Override this to add custom validation.

        Args:
            config: Action configuration from YAML

        Returns:
            True if valid, False otherwise
        """
        missing = [param for param in self.get_required_params() if not config.get(param)]
        if missing:
            logger.error(f"{self.action_type} action requires {', '.join(repr(m) for m in missing)}")
            return False
        return True

    def get_required_params(self) -> list:
        """
        Return list of required parameters for this action

        Override this to specify requirements
        """
        return []

    def get_optional_params(self) -> list:
        """
        Return list of optional parameters for this action

        Override this to specify optional params
        """
        return []
