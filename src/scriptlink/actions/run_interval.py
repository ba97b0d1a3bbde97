"""
Run a script on a button periodically, and another one on key press
"""

import logging
from typing import Any, Dict

from .base import ActionContext
from .run_script import RunScriptAction

logger = logging.getLogger(__name__)


class RunIntervalAction(RunScriptAction):
    """
    Monitors something by re-running a script every few seconds.

    Key presses behave like the "script" action. In addition, while the
    button is visible, ``interval_script_path`` runs every
    ``interval_delay`` seconds and its output updates the button. A run
    that is still going when the next one is due causes that next run to
    be skipped.

    Settings:
        script_path: Script run on key press
        script_arguments: Arguments for script_path
        interval_script_path: Script run on the interval
        interval_script_arguments: Arguments for interval_script_path
        interval_delay: Seconds between interval runs
        default_title: Title shown until a script has run
    """

    action_type = "interval"
    uuid = "io.raser.streamdeck.scriptlink.runinterval"

    def on_will_appear(self, context: ActionContext) -> None:
        super().on_will_appear(context)
        self.start_interval(context)

    def on_did_receive_settings(self, context: ActionContext) -> None:
        super().on_did_receive_settings(context)
        self.start_interval(context)

    def on_will_disappear(self, context: ActionContext) -> None:
        context.controller.interval_manager.clear(context.key_index)

    def on_key_down(self, context: ActionContext) -> None:
        settings = context.settings
        if settings.get("script_path"):
            super().on_key_down(context)
            return

        # Without a key press script, a press refreshes the interval script
        self.run_and_display(
            context,
            settings.get("interval_script_path"),
            settings.get("interval_script_arguments"),
        )

    def start_interval(self, context: ActionContext) -> bool:
        """
        (Re)start the interval for this button if its settings allow it.

        Returns:
            True if an interval was started
        """
        interval_manager = context.controller.interval_manager
        interval_manager.clear(context.key_index)

        settings = context.settings
        if not self.validate_interval_settings(settings):
            return False

        script_path = settings["interval_script_path"]
        script_arguments = settings.get("interval_script_arguments")

        interval_manager.start(
            context.key_index,
            float(settings["interval_delay"]),
            lambda: self.run_and_display(context, script_path, script_arguments),
        )
        return True

    def validate_interval_settings(self, settings: Dict[str, Any]) -> bool:
        """Return True if the settings can be used to run a script on an interval."""
        script_path = settings.get("interval_script_path")
        delay = settings.get("interval_delay")
        logger.debug(f"interval_script_path: {script_path!r}, interval_delay: {delay!r}")

        try:
            valid = bool(script_path) and float(delay) > 0
        except (TypeError, ValueError):
            valid = False

        logger.info(f"interval settings valid: {valid}")
        return valid

    def validate_config(self, config: Dict[str, Any]) -> bool:
        if not config.get("script_path") and not config.get("interval_script_path"):
            logger.error("interval action requires 'script_path' or 'interval_script_path'")
            return False
        return True

    def get_required_params(self) -> list:
        return []

    def get_optional_params(self) -> list:
        return ["script_path"] + super().get_optional_params() + [
            "interval_script_path",
            "interval_script_arguments",
            "interval_delay",
        ]
