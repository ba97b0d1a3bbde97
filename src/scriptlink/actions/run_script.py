"""
Run a script when a button is pressed
"""

import logging

from ..utils.errors import ScriptLinkError
from .base import ActionContext, BaseAction

logger = logging.getLogger(__name__)

ERROR_TITLE = "ERROR"


class RunScriptAction(BaseAction):
    """
    Runs the configured script on key press and shows its output.

    Settings:
        script_path: Executable to run
        script_arguments: Argument string, e.g. ``"'~/my repo' --short"``
        default_title: Title shown until the script has run
    """

    action_type = "script"
    uuid = "io.raser.streamdeck.scriptrunner.runscript"

    def on_key_down(self, context: ActionContext) -> None:
        settings = context.settings
        self.run_and_display(context, settings.get("script_path"), settings.get("script_arguments"))

    def run_and_display(self, context: ActionContext, script_path, script_arguments) -> bool:
        """
        Run a script and apply its display settings to the button.

        Any failure is logged and the button shows ERROR.

        Returns:
            True if the script ran and its output was applied
        """
        try:
            display_settings = context.controller.script_runner.execute_script(
                script_path, script_arguments
            )
            display_settings.apply(context)
            return True
        except ScriptLinkError as e:
            logger.error(f"ERROR running script {script_path}: {e}")
        except Exception as e:
            logger.error(f"ERROR running script {script_path}: {e}", exc_info=True)

        context.set_title(ERROR_TITLE)
        return False

    def get_required_params(self) -> list:
        return ["script_path"]

    def get_optional_params(self) -> list:
        return ["script_arguments", "default_title"]
