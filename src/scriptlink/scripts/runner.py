"""
Script execution for button actions.
"""

import logging
import os
import subprocess
import time
from typing import List, Optional

from ..utils.arguments import ArgumentStringParser
from ..utils.errors import ScriptExecutionError
from .display import DisplaySettings

logger = logging.getLogger(__name__)


class ScriptRunner:
    """
    Runs button scripts and turns their output into DisplaySettings.

    Scripts are executed directly with an argument vector, never through a
    shell, so the parsed arguments reach the script verbatim.
    """

    # Seconds before a script is killed (None = wait forever)
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        parser: Optional[ArgumentStringParser] = None,
    ):
        """
        Initialize the script runner.

        Args:
            timeout: Seconds to wait for a script before giving up
            parser: Argument parser (a fresh ArgumentStringParser by default)
        """
        self.timeout = timeout
        self.parser = parser or ArgumentStringParser()

    def build_command(self, script_path: str, script_arguments: Optional[str]) -> List[str]:
        """Build the argument vector for a script invocation."""
        args = self.parser.parse(script_arguments) if script_arguments else []
        return [os.path.expanduser(script_path), *args]

    def execute_script(
        self, script_path: str, script_arguments: Optional[str] = None
    ) -> DisplaySettings:
        """
        Run a script and parse its JSON output.

        Args:
            script_path: Path to the executable script
            script_arguments: Raw argument string from the button settings

        Returns:
            DisplaySettings parsed from the script's stdout

        Raises:
            ScriptExecutionError: If the script can't be run or exits non-zero
            ScriptOutputError: If the script's output isn't a JSON object
        """
        if not script_path:
            raise ScriptExecutionError("No script configured")

        command = self.build_command(script_path, script_arguments)
        logger.info(f"running script: '{script_path}'")
        logger.debug(f"script arguments: {command[1:]}")

        start_time = time.monotonic()
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ScriptExecutionError(
                f"Script not found: {command[0]}", script_path=script_path
            ) from e
        except PermissionError as e:
            raise ScriptExecutionError(
                f"Script is not executable: {command[0]}", script_path=script_path
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ScriptExecutionError(
                f"Script {script_path} timed out after {self.timeout}s",
                script_path=script_path,
            ) from e
        except OSError as e:
            raise ScriptExecutionError(
                f"Cannot run script {command[0]}: {e}", script_path=script_path
            ) from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug(f"Script {script_path} ran in {elapsed_ms:.0f}ms")

        if result.returncode != 0:
            logger.error(f"ERROR running script {script_path}: {result.stderr}")
            raise ScriptExecutionError(
                f"Script {script_path} exited with status {result.returncode}",
                script_path=script_path,
                stderr=result.stderr,
            )

        output = (result.stdout or "").strip()
        logger.info(f"script returned: '{output}'")
        return DisplaySettings.parse_json(output)
