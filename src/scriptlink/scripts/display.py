"""
Display settings returned by button scripts.
"""

import json
import logging
from typing import Any, Optional

from ..utils.colors import get_color_png_path, is_color_available
from ..utils.errors import ScriptOutputError

logger = logging.getLogger(__name__)


class DisplaySettings:
    """
    What a script wants shown on its button.

    Scripts print a JSON object to stdout, for example
    ``{"title": "3 changes", "color": "orange"}``. Every key is optional;
    unknown keys are ignored.

    Attributes:
        title: Button title. Non-string values are converted with str().
        color: HTML color name for the background
        image: Background image path or data URI. Takes precedence over color.
    """

    def __init__(
        self,
        title: Optional[Any] = None,
        color: Optional[str] = None,
        image: Optional[str] = None,
    ):
        self.title = title
        self.color = color
        self.image = image

    @classmethod
    def parse_json(cls, text: str) -> "DisplaySettings":
        """
        Build display settings from a script's stdout.

        Raises:
            ScriptOutputError: If the text is not a JSON object, or its color
                or image is not a string
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ScriptOutputError(f"Script output is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ScriptOutputError(
                f"Script output must be a JSON object, got {type(data).__name__}"
            )

        for key in ("color", "image"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ScriptOutputError(
                    f"Script output '{key}' must be a string, got {type(value).__name__}"
                )

        return cls(data.get("title"), data.get("color"), data.get("image"))

    def apply(self, context) -> None:
        """
        Update the button behind ``context`` with these settings.

        Args:
            context: ActionContext of the button to update
        """
        if self.title is not None:
            logger.info(f"setting title: '{self.title}'")
            context.set_title(str(self.title))

        if self.image:
            logger.info("setting background image")
            logger.debug(f"background image: '{self.image}'")
            context.set_image(self.image)
        elif is_color_available(self.color):
            color_path = get_color_png_path(self.color)
            logger.info(f"setting background color: '{self.color}' -> '{color_path}'")
            context.set_image(color_path)
        elif self.color:
            logger.warning(f"Unknown background color: '{self.color}'")

    def __eq__(self, other) -> bool:
        if not isinstance(other, DisplaySettings):
            return NotImplemented
        return (self.title, self.color, self.image) == (other.title, other.color, other.image)

    def __repr__(self) -> str:
        return f"DisplaySettings(title={self.title!r}, color={self.color!r}, image={self.image!r})"
