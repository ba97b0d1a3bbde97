"""
Button rendering for Stream Deck
"""

import base64
import binascii
import io
import logging
import os
from typing import Any, Dict, List, Optional

from PIL import Image, ImageDraw, ImageFont
from PIL.Image import UnidentifiedImageError
from StreamDeck.ImageHelpers import PILHelper

logger = logging.getLogger(__name__)

DEFAULT_STYLE: Dict[str, Any] = {
    "font": "DejaVu Sans",
    "font_size": 14,
    "text_color": "#FFFFFF",
    "background_color": "#000000",
    "text_align": "center",
    "text_offset": 0,
}


class ButtonRenderer:
    """
    Renders key images from a title, a background image and a style.

    Background images are either file paths or ``data:image/...;base64,``
    URIs. Relative paths are resolved against the asset directories, which
    is where the generated color PNGs live.

    Attributes:
        asset_dirs: Directories searched for relative image paths
        font_cache: Loaded fonts keyed by name and size
    """

    def __init__(self, asset_dirs: Optional[List[str]] = None):
        self.asset_dirs = [os.path.expanduser(d) for d in (asset_dirs or [])]
        self.font_cache: Dict[str, Any] = {}

    def render_button(
        self,
        deck,
        title: str = "",
        image: Optional[str] = None,
        style: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        """
        Render a key image in the deck's native format.

        Args:
            deck: Stream Deck device (for image size and format)
            title: Text drawn over the background. '\\n' starts a new line.
            image: Background image path or data URI
            style: Style dictionary, missing keys fall back to DEFAULT_STYLE
        """
        style = {**DEFAULT_STYLE, **(style or {})}
        image_size = deck.key_image_format()["size"]

        canvas = Image.new("RGB", image_size, style["background_color"])

        background_loaded = False
        if image:
            background = self.load_image(image)
            if background is not None:
                self._paste_fill(canvas, background, style["background_color"])
                background_loaded = True

        if title:
            self._draw_text(ImageDraw.Draw(canvas), title, style, image_size, background_loaded)

        return PILHelper.to_native_key_format(deck, canvas)

    def render_blank(self, deck) -> bytes:
        """Render a blank button"""
        image_size = deck.key_image_format()["size"]
        return PILHelper.to_native_key_format(deck, Image.new("RGB", image_size, "black"))

    def load_image(self, image: str) -> Optional[Image.Image]:
        """
        Load a background image from a data URI or a file path.

        Returns:
            The loaded image, or None if it can't be read
        """
        try:
            if image.startswith("data:"):
                return self._decode_data_uri(image)

            image_file = self.resolve_path(image)
            if not image_file:
                logger.warning(f"Image file not found: {image}")
                return None

            with Image.open(image_file) as loaded:
                loaded.load()
                return loaded.copy()

        except (FileNotFoundError, PermissionError) as e:
            logger.warning(f"Cannot access image file {image}: {e}")
        except UnidentifiedImageError as e:
            logger.warning(f"Invalid or corrupted image {image[:64]}: {e}")
        except (ValueError, binascii.Error) as e:
            logger.warning(f"Invalid image data URI: {e}")
        except OSError as e:
            logger.warning(f"Error reading image {image[:64]}: {e}")
        return None

    def resolve_path(self, image_path: str) -> Optional[str]:
        """Find an image file by absolute path or relative to the asset directories."""
        image_path = os.path.expanduser(image_path)

        if os.path.isabs(image_path):
            return image_path if os.path.exists(image_path) else None

        for base_path in [*self.asset_dirs, os.getcwd()]:
            full_path = os.path.join(base_path, image_path)
            if os.path.exists(full_path):
                return full_path

        return None

    def _decode_data_uri(self, uri: str) -> Image.Image:
        header, _, payload = uri.partition(",")
        if not header.endswith(";base64"):
            raise ValueError("only base64 encoded data URIs are supported")
        data = base64.b64decode(payload, validate=True)
        with Image.open(io.BytesIO(data)) as loaded:
            loaded.load()
            return loaded.copy()

    def _paste_fill(self, canvas: Image.Image, background: Image.Image, bg_color: str) -> None:
        """Scale a background to fill the canvas, cropping the overflow."""
        if background.mode in ("RGBA", "LA", "P"):
            background = background.convert("RGBA")
            flattened = Image.new("RGB", background.size, bg_color)
            flattened.paste(background, (0, 0), background)
            background = flattened
        elif background.mode != "RGB":
            background = background.convert("RGB")

        width, height = canvas.size
        scale = max(width / background.width, height / background.height)
        new_size = (max(1, round(background.width * scale)), max(1, round(background.height * scale)))
        background = background.resize(new_size, Image.Resampling.LANCZOS)

        left = (background.width - width) // 2
        top = (background.height - height) // 2
        canvas.paste(background.crop((left, top, left + width, top + height)), (0, 0))

    def _draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        style: Dict[str, Any],
        image_size: tuple,
        background_loaded: bool,
    ) -> None:
        """
        Draw centered, possibly multi-line text.

        Vertical placement follows style['text_align'] ('top', 'center' or
        'bottom') plus style['text_offset']. A border is drawn around the
        text when it sits on a background image, unless style['border_size']
        says otherwise.
        """
        font = self._load_font(style["font"], style["font_size"])
        border_size = style.get("border_size", 1 if background_loaded else 0)
        border_color = style.get("border_color", "#000000")
        line_spacing = 2

        lines = text.split("\n")
        line_bboxes = [draw.textbbox((0, 0), line, font=font) for line in lines]
        total_height = sum(bbox[3] - bbox[1] for bbox in line_bboxes)
        total_height += (len(lines) - 1) * line_spacing

        text_align = style["text_align"]
        if text_align == "top":
            y_offset = 8
        elif text_align == "bottom":
            y_offset = image_size[1] - total_height - 8
        else:
            y_offset = (image_size[1] - total_height) // 2
        y_offset += style["text_offset"]

        for line, bbox in zip(lines, line_bboxes):
            text_x = (image_size[0] - (bbox[2] - bbox[0])) // 2 - bbox[0]
            line_y = y_offset - bbox[1]

            if border_size and border_size > 0:
                for dx in range(-border_size, border_size + 1):
                    for dy in range(-border_size, border_size + 1):
                        if dx or dy:
                            draw.text((text_x + dx, line_y + dy), line, font=font, fill=border_color)

            draw.text((text_x, line_y), line, font=font, fill=style["text_color"])
            y_offset += (bbox[3] - bbox[1]) + line_spacing

    def _load_font(self, font_name: str, font_size: int):
        """Load a font with caching"""
        cache_key = f"{font_name}_{font_size}"
        if cache_key in self.font_cache:
            return self.font_cache[cache_key]

        font = None

        if "/" in font_name or font_name.endswith((".ttf", ".otf")):
            font_path = os.path.expanduser(font_name)
            try:
                font = ImageFont.truetype(font_path, font_size)
            except OSError as e:
                logger.warning(f"Failed to load font from path '{font_path}': {e}")

        if not font:
            font = self._find_system_font(font_name, font_size)

        if not font:
            logger.warning(f"Failed to load font '{font_name}', using default")
            font = ImageFont.load_default()

        self.font_cache[cache_key] = font
        return font

    def _find_system_font(self, font_name: str, font_size: int):
        wanted = font_name.lower().replace(" ", "")
        font_dirs = [
            "/usr/share/fonts",
            "/usr/local/share/fonts",
            os.path.expanduser("~/.fonts"),
            os.path.expanduser("~/.local/share/fonts"),
            "/Library/Fonts",
            os.path.expanduser("~/Library/Fonts"),
        ]

        for font_dir in font_dirs:
            if not os.path.exists(font_dir):
                continue
            for root, _dirs, files in os.walk(font_dir):
                for file in files:
                    if not file.endswith((".ttf", ".otf")):
                        continue
                    if wanted not in file.lower().replace(" ", ""):
                        continue
                    font_path = os.path.join(root, file)
                    try:
                        font = ImageFont.truetype(font_path, font_size)
                        logger.debug(f"Loaded font: {font_path}")
                        return font
                    except OSError as e:
                        logger.debug(f"Cannot load font {font_path}: {e}")
        return None
