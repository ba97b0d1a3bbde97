"""
PNG file mapping for HTML color names.

Scripts may ask for a background color by name. Each supported name maps
to a solid-color PNG under ``imgs/colors/`` in the assets directory, which
is generated on startup with Pillow.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from PIL import Image

logger = logging.getLogger(__name__)

COLOR_IMAGE_DIR = "imgs/colors"

# Must stay in sync with the PNG files generated by generate_color_pngs()
HTML_COLORS: Dict[str, str] = {
    # Basic colors
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#008000",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "silver": "#C0C0C0",
    "gray": "#808080",
    "maroon": "#800000",
    "olive": "#808000",
    "lime": "#00FF00",
    "aqua": "#00FFFF",
    "teal": "#008080",
    "navy": "#000080",
    "fuchsia": "#FF00FF",
    "purple": "#800080",
    # Extended colors (subset of most commonly used)
    "orange": "#FFA500",
    "pink": "#FFC0CB",
    "brown": "#A52A2A",
    "gold": "#FFD700",
    "violet": "#EE82EE",
    "indigo": "#4B0082",
    "turquoise": "#40E0D0",
    "coral": "#FF7F50",
    "salmon": "#FA8072",
    "khaki": "#F0E68C",
    "tan": "#D2B48C",
    "crimson": "#DC143C",
    "darkblue": "#00008B",
    "darkgreen": "#006400",
    "darkorange": "#FF8C00",
    "darkred": "#8B0000",
    "lightblue": "#ADD8E6",
    "lightgreen": "#90EE90",
    "lightgray": "#D3D3D3",
    "rebeccapurple": "#663399",
    "royalblue": "#4169E1",
    "forestgreen": "#228B22",
    "steelblue": "#4682B4",
    "tomato": "#FF6347",
}

AVAILABLE_COLORS: List[str] = list(HTML_COLORS)


def get_color_png_path(color_name: str) -> Optional[str]:
    """
    Get the PNG file path for the given HTML color name.

    The path is relative to the assets directory.

    Returns:
        Path like ``imgs/colors/red.png``, or None for unknown colors
    """
    normalized = color_name.lower()
    if normalized not in HTML_COLORS:
        return None
    return f"{COLOR_IMAGE_DIR}/{normalized}.png"


def get_available_colors() -> List[str]:
    """Return all available HTML color names"""
    return list(AVAILABLE_COLORS)


def is_color_available(color_name: Optional[str]) -> bool:
    """Check if a color name is available"""
    if not color_name:
        return False
    return color_name.lower() in HTML_COLORS


def generate_color_pngs(
    assets_dir: Union[str, Path],
    size: Tuple[int, int] = (72, 72),
    overwrite: bool = False,
) -> List[Path]:
    """
    Write a solid-color PNG for every available color name.

    Args:
        assets_dir: Assets root; files land in ``<assets_dir>/imgs/colors``
        size: Image dimensions in pixels
        overwrite: Regenerate files that already exist

    Returns:
        Paths of the files that were written
    """
    output_dir = Path(assets_dir).expanduser() / COLOR_IMAGE_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, hex_color in HTML_COLORS.items():
        target = output_dir / f"{name}.png"
        if target.exists() and not overwrite:
            continue

        Image.new("RGB", size, hex_color).save(target, "PNG")
        written.append(target)
        logger.debug(f"Generated: {target}")

    if written:
        logger.info(f"Generated {len(written)} color PNG files in {output_dir}")
    return written
