"""
Tests for key image rendering
"""

import base64
import io
from unittest.mock import patch

import pytest
from PIL import Image

from scriptlink.device.renderer import ButtonRenderer
from scriptlink.utils.colors import generate_color_pngs


@pytest.fixture
def capture_native():
    """Return the PIL image instead of converting it to the device format"""
    with patch(
        "scriptlink.device.renderer.PILHelper.to_native_key_format",
        side_effect=lambda deck, image: image,
    ):
        yield


@pytest.fixture
def assets(tmp_path):
    generate_color_pngs(tmp_path, size=(8, 8))
    return tmp_path


def png_data_uri(color):
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buffer, "PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode()


class TestButtonRenderer:
    """Test ButtonRenderer"""

    def test_render_returns_native_bytes(self, mock_deck):
        result = ButtonRenderer().render_button(mock_deck, title="Hi")
        assert isinstance(result, bytes)
        assert len(result) > 0

    def test_style_background(self, mock_deck, capture_native):
        image = ButtonRenderer().render_button(mock_deck, style={"background_color": "#0000FF"})
        assert image.size == (72, 72)
        assert image.getpixel((0, 0)) == (0, 0, 255)

    def test_color_png_background(self, mock_deck, capture_native, assets):
        renderer = ButtonRenderer(asset_dirs=[str(assets)])
        image = renderer.render_button(mock_deck, image="imgs/colors/red.png")

        assert image.size == (72, 72)
        assert image.getpixel((36, 36)) == (255, 0, 0)

    def test_data_uri_background(self, mock_deck, capture_native):
        image = ButtonRenderer().render_button(mock_deck, image=png_data_uri("lime"))
        assert image.getpixel((10, 10)) == (0, 255, 0)

    def test_missing_image_falls_back_to_style(self, mock_deck, capture_native, caplog):
        image = ButtonRenderer().render_button(
            mock_deck, image="nope/missing.png", style={"background_color": "#FFFFFF"}
        )

        assert image.getpixel((0, 0)) == (255, 255, 255)
        assert "not found" in caplog.text

    def test_invalid_data_uri_falls_back(self, mock_deck, capture_native, caplog):
        image = ButtonRenderer().render_button(mock_deck, image="data:image/png;base64,!!!")
        assert image.getpixel((0, 0)) == (0, 0, 0)
        assert "Invalid image data URI" in caplog.text

    def test_title_is_drawn(self, mock_deck, capture_native):
        blank = ButtonRenderer().render_button(mock_deck)
        titled = ButtonRenderer().render_button(mock_deck, title="Clean")
        assert blank.tobytes() != titled.tobytes()

    def test_multiline_title(self, mock_deck, capture_native):
        image = ButtonRenderer().render_button(mock_deck, title="3\nchanges")
        assert image.size == (72, 72)

    def test_resolve_path_prefers_asset_dirs(self, assets):
        renderer = ButtonRenderer(asset_dirs=[str(assets)])
        assert renderer.resolve_path("imgs/colors/red.png") == str(assets / "imgs/colors/red.png")
        assert renderer.resolve_path("imgs/colors/nothing.png") is None

    def test_resolve_absolute_path(self, assets):
        path = str(assets / "imgs/colors/blue.png")
        assert ButtonRenderer().resolve_path(path) == path

    def test_font_cache(self):
        renderer = ButtonRenderer()
        font = renderer._load_font("NoSuchFont", 12)
        assert renderer._load_font("NoSuchFont", 12) is font

    def test_render_blank(self, mock_deck):
        assert isinstance(ButtonRenderer().render_blank(mock_deck), bytes)
