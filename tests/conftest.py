"""
Pytest configuration and fixtures
"""

from unittest.mock import MagicMock, Mock

import pytest
import yaml


@pytest.fixture
def sample_config():
    """Sample configuration for testing"""
    return {
        "device": {"brightness": 75},
        "styles": {
            "default": {
                "font": "DejaVu Sans",
                "font_size": 14,
                "text_color": "#FFFFFF",
                "background_color": "#000000",
                "text_align": "center",
                "text_offset": 0,
            }
        },
        "buttons": {
            1: {
                "action": {
                    "type": "script",
                    "default_title": "Git",
                    "script_path": "/usr/local/bin/git-status",
                    "script_arguments": "'~/my repo'",
                }
            },
            2: {
                "action": {
                    "type": "interval",
                    "default_title": "Dice",
                    "script_path": "/usr/local/bin/random",
                    "interval_script_path": "/usr/local/bin/random",
                    "interval_delay": 5,
                }
            },
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    sample_config.setdefault("paths", {})["assets"] = str(tmp_path / "assets")
    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture
def mock_deck():
    """Mock Stream Deck device"""
    deck = MagicMock()
    deck.is_visual.return_value = True
    deck.is_open.return_value = True
    deck.connected.return_value = True
    deck.key_count.return_value = 15
    deck.get_serial_number.return_value = "TEST123"
    deck.deck_type.return_value = "Stream Deck Original"
    deck.key_image_format.return_value = {
        "size": (72, 72),
        "format": "BMP",
        "flip": (True, False),
        "rotation": 0,
    }
    return deck


@pytest.fixture
def mock_controller():
    """Controller stand-in for action tests"""
    controller = Mock()
    controller.script_runner = Mock()
    controller.interval_manager = Mock()
    controller.update_button.return_value = True
    return controller


@pytest.fixture
def action_context(mock_controller, sample_config):
    """Action context for the first sample button"""
    from scriptlink.actions.base import ActionContext

    return ActionContext(
        controller=mock_controller,
        button_config=sample_config["buttons"][1],
        key_index=0,
    )


@pytest.fixture(autouse=True)
def no_subprocess_calls(monkeypatch):
    """Prevent actual subprocess calls during testing"""
    completed = Mock(returncode=0, stdout="{}", stderr="")
    monkeypatch.setattr("subprocess.Popen", Mock())
    monkeypatch.setattr("subprocess.run", Mock(return_value=completed))


@pytest.fixture
def sample_image():
    """Create a sample test image"""
    from PIL import Image

    return Image.new("RGB", (72, 72), color="red")
