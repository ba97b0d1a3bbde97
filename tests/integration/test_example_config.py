"""
Integration tests for the shipped example configuration - preventing breaking changes
"""

from pathlib import Path

import pytest

from scriptlink.actions.registry import ActionRegistry
from scriptlink.config.loader import ConfigLoader
from scriptlink.utils.arguments import ArgumentStringParser

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"


@pytest.fixture
def example_config():
    return ConfigLoader().load(str(EXAMPLES_DIR / "config.yaml"))


class TestExampleConfig:
    """Test that the example configuration stays valid"""

    def test_loads(self, example_config):
        assert sorted(example_config["buttons"]) == [1, 2, 3]
        assert example_config["styles"]["small"]["font_size"] == 10

    def test_actions_are_valid(self, example_config):
        registry = ActionRegistry()
        registry.auto_discover()

        for button_config in example_config["buttons"].values():
            action_config = button_config["action"]
            action = registry.get_action(action_config["type"])
            assert action is not None
            assert action.validate_config(action_config)

    def test_argument_strings(self, example_config):
        parser = ArgumentStringParser()
        buttons = example_config["buttons"]

        assert parser.parse(buttons[1]["action"]["script_arguments"]) == ["~/src/my project"]
        assert parser.parse(buttons[3]["action"]["script_arguments"]) == [
            "1",
            "first",
            "second word",
            'third "quoted"',
        ]

    def test_example_scripts_exist(self, example_config):
        for name in ("git_status.py", "random_color.py", "showarg.py"):
            assert (EXAMPLES_DIR / "scripts" / name).exists()
