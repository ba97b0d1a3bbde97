"""
Tests for configuration loading and validation
"""

import pytest
import yaml

from scriptlink.config.loader import MAX_CONFIG_SIZE, ConfigLoader
from scriptlink.utils.errors import ConfigurationError


def write_config(tmp_path, config, name="config.yaml"):
    path = tmp_path / name
    path.write_text(yaml.dump(config) if not isinstance(config, str) else config)
    return str(path)


class TestConfigLoader:
    """Test loading YAML configuration"""

    def test_load_sample(self, config_file):
        config = ConfigLoader().load(str(config_file))

        assert config["device"]["brightness"] == 75
        assert config["buttons"][1]["action"]["script_arguments"] == "'~/my repo'"

    def test_defaults_applied(self, tmp_path):
        path = write_config(tmp_path, {"buttons": {1: {"action": {"type": "script"}}}})
        config = ConfigLoader().load(path)

        assert config["device"]["brightness"] == 100
        assert config["paths"]["assets"] == "~/.scriptlink"
        assert config["scripts"]["timeout"] == 30
        assert config["styles"]["default"]["text_align"] == "center"

    def test_partial_default_style_is_completed(self, tmp_path):
        path = write_config(
            tmp_path,
            {"styles": {"default": {"font_size": 20}}, "buttons": {1: {"action": {"type": "script"}}}},
        )
        style = ConfigLoader().load(path)["styles"]["default"]

        assert style["font_size"] == 20
        assert style["text_color"] == "#FFFFFF"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader().load(str(tmp_path / "missing.yaml"))

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="directory"):
            ConfigLoader().load(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path, "buttons: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader().load(path)

    def test_too_large(self, tmp_path):
        path = write_config(tmp_path, "#" * (MAX_CONFIG_SIZE + 1))
        with pytest.raises(ConfigurationError, match="too large"):
            ConfigLoader().load(path)


class TestConfigValidation:
    """Test structural validation"""

    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    def test_not_a_dictionary(self, loader):
        with pytest.raises(ConfigurationError, match="must be a dictionary"):
            loader.validate(["buttons"])

    def test_missing_buttons(self, loader):
        with pytest.raises(ConfigurationError, match="'buttons' section"):
            loader.validate({"device": {}})

    def test_empty_buttons(self, loader):
        with pytest.raises(ConfigurationError, match="non-empty"):
            loader.validate({"buttons": {}})

    @pytest.mark.parametrize("key", [0, -1, "one", True])
    def test_invalid_button_keys(self, loader, key):
        with pytest.raises(ConfigurationError, match="positive integers"):
            loader.validate({"buttons": {key: {"action": {"type": "script"}}}})

    def test_button_without_action_type(self, loader):
        with pytest.raises(ConfigurationError, match="'action' with a 'type'"):
            loader.validate({"buttons": {1: {"action": {"script_path": "/bin/x"}}}})

    def test_non_string_arguments(self, loader):
        """Unquoted numbers in YAML would otherwise silently become ints"""
        with pytest.raises(ConfigurationError, match="must be a string"):
            loader.validate({"buttons": {1: {"action": {"type": "script", "script_arguments": 5}}}})

    def test_invalid_brightness(self, loader):
        with pytest.raises(ConfigurationError, match="brightness"):
            loader.validate({"device": {"brightness": 150}, "buttons": {1: {"action": {"type": "script"}}}})

    def test_invalid_timeout(self, loader):
        with pytest.raises(ConfigurationError, match="timeout"):
            loader.validate({"scripts": {"timeout": 0}, "buttons": {1: {"action": {"type": "script"}}}})

    def test_invalid_section_type(self, loader):
        with pytest.raises(ConfigurationError, match="'styles' must be a dictionary"):
            loader.validate({"styles": [], "buttons": {1: {"action": {"type": "script"}}}})

    @pytest.mark.parametrize("style", [None, "small", [1, 2]])
    def test_non_mapping_style(self, loader, style):
        with pytest.raises(ConfigurationError, match="Style 'compact' must be a dictionary"):
            loader.validate({"styles": {"compact": style}, "buttons": {1: {"action": {"type": "script"}}}})

    def test_empty_default_style_is_a_configuration_error(self, tmp_path):
        path = write_config(tmp_path, "styles:\n  default:\nbuttons:\n  1:\n    action:\n      type: script\n")
        with pytest.raises(ConfigurationError, match="Style 'default'"):
            ConfigLoader().load(path)
