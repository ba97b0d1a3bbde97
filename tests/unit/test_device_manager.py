"""
Tests for Stream Deck device connection management.
"""

from unittest.mock import Mock, patch

import pytest

from scriptlink.device.manager import DeviceManager


def make_deck(serial="TEST123", visual=True):
    deck = Mock()
    deck.deck_type.return_value = "Stream Deck Original"
    deck.key_count.return_value = 15
    deck.is_visual.return_value = visual
    deck.get_serial_number.return_value = serial
    return deck


@pytest.fixture
def mock_sdm():
    with patch("scriptlink.device.manager.StreamDeckManager") as mock_sdm_class:
        yield mock_sdm_class.return_value


class TestDeviceManager:
    """Test suite for DeviceManager class."""

    def test_connect_success(self, mock_sdm):
        deck = make_deck()
        mock_sdm.enumerate.return_value = [deck]

        result = DeviceManager().connect()

        assert result is deck
        deck.open.assert_called_once()
        deck.reset.assert_called_once()

    def test_connect_no_devices(self, mock_sdm):
        mock_sdm.enumerate.return_value = []
        assert DeviceManager().connect() is None

    def test_connect_skips_devices_without_screens(self, mock_sdm):
        pedal = make_deck(visual=False)
        deck = make_deck()
        mock_sdm.enumerate.return_value = [pedal, deck]

        assert DeviceManager().connect() is deck
        pedal.close.assert_called_once()

    def test_connect_by_serial(self, mock_sdm):
        first = make_deck(serial="AAA")
        second = make_deck(serial="BBB")
        mock_sdm.enumerate.return_value = [first, second]

        assert DeviceManager(serial="BBB").connect() is second
        first.close.assert_called_once()

    def test_connect_serial_not_found(self, mock_sdm):
        mock_sdm.enumerate.return_value = [make_deck(serial="AAA")]
        assert DeviceManager(serial="ZZZ").connect() is None

    def test_connect_handles_usb_error(self, mock_sdm):
        deck = make_deck()
        deck.open.side_effect = OSError("USB device not accessible")
        mock_sdm.enumerate.return_value = [deck]

        assert DeviceManager().connect() is None

    def test_connect_reenumerates_each_time(self, mock_sdm):
        deck = make_deck()
        mock_sdm.enumerate.side_effect = [[], [deck]]
        manager = DeviceManager()

        assert manager.connect() is None
        assert manager.connect() is deck
        assert mock_sdm.enumerate.call_count == 2

    def test_disconnect_clean(self, mock_sdm):
        deck = make_deck()
        assert DeviceManager().disconnect(deck) is True
        deck.reset.assert_called_once()
        deck.close.assert_called_once()

    def test_disconnect_unplugged_device(self, mock_sdm):
        deck = make_deck()
        deck.reset.side_effect = OSError("gone")
        deck.close.side_effect = OSError("gone")

        assert DeviceManager().disconnect(deck) is False

    def test_disconnect_none(self, mock_sdm):
        assert DeviceManager().disconnect(None) is True

    def test_is_connected(self, mock_sdm):
        deck = make_deck()
        deck.connected.return_value = True
        assert DeviceManager().is_connected(deck) is True

        deck.connected.return_value = False
        assert DeviceManager().is_connected(deck) is False

    def test_is_connected_usb_error(self, mock_sdm):
        deck = make_deck()
        deck.connected.side_effect = OSError("USB error")
        assert DeviceManager().is_connected(deck) is False

    def test_is_connected_none(self, mock_sdm):
        assert DeviceManager().is_connected(None) is False
