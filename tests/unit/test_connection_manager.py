"""
Tests for ConnectionManager hot-plug handling
"""

from unittest.mock import Mock

import pytest

from scriptlink.managers.connection import ConnectionManager


@pytest.fixture
def device_manager(mock_deck):
    manager = Mock()
    manager.connect.return_value = mock_deck
    manager.is_connected.return_value = True
    manager.disconnect.return_value = True
    return manager


@pytest.fixture
def callbacks():
    return Mock()


@pytest.fixture
def connection(device_manager, callbacks):
    return ConnectionManager(
        device_manager,
        on_connected=callbacks.connected,
        on_disconnected=callbacks.disconnected,
    )


class TestConnectionManager:
    """Test connection lifecycle"""

    def test_connect_notifies(self, connection, callbacks, mock_deck):
        assert connection.connect() is True
        assert connection.deck is mock_deck
        callbacks.connected.assert_called_once_with(mock_deck)

    def test_connect_without_device(self, connection, device_manager, callbacks):
        device_manager.connect.return_value = None

        assert connection.connect() is False
        callbacks.connected.assert_not_called()

    def test_connected_callback_failure_keeps_connection(self, connection, callbacks, caplog):
        callbacks.connected.side_effect = RuntimeError("setup failed")

        assert connection.connect() is True
        assert "setup failed" in caplog.text

    def test_disconnect_notifies_before_release(self, connection, device_manager, callbacks):
        order = []
        callbacks.disconnected.side_effect = lambda: order.append("callback")
        device_manager.disconnect.side_effect = lambda deck: order.append("release")
        connection.connect()

        connection.disconnect()

        assert order == ["callback", "release"]
        assert connection.deck is None

    def test_disconnect_without_device(self, connection, callbacks):
        connection.disconnect()
        callbacks.disconnected.assert_not_called()

    def test_check_connection_detects_unplug(self, connection, device_manager, callbacks):
        connection.connect()
        device_manager.is_connected.return_value = False
        device_manager.connect.return_value = None

        connection.check_connection(current_time=100.0)

        callbacks.disconnected.assert_called_once()
        assert connection.deck is None

    def test_check_connection_reconnects(self, connection, device_manager, mock_deck):
        connection.check_connection(current_time=100.0)
        assert connection.deck is mock_deck

    def test_reconnect_is_throttled(self, connection, device_manager):
        device_manager.connect.return_value = None

        connection.check_connection(current_time=100.0)
        connection.check_connection(current_time=100.5)
        assert device_manager.connect.call_count == 1

        connection.check_connection(current_time=102.5)
        assert device_manager.connect.call_count == 2

    def test_no_reconnect_when_shutting_down(self, connection, device_manager):
        connection.shutting_down = True
        connection.check_connection(current_time=100.0)
        device_manager.connect.assert_not_called()

    def test_monitoring_start_stop(self, connection):
        connection.start_monitoring()
        assert connection.running is True

        connection.stop_monitoring()
        assert connection.running is False
        assert connection.shutting_down is True
