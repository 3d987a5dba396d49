"""
Tests for heartbeat-driven MongoDB connectivity tracking
"""

from types import SimpleNamespace

from wifi_portal.core.database import ConnectionState

PRIMARY = ("db-0.example.net", 27017)
SECONDARY = ("db-1.example.net", 27017)


def heartbeat(address):
    return SimpleNamespace(connection_id=address)


class TestConnectionState:
    def test_single_server_follows_heartbeats(self):
        state = ConnectionState()

        state.succeeded(heartbeat(PRIMARY))
        assert state.connected is True

        state.failed(heartbeat(PRIMARY))
        assert state.connected is False

    def test_one_failing_member_keeps_deployment_connected(self):
        state = ConnectionState()
        state.succeeded(heartbeat(PRIMARY))
        state.succeeded(heartbeat(SECONDARY))

        state.failed(heartbeat(SECONDARY))
        assert state.connected is True

        state.succeeded(heartbeat(PRIMARY))
        assert state.connected is True

        state.failed(heartbeat(PRIMARY))
        assert state.connected is False

    def test_reset_forgets_servers(self):
        state = ConnectionState()
        state.succeeded(heartbeat(PRIMARY))

        state.reset()

        assert state.connected is False
        assert state.servers == {}
