"""Tests for SettingsBroadcaster registry, delivery and streaming."""

import json
from unittest.mock import MagicMock

from app.exceptions import ConnectionClosedException
from app.services.settings_broadcaster import Audience, SettingsBroadcaster
from app.utils.sse import KEEPALIVE_COMMENT


def _broadcaster() -> SettingsBroadcaster:
    return SettingsBroadcaster(queue_size=4, keepalive_seconds=0.01)


def _event(chunk: str) -> dict:
    assert chunk.startswith("data: ")
    assert chunk.endswith("\n\n")
    return json.loads(chunk[len("data: ") :])


class TestRegistry:
    """Tests for registering and unregistering connections."""

    def test_register_and_unregister(self) -> None:
        broadcaster = _broadcaster()
        broadcaster.register(Audience.WEB, "conn-1", MagicMock())

        assert broadcaster.size(Audience.WEB) == 1
        assert broadcaster.unregister(Audience.WEB, "conn-1") is True
        assert broadcaster.size(Audience.WEB) == 0

    def test_unregister_unknown_connection(self) -> None:
        broadcaster = _broadcaster()

        assert broadcaster.unregister(Audience.MOBILE, "missing") is False

    def test_audiences_are_independent(self) -> None:
        """Test that a connection only lives in its own audience's registry."""
        broadcaster = _broadcaster()
        broadcaster.register(Audience.WEB, "conn-1", MagicMock())

        assert broadcaster.size(Audience.MOBILE) == 0
        assert broadcaster.unregister(Audience.MOBILE, "conn-1") is False
        assert broadcaster.size(Audience.WEB) == 1


class TestBroadcast:
    """Tests for delivering payloads."""

    def test_delivers_to_every_connection_of_audience(self) -> None:
        broadcaster = _broadcaster()
        web_a, web_b, mobile = MagicMock(), MagicMock(), MagicMock()
        broadcaster.register(Audience.WEB, "a", web_a)
        broadcaster.register(Audience.WEB, "b", web_b)
        broadcaster.register(Audience.MOBILE, "m", mobile)
        payload = {"type": "settings_update", "data": {"mg1_enabled": False}}

        delivered = broadcaster.broadcast(Audience.WEB, payload)

        assert delivered == 2
        web_a.send.assert_called_once_with(payload)
        web_b.send.assert_called_once_with(payload)
        mobile.send.assert_not_called()

    def test_failing_connection_is_pruned(self) -> None:
        """Test that one failing sink is dropped while the others still receive."""
        broadcaster = _broadcaster()
        first, failing, last = MagicMock(), MagicMock(), MagicMock()
        failing.send.side_effect = ConnectionClosedException("bad", "client went away")
        broadcaster.register(Audience.WEB, "first", first)
        broadcaster.register(Audience.WEB, "bad", failing)
        broadcaster.register(Audience.WEB, "last", last)

        delivered = broadcaster.broadcast(Audience.WEB, {"type": "settings_update"})

        assert delivered == 2
        first.send.assert_called_once()
        last.send.assert_called_once()
        assert broadcaster.size(Audience.WEB) == 2
        assert broadcaster.unregister(Audience.WEB, "bad") is False

    def test_unexpected_send_error_does_not_propagate(self) -> None:
        broadcaster = _broadcaster()
        sink = MagicMock()
        sink.send.side_effect = RuntimeError("boom")
        broadcaster.register(Audience.MOBILE, "m", sink)

        assert broadcaster.broadcast(Audience.MOBILE, {"type": "settings_update"}) == 0
        assert broadcaster.size(Audience.MOBILE) == 0

    def test_broadcast_without_connections(self) -> None:
        assert _broadcaster().broadcast(Audience.WEB, {"type": "settings_update"}) == 0


class TestStream:
    """Tests for the per-connection SSE stream."""

    def test_registers_on_first_iteration(self) -> None:
        """Test that creating the generator alone registers nothing."""
        broadcaster = _broadcaster()

        stream = broadcaster.stream(Audience.WEB, {"mg1_enabled": True})
        assert broadcaster.size(Audience.WEB) == 0

        next(stream)
        assert broadcaster.size(Audience.WEB) == 1
        stream.close()

    def test_opens_with_connected_and_current_settings(self) -> None:
        broadcaster = _broadcaster()
        stream = broadcaster.stream(Audience.MOBILE, {"minigame1_enabled": True})

        connected = _event(next(stream))
        initial = _event(next(stream))

        assert connected == {"type": "connected", "message": "SSE connection established"}
        assert initial == {"type": "settings_update", "data": {"minigame1_enabled": True}}
        stream.close()

    def test_relays_broadcasts(self) -> None:
        broadcaster = _broadcaster()
        stream = broadcaster.stream(Audience.WEB, {})
        next(stream)
        next(stream)

        broadcaster.broadcast(Audience.WEB, {"type": "settings_update", "data": {"mg2_rounds": 4}})

        assert _event(next(stream)) == {"type": "settings_update", "data": {"mg2_rounds": 4}}
        stream.close()

    def test_keepalive_when_idle(self) -> None:
        broadcaster = _broadcaster()
        stream = broadcaster.stream(Audience.WEB, {})
        next(stream)
        next(stream)

        assert next(stream) == KEEPALIVE_COMMENT
        stream.close()

    def test_close_unregisters(self) -> None:
        """Test that closing the generator, as the server does on disconnect, unregisters."""
        broadcaster = _broadcaster()
        stream = broadcaster.stream(Audience.MOBILE, {})
        next(stream)

        stream.close()

        assert broadcaster.size(Audience.MOBILE) == 0

    def test_full_queue_ends_stream(self) -> None:
        """Test that a client that stops reading is dropped and its stream ends."""
        broadcaster = SettingsBroadcaster(queue_size=1, keepalive_seconds=0.01)
        stream = broadcaster.stream(Audience.WEB, {})
        next(stream)
        next(stream)

        broadcaster.broadcast(Audience.WEB, {"type": "settings_update", "data": {"n": 1}})
        broadcaster.broadcast(Audience.WEB, {"type": "settings_update", "data": {"n": 2}})

        assert broadcaster.size(Audience.WEB) == 0
        assert list(stream) == []
