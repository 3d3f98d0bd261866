"""Broadcast registry for settings SSE connections.

This singleton service tracks the open settings streams of both audiences
and fans settings updates out to them.

Key responsibilities:
- Keep an independent connection registry per audience (web, mobile)
- Deliver a payload to every connection of an audience
- Prune connections whose delivery fails, without failing the broadcast
- Produce the SSE byte stream for a single connection
"""

import logging
import threading
import uuid
from collections.abc import Iterator, Mapping
from enum import StrEnum
from typing import Any

from prometheus_client import Counter, Gauge

from app.exceptions import ConnectionClosedException
from app.utils.sse import KEEPALIVE_COMMENT, EventSink, QueueEventSink, format_sse_event

logger = logging.getLogger(__name__)

SSE_SETTINGS_CONNECTIONS_ACTIVE = Gauge(
    "sse_settings_connections_active",
    "Current number of open settings streams",
    ["audience"],
)
SSE_SETTINGS_EVENTS_SENT_TOTAL = Counter(
    "sse_settings_events_sent_total",
    "Total settings events delivered to streams",
    ["audience", "status"],
)


class Audience(StrEnum):
    """Client population a stream belongs to."""

    WEB = "web"
    MOBILE = "mobile"


class SettingsBroadcaster:
    """Singleton registry of open settings streams, partitioned by audience."""

    def __init__(self, queue_size: int, keepalive_seconds: float) -> None:
        self.queue_size = queue_size
        self.keepalive_seconds = keepalive_seconds

        # audience -> connection_id -> sink (protected by _lock)
        self._registries: dict[Audience, dict[str, EventSink]] = {
            audience: {} for audience in Audience
        }
        self._lock = threading.RLock()

        logger.info("SettingsBroadcaster initialized")

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, audience: Audience, connection_id: str, sink: EventSink) -> None:
        """Add a connection to an audience's registry."""
        with self._lock:
            self._registries[audience][connection_id] = sink
            count = len(self._registries[audience])
        SSE_SETTINGS_CONNECTIONS_ACTIVE.labels(audience=audience.value).set(count)

        logger.info(
            "Settings stream registered",
            extra={"audience": audience.value, "connection_id": connection_id},
        )

    def unregister(self, audience: Audience, connection_id: str) -> bool:
        """Remove a connection from an audience's registry.

        Returns:
            True if the connection was registered, False otherwise
        """
        with self._lock:
            removed = self._registries[audience].pop(connection_id, None)
            count = len(self._registries[audience])
        SSE_SETTINGS_CONNECTIONS_ACTIVE.labels(audience=audience.value).set(count)

        if removed is not None:
            logger.info(
                "Settings stream unregistered",
                extra={"audience": audience.value, "connection_id": connection_id},
            )
        return removed is not None

    def size(self, audience: Audience) -> int:
        """Number of connections registered for an audience."""
        with self._lock:
            return len(self._registries[audience])

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def broadcast(self, audience: Audience, payload: Mapping[str, Any]) -> int:
        """Deliver a payload to every connection of an audience.

        The registry is copied under the lock and sends happen outside it.
        A connection whose send raises is unregistered and delivery carries
        on with the rest; no delivery error reaches the caller.

        Args:
            audience: Registry to deliver to
            payload: JSON-serializable event

        Returns:
            Number of connections the payload was delivered to
        """
        with self._lock:
            targets = list(self._registries[audience].items())

        delivered = 0
        for connection_id, sink in targets:
            try:
                sink.send(payload)
            except Exception as e:
                SSE_SETTINGS_EVENTS_SENT_TOTAL.labels(
                    audience=audience.value, status="error"
                ).inc()
                logger.warning(
                    "Dropping settings stream after failed send: %s",
                    e,
                    extra={"audience": audience.value, "connection_id": connection_id},
                )
                self.unregister(audience, connection_id)
                continue

            SSE_SETTINGS_EVENTS_SENT_TOTAL.labels(
                audience=audience.value, status="success"
            ).inc()
            delivered += 1

        logger.debug(
            "Broadcast settings event to %d of %d %s streams",
            delivered,
            len(targets),
            audience.value,
        )
        return delivered

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def stream(self, audience: Audience, initial_payload: Mapping[str, Any]) -> Iterator[str]:
        """Produce the SSE stream for one client connection.

        The connection is registered when iteration starts, so a response
        that is discarded before streaming leaves nothing behind. The stream
        opens with a ``connected`` event and the current settings, then
        relays broadcasts, emitting a keep-alive comment whenever nothing
        was sent for ``keepalive_seconds``. It ends when the sink is closed
        and always unregisters the connection, including when the server
        closes the generator after the client goes away.

        Args:
            audience: Registry the connection joins
            initial_payload: Settings sent in the first ``settings_update``

        Yields:
            Framed SSE events and comments
        """
        connection_id = str(uuid.uuid4())
        sink = QueueEventSink(connection_id, self.queue_size)
        self.register(audience, connection_id, sink)

        try:
            yield format_sse_event(
                {"type": "connected", "message": "SSE connection established"}
            )
            yield format_sse_event({"type": "settings_update", "data": dict(initial_payload)})

            while True:
                message = sink.next_message(self.keepalive_seconds)
                yield message if message is not None else KEEPALIVE_COMMENT
        except ConnectionClosedException as e:
            logger.info(
                "Settings stream closed: %s",
                e.reason,
                extra={"audience": audience.value, "connection_id": connection_id},
            )
        finally:
            self.unregister(audience, connection_id)
            sink.close()
