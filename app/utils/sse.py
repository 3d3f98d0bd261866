"""Server-sent event framing and per-connection event queues."""

import json
from collections.abc import Mapping
from queue import Empty, Full, Queue, ShutDown
from typing import Any, Protocol

from app.exceptions import ConnectionClosedException

SSE_MIMETYPE = "text/event-stream"

# Connection is hop-by-hop and must be left to the WSGI server
SSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}

KEEPALIVE_COMMENT = ": keep-alive\n\n"


def format_sse_event(payload: Mapping[str, Any]) -> str:
    """Frame a JSON payload as a single SSE ``data:`` event."""
    return f"data: {json.dumps(payload)}\n\n"


class EventSink(Protocol):
    """Anything a broadcast can be delivered to.

    ``send`` must raise when the connection can no longer accept events.
    """

    def send(self, payload: Mapping[str, Any]) -> None: ...


class QueueEventSink:
    """Bounded queue of framed events feeding one streaming response.

    Broadcasts call ``send`` from the writing request's thread; the
    streaming generator drains the queue with ``next_message``. A full
    queue means the client stopped reading, so the sink closes itself
    and the next ``send`` (and the reader) see a closed connection.
    """

    def __init__(self, connection_id: str, maxsize: int) -> None:
        self.connection_id = connection_id
        self._queue: Queue[str] = Queue(maxsize=maxsize)

    def send(self, payload: Mapping[str, Any]) -> None:
        """Enqueue an event without blocking.

        Raises:
            ConnectionClosedException: If the queue is full or already closed
        """
        try:
            self._queue.put_nowait(format_sse_event(payload))
        except Full as e:
            self.close()
            raise ConnectionClosedException(self.connection_id, "event queue is full") from e
        except ShutDown as e:
            raise ConnectionClosedException(self.connection_id, "connection closed") from e

    def next_message(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for the next framed event.

        Returns:
            The framed event, or None if nothing arrived in time

        Raises:
            ConnectionClosedException: If the sink has been closed
        """
        try:
            return self._queue.get(timeout=timeout)
        except Empty:
            return None
        except ShutDown as e:
            raise ConnectionClosedException(self.connection_id, "connection closed") from e

    def close(self) -> None:
        """Stop accepting events and discard anything still queued."""
        self._queue.shutdown(immediate=True)
