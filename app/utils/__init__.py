"""Utility modules for the fatigue admin backend."""

import uuid

from flask import has_request_context, request

CORRELATION_ID_HEADER = "X-Request-Id"


def get_current_correlation_id() -> str:
    """Get or generate a correlation ID for the current request.

    Returns:
        The caller-supplied request ID when present, otherwise a new UUID
    """
    if has_request_context():
        supplied = request.headers.get(CORRELATION_ID_HEADER)
        if supplied:
            return supplied
    return str(uuid.uuid4())
