"""Centralized error handling utilities."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from flask import current_app, has_app_context, jsonify
from flask.wrappers import Response
from pydantic import ValidationError

from app.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessLogicException,
    RecordExistsException,
    RecordNotFoundException,
    ValidationException,
)
from app.utils import get_current_correlation_id

logger = logging.getLogger(__name__)


def mark_request_failed() -> None:
    """Flag the request-scoped session so teardown rolls it back."""
    if not has_app_context():
        return
    container = getattr(current_app, "container", None)
    if container is None:
        return
    container.db_session().info["needs_rollback"] = True


def build_error_response(
    error: str,
    details: dict[str, Any],
    code: str | None = None,
    status_code: int = 400,
) -> tuple[Response, int]:
    """Build an error envelope with correlation ID and optional error code."""
    response_data: dict[str, Any] = {
        "success": False,
        "message": error,
        "error": error,
        "details": details,
    }

    if code:
        response_data["code"] = code

    correlation_id = get_current_correlation_id()
    if correlation_id:
        response_data["correlationId"] = correlation_id

    return jsonify(response_data), status_code


def handle_api_errors(
    func: Callable[..., Any],
) -> Callable[..., Response | tuple[Response | str, int]]:
    """Decorator to handle common API errors consistently.

    Handles ValidationError, custom exceptions, and generic exceptions
    with appropriate HTTP status codes and error messages. Any handled
    error marks the request session for rollback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BusinessLogicException as e:
            mark_request_failed()
            logger.warning("%s in %s: %s", type(e).__name__, func.__name__, e.message)
            return business_error_response(e)
        except ValidationError as e:
            mark_request_failed()
            logger.warning("Validation error in %s: %s", func.__name__, str(e))
            error_details = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                error_details.append({"message": error["msg"], "field": field})

            return build_error_response(
                "Validation failed", {"errors": error_details}, status_code=400
            )
        except Exception as e:
            mark_request_failed()
            logger.error("Exception in %s: %s", func.__name__, str(e), exc_info=True)
            return build_error_response(
                "Internal server error", {"message": str(e)}, status_code=500
            )

    return wrapper


def business_error_response(e: BusinessLogicException) -> tuple[Response, int]:
    """Map a business logic exception to its HTTP error response."""
    if isinstance(e, RecordNotFoundException):
        return build_error_response(
            e.message,
            {"message": "The requested resource could not be found"},
            code=e.error_code,
            status_code=404,
        )

    if isinstance(e, RecordExistsException):
        return build_error_response(
            e.message,
            {"message": "The resource already exists"},
            code=e.error_code,
            status_code=409,
        )

    if isinstance(e, AuthenticationException):
        return build_error_response(
            e.message,
            {"message": "Authentication is required to access this resource"},
            code=e.error_code,
            status_code=401,
        )

    if isinstance(e, AuthorizationException):
        return build_error_response(
            e.message,
            {"message": "You do not have permission to access this resource"},
            code=e.error_code,
            status_code=403,
        )

    if isinstance(e, ValidationException):
        return build_error_response(
            e.message,
            {"message": "Validation failed"},
            code=e.error_code,
            status_code=400,
        )

    return build_error_response(
        e.message,
        {"message": "A business logic operation failed"},
        code=e.error_code,
        status_code=400,
    )
