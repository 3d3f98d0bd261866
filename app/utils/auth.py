"""Authentication utilities for admin tokens and the mobile API key."""

import hmac
import logging

from flask import g, request

from app.config import Settings
from app.exceptions import AuthenticationException, AuthorizationException
from app.services.auth_service import AuthContext, AuthService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


def get_auth_context() -> AuthContext | None:
    """Get the current authentication context from flask.g.

    Returns:
        AuthContext if an admin is authenticated, None otherwise
    """
    return getattr(g, "auth_context", None)


def get_actor_id() -> int | None:
    """ID of the authenticated admin, for activity log entries."""
    auth_context = get_auth_context()
    return auth_context.user_id if auth_context else None


def extract_token_from_request() -> str | None:
    """Extract the JWT from the Authorization header or ``token`` query parameter.

    The query parameter exists for EventSource clients, which cannot set
    request headers.

    Returns:
        JWT token string or None if not found
    """
    auth_header = request.headers.get("Authorization")
    if auth_header:
        parts = auth_header.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            logger.debug("Token extracted from Authorization header")
            return parts[1]

    token = request.args.get("token")
    if token:
        logger.debug("Token extracted from query string")
        return token

    return None


def authenticate_admin_request(
    auth_service: AuthService, user_service: UserService
) -> AuthContext:
    """Authenticate the current request as an admin and store the context in flask.g.

    Args:
        auth_service: AuthService instance for token validation
        user_service: UserService used to confirm the subject is still an admin

    Returns:
        AuthContext of the admin

    Raises:
        AuthenticationException: If the token is missing, invalid, or expired
        AuthorizationException: If the token's user is no longer an admin
    """
    token = extract_token_from_request()
    if not token:
        raise AuthenticationException("Access token required")

    auth_context = auth_service.validate_token(token)

    admin = user_service.get_admin(auth_context.user_id)
    if admin is None:
        raise AuthorizationException("Admin access required")

    auth_context.name = admin.name
    g.auth_context = auth_context

    logger.info(
        "Request authenticated: user_id=%s employee_id=%s",
        auth_context.user_id,
        auth_context.employee_id,
    )
    return auth_context


def check_mobile_api_key(config: Settings) -> None:
    """Check the ``X-API-Key`` header of a mobile request.

    Requests pass without a key when none is configured; production
    configuration refuses to start without one.

    Raises:
        AuthenticationException: If a key is configured and the header does not match
    """
    if not config.mobile_api_key:
        logger.debug("No mobile API key configured - skipping check")
        return

    api_key = request.headers.get(API_KEY_HEADER, "")
    if not hmac.compare_digest(api_key.encode(), config.mobile_api_key.encode()):
        logger.warning("API key validation failed (key present: %s)", bool(api_key))
        raise AuthenticationException("Invalid API key")
