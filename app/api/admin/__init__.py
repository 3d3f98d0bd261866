"""Admin panel API blueprints.

Every endpoint under ``/api/admin`` requires a bearer token of a user who is
still an admin, unless authentication is disabled in the configuration.
"""

import logging
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request

from app.config import Settings
from app.exceptions import BusinessLogicException
from app.services.auth_service import AuthService
from app.services.container import ServiceContainer
from app.services.user_service import UserService
from app.utils.auth import authenticate_admin_request
from app.utils.error_handling import business_error_response, mark_request_failed

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


@admin_bp.before_request
@inject
def before_request_authentication(
    auth_service: AuthService = Provide[ServiceContainer.auth_service],
    user_service: UserService = Provide[ServiceContainer.user_service],
    config: Settings = Provide[ServiceContainer.config],
) -> Any:
    """Authenticate all requests to /api/admin endpoints before processing.

    Returns:
        None if authentication succeeds or is skipped
        Error response tuple if authentication fails
    """
    if request.method == "OPTIONS":
        return None

    if not config.auth_enabled:
        logger.debug("Authentication disabled - skipping admin check")
        return None

    logger.debug("Authenticating request to %s %s", request.method, request.path)
    try:
        authenticate_admin_request(auth_service, user_service)
    except BusinessLogicException as e:
        mark_request_failed()
        logger.warning("Admin authentication failed: %s", e.message)
        return business_error_response(e)

    return None


# Note: Imports are done after admin_bp creation to avoid circular imports
from app.api.admin.csv_import import csv_import_bp  # noqa: E402
from app.api.admin.dashboard import dashboard_bp  # noqa: E402
from app.api.admin.history import history_bp  # noqa: E402
from app.api.admin.questions import questions_bp  # noqa: E402
from app.api.admin.settings import settings_bp  # noqa: E402
from app.api.admin.users import users_bp  # noqa: E402

admin_bp.register_blueprint(csv_import_bp)  # type: ignore[attr-defined]
admin_bp.register_blueprint(dashboard_bp)  # type: ignore[attr-defined]
admin_bp.register_blueprint(history_bp)  # type: ignore[attr-defined]
admin_bp.register_blueprint(questions_bp)  # type: ignore[attr-defined]
admin_bp.register_blueprint(settings_bp)  # type: ignore[attr-defined]
admin_bp.register_blueprint(users_bp)  # type: ignore[attr-defined]
