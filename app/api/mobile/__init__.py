"""Mobile app API blueprints.

Every endpoint under ``/api/android`` checks the ``X-API-Key`` header when
a mobile API key is configured.
"""

import logging
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request

from app.config import Settings
from app.exceptions import BusinessLogicException
from app.services.container import ServiceContainer
from app.utils.auth import check_mobile_api_key
from app.utils.error_handling import business_error_response

logger = logging.getLogger(__name__)

mobile_bp = Blueprint("android", __name__, url_prefix="/android")


@mobile_bp.before_request
@inject
def before_request_api_key(
    config: Settings = Provide[ServiceContainer.config],
) -> Any:
    """Reject mobile requests without a valid API key.

    Returns:
        None if the key is valid or not required
        Error response tuple otherwise
    """
    if request.method == "OPTIONS":
        return None

    try:
        check_mobile_api_key(config)
    except BusinessLogicException as e:
        return business_error_response(e)

    return None


# Note: Imports are done after mobile_bp creation to avoid circular imports
from app.api.mobile.auth import mobile_auth_bp  # noqa: E402
from app.api.mobile.questions import mobile_questions_bp  # noqa: E402
from app.api.mobile.results import mobile_results_bp  # noqa: E402
from app.api.mobile.settings import mobile_settings_bp  # noqa: E402

mobile_bp.register_blueprint(mobile_auth_bp)  # type: ignore[attr-defined]
mobile_bp.register_blueprint(mobile_questions_bp)  # type: ignore[attr-defined]
mobile_bp.register_blueprint(mobile_results_bp)  # type: ignore[attr-defined]
mobile_bp.register_blueprint(mobile_settings_bp)  # type: ignore[attr-defined]
