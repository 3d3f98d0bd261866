"""Mobile login API endpoint."""

import logging
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.exceptions import RecordNotFoundException, ValidationException
from app.schemas.auth import MobileLoginResponseSchema, MobileLoginSchema, MobileUserSchema
from app.schemas.error import ErrorResponseSchema
from app.services.container import ServiceContainer
from app.services.user_service import UserService
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

logger = logging.getLogger(__name__)

mobile_auth_bp = Blueprint("mobile_auth", __name__)


@mobile_auth_bp.route("/login", methods=["POST"])
@api.validate(
    json=MobileLoginSchema,
    resp=SpectreeResponse(
        HTTP_200=MobileLoginResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def login(
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """Look up the employee taking a test by employee ID."""
    data = MobileLoginSchema.model_validate(request.get_json())
    employee_id = data.employee_id.strip()
    if not employee_id:
        raise ValidationException("Employee ID is required")

    user = user_service.get_by_employee_id(employee_id)
    if user is None:
        raise RecordNotFoundException("User", employee_id)

    logger.info("Mobile login for %s", employee_id)
    return MobileLoginResponseSchema(
        message="Login successful",
        data=MobileUserSchema.model_validate(user),
    ).model_dump(mode="json")
