"""Admin authentication endpoints."""

import logging
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.schemas.auth import (
    AdminLoginDataSchema,
    AdminLoginResponseSchema,
    AdminLoginSchema,
    AdminProfileSchema,
    AdminValidateDataSchema,
    AdminValidateResponseSchema,
)
from app.schemas.error import ErrorResponseSchema
from app.services.auth_service import AuthService
from app.services.container import ServiceContainer
from app.services.user_service import UserService
from app.utils.auth import authenticate_admin_request
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.route("/login", methods=["POST"])
@api.validate(
    json=AdminLoginSchema,
    resp=SpectreeResponse(
        HTTP_200=AdminLoginResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_401=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def login(
    auth_service: AuthService = Provide[ServiceContainer.auth_service],
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """Sign in an admin and issue a bearer token.

    Returns:
        200: Token and admin profile
        401: Unknown employee ID, non-admin user or wrong password
    """
    data = AdminLoginSchema.model_validate(request.get_json())
    admin = user_service.authenticate_admin(data.employee_id, data.password)
    token = auth_service.issue_token(admin.id, admin.employee_id, admin.role)

    return AdminLoginResponseSchema(
        message="Login successful",
        data=AdminLoginDataSchema(
            token=token,
            admin=AdminProfileSchema.model_validate(admin),
        ),
    ).model_dump(mode="json")


@auth_bp.route("/validate", methods=["GET"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=AdminValidateResponseSchema,
        HTTP_401=ErrorResponseSchema,
        HTTP_403=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def validate(
    auth_service: AuthService = Provide[ServiceContainer.auth_service],
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """Check that the bearer token is valid and still belongs to an admin.

    Returns:
        200: The admin's profile
        401: Missing, invalid or expired token
        403: The token's user is no longer an admin
    """
    auth_context = authenticate_admin_request(auth_service, user_service)
    admin = user_service.get_user(auth_context.user_id)

    return AdminValidateResponseSchema(
        data=AdminValidateDataSchema(admin=AdminProfileSchema.model_validate(admin)),
    ).model_dump(mode="json")
