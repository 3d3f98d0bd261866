"""Admin user management API endpoints."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.schemas.common import ListQuerySchema, MessageResponseSchema, PaginationSchema
from app.schemas.error import ErrorResponseSchema
from app.schemas.user import (
    UserCreateSchema,
    UserListResponseSchema,
    UserResponseSchema,
    UserSchema,
    UserUpdateSchema,
)
from app.services.container import ServiceContainer
from app.services.user_service import UserService
from app.utils.auth import get_actor_id
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

users_bp = Blueprint("users", __name__, url_prefix="/users")


@users_bp.route("", methods=["GET"])
@api.validate(
    query=ListQuerySchema,
    resp=SpectreeResponse(
        HTTP_200=UserListResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def list_users(
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """List users, admins first, with optional search."""
    query = ListQuerySchema.model_validate(request.args.to_dict())
    users, page = user_service.list_users(page=query.page, search=query.search)

    return UserListResponseSchema(
        data=[UserSchema.model_validate(u) for u in users],
        pagination=PaginationSchema.from_page(page),
    ).model_dump(mode="json", by_alias=True)


@users_bp.route("", methods=["POST"])
@api.validate(
    json=UserCreateSchema,
    resp=SpectreeResponse(
        HTTP_201=UserResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_409=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def create_user(
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """Create a user; admins need a password."""
    data = UserCreateSchema.model_validate(request.get_json())
    user = user_service.create_user(
        name=data.name,
        employee_id=data.employee_id,
        role=data.role,
        nik=data.nik,
        password=data.password,
        actor_id=get_actor_id(),
    )

    return UserResponseSchema(
        message="User created successfully",
        data=UserSchema.model_validate(user),
    ).model_dump(mode="json"), 201


@users_bp.route("/<int:user_id>", methods=["PUT"])
@api.validate(
    json=UserUpdateSchema,
    resp=SpectreeResponse(
        HTTP_200=UserResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def update_user(
    user_id: int,
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """Update a user's name, role and optionally password."""
    data = UserUpdateSchema.model_validate(request.get_json())
    user = user_service.update_user(
        user_id,
        name=data.name,
        role=data.role,
        password=data.password,
        actor_id=get_actor_id(),
    )

    return UserResponseSchema(
        message="User updated successfully",
        data=UserSchema.model_validate(user),
    ).model_dump(mode="json")


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=MessageResponseSchema,
        HTTP_404=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def delete_user(
    user_id: int,
    user_service: UserService = Provide[ServiceContainer.user_service],
) -> Any:
    """Delete a user with their results, answers and activity entries."""
    user_service.delete_user(user_id, actor_id=get_actor_id())
    return MessageResponseSchema(message="User deleted successfully").model_dump(mode="json")
