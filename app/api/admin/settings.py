"""Admin settings API endpoints, including the live settings stream."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response, request
from spectree import Response as SpectreeResponse

from app.schemas.error import ErrorResponseSchema
from app.schemas.settings import (
    SettingsResponseSchema,
    SettingsUpdateSchema,
    StreamQuerySchema,
)
from app.services.container import ServiceContainer
from app.services.settings_broadcaster import Audience, SettingsBroadcaster
from app.services.settings_update_service import SettingsUpdateService
from app.utils.auth import get_actor_id
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api
from app.utils.sse import SSE_HEADERS, SSE_MIMETYPE

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


@settings_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=SettingsResponseSchema))
@handle_api_errors
@inject
def get_settings(
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
) -> Any:
    """Current settings in canonical shape."""
    return SettingsResponseSchema(
        message="Settings loaded successfully",
        data=dict(settings_update_service.get_settings()),
    ).model_dump(mode="json")


@settings_bp.route("", methods=["POST"])
@api.validate(
    json=SettingsUpdateSchema,
    resp=SpectreeResponse(
        HTTP_200=SettingsResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def update_settings(
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
) -> Any:
    """Change the settings present in the body and notify every open stream."""
    data = SettingsUpdateSchema.model_validate(request.get_json())
    snapshot = settings_update_service.update_settings(data.changes(), actor_id=get_actor_id())

    return SettingsResponseSchema(
        message="Settings updated successfully",
        data=snapshot,
    ).model_dump(mode="json")


@settings_bp.route("/stream", methods=["GET"])
@api.validate(query=StreamQuerySchema)
@handle_api_errors
@inject
def stream_settings(
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
    broadcaster: SettingsBroadcaster = Provide[ServiceContainer.settings_broadcaster],
) -> Any:
    """Server-sent event stream of canonical settings updates.

    Opens with a ``connected`` event and the current settings; every later
    update arrives as a ``settings_update`` event.
    """
    snapshot = settings_update_service.get_settings()
    return Response(
        broadcaster.stream(Audience.WEB, snapshot),
        mimetype=SSE_MIMETYPE,
        headers=SSE_HEADERS,
    )
