"""Mobile settings API endpoints, including the live settings stream."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response, request
from spectree import Response as SpectreeResponse

from app.exceptions import ValidationException
from app.schemas.error import ErrorResponseSchema
from app.schemas.settings import SettingsResponseSchema
from app.services.container import ServiceContainer
from app.services.settings_broadcaster import Audience, SettingsBroadcaster
from app.services.settings_update_service import SettingsUpdateService
from app.utils.error_handling import handle_api_errors
from app.utils.settings_format import to_mobile_shape
from app.utils.spectree_config import api
from app.utils.sse import SSE_HEADERS, SSE_MIMETYPE

mobile_settings_bp = Blueprint("mobile_settings", __name__, url_prefix="/settings")


@mobile_settings_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=SettingsResponseSchema))
@handle_api_errors
@inject
def get_settings(
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
) -> Any:
    """Current settings in the mobile app's naming."""
    return SettingsResponseSchema(
        message="Settings loaded successfully",
        data=settings_update_service.get_mobile_settings(),
    ).model_dump(mode="json")


@mobile_settings_bp.route("", methods=["POST"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=SettingsResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def update_settings(
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
) -> Any:
    """Change settings sent in mobile or canonical naming.

    Fields the server does not know are ignored; known fields are held to
    the same bounds as the admin endpoint.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationException("Request body must be a JSON object")

    snapshot = settings_update_service.update_mobile_settings(payload)

    return SettingsResponseSchema(
        message="Settings saved successfully",
        data=to_mobile_shape(snapshot),
    ).model_dump(mode="json")


@mobile_settings_bp.route("/stream", methods=["GET"])
@handle_api_errors
@inject
def stream_settings(
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
    broadcaster: SettingsBroadcaster = Provide[ServiceContainer.settings_broadcaster],
) -> Any:
    """Server-sent event stream of settings updates in mobile shape."""
    return Response(
        broadcaster.stream(Audience.MOBILE, settings_update_service.get_mobile_settings()),
        mimetype=SSE_MIMETYPE,
        headers=SSE_HEADERS,
    )
