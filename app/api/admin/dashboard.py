"""Admin dashboard API endpoint."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint
from spectree import Response as SpectreeResponse

from app.schemas.dashboard import DashboardResponseSchema, DashboardSchema
from app.schemas.error import ErrorResponseSchema
from app.services.container import ServiceContainer
from app.services.dashboard_service import DashboardService
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.route("", methods=["GET"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=DashboardResponseSchema,
        HTTP_401=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def get_dashboard(
    dashboard_service: DashboardService = Provide[ServiceContainer.dashboard_service],
) -> Any:
    """Totals, success rate and recent users, tests and activities."""
    summary = dashboard_service.get_summary()
    return DashboardResponseSchema(
        data=DashboardSchema.from_summary(summary),
    ).model_dump(mode="json", by_alias=True)
