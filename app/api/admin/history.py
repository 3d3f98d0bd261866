"""Admin test history and recorded answer API endpoints."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.schemas.common import PaginationSchema
from app.schemas.error import ErrorResponseSchema
from app.schemas.history import (
    HistoryItemSchema,
    HistoryListResponseSchema,
    HistoryQuerySchema,
    UserAnswersDataSchema,
    UserAnswersResponseSchema,
)
from app.services.container import ServiceContainer
from app.services.history_service import HistoryService
from app.services.settings_update_service import SettingsUpdateService
from app.utils.error_handling import handle_api_errors
from app.utils.setting_values import DEFAULT_SETTINGS, is_numeric_value
from app.utils.spectree_config import api

history_bp = Blueprint("history", __name__)


@history_bp.route("/history", methods=["GET"])
@api.validate(
    query=HistoryQuerySchema,
    resp=SpectreeResponse(
        HTTP_200=HistoryListResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def list_history(
    history_service: HistoryService = Provide[ServiceContainer.history_service],
    settings_update_service: SettingsUpdateService = Provide[
        ServiceContainer.settings_update_service
    ],
) -> Any:
    """List non-admin test results, newest first, with Fit/Unfit status."""
    query = HistoryQuerySchema.model_validate(request.args.to_dict())

    passing_score = settings_update_service.get_settings()["minimum_passing_score"]
    if not is_numeric_value(passing_score):
        passing_score = DEFAULT_SETTINGS["minimum_passing_score"]

    entries, page = history_service.list_history(
        minimum_passing_score=float(passing_score),
        page=query.page,
        search=query.search,
        on_date=query.on_date,
    )

    return HistoryListResponseSchema(
        data=[HistoryItemSchema.from_entry(entry) for entry in entries],
        pagination=PaginationSchema.from_page(page),
    ).model_dump(mode="json", by_alias=True)


@history_bp.route("/user_answers/<int:result_id>", methods=["GET"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=UserAnswersResponseSchema,
        HTTP_404=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def get_user_answers(
    result_id: int,
    history_service: HistoryService = Provide[ServiceContainer.history_service],
) -> Any:
    """Answers recorded for a test result, grouped by question."""
    answers = history_service.get_user_answers(result_id)
    return UserAnswersResponseSchema(
        data=UserAnswersDataSchema.from_answers(result_id, answers),
    ).model_dump(mode="json", by_alias=True)
