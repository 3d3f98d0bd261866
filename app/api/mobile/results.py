"""Mobile test result and answer submission API endpoints."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.schemas.error import ErrorResponseSchema
from app.schemas.test_result import (
    TestResultCreateSchema,
    TestResultResponseSchema,
    TestResultSchema,
    UserAnswersCreateSchema,
    UserAnswersSavedResponseSchema,
    UserAnswersSavedSchema,
)
from app.services.container import ServiceContainer
from app.services.test_result_service import TestResultService
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

mobile_results_bp = Blueprint("mobile_results", __name__)


@mobile_results_bp.route("/results", methods=["POST"])
@api.validate(
    json=TestResultCreateSchema,
    resp=SpectreeResponse(
        HTTP_200=TestResultResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def save_result(
    test_result_service: TestResultService = Provide[ServiceContainer.test_result_service],
) -> Any:
    """Store the scores of a completed test."""
    data = TestResultCreateSchema.model_validate(request.get_json())
    result = test_result_service.save_result(data.to_input())

    return TestResultResponseSchema(
        data=TestResultSchema.model_validate(result),
    ).model_dump(mode="json")


@mobile_results_bp.route("/user-answers", methods=["POST"])
@api.validate(
    json=UserAnswersCreateSchema,
    resp=SpectreeResponse(
        HTTP_200=UserAnswersSavedResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def save_user_answers(
    test_result_service: TestResultService = Provide[ServiceContainer.test_result_service],
) -> Any:
    """Store the answers given during a test."""
    data = UserAnswersCreateSchema.model_validate(request.get_json())
    saved = test_result_service.save_user_answers(
        data.result_id, [answer.to_input() for answer in data.answers]
    )

    return UserAnswersSavedResponseSchema(
        message=f"Successfully saved {saved} answers",
        data=UserAnswersSavedSchema(result_id=data.result_id, answers_saved=saved),
    ).model_dump(mode="json")
