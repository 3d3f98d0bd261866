"""Admin question management API endpoints."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.schemas.common import MessageResponseSchema
from app.schemas.error import ErrorResponseSchema
from app.schemas.question import (
    QuestionListResponseSchema,
    QuestionResponseSchema,
    QuestionSchema,
    QuestionWriteSchema,
)
from app.services.container import ServiceContainer
from app.services.question_service import QuestionService
from app.utils.auth import get_actor_id
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

questions_bp = Blueprint("questions", __name__, url_prefix="/questions")


@questions_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=QuestionListResponseSchema))
@handle_api_errors
@inject
def list_questions(
    question_service: QuestionService = Provide[ServiceContainer.question_service],
) -> Any:
    """List active questions with their answer options."""
    questions = question_service.list_active_questions()
    return QuestionListResponseSchema(
        data=[QuestionSchema.model_validate(q) for q in questions],
    ).model_dump(mode="json")


@questions_bp.route("", methods=["POST"])
@api.validate(
    json=QuestionWriteSchema,
    resp=SpectreeResponse(
        HTTP_201=QuestionResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def create_question(
    question_service: QuestionService = Provide[ServiceContainer.question_service],
) -> Any:
    """Create a question with its answer options."""
    data = QuestionWriteSchema.model_validate(request.get_json())
    question = question_service.create_question(
        data.question_text, data.answer_inputs(), actor_id=get_actor_id()
    )

    return QuestionResponseSchema(
        message="Question created successfully",
        data=QuestionSchema.model_validate(question),
    ).model_dump(mode="json"), 201


@questions_bp.route("/<int:question_id>", methods=["PUT"])
@api.validate(
    json=QuestionWriteSchema,
    resp=SpectreeResponse(
        HTTP_200=QuestionResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def update_question(
    question_id: int,
    question_service: QuestionService = Provide[ServiceContainer.question_service],
) -> Any:
    """Replace a question's text and answer options."""
    data = QuestionWriteSchema.model_validate(request.get_json())
    question = question_service.update_question(
        question_id, data.question_text, data.answer_inputs(), actor_id=get_actor_id()
    )

    return QuestionResponseSchema(
        message="Question updated successfully",
        data=QuestionSchema.model_validate(question),
    ).model_dump(mode="json")


@questions_bp.route("/<int:question_id>", methods=["DELETE"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=MessageResponseSchema,
        HTTP_404=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def delete_question(
    question_id: int,
    question_service: QuestionService = Provide[ServiceContainer.question_service],
) -> Any:
    """Deactivate a question."""
    question_service.delete_question(question_id, actor_id=get_actor_id())
    return MessageResponseSchema(message="Question deleted successfully").model_dump(mode="json")
