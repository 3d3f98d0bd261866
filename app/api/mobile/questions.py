"""Mobile question API endpoints."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from app.models.question import Question
from app.schemas.common import MessageResponseSchema
from app.schemas.error import ErrorResponseSchema
from app.schemas.question import (
    MobileAnswerSchema,
    MobileQuestionCreatedSchema,
    MobileQuestionListResponseSchema,
    MobileQuestionSchema,
    QuestionWriteSchema,
)
from app.services.container import ServiceContainer
from app.services.question_service import QuestionService
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

mobile_questions_bp = Blueprint("mobile_questions", __name__, url_prefix="/questions")


def _to_mobile(question: Question) -> MobileQuestionSchema:
    return MobileQuestionSchema(
        id=question.question_id,
        question_text=question.question_text,
        answers=[
            MobileAnswerSchema(id=a.answer_id, answer_text=a.answer_text, score=a.score)
            for a in question.answers
        ],
    )


@mobile_questions_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=MobileQuestionListResponseSchema))
@handle_api_errors
@inject
def list_questions(
    question_service: QuestionService = Provide[ServiceContainer.question_service],
) -> Any:
    """Active questions with their answer options, in the app's naming."""
    questions = question_service.list_active_questions()
    return MobileQuestionListResponseSchema(
        message=None if questions else "No questions available",
        questions=[_to_mobile(q) for q in questions],
    ).model_dump(mode="json")


@mobile_questions_bp.route("", methods=["POST"])
@api.validate(
    json=QuestionWriteSchema,
    resp=SpectreeResponse(
        HTTP_200=MobileQuestionCreatedSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def create_question(
    question_service: QuestionService = Provide[ServiceContainer.question_service],
) -> Any:
    """Create a question; accepts ``questionText``/``answerText``/``scoreValue``."""
    data = QuestionWriteSchema.model_validate(request.get_json())
    question = question_service.create_question(data.question_text, data.answer_inputs())

    return MobileQuestionCreatedSchema(
        message="Question created",
        question_id=question.question_id,
    ).model_dump(mode="json", by_alias=True)


@mobile_questions_bp.route("/<int:question_id>", methods=["PUT"])
@api.validate(
    json=QuestionWriteSchema,
    resp=SpectreeResponse(
        HTTP_200=MessageResponseSchema,
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
    question_service.update_question(question_id, data.question_text, data.answer_inputs())
    return MessageResponseSchema(message="Question updated successfully").model_dump(mode="json")


@mobile_questions_bp.route("/<int:question_id>", methods=["DELETE"])
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
    question_service.delete_question(question_id)
    return MessageResponseSchema(message="Question deleted successfully").model_dump(mode="json")
