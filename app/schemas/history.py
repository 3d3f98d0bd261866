"""History and recorded answer schemas for API request/response validation."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import EnvelopeSchema, ListQuerySchema, PaginationSchema
from app.services.history_service import AnsweredQuestion, HistoryEntry


class HistoryQuerySchema(ListQuerySchema):
    """Query parameters of the history listing."""

    model_config = ConfigDict(populate_by_name=True)

    on_date: date | None = Field(
        None, alias="date", description="Only results taken on this day (YYYY-MM-DD)"
    )

    @field_validator("on_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v: object) -> object:
        """Treat an empty ``date`` parameter as no filter."""
        return None if v == "" else v


class HistoryItemSchema(BaseModel):
    """A test result with its user and Fit/Unfit status."""

    result_id: int
    test_timestamp: datetime
    assessment_score: int
    minigame1_score: int
    minigame2_score: int
    minigame3_score: int
    minigame4_score: int
    minigame5_score: int
    total_score: int
    name: str
    employee_id: str
    nik: str | None = None
    status: str

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryItemSchema":
        result = entry.result
        return cls(
            result_id=result.result_id,
            test_timestamp=result.test_timestamp,
            assessment_score=result.assessment_score,
            minigame1_score=result.minigame1_score,
            minigame2_score=result.minigame2_score,
            minigame3_score=result.minigame3_score,
            minigame4_score=result.minigame4_score,
            minigame5_score=result.minigame5_score,
            total_score=result.total_score,
            name=entry.user.name,
            employee_id=entry.user.employee_id,
            nik=entry.user.nik,
            status=entry.status,
        )


class HistoryListResponseSchema(EnvelopeSchema):
    data: list[HistoryItemSchema]
    pagination: PaginationSchema


class PossibleAnswerSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    answer_text: str = Field(..., alias="answerText")
    score: int
    is_user_answer: bool = Field(..., alias="isUserAnswer")


class AnsweredQuestionSchema(BaseModel):
    """A question from a test with the user's answer and the options offered."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    question_id: int = Field(..., alias="questionId")
    question_text: str = Field(..., alias="questionText")
    user_answer: str = Field(..., alias="userAnswer")
    total_assessment_score: int = Field(..., alias="totalAssessmentScore")
    possible_answers: list[PossibleAnswerSchema] = Field(..., alias="possibleAnswers")


class UserAnswersDataSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result_id: int = Field(..., alias="resultId")
    total_questions: int = Field(..., alias="totalQuestions")
    answers: list[AnsweredQuestionSchema]

    @classmethod
    def from_answers(
        cls, result_id: int, answers: list[AnsweredQuestion]
    ) -> "UserAnswersDataSchema":
        return cls(
            result_id=result_id,
            total_questions=len(answers),
            answers=[AnsweredQuestionSchema.model_validate(answer) for answer in answers],
        )


class UserAnswersResponseSchema(EnvelopeSchema):
    data: UserAnswersDataSchema
