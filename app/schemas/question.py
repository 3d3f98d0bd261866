"""Question schemas for API request/response validation."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.schemas.common import EnvelopeSchema
from app.services.question_service import AnswerInput


class AnswerInputSchema(BaseModel):
    """An answer option in a question write request."""

    answer_text: str = Field(
        "",
        validation_alias=AliasChoices("answer_text", "answerText"),
        description="Answer text; blank answers are skipped",
    )
    score: int = Field(
        0,
        validation_alias=AliasChoices("score", "scoreValue"),
        description="Score awarded for this answer",
    )

    def to_input(self) -> AnswerInput:
        return AnswerInput(answer_text=self.answer_text, score=self.score)


class QuestionWriteSchema(BaseModel):
    """Request schema for creating or updating a question."""

    question_text: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("question_text", "questionText"),
        description="Question text",
    )
    answers: list[AnswerInputSchema] = Field(
        default_factory=list, description="Answer options, replacing any existing ones"
    )

    def answer_inputs(self) -> list[AnswerInput]:
        return [answer.to_input() for answer in self.answers]


class AnswerSchema(BaseModel):
    """Answer option as returned by the admin API."""

    model_config = ConfigDict(from_attributes=True)

    answer_id: int
    answer_text: str
    score: int


class QuestionSchema(BaseModel):
    """Question with its answer options as returned by the admin API."""

    model_config = ConfigDict(from_attributes=True)

    question_id: int
    question_text: str
    answers: list[AnswerSchema]


class QuestionResponseSchema(EnvelopeSchema):
    data: QuestionSchema


class QuestionListResponseSchema(EnvelopeSchema):
    data: list[QuestionSchema]


class MobileAnswerSchema(BaseModel):
    """Answer option in the mobile app's naming."""

    id: int
    answer_text: str
    score: int


class MobileQuestionSchema(BaseModel):
    """Question in the mobile app's naming."""

    id: int
    question_text: str
    answers: list[MobileAnswerSchema]


class MobileQuestionListResponseSchema(EnvelopeSchema):
    questions: list[MobileQuestionSchema]


class MobileQuestionCreatedSchema(EnvelopeSchema):
    model_config = ConfigDict(populate_by_name=True)

    question_id: int = Field(..., alias="questionId")
