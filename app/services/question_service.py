"""Question service for the assessment questionnaire."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.exceptions import RecordNotFoundException, ValidationException
from app.models.question import Question, QuestionAnswer
from app.services.activity_service import ActivityService

logger = logging.getLogger(__name__)


@dataclass
class AnswerInput:
    """An answer option as submitted by a client."""

    answer_text: str
    score: int = 0


class QuestionService:
    """Service for question CRUD operations.

    Deleting a question only deactivates it. Updating a question replaces
    its whole answer list.
    """

    def __init__(self, db: Session, activity_service: ActivityService) -> None:
        """Initialize question service.

        Args:
            db: SQLAlchemy database session
            activity_service: Activity log recorder
        """
        self.db = db
        self.activity_service = activity_service

    def list_active_questions(self) -> list[Question]:
        """Active questions with their answers, oldest first."""
        stmt = (
            select(Question)
            .where(Question.is_active.is_(True))
            .order_by(Question.question_id.asc())
        )
        return list(self.db.scalars(stmt))

    def get_active_question(self, question_id: int) -> Question:
        """Get an active question by ID.

        Raises:
            RecordNotFoundException: If the question does not exist or was deleted
        """
        question = self.db.get(Question, question_id)
        if question is None or not question.is_active:
            raise RecordNotFoundException("Question", str(question_id))
        return question

    def get_answers_by_question(
        self, question_ids: Iterable[int]
    ) -> dict[int, list[QuestionAnswer]]:
        """Answer options for the given questions, active or not."""
        ids = list(set(question_ids))
        if not ids:
            return {}

        stmt = (
            select(QuestionAnswer)
            .where(QuestionAnswer.question_id.in_(ids))
            .order_by(QuestionAnswer.answer_id.asc())
        )
        grouped: dict[int, list[QuestionAnswer]] = {}
        for answer in self.db.scalars(stmt):
            grouped.setdefault(answer.question_id, []).append(answer)
        return grouped

    def count_questions(self) -> int:
        """Total number of questions, including deleted ones."""
        return self.db.scalar(select(func.count()).select_from(Question)) or 0

    def create_question(
        self,
        question_text: str,
        answers: Iterable[AnswerInput],
        actor_id: int | None = None,
    ) -> Question:
        """Create a question with its answer options.

        Args:
            question_text: Question text
            answers: Answer options; entries with empty text are skipped
            actor_id: ID of the admin creating the question

        Returns:
            The created question

        Raises:
            ValidationException: If the question text is empty
        """
        question_text = question_text.strip() if question_text else ""
        if not question_text:
            raise ValidationException("Question text is required")

        question = Question(question_text=question_text, is_active=True)
        question.answers = self._build_answers(answers)
        self.db.add(question)
        self.db.flush()

        logger.info(
            "Created question %d with %d answers", question.question_id, len(question.answers)
        )
        self.activity_service.log(
            "question_created", f'New question created: "{question_text}"', actor_id
        )
        return question

    def update_question(
        self,
        question_id: int,
        question_text: str,
        answers: Iterable[AnswerInput],
        actor_id: int | None = None,
    ) -> Question:
        """Replace a question's text and answers.

        Raises:
            RecordNotFoundException: If the question does not exist or was deleted
            ValidationException: If the question text is empty
        """
        question = self.get_active_question(question_id)

        question_text = question_text.strip() if question_text else ""
        if not question_text:
            raise ValidationException("Question text is required")

        question.question_text = question_text
        question.answers = self._build_answers(answers)
        self.db.flush()

        logger.info("Updated question %d", question_id)
        self.activity_service.log(
            "question_updated", f'Question edited: "{question_text}"', actor_id
        )
        return question

    def delete_question(self, question_id: int, actor_id: int | None = None) -> None:
        """Soft-delete a question.

        Raises:
            RecordNotFoundException: If the question does not exist or was deleted
        """
        question = self.get_active_question(question_id)
        question.is_active = False
        self.db.flush()

        logger.info("Deactivated question %d", question_id)
        self.activity_service.log(
            "question_deleted", f'Question deleted: "{question.question_text}"', actor_id
        )

    def _build_answers(self, answers: Iterable[AnswerInput]) -> list[QuestionAnswer]:
        return [
            QuestionAnswer(answer_text=answer.answer_text.strip(), score=answer.score)
            for answer in answers
            if answer.answer_text and answer.answer_text.strip()
        ]
