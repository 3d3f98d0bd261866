"""History service for reviewing test results and recorded answers."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.exceptions import RecordNotFoundException
from app.models.test_result import TestResult, UserAnswer
from app.models.user import User, UserRole
from app.services.question_service import QuestionService
from app.services.user_service import Page

logger = logging.getLogger(__name__)

FIT_STATUS = "Fit"
UNFIT_STATUS = "Unfit"


@dataclass
class HistoryEntry:
    """A test result with its user and pass/fail status."""

    result: TestResult
    user: User
    status: str


@dataclass
class PossibleAnswer:
    """An answer option, flagged when it is the one the user chose."""

    answer_text: str
    score: int
    is_user_answer: bool


@dataclass
class AnsweredQuestion:
    """A question from a test with the user's answer and the options offered."""

    question_id: int
    question_text: str
    user_answer: str
    total_assessment_score: int
    possible_answers: list[PossibleAnswer] = field(default_factory=list)


class HistoryService:
    """Read-only views over test results for the admin panel."""

    def __init__(
        self,
        db: Session,
        question_service: QuestionService,
        page_size: int,
    ) -> None:
        """Initialize history service.

        Args:
            db: SQLAlchemy database session
            question_service: Source of the answer options per question
            page_size: Number of results per listing page
        """
        self.db = db
        self.question_service = question_service
        self.page_size = page_size

    def list_history(
        self,
        minimum_passing_score: float,
        page: int = 1,
        search: str | None = None,
        on_date: date | None = None,
    ) -> tuple[list[HistoryEntry], Page]:
        """List results of non-admin users, newest first.

        Args:
            minimum_passing_score: Total score at or above which a result is Fit
            page: 1-based page number
            search: Case-insensitive substring matched against name, employee ID and NIK
            on_date: Only include results taken on this day

        Returns:
            Tuple of (entries on the page, pagination info)
        """
        page = max(page, 1)
        conditions = [User.role != UserRole.ADMIN.value]

        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    User.name.ilike(pattern),
                    User.employee_id.ilike(pattern),
                    User.nik.ilike(pattern),
                )
            )

        if on_date is not None:
            start = datetime.combine(on_date, time.min)
            conditions.append(TestResult.test_timestamp >= start)
            conditions.append(TestResult.test_timestamp < start + timedelta(days=1))

        count_stmt = (
            select(func.count())
            .select_from(TestResult)
            .join(User, TestResult.user_id == User.id)
            .where(*conditions)
        )
        total = self.db.scalar(count_stmt) or 0
        pagination = Page(page=page, page_size=self.page_size, total=total)

        stmt = (
            select(TestResult, User)
            .join(User, TestResult.user_id == User.id)
            .where(*conditions)
            .order_by(TestResult.test_timestamp.desc(), TestResult.result_id.desc())
            .limit(self.page_size)
            .offset(pagination.offset)
        )

        entries = [
            HistoryEntry(
                result=result,
                user=user,
                status=FIT_STATUS if result.total_score >= minimum_passing_score else UNFIT_STATUS,
            )
            for result, user in self.db.execute(stmt).tuples()
        ]
        return entries, pagination

    def get_user_answers(self, result_id: int) -> list[AnsweredQuestion]:
        """Answers recorded for a test result, one entry per question.

        Each entry lists the question's answer options, marking the option
        whose text matches what the user answered.

        Raises:
            RecordNotFoundException: If the test result does not exist
        """
        result = self.db.get(TestResult, result_id)
        if result is None:
            raise RecordNotFoundException("Test result", str(result_id))

        stmt = (
            select(UserAnswer)
            .where(UserAnswer.result_id == result_id)
            .order_by(UserAnswer.question_id.asc(), UserAnswer.answer_id.asc())
        )
        recorded = list(self.db.scalars(stmt))
        options = self.question_service.get_answers_by_question(
            answer.question_id for answer in recorded
        )

        grouped: dict[int, AnsweredQuestion] = {}
        for answer in recorded:
            if answer.question_id in grouped:
                continue
            grouped[answer.question_id] = AnsweredQuestion(
                question_id=answer.question_id,
                question_text=answer.question_text,
                user_answer=answer.user_answer,
                total_assessment_score=result.assessment_score,
                possible_answers=[
                    PossibleAnswer(
                        answer_text=option.answer_text,
                        score=option.score,
                        is_user_answer=option.answer_text == answer.user_answer,
                    )
                    for option in options.get(answer.question_id, [])
                ],
            )

        return list(grouped.values())
