"""Test result service for scores and answers submitted by the mobile app."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.exceptions import RecordNotFoundException
from app.models.test_result import TestResult, UserAnswer
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class ScoreInput:
    """Scores from one completed assessment run."""

    user_id: int
    assessment_score: int
    minigame1_score: int
    minigame2_score: int
    minigame3_score: int
    total_score: int
    minigame4_score: int = 0
    minigame5_score: int = 0


@dataclass
class UserAnswerInput:
    """One answered question as submitted by the mobile app."""

    question_id: int
    question_text: str
    user_answer: str


class TestResultService:
    """Service for storing and summarizing test results."""

    __test__ = False  # not a pytest test class

    def __init__(self, db: Session) -> None:
        """Initialize test result service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def save_result(self, scores: ScoreInput) -> TestResult:
        """Store the scores of a completed test.

        Raises:
            RecordNotFoundException: If the user does not exist
        """
        if self.db.get(User, scores.user_id) is None:
            raise RecordNotFoundException("User", str(scores.user_id))

        result = TestResult(
            user_id=scores.user_id,
            assessment_score=scores.assessment_score,
            minigame1_score=scores.minigame1_score,
            minigame2_score=scores.minigame2_score,
            minigame3_score=scores.minigame3_score,
            minigame4_score=scores.minigame4_score,
            minigame5_score=scores.minigame5_score,
            total_score=scores.total_score,
        )
        self.db.add(result)
        self.db.flush()

        logger.info(
            "Saved test result %d for user %d (total %d)",
            result.result_id,
            scores.user_id,
            scores.total_score,
        )
        return result

    def save_user_answers(self, result_id: int, answers: Iterable[UserAnswerInput]) -> int:
        """Store the answers given during a test.

        Returns:
            Number of answers stored

        Raises:
            RecordNotFoundException: If the test result does not exist
        """
        if self.db.get(TestResult, result_id) is None:
            raise RecordNotFoundException("Test result", str(result_id))

        rows = [
            UserAnswer(
                result_id=result_id,
                question_id=answer.question_id,
                question_text=answer.question_text,
                user_answer=answer.user_answer,
            )
            for answer in answers
        ]
        self.db.add_all(rows)
        self.db.flush()

        logger.info("Saved %d answers for test result %d", len(rows), result_id)
        return len(rows)

    def count_results(self) -> int:
        """Total number of test results."""
        return self.db.scalar(select(func.count()).select_from(TestResult)) or 0

    def count_results_at_least(self, total_score: int) -> int:
        """Number of test results whose total score reaches ``total_score``."""
        stmt = (
            select(func.count())
            .select_from(TestResult)
            .where(TestResult.total_score >= total_score)
        )
        return self.db.scalar(stmt) or 0

    def get_recent_results(self, limit: int = 5) -> list[TestResult]:
        """Most recent test results with their users, newest first."""
        stmt = (
            select(TestResult)
            .join(TestResult.user)
            .order_by(TestResult.test_timestamp.desc(), TestResult.result_id.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt))
