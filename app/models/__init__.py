"""SQLAlchemy models for the fatigue admin backend."""

from app.models.activity_log import ActivityLog
from app.models.question import Question, QuestionAnswer
from app.models.setting import AppSetting
from app.models.test_result import TestResult, UserAnswer
from app.models.user import User, UserRole

__all__ = [
    "ActivityLog",
    "AppSetting",
    "Question",
    "QuestionAnswer",
    "TestResult",
    "User",
    "UserAnswer",
    "UserRole",
]
