"""Pydantic schemas for request/response validation."""

from app.schemas.common import (
    EnvelopeSchema,
    ListQuerySchema,
    MessageResponseSchema,
    PaginationSchema,
)
from app.schemas.error import ErrorResponseSchema
from app.schemas.question import (
    QuestionListResponseSchema,
    QuestionResponseSchema,
    QuestionSchema,
    QuestionWriteSchema,
)
from app.schemas.settings import SettingsResponseSchema, SettingsUpdateSchema
from app.schemas.test_result import (
    TestResultCreateSchema,
    TestResultResponseSchema,
    UserAnswersCreateSchema,
)
from app.schemas.user import (
    UserCreateSchema,
    UserListResponseSchema,
    UserResponseSchema,
    UserSchema,
    UserUpdateSchema,
)

__all__ = [
    # Common schemas
    "EnvelopeSchema",
    "ListQuerySchema",
    "MessageResponseSchema",
    "PaginationSchema",
    # Error schemas
    "ErrorResponseSchema",
    # Question schemas
    "QuestionListResponseSchema",
    "QuestionResponseSchema",
    "QuestionSchema",
    "QuestionWriteSchema",
    # Settings schemas
    "SettingsResponseSchema",
    "SettingsUpdateSchema",
    # Test result schemas
    "TestResultCreateSchema",
    "TestResultResponseSchema",
    "UserAnswersCreateSchema",
    # User schemas
    "UserCreateSchema",
    "UserListResponseSchema",
    "UserResponseSchema",
    "UserSchema",
    "UserUpdateSchema",
]
