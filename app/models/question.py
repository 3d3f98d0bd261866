"""Question and answer models for the assessment questionnaire."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.extensions import db


class Question(db.Model):  # type: ignore[name-defined]
    """SQLAlchemy model for a questionnaire question.

    Questions are soft-deleted by clearing ``is_active`` so that historical
    answers keep pointing at a valid row.
    """

    __tablename__ = "questions"

    question_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    question_text: Mapped[str] = mapped_column(Text, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    answers: Mapped[list[QuestionAnswer]] = relationship(
        "QuestionAnswer",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="QuestionAnswer.answer_id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """Return string representation of Question."""
        return f"<Question(question_id={self.question_id}, is_active={self.is_active})>"


class QuestionAnswer(db.Model):  # type: ignore[name-defined]
    """A selectable answer for a question, with the score it contributes."""

    __tablename__ = "question_answers"

    answer_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.question_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    answer_text: Mapped[str] = mapped_column(Text, nullable=False)

    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    question: Mapped[Question] = relationship("Question", back_populates="answers")

    def __repr__(self) -> str:
        """Return string representation of QuestionAnswer."""
        return f"<QuestionAnswer(answer_id={self.answer_id}, score={self.score})>"
