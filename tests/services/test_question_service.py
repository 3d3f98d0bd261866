"""Tests for QuestionService."""

from collections.abc import Callable

import pytest
from flask import Flask

from app.exceptions import RecordNotFoundException, ValidationException
from app.models.question import Question
from app.services.container import ServiceContainer
from app.services.question_service import AnswerInput


class TestQuestionServiceCreate:
    """Tests for creating questions."""

    def test_create_with_answers(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            question = container.question_service().create_question(
                "  How many hours did you sleep?  ",
                [AnswerInput("Less than 4", 20), AnswerInput("4 to 6", 10), AnswerInput("More", 0)],
            )

            assert question.question_id is not None
            assert question.question_text == "How many hours did you sleep?"
            assert question.is_active
            assert [(a.answer_text, a.score) for a in question.answers] == [
                ("Less than 4", 20),
                ("4 to 6", 10),
                ("More", 0),
            ]

    def test_blank_answers_are_skipped(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            question = container.question_service().create_question(
                "Feeling tired?", [AnswerInput("Yes", 5), AnswerInput("   ", 3), AnswerInput("")]
            )

            assert [a.answer_text for a in question.answers] == ["Yes"]

    def test_empty_text_rejected(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(ValidationException):
                container.question_service().create_question("   ", [])

    def test_create_logs_activity(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            container.question_service().create_question("Feeling tired?", [], actor_id=None)

            activity = container.activity_service().get_recent(1)[0]
            assert activity.activity_type == "question_created"
            assert "Feeling tired?" in activity.description


class TestQuestionServiceUpdate:
    """Tests for updating questions."""

    def test_update_replaces_answers(
        self, app: Flask, container: ServiceContainer, make_question: Callable[..., Question]
    ) -> None:
        question = make_question("Old text", [("A", 1), ("B", 2)])
        with app.app_context():
            updated = container.question_service().update_question(
                question.question_id, "New text", [AnswerInput("C", 3)]
            )

            assert updated.question_text == "New text"
            assert [(a.answer_text, a.score) for a in updated.answers] == [("C", 3)]

    def test_update_missing_question(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(RecordNotFoundException):
                container.question_service().update_question(9999, "Text", [])

    def test_update_deleted_question(
        self, app: Flask, container: ServiceContainer, make_question: Callable[..., Question]
    ) -> None:
        question = make_question("Gone")
        with app.app_context():
            service = container.question_service()
            service.delete_question(question.question_id)

            with pytest.raises(RecordNotFoundException):
                service.update_question(question.question_id, "Back", [])


class TestQuestionServiceDelete:
    """Tests for soft-deleting questions."""

    def test_delete_hides_question_but_keeps_row(
        self, app: Flask, container: ServiceContainer, make_question: Callable[..., Question]
    ) -> None:
        kept = make_question("Kept")
        removed = make_question("Removed")
        with app.app_context():
            service = container.question_service()
            service.delete_question(removed.question_id)

            active = service.list_active_questions()
            assert [q.question_id for q in active] == [kept.question_id]
            assert service.count_questions() == 2

    def test_delete_twice(
        self, app: Flask, container: ServiceContainer, make_question: Callable[..., Question]
    ) -> None:
        question = make_question("Once")
        with app.app_context():
            service = container.question_service()
            service.delete_question(question.question_id)

            with pytest.raises(RecordNotFoundException):
                service.delete_question(question.question_id)


class TestQuestionServiceAnswers:
    """Tests for looking up answer options."""

    def test_answers_grouped_by_question(
        self, app: Flask, container: ServiceContainer, make_question: Callable[..., Question]
    ) -> None:
        first = make_question("First", [("Yes", 0), ("No", 10)])
        second = make_question("Second", [("Maybe", 5)])
        with app.app_context():
            grouped = container.question_service().get_answers_by_question(
                [first.question_id, second.question_id, first.question_id]
            )

            assert [a.answer_text for a in grouped[first.question_id]] == ["Yes", "No"]
            assert [a.answer_text for a in grouped[second.question_id]] == ["Maybe"]

    def test_no_ids(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            assert container.question_service().get_answers_by_question([]) == {}
