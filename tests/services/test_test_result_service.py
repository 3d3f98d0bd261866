"""Tests for TestResultService."""

from collections.abc import Callable

import pytest
from flask import Flask

from app.exceptions import RecordNotFoundException
from app.models.test_result import TestResult
from app.models.user import User
from app.services.container import ServiceContainer
from app.services.test_result_service import ScoreInput, UserAnswerInput


def _scores(user_id: int, total: int = 75) -> ScoreInput:
    return ScoreInput(
        user_id=user_id,
        assessment_score=20,
        minigame1_score=15,
        minigame2_score=15,
        minigame3_score=25,
        total_score=total,
    )


class TestSaveResult:
    """Tests for storing test scores."""

    def test_save_result(
        self, app: Flask, container: ServiceContainer, make_user: Callable[..., User]
    ) -> None:
        user = make_user("EMP001", "Budi")
        with app.app_context():
            result = container.test_result_service().save_result(_scores(user.id))

            assert result.result_id is not None
            assert result.user_id == user.id
            assert result.total_score == 75
            assert result.minigame4_score == 0
            assert result.minigame5_score == 0

    def test_unknown_user(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(RecordNotFoundException):
                container.test_result_service().save_result(_scores(9999))


class TestSaveUserAnswers:
    """Tests for storing answers."""

    def test_save_answers(
        self,
        app: Flask,
        container: ServiceContainer,
        make_user: Callable[..., User],
        make_result: Callable[..., TestResult],
    ) -> None:
        user = make_user("EMP001", "Budi")
        result = make_result(user.id)
        with app.app_context():
            saved = container.test_result_service().save_user_answers(
                result.result_id,
                [
                    UserAnswerInput(1, "Slept well?", "Yes"),
                    UserAnswerInput(2, "Feeling dizzy?", "No"),
                ],
            )

            assert saved == 2

    def test_unknown_result(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(RecordNotFoundException):
                container.test_result_service().save_user_answers(
                    9999, [UserAnswerInput(1, "Q", "A")]
                )


class TestResultStatistics:
    """Tests for counts and recent results."""

    def test_counts(
        self,
        app: Flask,
        container: ServiceContainer,
        make_user: Callable[..., User],
        make_result: Callable[..., TestResult],
    ) -> None:
        user = make_user("EMP001", "Budi")
        for total in (50, 80, 95):
            make_result(user.id, total_score=total)

        with app.app_context():
            service = container.test_result_service()

            assert service.count_results() == 3
            assert service.count_results_at_least(80) == 2

    def test_recent_results_newest_first(
        self,
        app: Flask,
        container: ServiceContainer,
        make_user: Callable[..., User],
        make_result: Callable[..., TestResult],
    ) -> None:
        user = make_user("EMP001", "Budi")
        ids = [make_result(user.id).result_id for _ in range(7)]

        with app.app_context():
            recent = container.test_result_service().get_recent_results(5)

            assert [r.result_id for r in recent] == list(reversed(ids))[:5]
            assert recent[0].user.name == "Budi"
