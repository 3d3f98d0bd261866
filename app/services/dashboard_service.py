"""Dashboard service aggregating admin overview statistics."""

from dataclasses import dataclass

from app.consts import DASHBOARD_SUCCESS_THRESHOLD
from app.models.activity_log import ActivityLog
from app.models.test_result import TestResult
from app.models.user import User
from app.services.activity_service import ActivityService
from app.services.question_service import QuestionService
from app.services.test_result_service import TestResultService
from app.services.user_service import UserService


@dataclass
class DashboardSummary:
    """Totals and recent items shown on the admin dashboard."""

    total_users: int
    total_test_results: int
    total_questions: int
    success_rate: int
    recent_users: list[User]
    recent_tests: list[TestResult]
    recent_activities: list[ActivityLog]


class DashboardService:
    """Builds the dashboard summary from the other services."""

    def __init__(
        self,
        user_service: UserService,
        question_service: QuestionService,
        test_result_service: TestResultService,
        activity_service: ActivityService,
    ) -> None:
        self.user_service = user_service
        self.question_service = question_service
        self.test_result_service = test_result_service
        self.activity_service = activity_service

    def get_summary(self) -> DashboardSummary:
        """Collect totals, success rate and the most recent items.

        The success rate is the percentage of results whose total score is
        at least ``DASHBOARD_SUCCESS_THRESHOLD``, rounded to a whole number.
        """
        total_results = self.test_result_service.count_results()
        successful = self.test_result_service.count_results_at_least(
            DASHBOARD_SUCCESS_THRESHOLD
        )
        success_rate = round(successful / total_results * 100) if total_results else 0

        return DashboardSummary(
            total_users=self.user_service.count_users(),
            total_test_results=total_results,
            total_questions=self.question_service.count_questions(),
            success_rate=success_rate,
            recent_users=self.user_service.get_recent_users(5),
            recent_tests=self.test_result_service.get_recent_results(5),
            recent_activities=self.activity_service.get_recent(10),
        )
