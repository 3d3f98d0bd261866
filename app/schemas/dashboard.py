"""Dashboard schemas for API response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EnvelopeSchema
from app.services.dashboard_service import DashboardSummary


class RecentUserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    employee_id: str


class RecentTestSchema(BaseModel):
    result_id: int
    test_timestamp: datetime
    total_score: int
    user_name: str


class RecentActivitySchema(BaseModel):
    activity_type: str
    description: str
    timestamp: datetime
    admin_name: str | None = None


class DashboardSchema(BaseModel):
    """Totals and recent items shown on the admin dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(..., alias="totalUsers")
    total_test_results: int = Field(..., alias="totalTestResults")
    total_questions: int = Field(..., alias="totalQuestions")
    success_rate: int = Field(
        ..., alias="successRate", description="Percent of results scoring 80 or more"
    )
    recent_users: list[RecentUserSchema] = Field(..., alias="recentUsers")
    recent_tests: list[RecentTestSchema] = Field(..., alias="recentTests")
    recent_activities: list[RecentActivitySchema] = Field(..., alias="recentActivities")

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> "DashboardSchema":
        return cls(
            total_users=summary.total_users,
            total_test_results=summary.total_test_results,
            total_questions=summary.total_questions,
            success_rate=summary.success_rate,
            recent_users=[RecentUserSchema.model_validate(u) for u in summary.recent_users],
            recent_tests=[
                RecentTestSchema(
                    result_id=t.result_id,
                    test_timestamp=t.test_timestamp,
                    total_score=t.total_score,
                    user_name=t.user.name,
                )
                for t in summary.recent_tests
            ],
            recent_activities=[
                RecentActivitySchema(
                    activity_type=a.activity_type,
                    description=a.description,
                    timestamp=a.timestamp,
                    admin_name=a.user.name if a.user is not None else None,
                )
                for a in summary.recent_activities
            ],
        )


class DashboardResponseSchema(EnvelopeSchema):
    data: DashboardSchema
