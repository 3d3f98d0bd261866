"""Settings schemas for API request/response validation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EnvelopeSchema

_SCORE = {"ge": 0, "le": 10000}
_SPEED_NORMAL = {"ge": 100, "le": 5000}
_SPEED_HARD = {"ge": 50, "le": 2000}
_ROUNDS = {"ge": 1, "le": 20}
_TIME_NORMAL = {"ge": 250, "le": 10000}
_TIME_HARD = {"ge": 250, "le": 5000}


class SettingsUpdateSchema(BaseModel):
    """Request schema for an admin settings change.

    Every field is optional; only the fields present are changed.
    """

    model_config = ConfigDict(extra="ignore")

    minimum_passing_score: int | None = Field(None, **_SCORE)
    hard_mode_threshold: int | None = Field(None, **_SCORE)
    minigame_enabled: bool | None = None

    mg1_enabled: bool | None = None
    mg1_speed_normal: int | None = Field(None, **_SPEED_NORMAL)
    mg1_speed_hard: int | None = Field(None, **_SPEED_HARD)
    mg1_score_hit: int | None = Field(None, **_SCORE)

    mg2_enabled: bool | None = None
    mg2_rounds: int | None = Field(None, **_ROUNDS)
    mg2_speed_normal: int | None = Field(None, **_SPEED_NORMAL)
    mg2_speed_hard: int | None = Field(None, **_SPEED_HARD)
    mg2_score_max: int | None = Field(None, **_SCORE)

    mg3_enabled: bool | None = None
    mg3_rounds: int | None = Field(None, **_ROUNDS)
    mg3_time_normal: int | None = Field(None, **_TIME_NORMAL)
    mg3_time_hard: int | None = Field(None, **_TIME_HARD)
    mg3_score_round: int | None = Field(None, **_SCORE)

    mg4_enabled: bool | None = None
    mg4_time_normal: int | None = Field(None, **_TIME_NORMAL)
    mg4_time_hard: int | None = Field(None, **_TIME_HARD)
    mg4_score_max: int | None = Field(None, **_SCORE)

    mg5_enabled: bool | None = None
    mg5_time_normal: int | None = Field(None, **_TIME_NORMAL)
    mg5_time_hard: int | None = Field(None, **_TIME_HARD)
    mg5_score_hit: int | None = Field(None, **_SCORE)

    def changes(self) -> dict[str, Any]:
        """The fields the client actually sent, without nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SettingsResponseSchema(EnvelopeSchema):
    """Response schema for a settings snapshot, canonical or mobile shape."""

    data: dict[str, Any] = Field(..., description="Setting key to typed value")


class StreamQuerySchema(BaseModel):
    """Query parameters accepted by the settings streams."""

    token: str | None = Field(
        None, description="Admin token for clients that cannot send headers"
    )
