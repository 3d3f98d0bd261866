"""Error response schema."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="User-facing error message")
    error: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
    correlation_id: str | None = Field(
        None, alias="correlationId", description="Request correlation ID"
    )
