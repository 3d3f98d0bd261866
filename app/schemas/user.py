"""User schemas for API request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EnvelopeSchema, PaginationSchema


class UserCreateSchema(BaseModel):
    """Request schema for creating a user."""

    name: str = Field(..., min_length=1, description="Display name")
    employee_id: str = Field(..., min_length=1, description="Unique employee ID")
    role: Literal["admin", "user"] = Field(..., description="User role")
    nik: str | None = Field(None, description="National identity number")
    password: str | None = Field(None, description="Required when role is admin")


class UserUpdateSchema(BaseModel):
    """Request schema for updating a user."""

    name: str = Field(..., min_length=1, description="Display name")
    role: Literal["admin", "user"] = Field(..., description="User role")
    password: str | None = Field(
        None, description="New password; stored only for admin users"
    )


class UserSchema(BaseModel):
    """User as returned by the admin API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    employee_id: str = Field(..., description="Employee ID")
    nik: str | None = Field(None, description="National identity number")
    role: str = Field(..., description="User role")
    created_at: datetime | None = Field(None, description="Creation timestamp")


class UserResponseSchema(EnvelopeSchema):
    """Response schema for a single user."""

    data: UserSchema


class UserListResponseSchema(EnvelopeSchema):
    """Response schema for a page of users."""

    data: list[UserSchema]
    pagination: PaginationSchema
