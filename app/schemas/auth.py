"""Authentication schemas for API request/response validation."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EnvelopeSchema


class AdminLoginSchema(BaseModel):
    """Request schema for admin login."""

    employee_id: str = Field(..., min_length=1, description="Admin employee ID")
    password: str = Field(..., min_length=1, description="Admin password")


class AdminProfileSchema(BaseModel):
    """The signed-in admin."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    employee_id: str


class AdminLoginDataSchema(BaseModel):
    token: str = Field(..., description="Bearer token for the admin API")
    admin: AdminProfileSchema


class AdminLoginResponseSchema(EnvelopeSchema):
    data: AdminLoginDataSchema


class AdminValidateDataSchema(BaseModel):
    admin: AdminProfileSchema


class AdminValidateResponseSchema(EnvelopeSchema):
    data: AdminValidateDataSchema


class MobileLoginSchema(BaseModel):
    """Request schema for mobile login by employee ID."""

    employee_id: str = Field(..., description="Employee ID")


class MobileUserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    name: str
    role: str


class MobileLoginResponseSchema(EnvelopeSchema):
    data: MobileUserSchema
