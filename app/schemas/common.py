"""Response envelope and pagination schemas shared by the API modules."""

from pydantic import BaseModel, ConfigDict, Field

from app.services.user_service import Page


class EnvelopeSchema(BaseModel):
    """Fields every successful response carries next to its ``data``."""

    success: bool = Field(True, description="Whether the request succeeded")
    message: str | None = Field(None, description="Human-readable outcome")


class MessageResponseSchema(EnvelopeSchema):
    """Response carrying only a message."""


class PaginationSchema(BaseModel):
    """Pagination block of a listing response."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_records: int = Field(..., alias="totalRecords")
    records_per_page: int = Field(..., alias="recordsPerPage")
    has_next_page: bool = Field(..., alias="hasNextPage")
    has_prev_page: bool = Field(..., alias="hasPrevPage")

    @classmethod
    def from_page(cls, page: Page) -> "PaginationSchema":
        return cls(
            current_page=page.page,
            total_pages=page.total_pages,
            total_records=page.total,
            records_per_page=page.page_size,
            has_next_page=page.has_next,
            has_prev_page=page.has_prev,
        )


class ListQuerySchema(BaseModel):
    """Query parameters of a paginated, searchable listing."""

    page: int = Field(1, ge=1, description="1-based page number")
    search: str | None = Field(None, description="Case-insensitive search text")
