"""Category schemas for request/response validation."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Schema for category creation request."""

    name: str = Field(..., min_length=1, max_length=255)
    icon: str | None = Field(None, max_length=255)
    color: str | None = Field(None, max_length=50)


class CategoryResponse(BaseModel):
    """Schema for category response."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    category_id: UUID = Field(alias="id")
    name: str
    icon: str | None = None
    color: str | None = None
