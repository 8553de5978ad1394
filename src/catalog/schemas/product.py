"""Product schemas for request/response validation.

Wire names are camelCase (``countInStock``, ``isFeatured``...); attributes are
snake_case and both spellings are accepted on input.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from catalog.schemas.category import CategoryResponse


class ProductForm(BaseModel):
    """Text fields of a product create/update form.

    Unknown fields are rejected. Every field has a default, so a form that
    omits a field resets it on update.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        allow_inf_nan=False,
    )

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    rich_description: str | None = None
    brand: str | None = Field(None, max_length=255)
    price: float | None = Field(None, ge=0)
    category: str | None = None
    count_in_stock: int = Field(0, ge=0)
    rating: float = Field(0, ge=0)
    num_reviews: int = Field(0, ge=0)
    is_featured: bool = False

    @field_validator(
        "price", "count_in_stock", "rating", "num_reviews", "is_featured", mode="before"
    )
    @classmethod
    def blank_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Blank form inputs count as not sent."""
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    def product_fields(self) -> dict[str, Any]:
        """Column values written on create/update, category excluded."""
        return self.model_dump(exclude={"category"})


class ProductResponse(BaseModel):
    """Schema for product response with its category materialized."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    product_id: UUID = Field(alias="id")
    name: str | None = None
    description: str | None = None
    rich_description: str | None = None
    image: str = ""
    images: list[str] = Field(default_factory=list)
    brand: str | None = None
    price: float | None = None
    category: CategoryResponse | None = None
    count_in_stock: int = 0
    rating: float = 0
    num_reviews: int = 0
    is_featured: bool = False
    created_at: datetime | None = Field(None, alias="dateCreated")


class ProductCountResponse(BaseModel):
    """Schema for the product count response."""

    model_config = ConfigDict(populate_by_name=True)

    product_count: int = Field(alias="productCount")


class DeleteResponse(BaseModel):
    """Schema for a successful delete."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Uniform error body."""

    success: bool = False
    error: str
