"""Pydantic schemas for request/response validation."""

from catalog.schemas.category import CategoryCreate, CategoryResponse
from catalog.schemas.product import (
    DeleteResponse,
    ErrorResponse,
    ProductCountResponse,
    ProductForm,
    ProductResponse,
)

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "ProductForm",
    "ProductResponse",
    "ProductCountResponse",
    "DeleteResponse",
    "ErrorResponse",
]
