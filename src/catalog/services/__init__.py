"""Business logic services."""

from catalog.services.catalog_service import CatalogService
from catalog.services.category_service import CategoryService
from catalog.services.image_service import ImageBinder, UploadConfig
from catalog.services.product_service import ProductService
from catalog.services.validation import ValidationGate

__all__ = [
    "CatalogService",
    "CategoryService",
    "ImageBinder",
    "UploadConfig",
    "ProductService",
    "ValidationGate",
]
