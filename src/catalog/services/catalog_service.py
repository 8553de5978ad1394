"""Request pipeline for the product resource.

Each operation runs validate -> bind images -> persist, stopping at the first
failure. Store exceptions are rolled back and reported as ``InternalFailure``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from catalog.core.exceptions import (
    InternalFailure,
    MissingImage,
    PersistenceFailure,
    ProductNotFound,
)
from catalog.models.product import Product
from catalog.schemas.product import ProductForm
from catalog.services.category_service import CategoryService
from catalog.services.image_service import ImageBinder
from catalog.services.product_service import ProductService
from catalog.services.validation import ValidationGate, parse_uuid

logger = logging.getLogger(__name__)


class CatalogService:
    """Product operations as exposed over HTTP."""

    def __init__(
        self,
        db: AsyncSession,
        binder: ImageBinder,
        products: ProductService | None = None,
        categories: CategoryService | None = None,
    ):
        self.db = db
        self.binder = binder
        self.products = products if products is not None else ProductService(db)
        self.categories = categories if categories is not None else CategoryService(db)
        self.gate = ValidationGate(self.categories, self.products)

    @asynccontextmanager
    async def _store_errors(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.exception(f"Store failure while {action}")
            await self.products.rollback()
            raise InternalFailure() from e

    async def list_products(self, categories: str | None = None) -> list[Product]:
        """List products, filtered by a comma-separated list of category IDs.

        Malformed IDs in the filter match nothing.
        """
        category_ids = None
        if categories:
            parsed = (parse_uuid(part) for part in categories.split(",") if part.strip())
            category_ids = {category_id for category_id in parsed if category_id is not None}

        async with self._store_errors("listing products"):
            return await self.products.get_all(category_ids)

    async def get_product(self, product_id: str) -> Product:
        parsed = parse_uuid(product_id)
        async with self._store_errors("fetching product"):
            product = await self.products.get_by_id(parsed) if parsed else None
        if product is None:
            raise ProductNotFound()
        return product

    async def create_product(
        self, form: ProductForm, image: UploadFile | None, origin: str
    ) -> Product:
        """Create a product with its primary image.

        Args:
            form: Text fields of the request
            image: The uploaded primary image
            origin: ``scheme://host`` of the request, used for image URLs

        Raises:
            InvalidCategory: Category is unknown
            MissingImage: No image attached
            UnsupportedImageType: Image type not accepted
        """
        async with self._store_errors("creating product"):
            category = await self.gate.validate_category_ref(form.category)
            if image is None:
                raise MissingImage()

            image_url = await self.binder.store(image, origin)
            product = await self.products.create(
                {**form.product_fields(), "image": image_url, "category": category}
            )

        logger.info(f"Created product {product.product_id} in category {category.category_id}")
        return product

    async def update_product(
        self, product_id: str, form: ProductForm, image: UploadFile | None, origin: str
    ) -> Product:
        """Replace a product's fields, keeping its image when none is uploaded.

        Fields missing from ``form`` are reset to their defaults.
        """
        parsed = self.gate.validate_product_id(product_id)

        async with self._store_errors("updating product"):
            category = await self.gate.validate_category_ref(form.category)
            existing = await self.gate.validate_product_exists(parsed)

            if image is not None:
                image_url = await self.binder.store(image, origin)
            else:
                image_url = existing.image

            product = await self.products.update(
                parsed,
                {**form.product_fields(), "image": image_url, "category": category},
            )

        if product is None:
            raise PersistenceFailure("The product cannot be updated")

        logger.info(f"Updated product {parsed}")
        return product

    async def update_gallery(
        self, product_id: str, uploads: Sequence[UploadFile], origin: str
    ) -> Product:
        """Replace a product's gallery with the uploaded images, in order."""
        parsed = self.gate.validate_product_id(product_id)

        async with self._store_errors("updating gallery"):
            await self.gate.validate_product_exists(parsed)
            urls = await self.binder.store_gallery(uploads, origin)
            product = await self.products.update_gallery(parsed, urls)

        if product is None:
            raise PersistenceFailure("The gallery cannot be updated")

        logger.info(f"Replaced gallery of product {parsed} with {len(urls)} images")
        return product

    async def delete_product(self, product_id: str) -> None:
        parsed = parse_uuid(product_id)
        async with self._store_errors("deleting product"):
            removed = await self.products.remove(parsed) if parsed else False
        if not removed:
            raise ProductNotFound()
        logger.info(f"Deleted product {parsed}")

    async def count_products(self) -> int:
        async with self._store_errors("counting products"):
            return await self.products.count()

    async def featured_products(self, limit: int) -> list[Product]:
        async with self._store_errors("listing featured products"):
            return await self.products.get_featured(limit)
