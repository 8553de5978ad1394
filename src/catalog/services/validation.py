"""Checks that run before any product mutation."""

import logging
from uuid import UUID

from catalog.core.exceptions import InvalidCategory, InvalidProduct, InvalidProductId
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.services.category_service import CategoryService
from catalog.services.product_service import ProductService

logger = logging.getLogger(__name__)


def parse_uuid(value: object) -> UUID | None:
    """Parse an identifier, returning None when it is malformed."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except ValueError:
        return None


class ValidationGate:
    """Reference and identifier checks, each raising on failure."""

    def __init__(self, categories: CategoryService, products: ProductService):
        self.categories = categories
        self.products = products

    @staticmethod
    def validate_product_id(product_id: object) -> UUID:
        """Check the identifier shape without touching the store.

        Raises:
            InvalidProductId: Identifier is not a UUID
        """
        parsed = parse_uuid(product_id) if product_id is not None else None
        if parsed is None:
            logger.info(f"Rejected malformed product id {product_id!r}")
            raise InvalidProductId()
        return parsed

    async def validate_category_ref(self, category_id: object) -> Category:
        """Resolve the referenced category.

        Raises:
            InvalidCategory: Identifier is missing, malformed or unknown
        """
        parsed = parse_uuid(category_id) if category_id else None
        category = await self.categories.get_by_id(parsed) if parsed else None
        if category is None:
            logger.info(f"Rejected unknown category {category_id!r}")
            raise InvalidCategory()
        return category

    async def validate_product_exists(self, product_id: UUID) -> Product:
        """Load the product targeted by a mutation.

        Raises:
            InvalidProduct: No product with this ID
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            logger.info(f"Rejected mutation of missing product {product_id}")
            raise InvalidProduct()
        return product
