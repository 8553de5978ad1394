"""Product persistence: the only code that reads or writes the products table."""

from typing import Any, Collection
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.exceptions import PersistenceFailure
from catalog.models.product import Product


class ProductService:
    """Service class for product storage operations.

    Every product returned by this class carries its category loaded, since the
    relationship is declared with selectin loading.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, category_ids: Collection[UUID] | None = None) -> list[Product]:
        """Get products, optionally restricted to a set of categories.

        Args:
            category_ids: Allowed category IDs, or None for no constraint.
                An empty collection matches nothing.

        Returns:
            Products in store order
        """
        query = select(Product)
        if category_ids is not None:
            query = query.where(Product.category_id.in_(list(category_ids)))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, product_id: UUID) -> Product | None:
        """Get product by ID."""
        result = await self.db.execute(
            select(Product).where(Product.product_id == product_id)
        )
        return result.scalar_one_or_none()

    async def create(self, fields: dict[str, Any]) -> Product:
        """Insert a new product.

        Args:
            fields: Column values, ``category`` being a Category instance

        Returns:
            Stored product with its generated ID

        Raises:
            PersistenceFailure: The store refused the row
        """
        product = Product(images=[], **fields)

        self.db.add(product)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise PersistenceFailure("The product cannot be created") from e

        await self.db.refresh(product)
        return product

    async def update(self, product_id: UUID, fields: dict[str, Any]) -> Product | None:
        """Rewrite every given field of a product.

        Returns:
            Updated product, or None if it does not exist
        """
        product = await self.get_by_id(product_id)
        if product is None:
            return None

        for name, value in fields.items():
            setattr(product, name, value)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise PersistenceFailure("The product cannot be updated") from e

        await self.db.refresh(product)
        return product

    async def update_gallery(self, product_id: UUID, images: list[str]) -> Product | None:
        """Replace the gallery of a product."""
        product = await self.get_by_id(product_id)
        if product is None:
            return None

        product.images = list(images)
        await self.db.commit()
        await self.db.refresh(product)
        return product

    async def remove(self, product_id: UUID) -> bool:
        """Delete a product.

        Returns:
            True if a product was deleted, False if none matched
        """
        product = await self.get_by_id(product_id)
        if product is None:
            return False

        await self.db.delete(product)
        await self.db.commit()
        return True

    async def count(self) -> int:
        """Total number of products."""
        result = await self.db.execute(select(func.count(Product.product_id)))
        return result.scalar_one()

    async def get_featured(self, limit: int) -> list[Product]:
        """Get at most ``limit`` featured products; 0 yields none."""
        result = await self.db.execute(
            select(Product).where(Product.is_featured.is_(True)).limit(limit)
        )
        return list(result.scalars().all())

    async def rollback(self) -> None:
        await self.db.rollback()
