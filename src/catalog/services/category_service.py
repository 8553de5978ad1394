"""Category service used as the reference target for products."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.category import Category
from catalog.schemas.category import CategoryCreate


class CategoryService:
    """Service class for category operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, category_id: UUID) -> Category | None:
        """Get category by ID."""
        result = await self.db.execute(
            select(Category).where(Category.category_id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[Category]:
        """Get all categories ordered by name."""
        result = await self.db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def create(self, category_data: CategoryCreate) -> Category:
        """Create a new category."""
        category = Category(
            name=category_data.name,
            icon=category_data.icon,
            color=category_data.color,
        )

        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category
