"""Seed data script for development and testing.

Creates:
- 3 categories (Electronics, Books, Home)
- PRODUCTS_PER_CATEGORY products in each, every third one featured

Uploaded images are not created; seeded products point at a placeholder URL
under SEED_IMAGE_BASE_URL.

Environment Variables:
    PRODUCTS_PER_CATEGORY: Products created per category (default: 5)
    SEED_IMAGE_BASE_URL: Origin used for placeholder image URLs
        (default: http://localhost:8000)

Usage:
    uv run python -m scripts.seed_data
"""

import asyncio
import os
import random

from sqlalchemy import select

from catalog.core.config import settings
from catalog.core.database import async_session_maker, engine
from catalog.models import Category, Product

PRODUCTS_PER_CATEGORY = int(os.getenv("PRODUCTS_PER_CATEGORY", "5"))
SEED_IMAGE_BASE_URL = os.getenv("SEED_IMAGE_BASE_URL", "http://localhost:8000")

CATEGORIES = [
    {"name": "Electronics", "icon": "icon-electronics", "color": "#1e88e5"},
    {"name": "Books", "icon": "icon-books", "color": "#43a047"},
    {"name": "Home", "icon": "icon-home", "color": "#fb8c00"},
]


async def seed_categories(session) -> list[Category]:
    """Create the sample categories unless some already exist."""
    print("Seeding categories...")

    result = await session.execute(select(Category))
    existing = list(result.scalars().all())
    if existing:
        print(f"  {len(existing)} categories already exist, skipping...")
        return existing

    categories = [Category(**data) for data in CATEGORIES]
    session.add_all(categories)
    await session.commit()
    print(f"  Created {len(categories)} categories")
    return categories


async def seed_products(session, categories: list[Category]) -> None:
    """Create sample products for every category."""
    print("Seeding products...")

    placeholder = f"{SEED_IMAGE_BASE_URL}/{settings.UPLOAD_URL_PATH.strip('/')}/placeholder.png"
    products = []
    for category in categories:
        for i in range(1, PRODUCTS_PER_CATEGORY + 1):
            products.append(
                Product(
                    name=f"{category.name} item {i}",
                    description=f"Sample {category.name.lower()} product",
                    rich_description="",
                    image=placeholder,
                    images=[],
                    brand=random.choice(["Acme", "Globex", "Initech"]),
                    price=round(random.uniform(5, 500), 2),
                    category=category,
                    count_in_stock=random.randint(0, 100),
                    rating=round(random.uniform(0, 5), 1),
                    num_reviews=random.randint(0, 250),
                    is_featured=i % 3 == 0,
                )
            )

    session.add_all(products)
    await session.commit()
    print(f"  Created {len(products)} products")


async def main():
    async with async_session_maker() as session:
        categories = await seed_categories(session)
        await seed_products(session, categories)

    print("\nSeeding complete!")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
