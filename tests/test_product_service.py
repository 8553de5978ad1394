"""Tests for product persistence against an in-memory database."""

import pytest
from uuid import uuid4

from catalog.services.product_service import ProductService


class TestProductQueries:
    """Test list, fetch, count and featured queries."""

    @pytest.mark.asyncio
    async def test_get_all_without_filter(self, db_session, add_category, add_product):
        """Test that no filter returns every product."""
        category = await add_category()
        for name in ("P1", "P2", "P3"):
            await add_product(category, name)

        products = await ProductService(db_session).get_all()

        assert sorted(p.name for p in products) == ["P1", "P2", "P3"]

    @pytest.mark.asyncio
    async def test_get_all_filters_by_category(self, db_session, add_category, add_product):
        """Test that only products in the requested categories are returned."""
        a, b, c = [await add_category(name) for name in ("A", "B", "C")]
        await add_product(a, "P1")
        await add_product(b, "P2")
        await add_product(c, "P3")

        products = await ProductService(db_session).get_all({a.category_id, b.category_id})

        assert sorted(p.name for p in products) == ["P1", "P2"]

    @pytest.mark.asyncio
    async def test_get_all_with_empty_filter_matches_nothing(
        self, db_session, add_category, add_product
    ):
        """Test that an empty category set is a constraint, not a wildcard."""
        category = await add_category()
        await add_product(category, "P1")

        products = await ProductService(db_session).get_all(set())

        assert products == []

    @pytest.mark.asyncio
    async def test_get_by_id_loads_category(self, db_session, add_category, add_product):
        """Test that a fetched product carries the full category record."""
        category = await add_category("Books")
        product = await add_product(category, "Novel")
        product_id = product.product_id
        db_session.expunge_all()

        fetched = await ProductService(db_session).get_by_id(product_id)

        assert fetched.category.name == "Books"
        assert fetched.category.icon == "icon-books"

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, db_session):
        """Test that an unknown ID returns None."""
        assert await ProductService(db_session).get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_count(self, db_session, add_category, add_product):
        """Test count equals the number of stored products."""
        a, b = await add_category("A"), await add_category("B")
        await add_product(a, "P1")
        await add_product(b, "P2")

        assert await ProductService(db_session).count() == 2

    @pytest.mark.asyncio
    async def test_featured_zero_limit_is_empty(self, db_session, add_category, add_product):
        """Test that a limit of 0 returns no products."""
        category = await add_category()
        await add_product(category, "P1", is_featured=True)

        assert await ProductService(db_session).get_featured(0) == []

    @pytest.mark.asyncio
    async def test_featured_is_capped(self, db_session, add_category, add_product):
        """Test that only featured products are returned, at most limit."""
        category = await add_category()
        for i in range(5):
            await add_product(category, f"F{i}", is_featured=True)
        await add_product(category, "Plain")

        products = await ProductService(db_session).get_featured(2)

        assert len(products) == 2
        assert all(p.is_featured for p in products)


class TestProductWrites:
    """Test create, update, gallery and remove."""

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, db_session, add_category):
        """Test that create stores the product with an ID and empty gallery."""
        category = await add_category()
        service = ProductService(db_session)

        product = await service.create(
            {"name": "Lamp", "price": 19.5, "image": "http://x/a.png", "category": category}
        )

        assert product.product_id is not None
        assert product.images == []
        assert product.category_id == category.category_id
        assert product.created_at is not None
        assert await service.count() == 1

    @pytest.mark.asyncio
    async def test_update_rewrites_fields(self, db_session, add_category, add_product):
        """Test that update writes the given fields and the new category."""
        old, new = await add_category("Old"), await add_category("New")
        product = await add_product(old, "Lamp", brand="Acme")

        updated = await ProductService(db_session).update(
            product.product_id,
            {"name": "Desk lamp", "brand": None, "category": new, "image": "http://x/b.png"},
        )

        assert updated.name == "Desk lamp"
        assert updated.brand is None
        assert updated.category.name == "New"
        assert updated.image == "http://x/b.png"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        """Test that updating an unknown product returns None."""
        assert await ProductService(db_session).update(uuid4(), {"name": "x"}) is None

    @pytest.mark.asyncio
    async def test_update_gallery_replaces_images(self, db_session, add_category, add_product):
        """Test that the gallery is replaced, not merged."""
        category = await add_category()
        product = await add_product(category, "Lamp")
        service = ProductService(db_session)

        await service.update_gallery(product.product_id, ["http://x/1.png", "http://x/2.png"])
        updated = await service.update_gallery(product.product_id, ["http://x/3.png"])

        assert updated.images == ["http://x/3.png"]

    @pytest.mark.asyncio
    async def test_update_gallery_empty_is_idempotent(
        self, db_session, add_category, add_product
    ):
        """Test that an empty gallery clears images and can be repeated."""
        category = await add_category()
        product = await add_product(category, "Lamp")
        service = ProductService(db_session)
        await service.update_gallery(product.product_id, ["http://x/1.png"])

        first = await service.update_gallery(product.product_id, [])
        second = await service.update_gallery(product.product_id, [])

        assert first.images == []
        assert second.images == []

    @pytest.mark.asyncio
    async def test_update_gallery_missing_returns_none(self, db_session):
        """Test that gallery update of an unknown product returns None."""
        assert await ProductService(db_session).update_gallery(uuid4(), []) is None

    @pytest.mark.asyncio
    async def test_remove_twice(self, db_session, add_category, add_product):
        """Test that the second remove reports nothing removed."""
        category = await add_category()
        product = await add_product(category, "Lamp")
        service = ProductService(db_session)

        assert await service.remove(product.product_id) is True
        assert await service.remove(product.product_id) is False
        assert await service.count() == 0
