"""Pytest configuration and fixtures for testing."""

from typing import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from catalog.core.config import Settings
from catalog.core.database import Base, get_db
from catalog.main import create_app
from catalog.models import Category, Product
from catalog.services.image_service import ImageBinder, UploadConfig


# In-memory SQLite session with the catalog schema
@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def add_category(db_session: AsyncSession) -> Callable:
    """Insert a category and return it."""

    async def _add(name: str = "Electronics") -> Category:
        category = Category(name=name, icon=f"icon-{name.lower()}", color="#000000")
        db_session.add(category)
        await db_session.commit()
        return category

    return _add


@pytest.fixture
def add_product(db_session: AsyncSession) -> Callable:
    """Insert a product directly through the session and return it."""

    async def _add(category: Category, name: str = "Product", **fields) -> Product:
        product = Product(name=name, category=category, image="", images=[], **fields)
        db_session.add(product)
        await db_session.commit()
        return product

    return _add


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def binder(upload_dir) -> ImageBinder:
    return ImageBinder(UploadConfig(upload_dir=upload_dir))


# Mock collaborators for pipeline tests
@pytest.fixture
def mock_products() -> AsyncMock:
    products = AsyncMock()
    products.get_all = AsyncMock(return_value=[])
    products.get_by_id = AsyncMock(return_value=None)
    products.create = AsyncMock()
    products.update = AsyncMock()
    products.update_gallery = AsyncMock()
    products.remove = AsyncMock(return_value=False)
    products.count = AsyncMock(return_value=0)
    products.get_featured = AsyncMock(return_value=[])
    products.rollback = AsyncMock()
    return products


@pytest.fixture
def mock_categories() -> AsyncMock:
    categories = AsyncMock()
    categories.get_by_id = AsyncMock(return_value=None)
    return categories


@pytest.fixture
def mock_binder() -> MagicMock:
    mock = MagicMock()
    mock.store = AsyncMock(return_value="http://shop.test/public/uploads/new.png")
    mock.store_gallery = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def mock_category() -> MagicMock:
    category = MagicMock()
    category.category_id = uuid4()
    category.name = "Electronics"
    return category


@pytest.fixture
def mock_product(mock_category: MagicMock) -> MagicMock:
    product = MagicMock()
    product.product_id = uuid4()
    product.name = "Test Product"
    product.image = "http://shop.test/public/uploads/old.png"
    product.images = []
    product.category = mock_category
    return product


# HTTP client bound to a fresh app and the in-memory session
@pytest.fixture
def app(db_session: AsyncSession, upload_dir):
    test_settings = Settings(
        _env_file=None,
        UPLOAD_DIR=str(upload_dir),
        RATE_LIMIT_ENABLED=False,
        LOG_LEVEL="WARNING",
    )
    application = create_app(test_settings)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as http_client:
        yield http_client


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Create a mock Redis client."""
    redis = AsyncMock()
    redis.register_script = MagicMock(return_value=AsyncMock(return_value=[1, 0]))
    return redis
