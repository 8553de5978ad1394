from catalog.core.config import Settings, settings
from catalog.core.database import Base, async_session_maker, engine, get_db
from catalog.core.exceptions import (
    CatalogError,
    CategoryNotFound,
    InternalFailure,
    InvalidCategory,
    InvalidPayload,
    InvalidProduct,
    InvalidProductId,
    MissingImage,
    PersistenceFailure,
    ProductNotFound,
    UnsupportedImageType,
)
from catalog.core.redis import close_redis, get_redis

__all__ = [
    "Settings",
    "settings",
    "Base",
    "engine",
    "async_session_maker",
    "get_db",
    "get_redis",
    "close_redis",
    "CatalogError",
    "InvalidCategory",
    "InvalidProductId",
    "ProductNotFound",
    "InvalidProduct",
    "MissingImage",
    "UnsupportedImageType",
    "InvalidPayload",
    "PersistenceFailure",
    "InternalFailure",
    "CategoryNotFound",
]
