"""API v1 routers."""

from catalog.api.v1 import categories, products

__all__ = ["categories", "products"]
