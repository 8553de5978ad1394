"""Product catalog API endpoints."""

from fastapi import APIRouter, Path, Query

from catalog.api.deps import (
    CatalogServiceDep,
    GalleryPayload,
    ImagePayload,
    Origin,
    parse_product_form,
)
from catalog.schemas.product import (
    DeleteResponse,
    ErrorResponse,
    ProductCountResponse,
    ProductResponse,
)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[ProductResponse])
@router.get("/", response_model=list[ProductResponse], include_in_schema=False)
async def list_products(
    catalog: CatalogServiceDep,
    categories: str | None = Query(None, description="Comma-separated category IDs."),
):
    """Get all products, optionally only those in the given categories."""
    return await catalog.list_products(categories)


@router.get("/get/count", response_model=ProductCountResponse)
async def count_products(catalog: CatalogServiceDep):
    """Get the total number of products."""
    return ProductCountResponse(product_count=await catalog.count_products())


@router.get("/get/featured/{count}", response_model=list[ProductResponse])
async def featured_products(
    catalog: CatalogServiceDep,
    count: int = Path(..., ge=0, description="Maximum number of products; 0 returns none."),
):
    """Get up to ``count`` featured products."""
    return await catalog.featured_products(count)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, catalog: CatalogServiceDep):
    """Get product by ID."""
    return await catalog.get_product(product_id)


@router.post("", response_model=ProductResponse)
@router.post("/", response_model=ProductResponse, include_in_schema=False)
async def create_product(
    payload: ImagePayload,
    origin: Origin,
    catalog: CatalogServiceDep,
):
    """Create a product from a multipart form with an ``image`` file."""
    form = parse_product_form(payload.fields)
    image = payload.files[0] if payload.files else None
    return await catalog.create_product(form, image, origin)


@router.put("/gallery-images/{product_id}", response_model=ProductResponse)
async def update_gallery(
    product_id: str,
    payload: GalleryPayload,
    origin: Origin,
    catalog: CatalogServiceDep,
):
    """Replace the product gallery with the uploaded ``images`` files."""
    return await catalog.update_gallery(product_id, payload.files, origin)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    payload: ImagePayload,
    origin: Origin,
    catalog: CatalogServiceDep,
):
    """Update a product; the current image is kept when no file is sent."""
    form = parse_product_form(payload.fields)
    image = payload.files[0] if payload.files else None
    return await catalog.update_product(product_id, form, image, origin)


@router.delete("/{product_id}", response_model=DeleteResponse)
async def delete_product(product_id: str, catalog: CatalogServiceDep):
    """Delete product by ID."""
    await catalog.delete_product(product_id)
    return DeleteResponse(message="The product is deleted!")
