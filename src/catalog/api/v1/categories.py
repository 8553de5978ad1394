"""Category API endpoints."""

from fastapi import APIRouter

from catalog.api.deps import CategoryServiceDep
from catalog.core.exceptions import CategoryNotFound
from catalog.schemas.category import CategoryCreate, CategoryResponse
from catalog.services.validation import parse_uuid

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(service: CategoryServiceDep):
    """Get all categories."""
    return await service.get_all()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, service: CategoryServiceDep):
    """Get category by ID."""
    parsed = parse_uuid(category_id)
    category = await service.get_by_id(parsed) if parsed else None
    if category is None:
        raise CategoryNotFound()
    return category


@router.post("", response_model=CategoryResponse)
async def create_category(category_data: CategoryCreate, service: CategoryServiceDep):
    """Create a new category."""
    return await service.create(category_data)
