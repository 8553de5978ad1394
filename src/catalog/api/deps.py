"""API dependencies for database access, services and multipart payloads."""

from typing import Annotated, NamedTuple

from fastapi import Depends, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from catalog.core.database import get_db
from catalog.core.exceptions import InvalidPayload
from catalog.schemas.product import ProductForm
from catalog.services.catalog_service import CatalogService
from catalog.services.category_service import CategoryService
from catalog.services.image_service import ImageBinder


class MultipartPayload(NamedTuple):
    """Text fields and files of a form request."""

    fields: dict[str, str]
    files: list[UploadFile]


def multipart_payload(file_field: str, max_files: int | None = None, allow_fields: bool = True):
    """Build a dependency that splits a form into text fields and files.

    Files under any other field name, repeated text fields, text fields when
    ``allow_fields`` is false and more than ``max_files`` files are rejected.
    File parts sent without a filename (an empty file input) are ignored.
    """

    async def dependency(request: Request) -> MultipartPayload:
        form = await request.form()
        fields: dict[str, str] = {}
        files: list[UploadFile] = []

        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if not value.filename:
                    continue
                if key != file_field:
                    raise InvalidPayload(f"Unexpected file field '{key}'")
                files.append(value)
            elif not allow_fields:
                raise InvalidPayload(f"Unexpected field '{key}'")
            elif key in fields:
                raise InvalidPayload(f"Duplicate field '{key}'")
            else:
                fields[key] = value

        if max_files is not None and len(files) > max_files:
            raise InvalidPayload(f"At most {max_files} '{file_field}' file(s) accepted")

        return MultipartPayload(fields, files)

    return dependency


def parse_product_form(fields: dict[str, str]) -> ProductForm:
    """Validate product text fields.

    Raises:
        InvalidPayload: Unknown field or value of the wrong type
    """
    try:
        return ProductForm.model_validate(fields)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "form"
        raise InvalidPayload(f"{location}: {error['msg']}") from None


def request_origin(request: Request) -> str:
    """``scheme://host`` of the inbound request."""
    return f"{request.url.scheme}://{request.url.netloc}"


def get_image_binder(request: Request) -> ImageBinder:
    return request.app.state.image_binder


DbSession = Annotated[AsyncSession, Depends(get_db)]
Origin = Annotated[str, Depends(request_origin)]
ImagePayload = Annotated[MultipartPayload, Depends(multipart_payload("image", max_files=1))]
GalleryPayload = Annotated[MultipartPayload, Depends(multipart_payload("images", allow_fields=False))]


async def get_catalog_service(
    db: DbSession,
    binder: Annotated[ImageBinder, Depends(get_image_binder)],
) -> CatalogService:
    """Get CatalogService bound to the request's session."""
    return CatalogService(db, binder)


async def get_category_service(db: DbSession) -> CategoryService:
    return CategoryService(db)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
