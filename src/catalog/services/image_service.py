"""Binding of uploaded image files to durable URLs."""

import logging
import re
import secrets
import time
from pathlib import Path
from typing import Callable, Sequence
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from catalog.core.config import Settings
from catalog.core.exceptions import InvalidPayload, UnsupportedImageType
from catalog.middleware.metrics import record_image_upload

logger = logging.getLogger(__name__)

FILE_TYPE_MAP = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
}


class UploadConfig(BaseModel):
    """Where uploads are written and how they are addressed."""

    model_config = ConfigDict(frozen=True)

    upload_dir: Path
    url_path: str = "public/uploads"
    file_type_map: dict[str, str] = Field(default_factory=lambda: dict(FILE_TYPE_MAP))
    max_gallery_images: int = Field(10, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadConfig":
        return cls(
            upload_dir=Path(settings.UPLOAD_DIR),
            url_path=settings.UPLOAD_URL_PATH.strip("/"),
            max_gallery_images=settings.MAX_GALLERY_IMAGES,
        )


class ImageBinder:
    """Stores uploaded images and returns their public URLs.

    Stored files are never overwritten or deleted; a replaced image leaves its
    file behind.
    """

    def __init__(self, config: UploadConfig, clock: Callable[[], float] = time.time):
        self.config = config
        self._clock = clock

    def extension_for(self, content_type: str | None) -> str:
        """Map a declared content type to a file extension.

        Raises:
            UnsupportedImageType: Content type is not an accepted image type
        """
        extension = self.config.file_type_map.get((content_type or "").lower())
        if extension is None:
            record_image_upload("rejected")
            raise UnsupportedImageType()
        return extension

    def build_filename(self, original_name: str | None, extension: str) -> str:
        """Derive the stored name: original name, timestamp, random token, extension."""
        base = re.sub(r"\s", "-", Path(original_name or "image").name)
        timestamp = int(self._clock() * 1000)
        return f"{base}-{timestamp}-{secrets.token_hex(4)}.{extension}"

    def resolve_destination(self, upload: UploadFile) -> Path:
        """Pick the path an upload will be written to, validating its type first."""
        extension = self.extension_for(upload.content_type)
        return self.config.upload_dir / self.build_filename(upload.filename, extension)

    def public_url(self, origin: str, filename: str) -> str:
        """Absolute URL of a stored file; reserved characters in the name are escaped."""
        return f"{origin.rstrip('/')}/{self.config.url_path}/{quote(filename)}"

    async def store(self, upload: UploadFile, origin: str) -> str:
        """Write one upload and return its absolute URL."""
        destination = self.resolve_destination(upload)
        await self._write(upload, destination)
        return self.public_url(origin, destination.name)

    async def store_gallery(self, uploads: Sequence[UploadFile], origin: str) -> list[str]:
        """Write gallery uploads and return their URLs in upload order.

        Every file is type-checked before the first one is written.
        """
        limit = self.config.max_gallery_images
        if len(uploads) > limit:
            raise InvalidPayload(f"At most {limit} gallery images are accepted")

        destinations = [self.resolve_destination(upload) for upload in uploads]

        urls = []
        for upload, destination in zip(uploads, destinations):
            await self._write(upload, destination)
            urls.append(self.public_url(origin, destination.name))
        return urls

    async def _write(self, upload: UploadFile, destination: Path) -> None:
        content = await upload.read()
        await run_in_threadpool(self._write_bytes, destination, content)
        record_image_upload("stored")
        logger.info(f"Stored upload {upload.filename!r} as {destination.name} ({len(content)} bytes)")

    @staticmethod
    def _write_bytes(destination: Path, content: bytes) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "xb") as f:
            f.write(content)
