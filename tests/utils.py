"""Helpers shared by the test modules."""

import io

from starlette.datastructures import Headers, UploadFile

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def make_upload(
    filename: str = "photo.png",
    content_type: str = "image/png",
    content: bytes = PNG_BYTES,
) -> UploadFile:
    """Build an in-memory upload as the framework would hand it over."""
    return UploadFile(
        io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )
