"""Tests for binding uploaded images to stored files and URLs."""

import re

import pytest

from catalog.core.config import Settings
from catalog.core.exceptions import InvalidPayload, UnsupportedImageType
from catalog.services.image_service import ImageBinder, UploadConfig
from tests.utils import PNG_BYTES, make_upload

ORIGIN = "http://shop.test"


class TestUploadConfig:
    """Test upload configuration."""

    def test_from_settings(self, tmp_path):
        settings = Settings(
            _env_file=None,
            UPLOAD_DIR=str(tmp_path),
            UPLOAD_URL_PATH="/media/images/",
            MAX_GALLERY_IMAGES=4,
        )

        config = UploadConfig.from_settings(settings)

        assert config.upload_dir == tmp_path
        assert config.url_path == "media/images"
        assert config.max_gallery_images == 4
        assert config.file_type_map == {
            "image/png": "png",
            "image/jpeg": "jpeg",
            "image/jpg": "jpg",
        }


class TestFilenames:
    """Test the stored filename policy."""

    def test_filename_from_original_name_and_timestamp(self, upload_dir):
        binder = ImageBinder(UploadConfig(upload_dir=upload_dir), clock=lambda: 1700000000.5)

        name = binder.build_filename("my summer photo.png", "png")

        assert re.fullmatch(r"my-summer-photo\.png-1700000000500-[0-9a-f]{8}\.png", name)

    def test_same_timestamp_names_differ(self, upload_dir):
        binder = ImageBinder(UploadConfig(upload_dir=upload_dir), clock=lambda: 1.0)

        assert binder.build_filename("a.png", "png") != binder.build_filename("a.png", "png")

    def test_directory_components_dropped(self, binder):
        name = binder.build_filename("../../etc/evil.png", "png")

        assert name.startswith("evil.png-")

    def test_url_escapes_reserved_characters(self, binder):
        url = binder.public_url(ORIGIN, "a#b?.png-1-ab.png")

        assert url == f"{ORIGIN}/public/uploads/a%23b%3F.png-1-ab.png"

    @pytest.mark.parametrize(
        "content_type, extension",
        [("image/png", "png"), ("image/jpeg", "jpeg"), ("image/jpg", "jpg")],
    )
    def test_extension_from_content_type(self, binder, content_type, extension):
        destination = binder.resolve_destination(make_upload("pic", content_type))

        assert destination.suffix == f".{extension}"

    @pytest.mark.parametrize("content_type", ["image/gif", "application/pdf", ""])
    def test_unsupported_type_rejected(self, binder, upload_dir, content_type):
        with pytest.raises(UnsupportedImageType):
            binder.resolve_destination(make_upload("pic.gif", content_type))

        assert not upload_dir.exists()


class TestStore:
    """Test writing uploads."""

    @pytest.mark.asyncio
    async def test_store_writes_file_and_returns_url(self, binder, upload_dir):
        """Test that the file lands in the upload dir and the URL points at it."""
        url = await binder.store(make_upload("shoe.png"), ORIGIN)

        assert url.startswith(f"{ORIGIN}/public/uploads/shoe.png-")
        stored = upload_dir / url.rsplit("/", 1)[1]
        assert stored.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_store_rejects_type_before_writing(self, binder, upload_dir):
        with pytest.raises(UnsupportedImageType):
            await binder.store(make_upload("anim.gif", "image/gif"), ORIGIN)

        assert not upload_dir.exists()

    @pytest.mark.asyncio
    async def test_gallery_keeps_upload_order(self, binder, upload_dir):
        uploads = [make_upload(f"view{i}.jpg", "image/jpeg") for i in range(3)]

        urls = await binder.store_gallery(uploads, ORIGIN)

        names = [url.rsplit("/", 1)[1] for url in urls]
        assert [name.split("-")[0] for name in names] == ["view0.jpg", "view1.jpg", "view2.jpg"]
        assert sorted(p.name for p in upload_dir.iterdir()) == sorted(names)

    @pytest.mark.asyncio
    async def test_empty_gallery(self, binder):
        assert await binder.store_gallery([], ORIGIN) == []

    @pytest.mark.asyncio
    async def test_gallery_cap(self, upload_dir):
        binder = ImageBinder(UploadConfig(upload_dir=upload_dir, max_gallery_images=2))

        with pytest.raises(InvalidPayload):
            await binder.store_gallery([make_upload() for _ in range(3)], ORIGIN)

        assert not upload_dir.exists()

    @pytest.mark.asyncio
    async def test_gallery_checks_all_types_first(self, binder, upload_dir):
        """Test that one bad file prevents every file from being written."""
        uploads = [make_upload("ok.png"), make_upload("bad.gif", "image/gif")]

        with pytest.raises(UnsupportedImageType):
            await binder.store_gallery(uploads, ORIGIN)

        assert not upload_dir.exists()
