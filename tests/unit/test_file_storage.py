"""Tests for on-disk file storage and image variants."""

import base64
from pathlib import Path

import pytest
from PIL import Image

from src.oroya.core.config import Settings
from src.oroya.core.exceptions import NotFoundError, UploadError
from src.oroya.models.enums import FileVariant
from src.oroya.services.file_storage import FileStorage, decode_base64, variant_path

pytestmark = pytest.mark.unit

MB = 1024 * 1024


@pytest.fixture
def storage(tmp_path: Path) -> FileStorage:
    return FileStorage(Settings(storage_dir=tmp_path / "storage"))


async def test_png_gets_thumbnail_but_no_compressed_copy(storage: FileStorage, png_bytes: bytes):
    stored = await storage.save(png_bytes, "Logo.PNG", "image/png", 5 * MB)

    assert stored.filename == f"{stored.id}.png"
    assert stored.path == f"uploads/{stored.id}.png"
    assert stored.is_image is True
    assert (stored.width, stored.height) == (64, 48)
    assert stored.thumbnail_path == f"thumbnails/thumb_{stored.id}.jpg"
    assert stored.compressed_path is None

    with Image.open(storage.resolve(stored.thumbnail_path)) as thumb:
        assert thumb.format == "JPEG"
        assert thumb.size == (200, 200)
    assert storage.resolve(stored.path).read_bytes() == png_bytes


async def test_large_image_gets_compressed_copy(storage: FileStorage, large_png_bytes: bytes):
    stored = await storage.save(large_png_bytes, "banner.png", "image/png", 5 * MB)

    assert stored.compressed_path == f"compressed/compressed_{stored.id}.jpg"
    assert storage.resolve(stored.compressed_path).is_file()


async def test_pdf_stored_without_variants(storage: FileStorage):
    stored = await storage.save(b"%PDF-1.4 test", "report.pdf", "application/pdf", MB)

    assert stored.is_image is False
    assert stored.thumbnail_path is None
    assert stored.width is None
    assert await storage.read(stored.path) == b"%PDF-1.4 test"


async def test_svg_is_image_without_processing(storage: FileStorage):
    stored = await storage.save(b"<svg/>", "icon.svg", "image/svg+xml", MB)

    assert stored.is_image is True
    assert stored.thumbnail_path is None


async def test_disallowed_mimetype_rejected(storage: FileStorage):
    with pytest.raises(UploadError, match="File type not allowed"):
        await storage.save(b"MZ", "tool.exe", "application/x-msdownload", MB)


async def test_images_only_rejects_documents(storage: FileStorage):
    with pytest.raises(UploadError, match="Only image files are allowed"):
        await storage.save(b"%PDF", "report.pdf", "application/pdf", MB, images_only=True)


async def test_oversized_file_rejected(storage: FileStorage):
    with pytest.raises(UploadError, match="maximum allowed size"):
        await storage.save(b"x" * 2048, "notes.txt", "text/plain", 1024)


async def test_invalid_image_cleaned_up(storage: FileStorage):
    with pytest.raises(UploadError, match="is not a valid image"):
        await storage.save(b"not really a png", "broken.png", "image/png", MB)

    assert list((storage.root / "uploads").iterdir()) == []
    assert list((storage.root / "thumbnails").iterdir()) == []


def test_resolve_blocks_path_traversal(storage: FileStorage):
    with pytest.raises(NotFoundError):
        storage.resolve("../../etc/passwd")


async def test_read_missing_file(storage: FileStorage):
    storage.ensure_dirs()
    with pytest.raises(NotFoundError, match="missing from disk"):
        await storage.read("uploads/nothing.png")


async def test_delete_skips_missing_files(storage: FileStorage):
    stored = await storage.save(b"hello", "a.txt", "text/plain", MB)

    await storage.delete(stored.path, None, "uploads/gone.txt")

    assert not storage.resolve(stored.path).exists()


class TestDecodeBase64:
    def test_plain(self):
        assert decode_base64(base64.b64encode(b"hello").decode()) == b"hello"

    def test_data_url_prefix(self):
        payload = "data:text/plain;base64," + base64.b64encode(b"hello").decode()
        assert decode_base64(payload) == b"hello"

    def test_invalid(self):
        with pytest.raises(UploadError, match="Invalid base64 data"):
            decode_base64("not base64!!")


class TestVariantPath:
    def test_thumbnail_when_present(self):
        assert variant_path("u.png", None, "t.jpg", FileVariant.THUMBNAIL) == ("t.jpg", True)

    def test_compressed_falls_back_to_original(self):
        assert variant_path("u.png", None, "t.jpg", FileVariant.COMPRESSED) == ("u.png", False)

    def test_original(self):
        assert variant_path("u.png", "c.jpg", "t.jpg", FileVariant.ORIGINAL) == ("u.png", False)
