"""On-disk storage for uploaded files and their image variants."""

import asyncio
import base64
import binascii
import io
from dataclasses import asdict, dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Final
from uuid import UUID

import aiofiles
import aiofiles.os
from PIL import Image, ImageOps, UnidentifiedImageError

from src.oroya.core.config import Settings
from src.oroya.core.exceptions import NotFoundError, UploadError
from src.oroya.core.logging import get_logger
from src.oroya.models.base import new_id
from src.oroya.models.enums import FileVariant

logger = get_logger(__name__)

UPLOADS_DIR: Final[str] = "uploads"
THUMBNAILS_DIR: Final[str] = "thumbnails"
COMPRESSED_DIR: Final[str] = "compressed"

RASTER_IMAGE_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)
ALLOWED_MIME_TYPES: Final[frozenset[str]] = RASTER_IMAGE_TYPES | frozenset(
    {
        "image/svg+xml",
        "application/pdf",
        "text/plain",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)


@dataclass
class StoredFile:
    """Result of persisting one upload, ready to become a FileRecord."""

    id: UUID
    original_name: str
    filename: str
    mimetype: str
    size: int
    path: str
    is_image: bool
    width: int | None = None
    height: int | None = None
    compressed_path: str | None = None
    thumbnail_path: str | None = None

    def record_data(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("id")
        return data

    def paths(self) -> list[str]:
        return [p for p in (self.path, self.thumbnail_path, self.compressed_path) if p]


def decode_base64(data: str) -> bytes:
    """Decode base64 text, accepting an optional `data:<mime>;base64,` prefix."""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise UploadError("Invalid base64 data") from e


def _format_mb(size: int) -> str:
    return f"{size / 1024 / 1024:g}MB"


def file_too_large(max_size: int) -> UploadError:
    return UploadError(f"File exceeds the maximum allowed size ({_format_mb(max_size)})")


class FileStorage:
    """Writes uploads under a storage root.

    Paths handed out are relative to the root (e.g. "uploads/<id>.png")
    so the database stays valid if the root moves.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.root = Path(settings.storage_dir)

    def ensure_dirs(self) -> None:
        for name in (UPLOADS_DIR, THUMBNAILS_DIR, COMPRESSED_DIR):
            (self.root / name).mkdir(parents=True, exist_ok=True)

    def resolve(self, relative_path: str) -> Path:
        """Map a stored relative path to a file under the root."""
        root = self.root.resolve()
        target = (root / relative_path).resolve()
        if not target.is_relative_to(root):
            raise NotFoundError("File not found")
        return target

    def validate(
        self,
        size: int,
        mimetype: str,
        max_size: int,
        images_only: bool = False,
    ) -> None:
        """Reject uploads by size and type before anything touches disk."""
        if size > max_size:
            raise file_too_large(max_size)
        if images_only and mimetype not in RASTER_IMAGE_TYPES:
            raise UploadError(f"Only image files are allowed, got {mimetype}")
        if mimetype not in ALLOWED_MIME_TYPES:
            raise UploadError(f"File type not allowed: {mimetype}")

    async def save(
        self,
        content: bytes,
        original_name: str,
        mimetype: str,
        max_size: int,
        images_only: bool = False,
    ) -> StoredFile:
        """Validate and store one file, generating image variants.

        Raster images get their dimensions recorded, a square JPEG
        thumbnail, and a compressed JPEG copy when they exceed the
        configured bounds. Anything written is removed again on failure.
        """
        self.validate(len(content), mimetype, max_size, images_only)
        self.ensure_dirs()

        file_id = new_id()
        ext = PurePosixPath(original_name).suffix.lower()
        filename = f"{file_id}{ext}"
        stored = StoredFile(
            id=file_id,
            original_name=original_name,
            filename=filename,
            mimetype=mimetype,
            size=len(content),
            path=f"{UPLOADS_DIR}/{filename}",
            is_image=mimetype.startswith("image/"),
        )

        try:
            async with aiofiles.open(self.resolve(stored.path), mode="wb") as f:
                await f.write(content)
            if mimetype in RASTER_IMAGE_TYPES:
                await asyncio.to_thread(self._process_image, content, stored)
        except UnidentifiedImageError as e:
            await self.delete(*stored.paths())
            raise UploadError(f"'{original_name}' is not a valid image") from e
        except Exception:
            await self.delete(*stored.paths())
            raise

        logger.info(
            "file_stored",
            file_id=str(file_id),
            mimetype=mimetype,
            size=stored.size,
            is_image=stored.is_image,
        )
        return stored

    def _process_image(self, content: bytes, stored: StoredFile) -> None:
        settings = self.settings
        with Image.open(io.BytesIO(content)) as img:
            stored.width, stored.height = img.size
            rgb = img.convert("RGB")

            thumbnail_path = f"{THUMBNAILS_DIR}/thumb_{stored.id}.jpg"
            thumbnail = ImageOps.fit(
                rgb, (settings.thumbnail_size, settings.thumbnail_size), centering=(0.5, 0.5)
            )
            thumbnail.save(
                self.resolve(thumbnail_path), "JPEG", quality=settings.thumbnail_quality
            )
            stored.thumbnail_path = thumbnail_path

            if (
                stored.width > settings.compress_max_width
                or stored.height > settings.compress_max_height
            ):
                compressed_path = f"{COMPRESSED_DIR}/compressed_{stored.id}.jpg"
                rgb.save(
                    self.resolve(compressed_path), "JPEG", quality=settings.compression_quality
                )
                stored.compressed_path = compressed_path

    async def read(self, relative_path: str) -> bytes:
        path = self.resolve(relative_path)
        if not await aiofiles.os.path.isfile(path):
            raise NotFoundError("Stored file is missing from disk")
        async with aiofiles.open(path, mode="rb") as f:
            return await f.read()

    async def delete(self, *relative_paths: str | None) -> None:
        """Remove stored files. Missing files are skipped."""
        for relative_path in relative_paths:
            if not relative_path:
                continue
            try:
                await aiofiles.os.remove(self.resolve(relative_path))
            except FileNotFoundError:
                logger.debug("file_already_removed", path=relative_path)
            except OSError as e:
                logger.warning("file_remove_failed", path=relative_path, error=str(e))


def variant_path(
    path: str,
    compressed_path: str | None,
    thumbnail_path: str | None,
    variant: FileVariant,
) -> tuple[str, bool]:
    """Pick the stored path for a variant, falling back to the original.

    Returns:
        Tuple of (path, is_jpeg_variant)
    """
    if variant == FileVariant.COMPRESSED and compressed_path:
        return compressed_path, True
    if variant == FileVariant.THUMBNAIL and thumbnail_path:
        return thumbnail_path, True
    return path, False
