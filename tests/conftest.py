"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="oroya-tests-")

# Set env before any app imports so the cached settings pick it up
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("AUTO_MIGRATE", "false")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_ROOT}/oroya.db")
os.environ.setdefault("STORAGE_DIR", os.path.join(_TEST_ROOT, "storage"))

# ruff: noqa: E402 - Imports must be after env var setup
import io

import pytest
from PIL import Image

from src.oroya.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


def make_png(width: int = 64, height: int = 48, color: str = "red") -> bytes:
    """Encode a solid-color PNG in memory."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def large_png_bytes() -> bytes:
    """An image above the compression bounds (1920x1080)."""
    return make_png(2400, 1200, "blue")
