"""Tests for reading multipart uploads under a size limit."""

import io

import pytest
from fastapi import UploadFile

from src.oroya.api.v1 import files
from src.oroya.core.exceptions import UploadError

pytestmark = pytest.mark.unit


def make_upload(content: bytes, size: int | None = None) -> UploadFile:
    return UploadFile(io.BytesIO(content), size=size, filename="data.bin")


async def test_reads_whole_upload_in_chunks(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(files, "_READ_CHUNK_SIZE", 3)

    content = await files._read_limited(make_upload(b"0123456789"), max_size=10)

    assert content == b"0123456789"


async def test_stops_once_limit_is_passed(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(files, "_READ_CHUNK_SIZE", 4)
    upload = make_upload(b"x" * 100)

    with pytest.raises(UploadError, match="maximum allowed size"):
        await files._read_limited(upload, max_size=10)

    # Only the chunks up to the limit were consumed
    assert upload.file.tell() == 12


async def test_declared_size_rejected_without_reading():
    upload = make_upload(b"x" * 20, size=20)

    with pytest.raises(UploadError, match="maximum allowed size"):
        await files._read_limited(upload, max_size=10)

    assert upload.file.tell() == 0
