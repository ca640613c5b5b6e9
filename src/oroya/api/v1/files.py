"""File upload, download and association endpoints."""

from typing import Annotated
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, File, Path, Query, Response, UploadFile

from src.oroya.api.dependencies import FileServiceDep
from src.oroya.models import FileVariant
from src.oroya.schemas import (
    Base64Upload,
    Base64UploadResponse,
    FieldFileAttach,
    FieldFileRead,
    FieldFilesResponse,
    FileBase64Response,
    FileRead,
    FileRename,
    FileUploadResponse,
    MessageResponse,
    StorageStats,
)
from src.oroya.services.file_service import FileService, IncomingFile
from src.oroya.services.file_storage import file_too_large

router = APIRouter(prefix="/files", tags=["files"])

RecordId = Annotated[str, Path(min_length=1, max_length=100)]
VariantQuery = Annotated[FileVariant, Query(description="Which stored copy to return")]
_READ_CHUNK_SIZE = 1024 * 1024


async def _read_limited(upload: UploadFile, max_size: int) -> bytes:
    """Read an upload in chunks, giving up as soon as it passes `max_size`."""
    if upload.size is not None and upload.size > max_size:
        raise file_too_large(max_size)
    chunks: list[bytes] = []
    total = 0
    while chunk := await upload.read(_READ_CHUNK_SIZE):
        total += len(chunk)
        if total > max_size:
            raise file_too_large(max_size)
        chunks.append(chunk)
    return b"".join(chunks)


async def _read_uploads(
    uploads: list[UploadFile] | None, service: FileService, images_only: bool = False
) -> list[IncomingFile]:
    uploads = uploads or []
    max_size = service.check_batch(len(uploads), images_only)
    incoming = []
    for upload in uploads:
        incoming.append(
            IncomingFile(
                content=await _read_limited(upload, max_size),
                filename=upload.filename or "upload",
                mimetype=upload.content_type or "application/octet-stream",
            )
        )
    return incoming


@router.get(
    "",
    response_model=list[FileRead],
    summary="List files",
)
async def list_files(service: FileServiceDep) -> list[FileRead]:
    files = await service.list_files()
    return [FileRead.model_validate(f) for f in files]


@router.post(
    "/upload",
    response_model=FileUploadResponse,
    status_code=201,
    summary="Upload files",
    description="Multipart upload under the `files` key. The batch is stored all-or-nothing.",
    responses={400: {"description": "No files, too many files, too large or type not allowed"}},
)
async def upload_files(
    service: FileServiceDep,
    files: Annotated[list[UploadFile] | None, File()] = None,
) -> FileUploadResponse:
    records = await service.upload_files(await _read_uploads(files, service))
    return FileUploadResponse(
        message=f"{len(records)} file(s) uploaded successfully",
        files=[FileRead.model_validate(r) for r in records],
    )


@router.post(
    "/upload/images",
    response_model=FileUploadResponse,
    status_code=201,
    summary="Upload images",
    description="Multipart upload under the `images` key. Raster images only.",
    responses={400: {"description": "No images, too many, too large or not an image"}},
)
async def upload_images(
    service: FileServiceDep,
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> FileUploadResponse:
    records = await service.upload_files(
        await _read_uploads(images, service, images_only=True), images_only=True
    )
    return FileUploadResponse(
        message=f"{len(records)} image(s) uploaded successfully",
        files=[FileRead.model_validate(r) for r in records],
    )


@router.post(
    "/upload/base64",
    response_model=Base64UploadResponse,
    status_code=201,
    summary="Upload a base64 encoded file",
    description="Optionally attaches the file to a record when `fieldId` and `recordId` are set.",
)
async def upload_base64(body: Base64Upload, service: FileServiceDep) -> Base64UploadResponse:
    record = await service.upload_base64(body)
    return Base64UploadResponse(
        message="File uploaded successfully",
        file=FileRead.model_validate(record),
    )


@router.get("/stats", response_model=StorageStats, summary="Storage statistics")
async def storage_stats(service: FileServiceDep) -> StorageStats:
    return StorageStats.model_validate(await service.storage_stats())


@router.get(
    "/orphans",
    response_model=list[FileRead],
    summary="List orphan files",
    description="Files not attached to any field record.",
)
async def list_orphans(service: FileServiceDep) -> list[FileRead]:
    files = await service.list_orphans()
    return [FileRead.model_validate(f) for f in files]


@router.get(
    "/field/{field_id}/record/{record_id}",
    response_model=FieldFilesResponse,
    summary="List files of a record",
)
async def list_record_files(
    field_id: UUID, record_id: RecordId, service: FileServiceDep
) -> FieldFilesResponse:
    files = await service.list_for_record(field_id, record_id)
    return FieldFilesResponse(files=[FileRead.model_validate(f) for f in files])


@router.post(
    "/field/{field_id}/record/{record_id}",
    response_model=FieldFileRead,
    status_code=201,
    summary="Attach a file to a record",
    responses={
        400: {"description": "File is already attached"},
        404: {"description": "Field or file not found"},
    },
)
async def attach_file(
    field_id: UUID, record_id: RecordId, body: FieldFileAttach, service: FileServiceDep
) -> FieldFileRead:
    link = await service.attach(field_id, record_id, body.file_id)
    return FieldFileRead.model_validate(link)


@router.delete(
    "/field/{field_id}/record/{record_id}/{file_id}",
    response_model=MessageResponse,
    summary="Detach a file from a record",
    description="Removes the association only. The file itself is kept.",
    responses={404: {"description": "File is not attached to this record"}},
)
async def detach_file(
    field_id: UUID, record_id: RecordId, file_id: UUID, service: FileServiceDep
) -> MessageResponse:
    await service.detach(field_id, record_id, file_id)
    return MessageResponse(message="File detached successfully")


@router.get(
    "/{file_id}",
    summary="Download file",
    response_class=Response,
    responses={
        200: {"description": "File bytes"},
        404: {"description": "File not found"},
    },
)
async def download_file(
    file_id: UUID,
    service: FileServiceDep,
    variant: VariantQuery = FileVariant.ORIGINAL,
) -> Response:
    file = await service.read_file(file_id, variant)
    return Response(
        content=file.content,
        media_type=file.media_type,
        headers={
            "Content-Disposition": (
                f"inline; filename*=UTF-8''{quote(file.record.original_name)}"
            ),
            "Cache-Control": "public, max-age=31536000",
        },
    )


@router.get(
    "/{file_id}/base64",
    response_model=FileBase64Response,
    summary="Download file as base64",
    responses={404: {"description": "File not found"}},
)
async def download_file_base64(
    file_id: UUID,
    service: FileServiceDep,
    variant: VariantQuery = FileVariant.ORIGINAL,
) -> FileBase64Response:
    return FileBase64Response.model_validate(await service.read_base64(file_id, variant))


@router.patch(
    "/{file_id}",
    response_model=FileRead,
    summary="Rename file",
    description="Changes the display name only. The stored filename is kept.",
    responses={404: {"description": "File not found"}},
)
async def rename_file(file_id: UUID, body: FileRename, service: FileServiceDep) -> FileRead:
    record = await service.rename_file(file_id, body.original_name)
    return FileRead.model_validate(record)


@router.delete(
    "/{file_id}",
    response_model=MessageResponse,
    summary="Delete file",
    description="Deletes the file, its record associations and every stored copy.",
    responses={404: {"description": "File not found"}},
)
async def delete_file(file_id: UUID, service: FileServiceDep) -> MessageResponse:
    await service.delete_file(file_id)
    return MessageResponse(message="File deleted successfully")
