"""HTTP client for the Oroya API."""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

import httpx
from pydantic.alias_generators import to_camel

from src.oroya.schemas import (
    EntityRead,
    FieldRead,
    FileRead,
    FileUploadResponse,
    ProjectRead,
    StorageStats,
)

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """Non-2xx response, carrying the server's `{error, message}` body."""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.error!r}, {self.message!r})"


def _camel_body(data: Mapping[str, Any]) -> dict[str, Any]:
    body = {}
    for key, value in data.items():
        body[to_camel(key)] = str(value) if isinstance(value, UUID) else value
    return body


def _raise_for_error(response: httpx.Response) -> None:
    if not response.is_error:
        return
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    raise ApiError(
        response.status_code,
        body.get("error") or response.reason_phrase,
        body.get("message") or response.text or response.reason_phrase,
    )


class OroyaClient:
    """Async API client.

    Construct one per process and pass it to the stores that need it.
    Use as an async context manager, or call `aclose()` when done.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "OroyaClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body (None for 204).

        Raises:
            ApiError: On any non-2xx response.
            httpx.TransportError: When the server cannot be reached.
        """
        response = await self._http.request(method, url, **kwargs)
        _raise_for_error(response)
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    # Projects

    async def list_projects(self) -> list[ProjectRead]:
        data = await self._request("GET", "/api/projects")
        return [ProjectRead.model_validate(item) for item in data]

    async def get_project(self, project_id: UUID) -> ProjectRead:
        return ProjectRead.model_validate(await self._request("GET", f"/api/projects/{project_id}"))

    async def create_project(self, name: str, description: str | None = None) -> ProjectRead:
        data = await self._request(
            "POST", "/api/projects", json={"name": name, "description": description}
        )
        return ProjectRead.model_validate(data)

    async def update_project(self, project_id: UUID, changes: Mapping[str, Any]) -> ProjectRead:
        data = await self._request(
            "PATCH", f"/api/projects/{project_id}", json=_camel_body(changes)
        )
        return ProjectRead.model_validate(data)

    async def delete_project(self, project_id: UUID) -> None:
        await self._request("DELETE", f"/api/projects/{project_id}")

    # Entities

    async def list_entities(self, project_id: UUID) -> list[EntityRead]:
        data = await self._request("GET", f"/api/projects/{project_id}/entities")
        return [EntityRead.model_validate(item) for item in data]

    async def create_entity(
        self, project_id: UUID, name: str, description: str | None = None
    ) -> EntityRead:
        data = await self._request(
            "POST",
            f"/api/projects/{project_id}/entities",
            json={"name": name, "description": description},
        )
        return EntityRead.model_validate(data)

    async def update_entity(self, entity_id: UUID, changes: Mapping[str, Any]) -> EntityRead:
        data = await self._request("PATCH", f"/api/entities/{entity_id}", json=_camel_body(changes))
        return EntityRead.model_validate(data)

    async def delete_entity(self, entity_id: UUID) -> None:
        await self._request("DELETE", f"/api/entities/{entity_id}")

    # Fields

    async def list_fields(self, entity_id: UUID) -> list[FieldRead]:
        data = await self._request("GET", f"/api/entities/{entity_id}/fields")
        return [FieldRead.model_validate(item) for item in data]

    async def create_field(self, entity_id: UUID, data: Mapping[str, Any]) -> FieldRead:
        body = await self._request(
            "POST", f"/api/entities/{entity_id}/fields", json=_camel_body(data)
        )
        return FieldRead.model_validate(body)

    async def update_field(self, field_id: UUID, changes: Mapping[str, Any]) -> FieldRead:
        data = await self._request("PATCH", f"/api/fields/{field_id}", json=_camel_body(changes))
        return FieldRead.model_validate(data)

    async def delete_field(self, field_id: UUID) -> None:
        await self._request("DELETE", f"/api/fields/{field_id}")

    # Files

    async def list_files(self) -> list[FileRead]:
        data = await self._request("GET", "/api/files")
        return [FileRead.model_validate(item) for item in data]

    async def upload_files(
        self, files: list[tuple[str, bytes, str]], images_only: bool = False
    ) -> list[FileRead]:
        """Upload `(filename, content, mimetype)` tuples in one multipart request."""
        key = "images" if images_only else "files"
        url = "/api/files/upload/images" if images_only else "/api/files/upload"
        data = await self._request("POST", url, files=[(key, f) for f in files])
        return FileUploadResponse.model_validate(data).files

    async def rename_file(self, file_id: UUID, original_name: str) -> FileRead:
        data = await self._request(
            "PATCH", f"/api/files/{file_id}", json={"originalName": original_name}
        )
        return FileRead.model_validate(data)

    async def delete_file(self, file_id: UUID) -> None:
        await self._request("DELETE", f"/api/files/{file_id}")

    async def download_file(self, file_id: UUID, variant: str = "original") -> bytes:
        response = await self._http.get(f"/api/files/{file_id}", params={"variant": variant})
        _raise_for_error(response)
        return response.content

    async def storage_stats(self) -> StorageStats:
        return StorageStats.model_validate(await self._request("GET", "/api/files/stats"))
