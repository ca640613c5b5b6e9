"""In-memory mirrors of server state with a best-effort offline fallback.

Each store keeps `items`, `loading` and `error`, and persists its items
to a JSON file when a path is given. Mutations validate names against the
mirror before calling the server. When the server cannot be reached or
fails with a 5xx, the mutation is applied to the mirror only and the
result is `Ok(..., source="local")` with a degraded-mode `error`. A 4xx
response is returned as `Err` and leaves the mirror untouched.
"""

from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import Any, ClassVar
from uuid import UUID

import aiofiles
import aiofiles.os
import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.oroya.client.api import ApiError, OroyaClient
from src.oroya.client.result import Err, Ok, Result
from src.oroya.core.logging import get_logger
from src.oroya.core.validators import (
    validate_entity_name,
    validate_field_name,
    validate_project_name,
)
from src.oroya.models.base import new_id, utc_now
from src.oroya.schemas import CamelModel, EntityRead, FieldCreate, FieldRead, FileRead, ProjectRead

logger = get_logger(__name__)

Listener = Callable[[], None]


class Store[ItemT: CamelModel]:
    """Shared state, persistence and remote-or-local mutation flow."""

    item_model: ClassVar[type[CamelModel]]
    label: ClassVar[str]

    def __init__(self, client: OroyaClient, storage_path: Path | str | None = None):
        self.client = client
        self.storage_path = Path(storage_path) if storage_path else None
        self.items: list[ItemT] = []
        self.loading = False
        self.error: str | None = None
        self._listeners: list[Listener] = []
        self._adapter: TypeAdapter[list[ItemT]] = TypeAdapter(list[self.item_model])  # type: ignore[name-defined]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def get(self, item_id: UUID) -> ItemT | None:
        return next((item for item in self.items if item.id == item_id), None)  # type: ignore[attr-defined]

    async def load(self) -> None:
        """Restore items saved by a previous session."""
        if self.storage_path is None or not await aiofiles.os.path.isfile(self.storage_path):
            return
        async with aiofiles.open(self.storage_path, mode="rb") as f:
            raw = await f.read()
        try:
            self.items = self._adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("store_state_unreadable", store=self.label, error=str(e))
            self.items = []
        self._notify()

    async def save(self) -> None:
        if self.storage_path is None:
            return
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.storage_path, mode="wb") as f:
            await f.write(self._adapter.dump_json(self.items, by_alias=True))

    def _reject(self, reason: str) -> Err:
        self.error = reason
        self._notify()
        return Err(reason)

    async def _run[T](
        self,
        remote: Callable[[], Awaitable[T]],
        on_remote: Callable[[T], Any],
        local: Callable[[], T | Err] | None,
        degraded_message: str,
    ) -> Result[T]:
        """Try the server first; fall back to `local` when it is unavailable.

        Without a `local` fallback an unavailable server is an `Err`. `local` may itself
        return an `Err` when the mirror no longer holds what it needs.
        """
        self.loading = True
        self.error = None
        self._notify()
        try:
            value = await remote()
        except ApiError as e:
            if not e.is_server_error:
                self.loading = False
                return self._reject(e.message)
            logger.warning(
                "store_remote_failed", store=self.label, status_code=e.status_code, error=e.message
            )
        except httpx.TransportError as e:
            logger.warning("store_remote_unreachable", store=self.label, error=str(e))
        else:
            on_remote(value)
            self.loading = False
            await self.save()
            self._notify()
            return Ok(value)

        self.loading = False
        if local is None:
            return self._reject(degraded_message)
        value = local()
        if isinstance(value, Err):
            return value
        self.error = degraded_message
        await self.save()
        self._notify()
        return Ok(value, source="local")

    def _replace(self, item: ItemT) -> None:
        for index, existing in enumerate(self.items):
            if existing.id == item.id:  # type: ignore[attr-defined]
                self.items[index] = item
                return
        self.items.append(item)

    def _remove(self, item_id: UUID) -> None:
        self.items = [item for item in self.items if item.id != item_id]  # type: ignore[attr-defined]

    def _patch_local(self, item_id: UUID, changes: dict[str, Any]) -> ItemT | Err:
        item = self.get(item_id)
        if item is None:
            return self._not_loaded(item_id)
        patched = item.model_copy(update={**changes, "updated_at": utc_now()})
        self._replace(patched)  # type: ignore[arg-type]
        return patched  # type: ignore[return-value]

    def _replace_where(self, keep: Callable[[ItemT], bool], fresh: Iterable[ItemT]) -> None:
        self.items = [item for item in self.items if keep(item)] + list(fresh)

    def _not_loaded(self, item_id: UUID) -> Err:
        return self._reject(f"{self.label.capitalize()} {item_id} is not loaded")


class ProjectStore(Store[ProjectRead]):
    item_model = ProjectRead
    label = "project"

    def __init__(self, client: OroyaClient, storage_path: Path | str | None = None):
        super().__init__(client, storage_path)
        self.current: ProjectRead | None = None

    def select(self, project_id: UUID | None) -> None:
        self.current = self.get(project_id) if project_id else None
        self._notify()

    def _names(self, exclude_id: UUID | None = None) -> list[str]:
        return [p.name for p in self.items if p.id != exclude_id]

    def _sync_current(self) -> None:
        if self.current is not None:
            self.current = self.get(self.current.id)

    async def fetch(self) -> Result[list[ProjectRead]]:
        def on_remote(projects: list[ProjectRead]) -> None:
            self.items = list(projects)
            self._sync_current()

        return await self._run(
            self.client.list_projects,
            on_remote,
            lambda: list(self.items),
            "API unavailable, showing locally saved projects",
        )

    async def create(self, name: str, description: str | None = None) -> Result[ProjectRead]:
        if error := validate_project_name(name, self._names()):
            return self._reject(error)

        def local() -> ProjectRead:
            now = utc_now()
            project = ProjectRead(
                id=new_id(), name=name, description=description, created_at=now, updated_at=now
            )
            self.items.append(project)
            return project

        return await self._run(
            lambda: self.client.create_project(name, description),
            self.items.append,
            local,
            "API unavailable, project created locally",
        )

    async def update(self, project_id: UUID, **changes: Any) -> Result[ProjectRead]:
        if self.get(project_id) is None:
            return self._not_loaded(project_id)
        if "name" in changes and (
            error := validate_project_name(changes["name"], self._names(exclude_id=project_id))
        ):
            return self._reject(error)

        def on_remote(project: ProjectRead) -> None:
            self._replace(project)
            self._sync_current()

        def local() -> ProjectRead | Err:
            project = self._patch_local(project_id, changes)
            if isinstance(project, Err):
                return project
            self._sync_current()
            return project

        return await self._run(
            lambda: self.client.update_project(project_id, changes),
            on_remote,
            local,
            "API unavailable, changes saved locally",
        )

    async def delete(self, project_id: UUID) -> Result[None]:
        def remove(_: object = None) -> None:
            self._remove(project_id)
            if self.current is not None and self.current.id == project_id:
                self.current = None

        return await self._run(
            lambda: self.client.delete_project(project_id),
            remove,
            remove,
            "API unavailable, project deleted locally",
        )


class EntityStore(Store[EntityRead]):
    """Entities of every loaded project."""

    item_model = EntityRead
    label = "entity"

    def for_project(self, project_id: UUID) -> list[EntityRead]:
        return [e for e in self.items if e.project_id == project_id]

    def _sibling_names(self, project_id: UUID, exclude_id: UUID | None = None) -> list[str]:
        return [e.name for e in self.for_project(project_id) if e.id != exclude_id]

    async def fetch(self, project_id: UUID) -> Result[list[EntityRead]]:
        return await self._run(
            lambda: self.client.list_entities(project_id),
            lambda entities: self._replace_where(lambda e: e.project_id != project_id, entities),
            lambda: self.for_project(project_id),
            "API unavailable, showing locally saved entities",
        )

    async def create(
        self, project_id: UUID, name: str, description: str | None = None
    ) -> Result[EntityRead]:
        if error := validate_entity_name(name, self._sibling_names(project_id)):
            return self._reject(error)

        def local() -> EntityRead:
            now = utc_now()
            entity = EntityRead(
                id=new_id(),
                project_id=project_id,
                name=name,
                description=description,
                created_at=now,
                updated_at=now,
            )
            self.items.append(entity)
            return entity

        return await self._run(
            lambda: self.client.create_entity(project_id, name, description),
            self.items.append,
            local,
            "API unavailable, entity created locally",
        )

    async def update(self, entity_id: UUID, **changes: Any) -> Result[EntityRead]:
        entity = self.get(entity_id)
        if entity is None:
            return self._not_loaded(entity_id)
        if "name" in changes and (
            error := validate_entity_name(
                changes["name"], self._sibling_names(entity.project_id, exclude_id=entity_id)
            )
        ):
            return self._reject(error)

        return await self._run(
            lambda: self.client.update_entity(entity_id, changes),
            self._replace,
            lambda: self._patch_local(entity_id, changes),
            "API unavailable, changes saved locally",
        )

    async def delete(self, entity_id: UUID) -> Result[None]:
        return await self._run(
            lambda: self.client.delete_entity(entity_id),
            lambda _: self._remove(entity_id),
            lambda: self._remove(entity_id),
            "API unavailable, entity deleted locally",
        )


class FieldStore(Store[FieldRead]):
    """Fields of every loaded entity."""

    item_model = FieldRead
    label = "field"

    def for_entity(self, entity_id: UUID) -> list[FieldRead]:
        return [f for f in self.items if f.entity_id == entity_id]

    def _sibling_names(self, entity_id: UUID, exclude_id: UUID | None = None) -> list[str]:
        return [f.name for f in self.for_entity(entity_id) if f.id != exclude_id]

    async def fetch(self, entity_id: UUID) -> Result[list[FieldRead]]:
        return await self._run(
            lambda: self.client.list_fields(entity_id),
            lambda fields: self._replace_where(lambda f: f.entity_id != entity_id, fields),
            lambda: self.for_entity(entity_id),
            "API unavailable, showing locally saved fields",
        )

    async def create(self, entity_id: UUID, **data: Any) -> Result[FieldRead]:
        """Create a field from snake_case keyword options (name, type, required, ...)."""
        if error := validate_field_name(str(data.get("name", "")), self._sibling_names(entity_id)):
            return self._reject(error)
        try:
            field = FieldCreate.model_validate(data)
        except PydanticValidationError as e:
            return self._reject(str(e.errors()[0]["msg"]).removeprefix("Value error, "))

        def local() -> FieldRead:
            now = utc_now()
            created = FieldRead(
                id=new_id(),
                entity_id=entity_id,
                created_at=now,
                updated_at=now,
                **field.model_dump(),
            )
            self.items.append(created)
            return created

        return await self._run(
            lambda: self.client.create_field(entity_id, field.model_dump(mode="json")),
            self.items.append,
            local,
            "API unavailable, field created locally",
        )

    async def update(self, field_id: UUID, **changes: Any) -> Result[FieldRead]:
        field = self.get(field_id)
        if field is None:
            return self._not_loaded(field_id)
        if "name" in changes and (
            error := validate_field_name(
                changes["name"], self._sibling_names(field.entity_id, exclude_id=field_id)
            )
        ):
            return self._reject(error)

        return await self._run(
            lambda: self.client.update_field(field_id, changes),
            self._replace,
            lambda: self._patch_local(field_id, changes),
            "API unavailable, changes saved locally",
        )

    async def delete(self, field_id: UUID) -> Result[None]:
        return await self._run(
            lambda: self.client.delete_field(field_id),
            lambda _: self._remove(field_id),
            lambda: self._remove(field_id),
            "API unavailable, field deleted locally",
        )


class FileStore(Store[FileRead]):
    """Uploaded files.

    Uploads and deletes need the server: there are no bytes to keep
    locally, so those return `Err` while offline. Renames fall back to
    the mirror like the other stores.
    """

    item_model = FileRead
    label = "file"

    async def fetch(self) -> Result[list[FileRead]]:
        def on_remote(files: list[FileRead]) -> None:
            self.items = list(files)

        return await self._run(
            self.client.list_files,
            on_remote,
            lambda: list(self.items),
            "API unavailable, showing locally saved files",
        )

    async def upload(
        self, files: list[tuple[str, bytes, str]], images_only: bool = False
    ) -> Result[list[FileRead]]:
        return await self._run(
            lambda: self.client.upload_files(files, images_only=images_only),
            self.items.extend,
            None,
            "API unavailable, files were not uploaded",
        )

    async def rename(self, file_id: UUID, original_name: str) -> Result[FileRead]:
        if self.get(file_id) is None:
            return self._not_loaded(file_id)
        if not original_name.strip():
            return self._reject("File name cannot be empty")

        return await self._run(
            lambda: self.client.rename_file(file_id, original_name.strip()),
            self._replace,
            lambda: self._patch_local(file_id, {"original_name": original_name.strip()}),
            "API unavailable, changes saved locally",
        )

    async def delete(self, file_id: UUID) -> Result[None]:
        return await self._run(
            lambda: self.client.delete_file(file_id),
            lambda _: self._remove(file_id),
            None,
            "API unavailable, file was not deleted",
        )
