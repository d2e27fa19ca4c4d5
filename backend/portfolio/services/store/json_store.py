"""Single-file JSON store for local, single-process deployments."""

import asyncio
import copy
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from portfolio.core.errors import StoreError
from portfolio.services.blobs.local import UPLOADS_ROUTE
from portfolio.services.store.base import (
    DEFAULT_AREA,
    DEFAULT_TYPE,
    ProjectRecord,
    Store,
    UploadMetadata,
    UploadRecord,
)
from portfolio.services.store.seed import DEMO_PROJECTS

logger = logging.getLogger(__name__)


def _empty_document() -> dict[str, Any]:
    return {"projects": [], "completedModules": {}, "uploads": {}}


def _relative_url(filename: str) -> str:
    return f"{UPLOADS_ROUTE}/{filename}"


def _parse_date(value: str) -> datetime:
    # Fechas ISO con sufijo "Z" (toISOString) en archivos existentes
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class JsonStore(Store):
    """
    Store sobre un único documento JSON.

    El documento completo vive en memoria y se reescribe entero en disco
    (flush) después de cada mutación. Cada mutación trabaja sobre una copia
    que solo sustituye al documento en memoria si la escritura tuvo éxito:
    un flush fallido no deja cambios a medias. Las mutaciones van bajo un
    único asyncio.Lock (escritor único dentro del proceso); varios procesos
    apuntando al mismo archivo pueden perder actualizaciones.

    Los uploads guardan solo `filename`; la URL de vista previa se
    reconstruye al leer con `url_builder` (el del servicio de blobs).

    Formato en disco:
        {"projects": [...], "completedModules": {key: bool}, "uploads": {key: {...}}}
    """

    def __init__(
        self,
        path: str | Path,
        seed_demo_data: bool = True,
        url_builder: Callable[[str], str] | None = None,
    ) -> None:
        self.path = Path(path)
        self.seed_demo_data = seed_demo_data
        self.url_builder = url_builder or _relative_url
        self._data: dict[str, Any] = _empty_document()
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        await self.load()

    async def load(self) -> None:
        """
        Cargar el documento desde disco o crearlo.

        Si el archivo existe pero no se puede leer, se registra el error y
        se arranca con un documento vacío.
        """
        if self.path.exists():
            try:
                raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
                data = json.loads(raw)
                for key, default in _empty_document().items():
                    data.setdefault(key, default)
                self._data = data
                logger.info(f"Data loaded from {self.path}")
            except (OSError, ValueError) as e:
                logger.error(f"Error reading {self.path}: {str(e)}")
                self._data = _empty_document()
            return

        logger.info(f"No data file found at {self.path}, creating a new one")
        data = _empty_document()
        if self.seed_demo_data:
            data["projects"] = copy.deepcopy(DEMO_PROJECTS)
        await self._commit(data)

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    async def _commit(self, data: dict[str, Any]) -> None:
        """Escribir `data` en disco y, solo si funciona, adoptarlo en memoria."""
        try:
            await asyncio.to_thread(self._write, data)
        except OSError as e:
            logger.error(f"Error writing {self.path}: {str(e)}")
            raise StoreError(f"Error writing data file: {e}") from e
        self._data = data

    def _snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def _to_upload_record(self, module_key: str, data: dict[str, Any]) -> UploadRecord:
        uploaded_at = data.get("uploadDate")
        return UploadRecord(
            module_key=module_key,
            filename=data["filename"],
            original_name=data.get("original_name", data["filename"]),
            mime_type=data.get("mime_type"),
            retrieval_url=self.url_builder(data["filename"]),
            size=data.get("size"),
            uploaded_at=_parse_date(uploaded_at) if uploaded_at else None,
        )

    async def list_projects(self) -> list[ProjectRecord]:
        return [
            ProjectRecord(
                id=p["id"],
                name=p["name"],
                type=p.get("type", DEFAULT_TYPE),
                area=p.get("area") or DEFAULT_AREA,
                modules=list(p.get("modules") or []),
            )
            for p in self._data["projects"]
        ]

    async def create_project(
        self,
        name: str,
        type: str = DEFAULT_TYPE,
        area: str | None = None,
        modules: list[str] | None = None,
    ) -> ProjectRecord:
        async with self._lock:
            data = self._snapshot()
            # Id simple: max id + 1 (una colección vacía vuelve a empezar en 1)
            max_id = max((p["id"] for p in data["projects"]), default=0)
            project = {
                "id": max_id + 1,
                "name": name,
                "type": type,
                "area": area or DEFAULT_AREA,
                "modules": list(modules or []),
            }
            data["projects"].append(project)
            await self._commit(data)
        logger.info(f"Created project {project['id']} ({name})")
        return ProjectRecord(**project)

    async def delete_project(self, project_id: int) -> int:
        async with self._lock:
            data = self._snapshot()
            before = len(data["projects"])
            data["projects"] = [p for p in data["projects"] if p["id"] != project_id]
            deleted = before - len(data["projects"])
            if deleted:
                await self._commit(data)
        logger.info(f"Deleted project {project_id}: {deleted} row(s)")
        return deleted

    async def list_completed(self) -> dict[str, bool]:
        return dict(self._data["completedModules"])

    async def toggle_completion(self, module_key: str) -> bool:
        async with self._lock:
            data = self._snapshot()
            new_state = not bool(data["completedModules"].get(module_key))
            data["completedModules"][module_key] = new_state
            await self._commit(data)
            return new_state

    async def list_uploads(self) -> dict[str, UploadRecord]:
        return {
            key: self._to_upload_record(key, data)
            for key, data in self._data["uploads"].items()
        }

    async def get_upload(self, module_key: str) -> UploadRecord | None:
        data = self._data["uploads"].get(module_key)
        return self._to_upload_record(module_key, data) if data else None

    async def swap_upload(
        self, module_key: str, metadata: UploadMetadata
    ) -> tuple[UploadRecord, UploadRecord | None]:
        async with self._lock:
            data = self._snapshot()
            previous = data["uploads"].get(module_key)
            entry = {
                "filename": metadata.filename,
                "original_name": metadata.original_name,
                "mime_type": metadata.mime_type,
                "size": metadata.size,
                "uploadDate": datetime.now(timezone.utc).isoformat(),
            }
            data["uploads"][module_key] = entry
            await self._commit(data)
        replaced = self._to_upload_record(module_key, previous) if previous else None
        return self._to_upload_record(module_key, entry), replaced

    async def delete_upload(self, module_key: str) -> UploadRecord | None:
        async with self._lock:
            data = self._snapshot()
            removed = data["uploads"].pop(module_key, None)
            if removed is None:
                return None
            await self._commit(data)
        return self._to_upload_record(module_key, removed)
