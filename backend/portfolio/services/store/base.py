"""Store interface and the records it exchanges with the API layer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_AREA = "Sistemas"
DEFAULT_TYPE = "REPORTE"


@dataclass
class ProjectRecord:
    id: int
    name: str
    type: str
    area: str = DEFAULT_AREA
    modules: list[str] = field(default_factory=list)


@dataclass
class UploadMetadata:
    """Datos de un blob recién guardado, listos para persistir."""

    filename: str
    original_name: str
    mime_type: str | None
    retrieval_url: str
    size: int | None = None


@dataclass
class UploadRecord:
    module_key: str
    filename: str
    original_name: str
    mime_type: str | None
    retrieval_url: str
    size: int | None = None
    uploaded_at: datetime | None = None


class Store(ABC):
    """
    Persistencia de proyectos, flags de completado y uploads.

    Cualquier fallo de I/O se propaga como StoreError; no hay reintentos
    ni transacciones entre las tres colecciones.
    """

    async def init(self) -> None:
        """Preparar el almacén al arrancar la aplicación."""

    async def close(self) -> None:
        """Liberar recursos al cerrar la aplicación."""

    @abstractmethod
    async def list_projects(self) -> list[ProjectRecord]: ...

    @abstractmethod
    async def create_project(
        self,
        name: str,
        type: str = DEFAULT_TYPE,
        area: str | None = None,
        modules: list[str] | None = None,
    ) -> ProjectRecord: ...

    @abstractmethod
    async def delete_project(self, project_id: int) -> int:
        """Borrar un proyecto; devuelve 0 o 1. No borra completados ni uploads."""

    @abstractmethod
    async def list_completed(self) -> dict[str, bool]: ...

    @abstractmethod
    async def toggle_completion(self, module_key: str) -> bool:
        """Invertir el flag; una clave nueva queda en True."""

    @abstractmethod
    async def list_uploads(self) -> dict[str, UploadRecord]: ...

    @abstractmethod
    async def get_upload(self, module_key: str) -> UploadRecord | None: ...

    @abstractmethod
    async def swap_upload(
        self, module_key: str, metadata: UploadMetadata
    ) -> tuple[UploadRecord, UploadRecord | None]:
        """
        Insertar o reemplazar el upload de la clave (uno por clave).

        Devuelve (registro nuevo, registro reemplazado o None). La lectura
        del anterior y la escritura del nuevo ocurren bajo el mismo bloqueo,
        así dos reemplazos simultáneos nunca ven el mismo registro anterior.
        """

    async def upsert_upload(self, module_key: str, metadata: UploadMetadata) -> UploadRecord:
        """Insertar o reemplazar el upload de la clave (uno por clave)."""
        record, _ = await self.swap_upload(module_key, metadata)
        return record

    @abstractmethod
    async def delete_upload(self, module_key: str) -> UploadRecord | None:
        """Borrar el upload; devuelve el registro eliminado o None si no existía."""
