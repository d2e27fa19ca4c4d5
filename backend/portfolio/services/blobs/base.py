"""Blob Service interface and reference naming."""

import re
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredBlob:
    reference: str
    retrieval_url: str
    size: int


def generate_reference(suggested_key: str, original_name: str | None = None) -> str:
    """
    Generar una referencia única para el blob.

    Combina la clave sugerida (saneada), el timestamp en milisegundos y un
    sufijo aleatorio corto, conservando la extensión del archivo original.
    Dos subidas seguidas para la misma clave nunca comparten referencia.
    """
    safe_key = _UNSAFE_CHARS.sub("_", suggested_key).strip("._") or "file"
    suffix = Path(original_name).suffix.lower() if original_name else ""
    if _UNSAFE_CHARS.search(suffix[1:]):
        suffix = ""
    timestamp = int(time.time() * 1000)
    return f"{safe_key[:120]}_{timestamp}_{uuid.uuid4().hex[:8]}{suffix}"


class BlobService(ABC):
    """Almacena, borra y publica los archivos binarios de los uploads."""

    async def init(self) -> None:
        """Preparar el almacenamiento al arrancar la aplicación."""

    @abstractmethod
    async def store(
        self,
        data: bytes,
        mime_type: str | None,
        suggested_key: str,
        original_name: str | None = None,
    ) -> StoredBlob: ...

    @abstractmethod
    async def delete(self, reference: str) -> None:
        """Borrar el blob; idempotente, los fallos se registran y no se propagan."""

    @abstractmethod
    def build_retrieval_url(self, reference: str) -> str: ...
