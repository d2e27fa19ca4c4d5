"""Local-disk blob service; files are served back through the /uploads mount."""

import asyncio
import logging
from pathlib import Path

from portfolio.core.errors import BlobStorageError
from portfolio.services.blobs.base import BlobService, StoredBlob, generate_reference

logger = logging.getLogger(__name__)

UPLOADS_ROUTE = "/uploads"


class LocalBlobService(BlobService):
    """
    Guarda los archivos en un directorio local.

    La URL de recuperación apunta a la ruta estática `/uploads/{reference}`
    que monta la propia aplicación sobre el mismo directorio.
    """

    def __init__(self, upload_dir: str | Path, public_base_url: str) -> None:
        self.upload_dir = Path(upload_dir)
        self.public_base_url = public_base_url.rstrip("/")

    async def init(self) -> None:
        # Si no se puede crear el directorio el arranque debe fallar
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Serving uploads from {self.upload_dir.resolve()}")

    def _path_for(self, reference: str) -> Path:
        path = (self.upload_dir / reference).resolve()
        if path.parent != self.upload_dir.resolve():
            raise BlobStorageError(f"Invalid blob reference: {reference}")
        return path

    async def store(
        self,
        data: bytes,
        mime_type: str | None,
        suggested_key: str,
        original_name: str | None = None,
    ) -> StoredBlob:
        reference = generate_reference(suggested_key, original_name)
        path = self._path_for(reference)
        try:
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            logger.error(f"Error writing upload {path}: {str(e)}")
            raise BlobStorageError(f"Could not write file: {e}") from e
        logger.info(f"Stored upload {reference} ({len(data)} bytes)")
        return StoredBlob(
            reference=reference,
            retrieval_url=self.build_retrieval_url(reference),
            size=len(data),
        )

    async def delete(self, reference: str) -> None:
        try:
            path = self._path_for(reference)
            await asyncio.to_thread(path.unlink, missing_ok=True)
            logger.info(f"Deleted upload {reference}")
        except (OSError, BlobStorageError) as e:
            logger.error(f"Failed to delete file {reference}: {str(e)}")

    def build_retrieval_url(self, reference: str) -> str:
        return f"{self.public_base_url}{UPLOADS_ROUTE}/{reference}"
