"""Upload lifecycle: replace and remove the proof file of a module."""

import logging

from portfolio.core.errors import StoreError
from portfolio.services.blobs import BlobService
from portfolio.services.store import Store, UploadMetadata, UploadRecord

logger = logging.getLogger(__name__)


async def replace_upload(
    store: Store,
    blobs: BlobService,
    module_key: str,
    data: bytes,
    original_name: str,
    mime_type: str | None,
) -> UploadRecord:
    """
    Guardar un nuevo archivo para el módulo, reemplazando el anterior.

    Orden: se escribe el blob nuevo, se actualiza el registro (upsert por
    module key) y después se borra el blob anterior. La limpieza es
    best-effort, no un intercambio atómico: si el borrado falla queda un
    blob huérfano, pero la URL del registro siempre apunta al blob nuevo.

    El registro anterior lo devuelve el propio store al reemplazarlo, así
    cada blob reemplazado se borra exactamente una vez aunque lleguen dos
    subidas simultáneas para la misma clave.
    """
    stored = await blobs.store(data, mime_type, module_key, original_name)

    try:
        record, previous = await store.swap_upload(
            module_key,
            UploadMetadata(
                filename=stored.reference,
                original_name=original_name,
                mime_type=mime_type,
                retrieval_url=stored.retrieval_url,
                size=stored.size,
            ),
        )
    except StoreError:
        await blobs.delete(stored.reference)
        raise

    if previous is not None and previous.filename != stored.reference:
        await blobs.delete(previous.filename)
        logger.info(f"Replaced upload for {module_key}: {previous.filename} -> {stored.reference}")

    return record


async def remove_upload(store: Store, blobs: BlobService, module_key: str) -> bool:
    """Borrar registro y blob; sin upload previo es un no-op. Devuelve si había algo."""
    removed = await store.delete_upload(module_key)
    if removed is None:
        return False
    await blobs.delete(removed.filename)
    logger.info(f"Removed upload for {module_key}")
    return True
