"""API endpoints para las pruebas de completado (archivos subidos)."""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from portfolio.api.deps import get_blob_service, get_store
from portfolio.core.errors import BaseAppException, ValidationError, map_exception_to_http
from portfolio.schemas.uploads import DeleteUploadResponse, UploadResponse, UploadView
from portfolio.services.blobs import BlobService
from portfolio.services.store import Store
from portfolio.services.uploads import remove_upload, replace_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.get("/uploads", response_model=dict[str, UploadView])
async def list_uploads(store: Store = Depends(get_store)) -> dict[str, UploadView]:
    """Mapa moduleKey -> {name, preview, type}."""
    try:
        records = await store.list_uploads()
        return {key: UploadView.from_record(r) for key, r in records.items()}
    except BaseAppException as e:
        logger.error(f"Error listing uploads: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error listing uploads: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error listing uploads",
        )


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile | None = File(None),
    module_key: str | None = Form(None, alias="moduleKey"),
    store: Store = Depends(get_store),
    blobs: BlobService = Depends(get_blob_service),
) -> UploadResponse:
    """
    Subir (o reemplazar) el archivo de prueba de un módulo.

    Args:
        file: Parte multipart `file`
        module_key: Campo de formulario `moduleKey`
        store: Store configurado
        blobs: Servicio de blobs configurado

    Returns:
        moduleKey y la vista del archivo con su URL de vista previa

    Raises:
        HTTPException: 400 si falta el archivo o la clave, 500 si falla el almacenamiento
    """
    try:
        if file is None:
            raise ValidationError("No file uploaded")
        if not module_key:
            raise ValidationError("moduleKey is required")

        data = await file.read()
        record = await replace_upload(
            store,
            blobs,
            module_key=module_key,
            data=data,
            original_name=file.filename or "file",
            mime_type=file.content_type,
        )
        return UploadResponse(module_key=module_key, file=UploadView.from_record(record))

    except ValidationError as e:
        raise map_exception_to_http(e)
    except BaseAppException as e:
        logger.error(f"Upload failed for {module_key}: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error uploading for {module_key}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Upload failed: {str(e)}",
        )


@router.delete("/upload/{module_key:path}", response_model=DeleteUploadResponse)
async def delete_upload(
    module_key: str,
    store: Store = Depends(get_store),
    blobs: BlobService = Depends(get_blob_service),
) -> DeleteUploadResponse:
    """Borrar el upload de un módulo; sin upload previo también es éxito."""
    try:
        await remove_upload(store, blobs, module_key)
        return DeleteUploadResponse(success=True)
    except BaseAppException as e:
        logger.error(f"Error deleting upload {module_key}: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error deleting upload {module_key}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting upload",
        )
