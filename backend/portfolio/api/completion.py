"""API endpoints para el estado de completado de los módulos."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_store
from portfolio.core.errors import BaseAppException, map_exception_to_http
from portfolio.schemas.completion import ToggleCompletionRequest, ToggleCompletionResponse
from portfolio.services.store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/completed", tags=["completion"])


@router.get("", response_model=dict[str, bool])
async def list_completed(store: Store = Depends(get_store)) -> dict[str, bool]:
    """Mapa moduleKey -> completado."""
    try:
        return await store.list_completed()
    except BaseAppException as e:
        logger.error(f"Error listing completed modules: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error listing completed modules: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error listing completed modules",
        )


@router.post("/toggle", response_model=ToggleCompletionResponse)
async def toggle_completion(
    request: ToggleCompletionRequest,
    store: Store = Depends(get_store),
) -> ToggleCompletionResponse:
    """
    Invertir el estado de un módulo.

    No es idempotente: cada llamada invierte el valor. La primera llamada
    para una clave desconocida la deja completada.
    """
    try:
        completed = await store.toggle_completion(request.module_key)
        logger.info(f"Toggled {request.module_key} -> {completed}")
        return ToggleCompletionResponse(module_key=request.module_key, completed=completed)
    except BaseAppException as e:
        logger.error(f"Error toggling {request.module_key}: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error toggling {request.module_key}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error toggling completion",
        )
