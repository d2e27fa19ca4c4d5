"""API endpoints para gestión de proyectos."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_store
from portfolio.core.errors import BaseAppException, map_exception_to_http
from portfolio.schemas.projects import (
    CreateProjectRequest,
    DeleteProjectResponse,
    ProjectResponse,
)
from portfolio.services.store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(store: Store = Depends(get_store)) -> list[ProjectResponse]:
    """Listar todos los proyectos (sin filtros ni paginación)."""
    try:
        records = await store.list_projects()
        return [ProjectResponse.from_record(r) for r in records]
    except BaseAppException as e:
        logger.error(f"Error listing projects: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error listing projects: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error listing projects",
        )


@router.post("", response_model=ProjectResponse)
async def create_project(
    request: CreateProjectRequest,
    store: Store = Depends(get_store),
) -> ProjectResponse:
    """
    Crear un proyecto nuevo.

    Args:
        request: Nombre obligatorio; tipo, área y módulos opcionales
        store: Store configurado

    Returns:
        Proyecto creado con su id asignado por el store
    """
    try:
        record = await store.create_project(
            name=request.name,
            type=request.type,
            area=request.area,
            modules=request.modules,
        )
        return ProjectResponse.from_record(record)
    except BaseAppException as e:
        logger.error(f"Error creating project: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error creating project: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating project",
        )


@router.delete("/{project_id}", response_model=DeleteProjectResponse)
async def delete_project(
    project_id: int,
    store: Store = Depends(get_store),
) -> DeleteProjectResponse:
    """
    Borrar un proyecto por id.

    Un id inexistente no es un error: responde `deleted: 0`. Los flags de
    completado y los uploads del proyecto se conservan como huérfanos.
    """
    try:
        deleted = await store.delete_project(project_id)
        return DeleteProjectResponse(deleted=deleted)
    except BaseAppException as e:
        logger.error(f"Error deleting project {project_id}: {str(e)}", exc_info=True)
        raise map_exception_to_http(e)
    except Exception as e:
        logger.error(f"Unexpected error deleting project {project_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting project",
        )
