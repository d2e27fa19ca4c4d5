"""Pydantic schemas for the projects API."""

from pydantic import BaseModel, Field, field_validator

from portfolio.services.store import DEFAULT_AREA, DEFAULT_TYPE, ProjectRecord


class CreateProjectRequest(BaseModel):
    """Request schema para crear un proyecto."""

    name: str = Field(..., description="Nombre del proyecto")
    type: str = Field(
        default=DEFAULT_TYPE,
        description="Tipo orientativo (REPORTE, SISTEMA, WEB APP); no se valida",
    )
    area: str | None = Field(None, description=f"Área; por defecto '{DEFAULT_AREA}'")
    modules: list[str] | None = Field(
        None,
        description="Nombres de módulo en orden; vacío = proyecto de un solo elemento",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("El nombre del proyecto no puede estar vacío")
        return v


class ProjectResponse(BaseModel):
    """Response schema para un proyecto."""

    id: int
    name: str
    type: str
    area: str
    modules: list[str]

    @classmethod
    def from_record(cls, record: ProjectRecord) -> "ProjectResponse":
        return cls(
            id=record.id,
            name=record.name,
            type=record.type,
            area=record.area,
            modules=record.modules,
        )


class DeleteProjectResponse(BaseModel):
    deleted: int = Field(..., description="Filas borradas (0 o 1)")
