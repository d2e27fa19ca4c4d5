"""Pydantic schemas for completion toggles."""

from pydantic import BaseModel, ConfigDict, Field


class ToggleCompletionRequest(BaseModel):
    """Request schema para invertir el estado de un módulo."""

    model_config = ConfigDict(populate_by_name=True)

    module_key: str = Field(..., alias="moduleKey", min_length=1)


class ToggleCompletionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    module_key: str = Field(..., alias="moduleKey")
    completed: bool
