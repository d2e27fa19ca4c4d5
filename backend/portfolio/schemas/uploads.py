"""Pydantic schemas for proof-of-completion uploads."""

from pydantic import BaseModel, ConfigDict, Field

from portfolio.services.store import UploadRecord


class UploadView(BaseModel):
    """Vista del upload que consume el cliente."""

    name: str = Field(..., description="Nombre original del archivo")
    preview: str = Field(..., description="URL absoluta para la vista previa")
    type: str | None = Field(None, description="MIME type declarado")

    @classmethod
    def from_record(cls, record: UploadRecord) -> "UploadView":
        return cls(
            name=record.original_name,
            preview=record.retrieval_url,
            type=record.mime_type,
        )


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    module_key: str = Field(..., alias="moduleKey")
    file: UploadView


class DeleteUploadResponse(BaseModel):
    success: bool = True
