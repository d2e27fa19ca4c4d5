"""Upload model: proof-of-completion file metadata per module key."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.models.base import Base, TimestampMixin


class Upload(Base, TimestampMixin):
    """
    Metadatos del archivo subido para un módulo.

    `filename` es la referencia opaca que usa el servicio de blobs
    (clave S3 o nombre en el directorio local).
    """

    __tablename__ = "uploads"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    module_key: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    filename: Mapped[str] = mapped_column(String(1024), nullable=False)
    original_name: Mapped[str] = mapped_column(Text, nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    retrieval_url: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Upload(module_key='{self.module_key}', filename='{self.filename}')>"
