"""Project model: a portfolio entry with its ordered module names."""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.models.base import Base, TimestampMixin


class Project(Base, TimestampMixin):
    """
    Modelo para proyectos del portafolio.

    Los módulos se guardan como lista JSON ordenada de nombres. No hay
    relación con completados ni uploads: esos registros se enlazan por
    module key derivada, no por foreign key.
    """

    __tablename__ = "projects"
    # Ids nunca reutilizados en SQLite (en PostgreSQL lo garantiza SERIAL)
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    area: Mapped[str] = mapped_column(String(100), nullable=False, default="Sistemas")
    modules: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}')>"
