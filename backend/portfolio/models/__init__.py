"""SQLAlchemy database models."""

from portfolio.models.base import Base, TimestampMixin
from portfolio.models.completed_module import CompletedModule
from portfolio.models.project import Project
from portfolio.models.upload import Upload

# Importar todos los modelos para que create_all los registre
__all__ = [
    "Base",
    "TimestampMixin",
    "Project",
    "CompletedModule",
    "Upload",
]
