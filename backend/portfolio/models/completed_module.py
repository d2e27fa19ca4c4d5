"""CompletedModule model: completion flag per module key."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.models.base import Base


class CompletedModule(Base):
    """Flag de completado; como máximo una fila por module key."""

    __tablename__ = "completed_modules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    module_key: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<CompletedModule(module_key='{self.module_key}', completed={self.completed})>"
