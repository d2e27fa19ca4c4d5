"""Database configuration and session management for SQLAlchemy async."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Crear el engine asíncrono.

    Solo se invoca cuando el backend de almacenamiento es "database"; la
    variante JSON nunca abre conexiones.
    """
    return create_async_engine(database_url, echo=echo, future=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Crear session factory ligada al engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
