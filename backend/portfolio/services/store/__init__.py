"""Stores para proyectos, completados y uploads."""

from typing import Callable

from portfolio.core.config import Settings
from portfolio.core.db import build_engine
from portfolio.core.errors import ConfigurationError
from portfolio.services.store.base import (
    DEFAULT_AREA,
    DEFAULT_TYPE,
    ProjectRecord,
    Store,
    UploadMetadata,
    UploadRecord,
)
from portfolio.services.store.json_store import JsonStore
from portfolio.services.store.sql_store import SqlStore


def build_store(
    settings: Settings,
    url_builder: Callable[[str], str] | None = None,
) -> Store:
    """
    Elegir la implementación de Store según `storage_backend`.

    `url_builder` (normalmente `BlobService.build_retrieval_url`) lo usa el
    store JSON para reconstruir la URL de cada upload a partir de su
    `filename`.
    """
    if settings.storage_backend == "database":
        if not settings.database_url:
            raise ConfigurationError("DATABASE_URL is required for the database backend")
        engine = build_engine(
            settings.database_url,
            echo=settings.environment == "development",
        )
        return SqlStore(engine)
    return JsonStore(
        settings.data_file,
        seed_demo_data=settings.seed_demo_data,
        url_builder=url_builder,
    )


__all__ = [
    "DEFAULT_AREA",
    "DEFAULT_TYPE",
    "JsonStore",
    "ProjectRecord",
    "SqlStore",
    "Store",
    "UploadMetadata",
    "UploadRecord",
    "build_store",
]
