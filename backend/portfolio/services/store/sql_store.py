"""Relational store backed by SQLAlchemy async (PostgreSQL or SQLite)."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from portfolio.core.db import Base, build_session_factory
from portfolio.core.errors import StoreError
from portfolio.models import CompletedModule, Project, Upload
from portfolio.services.store.base import (
    DEFAULT_AREA,
    DEFAULT_TYPE,
    ProjectRecord,
    Store,
    UploadMetadata,
    UploadRecord,
)

logger = logging.getLogger(__name__)


def _to_project_record(project: Project) -> ProjectRecord:
    return ProjectRecord(
        id=project.id,
        name=project.name,
        type=project.type,
        area=project.area,
        modules=list(project.modules or []),
    )


def _to_upload_record(upload: Upload) -> UploadRecord:
    return UploadRecord(
        module_key=upload.module_key,
        filename=upload.filename,
        original_name=upload.original_name,
        mime_type=upload.mime_type,
        retrieval_url=upload.retrieval_url,
        size=upload.size,
        uploaded_at=upload.updated_at,
    )


class SqlStore(Store):
    """
    Store sobre tablas relacionales.

    Cada operación abre su propia sesión y hace commit al terminar. Los ids
    de proyecto salen de la secuencia de la base de datos y no se reutilizan.
    La base de datos serializa escrituras en conflicto a nivel de fila.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = build_session_factory(engine)

    async def init(self) -> None:
        """Crear las tablas si no existen (no hay migraciones)."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreError(f"Cannot initialise database schema: {e}") from e

    async def close(self) -> None:
        await self.engine.dispose()

    async def list_projects(self) -> list[ProjectRecord]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(Project).order_by(Project.id))
                return [_to_project_record(p) for p in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreError(f"Error listing projects: {e}") from e

    async def create_project(
        self,
        name: str,
        type: str = DEFAULT_TYPE,
        area: str | None = None,
        modules: list[str] | None = None,
    ) -> ProjectRecord:
        try:
            async with self.session_factory() as session:
                project = Project(
                    name=name,
                    type=type,
                    area=area or DEFAULT_AREA,
                    modules=list(modules or []),
                )
                session.add(project)
                await session.flush()  # Para obtener el ID
                await session.commit()
                logger.info(f"Created project {project.id} ({project.name})")
                return _to_project_record(project)
        except SQLAlchemyError as e:
            raise StoreError(f"Error creating project: {e}") from e

    async def delete_project(self, project_id: int) -> int:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(Project).where(Project.id == project_id)
                )
                await session.commit()
                deleted = result.rowcount or 0
                logger.info(f"Deleted project {project_id}: {deleted} row(s)")
                return deleted
        except SQLAlchemyError as e:
            raise StoreError(f"Error deleting project {project_id}: {e}") from e

    async def list_completed(self) -> dict[str, bool]:
        """Solo las claves completadas; un False equivale a ausencia."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(CompletedModule.module_key).where(CompletedModule.completed.is_(True))
                )
                return {key: True for key in result.scalars().all()}
        except SQLAlchemyError as e:
            raise StoreError(f"Error listing completed modules: {e}") from e

    async def toggle_completion(self, module_key: str) -> bool:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(CompletedModule)
                    .where(CompletedModule.module_key == module_key)
                    .with_for_update()
                )
                flag = result.scalar_one_or_none()
                if flag is None:
                    flag = CompletedModule(module_key=module_key, completed=True)
                    session.add(flag)
                else:
                    flag.completed = not flag.completed
                new_state = flag.completed
                await session.commit()
                return new_state
        except SQLAlchemyError as e:
            # Dos primeros toggles simultáneos chocan en el índice único: sin reintento
            raise StoreError(f"Error toggling {module_key}: {e}") from e

    async def list_uploads(self) -> dict[str, UploadRecord]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(Upload))
                return {u.module_key: _to_upload_record(u) for u in result.scalars().all()}
        except SQLAlchemyError as e:
            raise StoreError(f"Error listing uploads: {e}") from e

    async def get_upload(self, module_key: str) -> UploadRecord | None:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Upload).where(Upload.module_key == module_key)
                )
                upload = result.scalar_one_or_none()
                return _to_upload_record(upload) if upload else None
        except SQLAlchemyError as e:
            raise StoreError(f"Error reading upload {module_key}: {e}") from e

    async def swap_upload(
        self, module_key: str, metadata: UploadMetadata
    ) -> tuple[UploadRecord, UploadRecord | None]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Upload).where(Upload.module_key == module_key).with_for_update()
                )
                upload = result.scalar_one_or_none()
                if upload is None:
                    previous = None
                    upload = Upload(module_key=module_key)
                    session.add(upload)
                else:
                    previous = _to_upload_record(upload)
                upload.filename = metadata.filename
                upload.original_name = metadata.original_name
                upload.mime_type = metadata.mime_type
                upload.size = metadata.size
                upload.retrieval_url = metadata.retrieval_url
                upload.updated_at = datetime.now(timezone.utc)
                await session.commit()
                await session.refresh(upload)
                return _to_upload_record(upload), previous
        except SQLAlchemyError as e:
            raise StoreError(f"Error saving upload {module_key}: {e}") from e

    async def delete_upload(self, module_key: str) -> UploadRecord | None:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Upload).where(Upload.module_key == module_key)
                )
                upload = result.scalar_one_or_none()
                if upload is None:
                    return None
                removed = _to_upload_record(upload)
                await session.delete(upload)
                await session.commit()
                return removed
        except SQLAlchemyError as e:
            raise StoreError(f"Error deleting upload {module_key}: {e}") from e
