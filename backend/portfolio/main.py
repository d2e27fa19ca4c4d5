"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from portfolio import __version__
from portfolio.api import completion, projects, uploads
from portfolio.core.config import Settings, settings as default_settings
from portfolio.core.logging import configure_logging
from portfolio.services.blobs import UPLOADS_ROUTE, BlobService, LocalBlobService, build_blob_service
from portfolio.services.store import Store, build_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: Store | None = None,
    blob_service: BlobService | None = None,
) -> FastAPI:
    """
    Construir la aplicación con el store y el servicio de blobs configurados.

    `store` y `blob_service` permiten inyectar instancias ya creadas (tests);
    si no se pasan se eligen según la configuración.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Portfolio Tracker API",
        description="API para seguimiento de proyectos, módulos y pruebas de completado",
        version=__version__,
    )
    app.state.settings = settings
    app.state.blob_service = blob_service or build_blob_service(settings)
    app.state.store = store or build_store(
        settings, url_builder=app.state.blob_service.build_retrieval_url
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Incluir routers
    app.include_router(projects.router)
    app.include_router(completion.router)
    app.include_router(uploads.router)

    # Archivos locales servidos en /uploads/* (solo backend local)
    if isinstance(app.state.blob_service, LocalBlobService):
        app.mount(
            UPLOADS_ROUTE,
            StaticFiles(directory=app.state.blob_service.upload_dir, check_dir=False),
            name="uploads",
        )

    @app.on_event("startup")
    async def startup() -> None:
        """Inicialización al arrancar la aplicación."""
        # Un fallo aquí (directorio de uploads, esquema) aborta el arranque
        await app.state.blob_service.init()
        await app.state.store.init()
        logger.info(
            f"Started with store={type(app.state.store).__name__}, "
            f"blobs={type(app.state.blob_service).__name__}"
        )

    @app.on_event("shutdown")
    async def shutdown() -> None:
        """Limpieza al cerrar la aplicación."""
        await app.state.store.close()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Portfolio Tracker API", "version": __version__}

    return app
