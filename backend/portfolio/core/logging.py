"""Logging setup for the service."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configurar el logger raíz una sola vez (idempotente con uvicorn)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("botocore").setLevel(logging.WARNING)
