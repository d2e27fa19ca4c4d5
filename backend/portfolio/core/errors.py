"""Centralized exception handling for the application."""

from fastapi import HTTPException, status


class BaseAppException(Exception):
    """Base exception for application errors."""

    pass


class ValidationError(BaseAppException):
    """Exception raised when validation fails."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StoreError(BaseAppException):
    """Fallo de I/O en el almacén de proyectos, completados o uploads."""

    pass


class BlobStorageError(BaseAppException):
    """Fallo al escribir un archivo en el servicio de blobs."""

    pass


class ConfigurationError(BaseAppException):
    """Configuración incompleta para el backend elegido (fatal en el arranque)."""

    pass


def map_exception_to_http(exception: Exception) -> HTTPException:
    """
    Mapea excepciones de negocio a códigos HTTP apropiados.

    Los errores de validación van al rango 4xx; los fallos de almacén o
    blobs al 5xx con un mensaje descriptivo.
    """
    if isinstance(exception, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exception.message,
        )
    if isinstance(exception, StoreError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Storage error: {exception}",
        )
    if isinstance(exception, BlobStorageError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"File storage error: {exception}",
        )

    # Error genérico (no debería llegar aquí en producción)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
