"""Servicios de blobs: almacenamiento de los archivos subidos."""

from portfolio.core.config import Settings
from portfolio.core.errors import ConfigurationError
from portfolio.services.blobs.base import BlobService, StoredBlob, generate_reference
from portfolio.services.blobs.local import UPLOADS_ROUTE, LocalBlobService
from portfolio.services.blobs.s3 import S3BlobService


def build_blob_service(settings: Settings) -> BlobService:
    """Elegir la implementación de BlobService según `blob_backend`."""
    if settings.blob_backend == "s3":
        if not (settings.s3_access_key_id and settings.s3_secret_access_key):
            raise ConfigurationError("S3 credentials are required for the s3 blob backend")
        return S3BlobService(
            bucket=settings.s3_bucket_name,
            endpoint_url=settings.s3_endpoint_url,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            region=settings.s3_region,
            public_url=settings.s3_public_url,
            folder=settings.s3_folder,
        )
    return LocalBlobService(settings.upload_dir, settings.public_base_url)


__all__ = [
    "BlobService",
    "LocalBlobService",
    "S3BlobService",
    "StoredBlob",
    "UPLOADS_ROUTE",
    "build_blob_service",
    "generate_reference",
]
