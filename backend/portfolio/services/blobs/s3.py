"""Blob service for S3/MinIO operations using boto3."""

import asyncio
import json
import logging
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from portfolio.core.errors import BlobStorageError
from portfolio.services.blobs.base import BlobService, StoredBlob, generate_reference

logger = logging.getLogger(__name__)


class S3BlobService(BlobService):
    """
    Servicio de blobs sobre S3/MinIO.

    Este servicio es perezoso: solo crea el cliente cuando se necesita.
    Los objetos se publican con lectura pública y la URL de recuperación
    es estable mientras el objeto exista.
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        region: str = "us-east-1",
        public_url: str | None = None,
        folder: str = "",
        client: Any | None = None,
    ) -> None:
        """Inicializar el servicio; `client` permite inyectar un cliente ya creado."""
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region = region
        self.public_url = public_url
        self.folder = folder.strip("/")
        self._s3_client = client

    @property
    def s3_client(self) -> Any:
        """
        Obtener cliente S3, creándolo si no existe.

        Esta propiedad es perezosa: crea el cliente solo cuando se necesita.
        """
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                region_name=self.region,
                config=Config(signature_version="s3v4"),
            )
        return self._s3_client

    def _key_for(self, reference: str) -> str:
        return f"{self.folder}/{reference}" if self.folder else reference

    async def init(self) -> None:
        # No fallar el startup si hay error, pero loguearlo
        try:
            await asyncio.to_thread(self.ensure_bucket_public)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error ensuring bucket public: {str(e)}")

    def check_bucket_exists(self) -> bool:
        """
        Verificar si el bucket existe.

        Returns:
            True si el bucket existe, False en caso contrario

        Raises:
            ClientError: Si hay un error de cliente de boto3 distinto de 404
            BotoCoreError: Si hay un error general de boto3
        """
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            # 404 significa que no existe, 403 puede significar que no tenemos permisos
            if error_code in ("404", "NoSuchBucket"):
                return False
            logger.error(f"Error checking bucket existence: {error_code} - {str(e)}")
            raise

    def ensure_bucket_public(self) -> None:
        """Crear el bucket si falta y dar lectura pública a sus objetos."""
        if not self.check_bucket_exists():
            logger.warning(f"Bucket {self.bucket} does not exist, attempting to create...")
            self.s3_client.create_bucket(Bucket=self.bucket)
            logger.info(f"Bucket {self.bucket} created successfully")

        policy = {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"AWS": ["*"]},
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{self.bucket}/*"],
                }
            ],
        }
        self.s3_client.put_bucket_policy(Bucket=self.bucket, Policy=json.dumps(policy))

    async def store(
        self,
        data: bytes,
        mime_type: str | None,
        suggested_key: str,
        original_name: str | None = None,
    ) -> StoredBlob:
        reference = generate_reference(suggested_key, original_name)
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": self._key_for(reference),
            "Body": data,
        }
        if mime_type:
            params["ContentType"] = mime_type
        try:
            await asyncio.to_thread(self.s3_client.put_object, **params)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"ClientError uploading {reference}: {error_code} - {str(e)}")
            raise BlobStorageError(f"Upload failed: {error_code}") from e
        except BotoCoreError as e:
            logger.error(f"BotoCoreError uploading {reference}: {str(e)}")
            raise BlobStorageError(f"Upload failed: {e}") from e

        logger.info(f"Uploaded object bucket={self.bucket}, key={self._key_for(reference)}")
        return StoredBlob(
            reference=reference,
            retrieval_url=self.build_retrieval_url(reference),
            size=len(data),
        )

    async def delete(self, reference: str) -> None:
        try:
            await asyncio.to_thread(
                self.s3_client.delete_object,
                Bucket=self.bucket,
                Key=self._key_for(reference),
            )
            logger.info(f"Deleted object bucket={self.bucket}, key={self._key_for(reference)}")
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"ClientError deleting {reference}: {error_code} - {str(e)}")
        except BotoCoreError as e:
            logger.error(f"BotoCoreError deleting {reference}: {str(e)}")

    def build_retrieval_url(self, reference: str) -> str:
        """
        URL pública del objeto.

        `public_url` (CDN o proxy) ya incluye el bucket; con un endpoint
        propio (MinIO) se usa path-style; sin ninguno, el host virtual de AWS.
        """
        key = self._key_for(reference)
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
