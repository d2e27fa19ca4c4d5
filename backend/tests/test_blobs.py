# -*- coding: utf-8 -*-
"""
Tests para los servicios de blobs (local y S3 con cliente boto3 simulado).
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from portfolio.core.errors import BlobStorageError
from portfolio.services.blobs import LocalBlobService, S3BlobService, generate_reference


def test_generate_reference_is_unique_and_safe():
    first = generate_reference("1-MODULO DE (ORDENES)", "captura.PNG")
    second = generate_reference("1-MODULO DE (ORDENES)", "captura.PNG")
    assert first != second
    assert first.startswith("1-MODULO_DE_ORDENES_")
    assert first.endswith(".png")
    assert "/" not in first and " " not in first


async def test_local_store_writes_file_and_builds_url(local_blobs):
    stored = await local_blobs.store(b"\x89PNG", "image/png", "1-A", "proof.png")
    path = local_blobs.upload_dir / stored.reference
    assert path.read_bytes() == b"\x89PNG"
    assert stored.retrieval_url == f"http://testserver/uploads/{stored.reference}"
    assert stored.size == 4


async def test_local_delete_is_idempotent(local_blobs):
    stored = await local_blobs.store(b"data", "image/png", "1-A", "a.png")
    await local_blobs.delete(stored.reference)
    assert not (local_blobs.upload_dir / stored.reference).exists()
    # Segunda vez: no existe, no debe lanzar
    await local_blobs.delete(stored.reference)


async def test_local_delete_rejects_path_traversal_without_raising(local_blobs, tmp_path):
    outside = tmp_path / "keep.txt"
    outside.write_text("x")
    await local_blobs.delete("../keep.txt")
    assert outside.exists()


async def test_local_init_creates_directory(tmp_path):
    blobs = LocalBlobService(tmp_path / "nested" / "uploads", "http://testserver/")
    await blobs.init()
    assert blobs.upload_dir.is_dir()
    assert blobs.build_retrieval_url("x.png") == "http://testserver/uploads/x.png"


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def s3_blobs(s3_client):
    return S3BlobService(
        bucket="portfolio",
        endpoint_url="http://minio:9000",
        access_key_id="key",
        secret_access_key="secret",
        folder="portfolio-manager",
        client=s3_client,
    )


async def test_s3_store_puts_object_under_folder(s3_blobs, s3_client):
    stored = await s3_blobs.store(b"img", "image/jpeg", "2-main", "foto.jpg")

    s3_client.put_object.assert_called_once()
    kwargs = s3_client.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "portfolio"
    assert kwargs["Key"] == f"portfolio-manager/{stored.reference}"
    assert kwargs["ContentType"] == "image/jpeg"
    assert kwargs["Body"] == b"img"
    assert stored.retrieval_url == f"http://minio:9000/portfolio/portfolio-manager/{stored.reference}"


async def test_s3_store_failure_raises_blob_storage_error(s3_blobs, s3_client):
    s3_client.put_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
    )
    with pytest.raises(BlobStorageError):
        await s3_blobs.store(b"img", "image/png", "2-main", "a.png")


async def test_s3_delete_errors_are_logged_not_raised(s3_blobs, s3_client):
    s3_client.delete_object.side_effect = ClientError(
        {"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "DeleteObject"
    )
    await s3_blobs.delete("gone.png")
    s3_client.delete_object.assert_called_once_with(
        Bucket="portfolio", Key="portfolio-manager/gone.png"
    )


def test_s3_public_url_takes_precedence(s3_client):
    blobs = S3BlobService(bucket="b", public_url="https://cdn.example.com/b/", client=s3_client)
    assert blobs.build_retrieval_url("x.png") == "https://cdn.example.com/b/x.png"


def test_s3_default_url_uses_aws_virtual_host(s3_client):
    blobs = S3BlobService(bucket="b", region="eu-west-1", client=s3_client)
    assert blobs.build_retrieval_url("x.png") == "https://b.s3.eu-west-1.amazonaws.com/x.png"


async def test_s3_init_creates_missing_bucket(s3_blobs, s3_client):
    s3_client.head_bucket.side_effect = ClientError(
        {"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket"
    )
    await s3_blobs.init()
    s3_client.create_bucket.assert_called_once_with(Bucket="portfolio")
    s3_client.put_bucket_policy.assert_called_once()


async def test_s3_init_logs_errors_without_failing(s3_blobs, s3_client):
    s3_client.head_bucket.side_effect = ClientError(
        {"Error": {"Code": "403", "Message": "Forbidden"}}, "HeadBucket"
    )
    await s3_blobs.init()
    s3_client.create_bucket.assert_not_called()
