# -*- coding: utf-8 -*-
"""
Fixtures compartidas.

- Stores JSON (archivo temporal) y SQL (sqlite+aiosqlite en archivo temporal).
- Servicio de blobs local en directorio temporal y un gateway falso en memoria.
- TestClient sobre create_app() con instancias inyectadas.
"""

import pytest
from fastapi.testclient import TestClient

from portfolio.core.config import Settings
from portfolio.core.db import build_engine
from portfolio.core.errors import BlobStorageError
from portfolio.main import create_app
from portfolio.services.blobs import BlobService, LocalBlobService, StoredBlob, generate_reference
from portfolio.services.store import JsonStore, SqlStore


class FakeBlobService(BlobService):
    """Servicio de blobs simulado (referencia -> bytes)."""

    def __init__(self):
        self.blobs = {}
        self.deleted = []
        self.fail_store = False

    async def store(self, data, mime_type, suggested_key, original_name=None):
        if self.fail_store:
            raise BlobStorageError("simulated outage")
        reference = generate_reference(suggested_key, original_name)
        self.blobs[reference] = data
        return StoredBlob(
            reference=reference,
            retrieval_url=self.build_retrieval_url(reference),
            size=len(data),
        )

    async def delete(self, reference):
        self.deleted.append(reference)
        self.blobs.pop(reference, None)

    def build_retrieval_url(self, reference):
        return f"https://cdn.test/{reference}"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        storage_backend="json",
        blob_backend="local",
        data_file=str(tmp_path / "data.json"),
        seed_demo_data=False,
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
        log_level="WARNING",
    )


@pytest.fixture
async def json_store(tmp_path):
    store = JsonStore(
        tmp_path / "data.json",
        seed_demo_data=False,
        url_builder=FakeBlobService().build_retrieval_url,
    )
    await store.init()
    return store


@pytest.fixture
async def sql_store(tmp_path):
    store = SqlStore(build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"))
    await store.init()
    yield store
    await store.close()


@pytest.fixture(params=["json", "sql"])
async def store(request, json_store, sql_store):
    """Ambas variantes de Store contra el mismo contrato."""
    return json_store if request.param == "json" else sql_store


@pytest.fixture
async def local_blobs(tmp_path):
    blobs = LocalBlobService(tmp_path / "uploads", "http://testserver")
    await blobs.init()
    return blobs


@pytest.fixture
def fake_blobs():
    return FakeBlobService()


@pytest.fixture
def client(settings):
    """TestClient con store JSON y blobs locales en tmp_path."""
    app = create_app(settings)
    with TestClient(app) as client_instance:
        yield client_instance


@pytest.fixture
def sql_client(settings, tmp_path, fake_blobs):
    """TestClient con store SQL (sqlite) y blobs en memoria."""
    store = SqlStore(build_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"))
    app = create_app(settings, store=store, blob_service=fake_blobs)
    with TestClient(app) as client_instance:
        yield client_instance
