"""FastAPI dependencies: store and blob service live on app.state."""

from fastapi import Request

from portfolio.services.blobs import BlobService
from portfolio.services.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_blob_service(request: Request) -> BlobService:
    return request.app.state.blob_service
