# -*- coding: utf-8 -*-
"""
Ciclo de vida de un upload: reemplazo con limpieza del blob anterior.
"""

import asyncio

import pytest

from portfolio.core.errors import BlobStorageError, StoreError
from portfolio.services.uploads import remove_upload, replace_upload


async def test_second_upload_replaces_record_and_removes_old_blob(store, fake_blobs):
    first = await replace_upload(store, fake_blobs, "1-A", b"one", "one.png", "image/png")
    second = await replace_upload(store, fake_blobs, "1-A", b"two", "two.png", "image/png")

    assert first.filename != second.filename
    assert first.retrieval_url != second.retrieval_url
    assert first.filename not in fake_blobs.blobs
    assert fake_blobs.blobs[second.filename] == b"two"

    uploads = await store.list_uploads()
    assert list(uploads) == ["1-A"]
    assert uploads["1-A"].retrieval_url == second.retrieval_url


async def test_replace_with_local_blobs_removes_previous_file(json_store, local_blobs):
    first = await replace_upload(json_store, local_blobs, "1-A", b"one", "a.png", "image/png")
    second = await replace_upload(json_store, local_blobs, "1-A", b"two", "a.png", "image/png")
    assert not (local_blobs.upload_dir / first.filename).exists()
    assert (local_blobs.upload_dir / second.filename).read_bytes() == b"two"


async def test_concurrent_replacements_keep_only_current_file(json_store, local_blobs):
    await replace_upload(json_store, local_blobs, "1-A", b"zero", "a.png", "image/png")
    await asyncio.gather(
        replace_upload(json_store, local_blobs, "1-A", b"one", "a.png", "image/png"),
        replace_upload(json_store, local_blobs, "1-A", b"two", "a.png", "image/png"),
    )

    current = await json_store.get_upload("1-A")
    assert [p.name for p in local_blobs.upload_dir.iterdir()] == [current.filename]


async def test_blob_failure_leaves_previous_upload_untouched(json_store, fake_blobs):
    first = await replace_upload(json_store, fake_blobs, "1-A", b"one", "a.png", "image/png")
    fake_blobs.fail_store = True
    with pytest.raises(BlobStorageError):
        await replace_upload(json_store, fake_blobs, "1-A", b"two", "b.png", "image/png")
    assert (await json_store.get_upload("1-A")).filename == first.filename
    assert first.filename in fake_blobs.blobs


async def test_store_failure_cleans_up_new_blob(json_store, fake_blobs):
    async def broken_swap(module_key, metadata):
        raise StoreError("disk full")

    json_store.swap_upload = broken_swap
    with pytest.raises(StoreError):
        await replace_upload(json_store, fake_blobs, "1-A", b"one", "a.png", "image/png")
    assert fake_blobs.blobs == {}
    assert len(fake_blobs.deleted) == 1


async def test_remove_upload_deletes_blob(store, fake_blobs):
    record = await replace_upload(store, fake_blobs, "1-A", b"one", "a.png", "image/png")
    assert await remove_upload(store, fake_blobs, "1-A") is True
    assert record.filename not in fake_blobs.blobs
    assert await store.get_upload("1-A") is None


async def test_remove_missing_upload_is_noop(store, fake_blobs):
    assert await remove_upload(store, fake_blobs, "1-A") is False
    assert fake_blobs.deleted == []
