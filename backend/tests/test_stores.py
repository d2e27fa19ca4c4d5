# -*- coding: utf-8 -*-
"""
Contrato común de Store (JSON y SQL) y reglas de id de cada variante.
"""

import asyncio
import json
import threading

import pytest

from portfolio.core.errors import StoreError
from portfolio.services.store import JsonStore, UploadMetadata


def _metadata(reference, name="proof.png"):
    return UploadMetadata(
        filename=reference,
        original_name=name,
        mime_type="image/png",
        retrieval_url=f"https://cdn.test/{reference}",
        size=4,
    )


async def test_create_project_applies_defaults(store):
    project = await store.create_project(name="Inventario")
    assert project.type == "REPORTE"
    assert project.area == "Sistemas"
    assert project.modules == []

    listed = await store.list_projects()
    assert [p.id for p in listed] == [project.id]


async def test_create_project_assigns_increasing_ids(store):
    first = await store.create_project(name="A", modules=["X", "Y"])
    second = await store.create_project(name="B", type="SISTEMA", area="Soporte")
    assert second.id > first.id
    listed = await store.list_projects()
    assert listed[0].modules == ["X", "Y"]
    assert listed[1].area == "Soporte"


async def test_delete_project_returns_count(store):
    project = await store.create_project(name="A")
    assert await store.delete_project(project.id) == 1
    assert await store.delete_project(project.id) == 0
    assert await store.list_projects() == []


@pytest.mark.parametrize("times", [1, 2, 3, 4, 7])
async def test_toggle_n_times_is_completed_when_odd(store, times):
    result = None
    for _ in range(times):
        result = await store.toggle_completion("1-A")
    assert result is (times % 2 == 1)
    assert bool((await store.list_completed()).get("1-A")) is (times % 2 == 1)


async def test_toggle_fresh_key_starts_completed(store):
    assert await store.toggle_completion("9-main") is True
    assert await store.toggle_completion("9-main") is False


async def test_upsert_upload_keeps_one_record_per_key(store):
    await store.upsert_upload("1-A", _metadata("first.png"))
    record = await store.upsert_upload("1-A", _metadata("second.png", name="v2.png"))
    assert record.filename == "second.png"

    uploads = await store.list_uploads()
    assert list(uploads) == ["1-A"]
    assert uploads["1-A"].original_name == "v2.png"
    assert uploads["1-A"].retrieval_url == "https://cdn.test/second.png"
    assert (await store.get_upload("1-A")).filename == "second.png"


async def test_delete_upload_missing_key_is_noop(store):
    assert await store.delete_upload("404-main") is None
    assert await store.list_uploads() == {}


async def test_delete_upload_returns_removed_record(store):
    await store.upsert_upload("1-A", _metadata("a.png"))
    removed = await store.delete_upload("1-A")
    assert removed.filename == "a.png"
    assert await store.get_upload("1-A") is None


async def test_delete_project_leaves_orphaned_records(store):
    project = await store.create_project(name="A", modules=["M"])
    key = f"{project.id}-M"
    await store.toggle_completion(key)
    await store.upsert_upload(key, _metadata("m.png"))

    await store.delete_project(project.id)

    assert (await store.list_completed()).get(key) is True
    assert key in await store.list_uploads()


async def test_json_store_restarts_ids_when_empty(json_store):
    a = await json_store.create_project(name="A")
    b = await json_store.create_project(name="B")
    await json_store.delete_project(a.id)
    await json_store.delete_project(b.id)
    again = await json_store.create_project(name="C")
    assert again.id == 1


async def test_sql_store_never_reuses_ids(sql_store):
    a = await sql_store.create_project(name="A")
    b = await sql_store.create_project(name="B")
    await sql_store.delete_project(a.id)
    await sql_store.delete_project(b.id)
    again = await sql_store.create_project(name="C")
    assert again.id == b.id + 1


async def test_sql_store_lists_only_completed_keys(sql_store):
    await sql_store.toggle_completion("1-A")
    await sql_store.toggle_completion("1-B")
    await sql_store.toggle_completion("1-B")
    assert await sql_store.list_completed() == {"1-A": True}


async def test_json_store_persists_document_layout(tmp_path):
    path = tmp_path / "data.json"
    store = JsonStore(path, seed_demo_data=False)
    await store.init()
    project = await store.create_project(name="A", modules=["M"])
    await store.toggle_completion("1-M")
    await store.upsert_upload("1-M", _metadata("m.png"))

    reloaded = JsonStore(path)
    await reloaded.init()
    assert [p.id for p in await reloaded.list_projects()] == [project.id]
    assert await reloaded.list_completed() == {"1-M": True}
    assert (await reloaded.get_upload("1-M")).original_name == "proof.png"

    document = json.loads(path.read_text(encoding="utf-8"))
    assert set(document) == {"projects", "completedModules", "uploads"}
    assert document["uploads"]["1-M"]["filename"] == "m.png"


async def test_json_store_seeds_demo_projects(tmp_path):
    store = JsonStore(tmp_path / "seeded.json", seed_demo_data=True)
    await store.init()
    projects = await store.list_projects()
    assert [p.id for p in projects] == [1, 2, 3, 4, 5, 6]
    assert projects[3].modules == []
    assert (tmp_path / "seeded.json").exists()


async def test_json_store_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonStore(path)
    await store.init()
    assert await store.list_projects() == []


async def test_json_store_write_failure_raises_store_error(tmp_path):
    store = JsonStore(tmp_path / "data.json", seed_demo_data=False)
    await store.init()
    project = await store.create_project(name="A")
    # Un directorio en lugar del archivo hace fallar la escritura
    store.path = tmp_path
    with pytest.raises(StoreError):
        await store.create_project(name="B")
    with pytest.raises(StoreError):
        await store.toggle_completion("1-A")
    with pytest.raises(StoreError):
        await store.upsert_upload("1-A", _metadata("a.png"))
    with pytest.raises(StoreError):
        await store.delete_project(project.id)

    # Memoria sin cambios: coincide con lo que hay en disco
    assert [p.name for p in await store.list_projects()] == ["A"]
    assert await store.list_completed() == {}
    assert await store.list_uploads() == {}


async def test_json_store_writes_outside_event_loop_thread(json_store, monkeypatch):
    threads = []
    write = json_store._write

    def recording_write(data):
        threads.append(threading.get_ident())
        write(data)

    monkeypatch.setattr(json_store, "_write", recording_write)
    await json_store.create_project(name="A")
    assert threads
    assert threading.get_ident() not in threads


async def test_swap_upload_returns_replaced_record(store):
    record, previous = await store.swap_upload("1-A", _metadata("a.png"))
    assert previous is None
    assert record.filename == "a.png"

    record, previous = await store.swap_upload("1-A", _metadata("b.png", name="v2.png"))
    assert record.filename == "b.png"
    assert previous.filename == "a.png"
    assert previous.original_name == "proof.png"


async def test_replacing_upload_refreshes_upload_time(store):
    first = await store.upsert_upload("1-A", _metadata("a.png"))
    await asyncio.sleep(0.01)
    second = await store.upsert_upload("1-A", _metadata("b.png"))
    assert first.uploaded_at is not None
    assert second.uploaded_at > first.uploaded_at
    assert (await store.get_upload("1-A")).uploaded_at == second.uploaded_at
