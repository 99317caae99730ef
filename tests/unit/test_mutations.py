"""Unit tests for the commit-then-mirror service mutations."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.zoo_product_form.schemas.services import SyncStatus
from src.zoo_product_form.shopify.exceptions import ShopifyApiError
from src.zoo_product_form.store.exceptions import (
    ServiceNotFoundError,
    ServiceStoreError,
    ValidationError,
)
from src.zoo_product_form.store.services import ServiceStore
from src.zoo_product_form.sync.catalog_sync import RemoteCatalogSync
from src.zoo_product_form.sync.mutations import (
    create_service,
    delete_service,
    update_service,
)


REMOTE_REF = "gid://shopify/Metaobject/55"


@pytest.fixture
def store(tmp_path):
    return ServiceStore(tmp_path / "zoo.db")


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.execute = AsyncMock(
        return_value={
            "data": {
                "metaobjectUpsert": {
                    "metaobject": {"id": REMOTE_REF, "handle": "zoo-service"},
                    "userErrors": [],
                },
                "metaobjectDelete": {"deletedId": REMOTE_REF, "userErrors": []},
            }
        }
    )
    return client


@pytest.fixture
def sync(mock_client, store):
    return RemoteCatalogSync(mock_client, store)


@pytest.mark.asyncio
async def test_create_returns_linked_service(store, sync):
    outcome = await create_service(store, sync, "Grooming", "Bath", "")

    assert outcome.sync.status == SyncStatus.SYNCED
    assert outcome.service.remote_ref == REMOTE_REF
    assert outcome.service.image_url is None


@pytest.mark.asyncio
async def test_create_validation_error_makes_no_remote_call(store, sync, mock_client):
    with pytest.raises(ValidationError):
        await create_service(store, sync, "   ")

    assert store.count() == 0
    mock_client.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_survives_remote_failure(store, sync, mock_client):
    mock_client.execute.side_effect = ShopifyApiError("HTTP 500 after 5 attempts")

    outcome = await create_service(store, sync, "Grooming")

    assert outcome.sync.status == SyncStatus.FAILED
    assert store.get(outcome.service.id).title == "Grooming"
    assert outcome.service.remote_ref is None


@pytest.mark.asyncio
async def test_update_addresses_existing_reference(store, sync, mock_client):
    service = store.set_remote_ref(store.create("Old").id, REMOTE_REF)

    outcome = await update_service(store, sync, service.id, "New", "Desc", None)

    assert outcome.service.title == "New"
    assert outcome.sync.reference_persisted is False
    _, variables = mock_client.execute.call_args.args
    assert variables["handle"] == {"id": REMOTE_REF}


@pytest.mark.asyncio
async def test_update_missing_service_raises(store, sync, mock_client):
    with pytest.raises(ServiceNotFoundError):
        await update_service(store, sync, 404, "Title")

    mock_client.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_linked_service_removes_remote(store, sync, mock_client):
    service = store.set_remote_ref(store.create("Grooming").id, REMOTE_REF)

    outcome = await delete_service(store, sync, service.id)

    assert outcome.sync.status == SyncStatus.SYNCED
    assert mock_client.execute.await_count == 1
    with pytest.raises(ServiceNotFoundError):
        store.get(service.id)


@pytest.mark.asyncio
async def test_delete_unlinked_service_skips_remote(store, sync, mock_client):
    service = store.create("Grooming")

    outcome = await delete_service(store, sync, service.id)

    assert outcome.sync.status == SyncStatus.SKIPPED
    mock_client.execute.assert_not_awaited()
    assert store.count() == 0


@pytest.mark.asyncio
async def test_delete_proceeds_when_remote_delete_fails(store, sync, mock_client):
    service = store.set_remote_ref(store.create("Grooming").id, REMOTE_REF)
    mock_client.execute.side_effect = ShopifyApiError("HTTP 502 after 5 attempts")

    outcome = await delete_service(store, sync, service.id)

    assert outcome.sync.status == SyncStatus.FAILED
    assert store.count() == 0


@pytest.mark.asyncio
async def test_create_does_not_reread_after_linking(store, sync, monkeypatch):
    """Once committed and linked, a failing read cannot turn create into an error."""
    monkeypatch.setattr(
        store, "get", MagicMock(side_effect=ServiceStoreError("database is locked"))
    )

    outcome = await create_service(store, sync, "Grooming")

    assert outcome.sync.status == SyncStatus.SYNCED
    assert outcome.service.title == "Grooming"
    assert outcome.service.remote_ref == REMOTE_REF


@pytest.mark.asyncio
async def test_create_keeps_committed_service_when_link_write_fails(
    store, sync, monkeypatch
):
    monkeypatch.setattr(
        store,
        "set_remote_ref",
        MagicMock(side_effect=ServiceStoreError("disk I/O error")),
    )

    outcome = await create_service(store, sync, "Grooming")

    assert outcome.sync.status == SyncStatus.FAILED
    assert "disk I/O error" in outcome.sync.error
    assert outcome.service.remote_ref is None
    assert store.count() == 1


@pytest.mark.asyncio
async def test_update_without_shopify_keeps_local_change(store):
    service = store.create("Old")
    sync = RemoteCatalogSync(None, store)

    outcome = await update_service(store, sync, service.id, "New")

    assert outcome.sync.status == SyncStatus.SKIPPED
    assert store.get(service.id).title == "New"
