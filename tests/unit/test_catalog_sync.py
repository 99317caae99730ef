"""Unit tests for RemoteCatalogSync (mocked Shopify client, real store)."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.zoo_product_form.schemas.services import (
    AddressBy,
    MetaobjectFieldKeys,
    SyncStatus,
)
from src.zoo_product_form.shopify.exceptions import ShopifyApiError
from src.zoo_product_form.shopify.graphql_strings import (
    MUTATION_METAOBJECT_DELETE,
    MUTATION_METAOBJECT_UPSERT,
)
from src.zoo_product_form.store.services import ServiceStore
from src.zoo_product_form.sync.catalog_sync import RemoteCatalogSync


REMOTE_REF = "gid://shopify/Metaobject/9001"


def _upsert_ok(remote_id=REMOTE_REF, handle="zoo-service-1"):
    return {
        "data": {
            "metaobjectUpsert": {
                "metaobject": {"id": remote_id, "handle": handle},
                "userErrors": [],
            }
        }
    }


def _upsert_user_errors():
    return {
        "data": {
            "metaobjectUpsert": {
                "metaobject": None,
                "userErrors": [{"field": ["fields"], "message": "Title can't be blank"}],
            }
        }
    }


@pytest.fixture
def store(tmp_path):
    return ServiceStore(tmp_path / "zoo.db")


@pytest.fixture
def mock_client():
    """Mock Shopify Admin client."""
    client = MagicMock()
    client.execute = AsyncMock()
    return client


@pytest.fixture
def sync(mock_client, store):
    return RemoteCatalogSync(mock_client, store)


def test_build_fields_title_only(sync, store):
    service = store.create("Grooming")

    assert sync.build_fields(service) == [{"key": "title", "value": "Grooming"}]


def test_build_fields_uses_configured_image_key(mock_client, store):
    sync = RemoteCatalogSync(
        mock_client, store, field_keys=MetaobjectFieldKeys(image="image")
    )
    service = store.create("Grooming", "Bath and trim", "https://example.com/dog.jpg")

    assert sync.build_fields(service) == [
        {"key": "title", "value": "Grooming"},
        {"key": "description", "value": "Bath and trim"},
        {"key": "image", "value": "https://example.com/dog.jpg"},
    ]


def test_address_policies():
    assert AddressBy.reference(REMOTE_REF).to_handle_input() == {"id": REMOTE_REF}
    assert AddressBy.handle("service-3").to_handle_input() == {
        "type": "zoo_service",
        "handle": "service-3",
    }
    assert AddressBy.new_entry().to_handle_input() == {"type": "zoo_service"}


@pytest.mark.asyncio
async def test_upsert_new_service_persists_remote_ref(sync, store, mock_client):
    """First successful sync addresses a new entry and stores the returned GID."""
    service = store.create("Grooming", None, "https://example.com/dog.jpg")
    mock_client.execute.return_value = _upsert_ok()

    result = await sync.upsert(service)

    assert result.status == SyncStatus.SYNCED
    assert result.remote_ref == REMOTE_REF
    assert result.reference_persisted is True
    assert store.get(service.id).remote_ref == REMOTE_REF

    document, variables = mock_client.execute.call_args.args
    assert document == MUTATION_METAOBJECT_UPSERT
    assert variables["handle"] == {"type": "zoo_service"}
    assert variables["metaobject"]["fields"] == [
        {"key": "title", "value": "Grooming"},
        {"key": "image_url", "value": "https://example.com/dog.jpg"},
    ]


@pytest.mark.asyncio
async def test_repeated_upserts_write_remote_ref_once(mock_client, store):
    """Re-syncing a linked service reuses its reference without a store write."""
    store_spy = MagicMock(wraps=store)
    sync = RemoteCatalogSync(mock_client, store_spy)
    mock_client.execute.return_value = _upsert_ok()

    service = store.create("Grooming")
    await sync.upsert(service)

    for _ in range(3):
        linked = store.get(service.id)
        result = await sync.upsert(linked)
        assert result.status == SyncStatus.SYNCED
        assert result.reference_persisted is False

    assert store_spy.set_remote_ref.call_count == 1
    _, variables = mock_client.execute.call_args.args
    assert variables["handle"] == {"id": REMOTE_REF}


@pytest.mark.asyncio
async def test_upsert_user_errors_are_soft_failures(sync, store, mock_client):
    service = store.create("Grooming")
    mock_client.execute.return_value = _upsert_user_errors()

    result = await sync.upsert(service)

    assert result.status == SyncStatus.FAILED
    assert not result.ok
    assert result.user_errors[0].message == "Title can't be blank"
    assert result.describe_failure() == "Title can't be blank"
    assert store.get(service.id).remote_ref is None


@pytest.mark.asyncio
async def test_upsert_transport_error_leaves_local_record(sync, store, mock_client):
    """A raising client is reported, never propagated, and nothing is rolled back."""
    service = store.create("Grooming", "Bath", None)
    mock_client.execute.side_effect = ShopifyApiError("HTTP 503 after 5 attempts")

    result = await sync.upsert(service)

    assert result.status == SyncStatus.FAILED
    assert "HTTP 503" in result.error
    stored = store.get(service.id)
    assert stored.title == "Grooming"
    assert stored.description == "Bath"
    assert stored.remote_ref is None


@pytest.mark.asyncio
async def test_failed_resync_keeps_stale_reference(sync, store, mock_client):
    service = store.create("Grooming")
    linked = store.set_remote_ref(service.id, REMOTE_REF)
    mock_client.execute.side_effect = RuntimeError("socket closed")

    result = await sync.upsert(linked)

    assert result.status == SyncStatus.FAILED
    assert result.remote_ref == REMOTE_REF
    assert store.get(service.id).remote_ref == REMOTE_REF


@pytest.mark.asyncio
async def test_upsert_without_metaobject_id_is_failure(sync, store, mock_client):
    service = store.create("Grooming")
    mock_client.execute.return_value = {
        "data": {"metaobjectUpsert": {"metaobject": None, "userErrors": []}}
    }

    result = await sync.upsert(service)

    assert result.status == SyncStatus.FAILED
    assert store.get(service.id).remote_ref is None


@pytest.mark.asyncio
async def test_delete_without_reference_makes_no_call(sync, store, mock_client):
    service = store.create("Grooming")

    result = await sync.delete(service)

    assert result.status == SyncStatus.SKIPPED
    mock_client.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_with_reference_calls_once(sync, store, mock_client):
    service = store.set_remote_ref(store.create("Grooming").id, REMOTE_REF)
    mock_client.execute.return_value = {
        "data": {"metaobjectDelete": {"deletedId": REMOTE_REF, "userErrors": []}}
    }

    result = await sync.delete(service)

    assert result.status == SyncStatus.SYNCED
    mock_client.execute.assert_awaited_once_with(
        MUTATION_METAOBJECT_DELETE, {"id": REMOTE_REF}
    )


@pytest.mark.asyncio
async def test_delete_failure_is_reported(sync, store, mock_client):
    service = store.set_remote_ref(store.create("Grooming").id, REMOTE_REF)
    mock_client.execute.side_effect = ShopifyApiError("Network error after 5 attempts")

    result = await sync.delete(service)

    assert result.status == SyncStatus.FAILED
    assert "Network error" in result.error


@pytest.mark.asyncio
async def test_upsert_returns_linked_service(sync, store, mock_client):
    service = store.create("Grooming")
    mock_client.execute.return_value = _upsert_ok()

    result = await sync.upsert(service)

    assert result.service is not None
    assert result.service.id == service.id
    assert result.service.remote_ref == REMOTE_REF


@pytest.mark.asyncio
async def test_without_client_every_call_is_skipped(store):
    sync = RemoteCatalogSync(None, store)
    unlinked = store.create("Grooming")
    linked = store.set_remote_ref(store.create("Training").id, REMOTE_REF)

    upserted = await sync.upsert(unlinked)
    deleted = await sync.delete(linked)

    assert upserted.status == SyncStatus.SKIPPED
    assert upserted.ok
    assert deleted.status == SyncStatus.SKIPPED
    assert deleted.remote_ref == REMOTE_REF
    assert store.get(unlinked.id).remote_ref is None
