"""FastAPI dependency providers for store, Shopify client and sync."""
from typing import AsyncIterator, Optional

import aiohttp
from fastapi import Depends, HTTPException, status

from ..config import Settings
from ..shopify.admin_client import ShopifyAdminClient
from ..store.services import ServiceStore
from ..sync.bootstrap import DefinitionBootstrap
from ..sync.catalog_sync import RemoteCatalogSync


def get_settings() -> Settings:
    return Settings.from_env()


def get_service_store(settings: Settings = Depends(get_settings)) -> ServiceStore:
    return ServiceStore(settings.db_path)


async def get_optional_admin_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[Optional[ShopifyAdminClient]]:
    """Yield a Shopify Admin client bound to a per-request aiohttp session.

    Yields None when the shop credentials are not configured, so local-only
    routes keep working without Shopify.
    """
    if not settings.shopify_configured:
        yield None
        return

    timeout = aiohttp.ClientTimeout(total=120, connect=10)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        yield ShopifyAdminClient(
            shop_domain=settings.shop_domain,
            access_token=settings.access_token,
            api_version=settings.api_version,
            session=session,
        )


def get_admin_client(
    client: Optional[ShopifyAdminClient] = Depends(get_optional_admin_client),
) -> ShopifyAdminClient:
    """Require a configured Shopify client (setup and product editor)."""
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="SHOPIFY_STORE_DOMAIN and SHOPIFY_ADMIN_ACCESS_TOKEN must be set",
        )
    return client


def get_catalog_sync(
    client: Optional[ShopifyAdminClient] = Depends(get_optional_admin_client),
    store: ServiceStore = Depends(get_service_store),
    settings: Settings = Depends(get_settings),
) -> RemoteCatalogSync:
    return RemoteCatalogSync(client, store, field_keys=settings.field_keys)


def get_definition_bootstrap(
    client: ShopifyAdminClient = Depends(get_admin_client),
    store: ServiceStore = Depends(get_service_store),
    settings: Settings = Depends(get_settings),
) -> DefinitionBootstrap:
    sync = RemoteCatalogSync(client, store, field_keys=settings.field_keys)
    return DefinitionBootstrap(client, store, sync)
