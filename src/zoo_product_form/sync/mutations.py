"""Two-phase service mutations: commit locally, then mirror best-effort."""
import logging
from typing import Optional

from ..schemas.services import ServiceMutationOutcome
from ..store.services import ServiceStore
from .catalog_sync import RemoteCatalogSync


logger = logging.getLogger(__name__)


async def create_service(
    store: ServiceStore,
    sync: RemoteCatalogSync,
    title: Optional[str],
    description: Optional[str] = None,
    image_url: Optional[str] = None,
) -> ServiceMutationOutcome:
    """Create a service and push it to a new Metaobject.

    Store errors (including ValidationError) propagate; sync failures are
    returned on the outcome.
    """
    service = store.create(title, description, image_url)
    result = await sync.upsert(service)
    return ServiceMutationOutcome(service=result.service or service, sync=result)


async def update_service(
    store: ServiceStore,
    sync: RemoteCatalogSync,
    service_id: int,
    title: Optional[str],
    description: Optional[str] = None,
    image_url: Optional[str] = None,
) -> ServiceMutationOutcome:
    """Update a service and mirror it by its known reference (or a new entry)."""
    service = store.update(service_id, title, description, image_url)
    result = await sync.upsert(service)
    return ServiceMutationOutcome(service=result.service or service, sync=result)


async def delete_service(
    store: ServiceStore,
    sync: RemoteCatalogSync,
    service_id: int,
) -> ServiceMutationOutcome:
    """Delete a service locally, then remove its Metaobject if linked."""
    service = store.get(service_id)
    store.delete(service_id)
    result = await sync.delete(service)
    if not result.ok:
        logger.warning(
            "Service id=%s deleted locally; metaobject %s left behind",
            service_id,
            service.remote_ref,
        )
    return ServiceMutationOutcome(service=service, sync=result)
