"""Best-effort mirror of services into zoo_service Metaobjects."""
import logging
from typing import Optional

from ..schemas.services import (
    AddressBy,
    MetaobjectFieldKeys,
    RemoteSyncResult,
    Service,
    SyncStatus,
    UserError,
)
from ..shopify.admin_client import ShopifyAdminClient
from ..shopify.graphql_strings import (
    MUTATION_METAOBJECT_DELETE,
    MUTATION_METAOBJECT_UPSERT,
)
from ..store.services import ServiceStore


logger = logging.getLogger(__name__)


class RemoteCatalogSync:
    """Mirrors Service records into Shopify Metaobjects.

    Every public method returns a RemoteSyncResult and never raises: the
    local record has already been committed by the time these run, so a
    remote failure is reported, not propagated. Without a client (shop not
    configured) every call is skipped.
    """

    def __init__(
        self,
        client: Optional[ShopifyAdminClient],
        store: ServiceStore,
        field_keys: Optional[MetaobjectFieldKeys] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.store = store
        self.field_keys = field_keys or MetaobjectFieldKeys()
        self.logger = logger_instance or logger

    def build_fields(self, service: Service) -> list[dict[str, str]]:
        """Build Metaobject fields from non-empty local values."""
        fields = [{"key": self.field_keys.title, "value": service.title}]

        if service.description:
            fields.append(
                {"key": self.field_keys.description, "value": service.description}
            )

        if service.image_url:
            fields.append({"key": self.field_keys.image, "value": service.image_url})

        return fields

    async def upsert(
        self,
        service: Service,
        address: Optional[AddressBy] = None,
    ) -> RemoteSyncResult:
        """Create or update the Metaobject mirroring a service.

        Args:
            service: Committed local record
            address: Addressing policy; defaults to AddressBy.for_service,
                i.e. the stored remote_ref when present, else a new entry

        Returns:
            RemoteSyncResult; remote_ref is written to the store only when the
            returned GID differs from the stored one
        """
        if self.client is None:
            self.logger.warning(
                "Shopify not configured, skipping upsert for service id=%s", service.id
            )
            return RemoteSyncResult(
                status=SyncStatus.SKIPPED, remote_ref=service.remote_ref
            )

        address = address or AddressBy.for_service(service)
        variables = {
            "handle": address.to_handle_input(),
            "metaobject": {"fields": self.build_fields(service)},
        }

        try:
            resp_data = await self.client.execute(MUTATION_METAOBJECT_UPSERT, variables)

            mutation_result = resp_data["data"]["metaobjectUpsert"] or {}
            user_errors = mutation_result.get("userErrors") or []
            if user_errors:
                self.logger.error(
                    "Metaobject upsert userErrors for service id=%s: %s",
                    service.id,
                    user_errors,
                )
                return RemoteSyncResult(
                    status=SyncStatus.FAILED,
                    remote_ref=service.remote_ref,
                    user_errors=[UserError(**e) for e in user_errors],
                )

            metaobject = mutation_result.get("metaobject") or {}
            remote_ref = metaobject.get("id")
            if not remote_ref:
                return RemoteSyncResult(
                    status=SyncStatus.FAILED,
                    remote_ref=service.remote_ref,
                    error="metaobjectUpsert returned no metaobject id",
                )

            linked = None
            if remote_ref != service.remote_ref:
                linked = self.store.set_remote_ref(service.id, remote_ref)

            self.logger.info(
                "Synced service id=%s to %s (address=%s)",
                service.id,
                remote_ref,
                address.mode.value,
            )
            return RemoteSyncResult(
                status=SyncStatus.SYNCED,
                remote_ref=remote_ref,
                reference_persisted=linked is not None,
                service=linked,
            )

        except Exception as exc:
            self.logger.error(
                "Metaobject upsert failed for service id=%s: %s",
                service.id,
                exc,
                exc_info=True,
            )
            return RemoteSyncResult(
                status=SyncStatus.FAILED,
                remote_ref=service.remote_ref,
                error=str(exc),
            )

    async def delete(self, service: Service) -> RemoteSyncResult:
        """Delete the Metaobject mirroring a service, if it has one."""
        if not service.remote_ref:
            return RemoteSyncResult(status=SyncStatus.SKIPPED)

        if self.client is None:
            self.logger.warning(
                "Shopify not configured, metaobject %s left behind", service.remote_ref
            )
            return RemoteSyncResult(
                status=SyncStatus.SKIPPED, remote_ref=service.remote_ref
            )

        try:
            resp_data = await self.client.execute(
                MUTATION_METAOBJECT_DELETE, {"id": service.remote_ref}
            )

            mutation_result = resp_data["data"]["metaobjectDelete"] or {}
            user_errors = mutation_result.get("userErrors") or []
            if user_errors:
                self.logger.error(
                    "Metaobject delete userErrors for %s: %s",
                    service.remote_ref,
                    user_errors,
                )
                return RemoteSyncResult(
                    status=SyncStatus.FAILED,
                    remote_ref=service.remote_ref,
                    user_errors=[UserError(**e) for e in user_errors],
                )

            self.logger.info("Deleted metaobject %s", service.remote_ref)
            return RemoteSyncResult(
                status=SyncStatus.SYNCED, remote_ref=service.remote_ref
            )

        except Exception as exc:
            self.logger.error(
                "Failed to delete metaobject %s: %s",
                service.remote_ref,
                exc,
                exc_info=True,
            )
            return RemoteSyncResult(
                status=SyncStatus.FAILED,
                remote_ref=service.remote_ref,
                error=str(exc),
            )
