"""zoo_service Metaobject definition bootstrap and catalog backfill."""
import logging
from typing import Optional

from ..schemas.services import METAOBJECT_TYPE, AddressBy, SyncLogLine, SyncReport
from ..shopify.admin_client import ShopifyAdminClient
from ..shopify.graphql_strings import (
    MUTATION_METAOBJECT_DEFINITION_CREATE,
    QUERY_METAOBJECT_DEFINITIONS,
)
from ..store.services import ServiceStore
from .catalog_sync import RemoteCatalogSync
from .exceptions import DefinitionBootstrapError


logger = logging.getLogger(__name__)


DEFINITION_PAGE_SIZE = 50

ZOO_SERVICE_DEFINITION = {
    "type": METAOBJECT_TYPE,
    "name": "Zoo Service",
    "description": "Service catalog for Zoo products",
    "fieldDefinitions": [
        {
            "key": "title",
            "name": "Title",
            "type": "single_line_text_field",
            "required": True,
        },
        {
            "key": "description",
            "name": "Description",
            "type": "multi_line_text_field",
        },
        {
            "key": "image_url",
            "name": "Image URL",
            "type": "url",
        },
    ],
    "access": {"storefront": "PUBLIC_READ"},
}


class DefinitionBootstrap:
    """Ensures the zoo_service definition exists and backfills all services."""

    def __init__(
        self,
        client: ShopifyAdminClient,
        store: ServiceStore,
        sync: RemoteCatalogSync,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.store = store
        self.sync = sync
        self.logger = logger_instance or logger

    async def find_definition(self) -> Optional[str]:
        """Return the GID of the existing zoo_service definition, if any."""
        resp_data = await self.client.execute(
            QUERY_METAOBJECT_DEFINITIONS, {"first": DEFINITION_PAGE_SIZE}
        )

        edges = resp_data["data"]["metaobjectDefinitions"]["edges"]
        for edge in edges:
            node = edge.get("node") or {}
            if node.get("type") == METAOBJECT_TYPE:
                return node["id"]
        return None

    async def ensure_definition(self) -> str:
        """Check for the zoo_service definition and create it when missing.

        Not cached: every call queries Shopify first.

        Returns:
            Definition GID (existing or newly created)

        Raises:
            DefinitionBootstrapError: If creation returns userErrors
            ShopifyClientError: On transport or GraphQL failures
        """
        self.logger.info("Checking for existing metaobject definition...")
        definition_id = await self.find_definition()
        if definition_id:
            self.logger.info("Found existing metaobject definition: %s", definition_id)
            return definition_id

        self.logger.info("Creating %s metaobject definition...", METAOBJECT_TYPE)
        resp_data = await self.client.execute(
            MUTATION_METAOBJECT_DEFINITION_CREATE,
            {"definition": ZOO_SERVICE_DEFINITION},
        )

        mutation_result = resp_data["data"]["metaobjectDefinitionCreate"]
        user_errors = mutation_result.get("userErrors") or []
        if user_errors:
            raise DefinitionBootstrapError(user_errors)

        definition_id = mutation_result["metaobjectDefinition"]["id"]
        self.logger.info("Created metaobject definition: %s", definition_id)
        return definition_id

    async def backfill_all(self) -> SyncReport:
        """Upsert every stored service by its service-<id> handle.

        Runs sequentially, one Shopify call at a time, and never stops on a
        per-record failure.

        Returns:
            SyncReport with counts and two log lines per service
        """
        try:
            definition_id = await self.ensure_definition()
        except Exception as exc:
            self.logger.error("Definition bootstrap failed: %s", exc, exc_info=True)
            return SyncReport(success=False, fatal_error=str(exc))

        services = self.store.list(newest_first=False)
        self.logger.info("Found %s services to sync", len(services))

        report = SyncReport(
            success=True,
            definition_id=definition_id,
            total=len(services),
        )

        for service in services:
            report.log_lines.append(
                SyncLogLine(
                    level="info",
                    message=f"Syncing service: {service.title}",
                    service_id=service.id,
                )
            )

            result = await self.sync.upsert(service, AddressBy.handle(service.handle))

            if result.ok:
                report.success_count += 1
                report.log_lines.append(
                    SyncLogLine(
                        level="success",
                        message=f'Synced "{service.title}" ({result.remote_ref})',
                        service_id=service.id,
                    )
                )
            else:
                report.error_count += 1
                report.log_lines.append(
                    SyncLogLine(
                        level="error",
                        message=f'Failed to sync "{service.title}": {result.describe_failure()}',
                        service_id=service.id,
                    )
                )

        self.logger.info(
            "Backfill complete: success=%s, errors=%s, total=%s",
            report.success_count,
            report.error_count,
            report.total,
        )
        return report
