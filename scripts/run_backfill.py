#!/usr/bin/env python3
"""CLI entry point for the zoo_service Metaobject backfill.

Usage:
    # Ensure the definition exists and sync every service
    PYTHONPATH=. python scripts/run_backfill.py

    # Only ensure the definition
    PYTHONPATH=. python scripts/run_backfill.py --definition-only
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

import aiohttp

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.zoo_product_form.config import Settings
from src.zoo_product_form.shopify.admin_client import ShopifyAdminClient
from src.zoo_product_form.shopify.exceptions import ShopifyClientError
from src.zoo_product_form.store.services import ServiceStore
from src.zoo_product_form.sync.bootstrap import DefinitionBootstrap
from src.zoo_product_form.sync.catalog_sync import RemoteCatalogSync
from src.zoo_product_form.sync.exceptions import DefinitionBootstrapError


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def run_definition_only(bootstrap: DefinitionBootstrap) -> int:
    """Ensure the definition exists; returns the process exit code."""
    try:
        definition_id = await bootstrap.ensure_definition()
    except (DefinitionBootstrapError, ShopifyClientError) as exc:
        logging.error("Definition bootstrap failed: %s", exc)
        print(f"Fatal error: {exc}")
        return 1

    print(f"Definition: {definition_id}")
    return 0


async def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="zoo_service Metaobject backfill")
    parser.add_argument(
        "--definition-only",
        action="store_true",
        help="Ensure the metaobject definition exists without syncing services",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)

    settings = Settings.from_env()
    if not settings.shopify_configured:
        logging.error("SHOPIFY_STORE_DOMAIN and SHOPIFY_ADMIN_ACCESS_TOKEN must be set")
        return 2

    store = ServiceStore(settings.db_path)

    timeout = aiohttp.ClientTimeout(total=300, connect=30)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        client = ShopifyAdminClient(
            shop_domain=settings.shop_domain,
            access_token=settings.access_token,
            api_version=settings.api_version,
            session=session,
        )
        sync = RemoteCatalogSync(client, store, field_keys=settings.field_keys)
        bootstrap = DefinitionBootstrap(client, store, sync)

        if args.definition_only:
            return await run_definition_only(bootstrap)

        report = await bootstrap.backfill_all()

    for line in report.log_lines:
        print(f"[{line.level}] {line.message}")

    if not report.success:
        print(f"Fatal error: {report.fatal_error}")
        return 1

    print(
        f"=== Sync Complete === Success: {report.success_count} "
        f"Errors: {report.error_count} Total: {report.total}"
    )
    return 0 if report.error_count == 0 else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
