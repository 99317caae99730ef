"""Product title lookup and update for the product editor."""
import logging
from typing import Optional

from .admin_client import ShopifyAdminClient
from .exceptions import ShopifyGraphQLError
from .graphql_strings import MUTATION_PRODUCT_TITLE_UPDATE, QUERY_PRODUCT_TITLE


logger = logging.getLogger(__name__)


def to_product_gid(raw_id: str) -> str:
    """Expand a numeric product id to a Product GID."""
    raw_id = raw_id.strip()
    if raw_id.startswith("gid://"):
        return raw_id
    return f"gid://shopify/Product/{raw_id}"


async def fetch_product(client: ShopifyAdminClient, raw_id: str) -> Optional[dict]:
    """Return ``{"id", "title"}`` for a product, or None if it doesn't exist."""
    resp_data = await client.execute(QUERY_PRODUCT_TITLE, {"id": to_product_gid(raw_id)})
    return resp_data["data"].get("product")


async def update_product_title(
    client: ShopifyAdminClient, raw_id: str, title: str
) -> dict:
    """Rename a product.

    Raises:
        ShopifyGraphQLError: If productUpdate returns userErrors
    """
    product_id = to_product_gid(raw_id)
    resp_data = await client.execute(
        MUTATION_PRODUCT_TITLE_UPDATE, {"input": {"id": product_id, "title": title}}
    )

    mutation_result = resp_data["data"]["productUpdate"]
    user_errors = mutation_result.get("userErrors") or []
    if user_errors:
        raise ShopifyGraphQLError(user_errors)

    logger.info("Updated product title: %s", product_id)
    return mutation_result["product"]
