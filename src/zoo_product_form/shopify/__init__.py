"""Shopify integration modules."""
from .admin_client import ShopifyAdminClient
from .exceptions import ShopifyApiError, ShopifyClientError, ShopifyGraphQLError

__all__ = [
    "ShopifyAdminClient",
    "ShopifyClientError",
    "ShopifyApiError",
    "ShopifyGraphQLError",
]
