"""Custom exceptions for the Shopify Admin GraphQL client."""


class ShopifyClientError(Exception):
    """Base exception for all Shopify Admin client errors."""


class ShopifyApiError(ShopifyClientError):
    """Raised for transport failures (HTTP 4xx/5xx, network, missing data)."""


class ShopifyGraphQLError(ShopifyClientError):
    """Raised when GraphQL returns root-level errors or escalated userErrors."""

    def __init__(self, user_errors: object):
        self.user_errors = user_errors
        if isinstance(user_errors, str):
            message = user_errors
        else:
            message = f"GraphQL userErrors: {user_errors}"
        super().__init__(message)
