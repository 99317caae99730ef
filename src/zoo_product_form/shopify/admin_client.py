"""Async Shopify Admin GraphQL client."""
import asyncio
import logging
import random
from typing import Any, Optional

import aiohttp

from .exceptions import ShopifyApiError, ShopifyGraphQLError


class ShopifyAdminClient:
    """Async client for the Shopify GraphQL Admin API.

    Executes single GraphQL documents against the shop's Admin endpoint.
    Implements retry logic for 429/5xx/network errors; everything else is
    surfaced to the caller as a ShopifyClientError subclass.
    """

    MAX_RETRY_ATTEMPTS = 4
    RETRY_BASE_DELAY = 0.5  # seconds
    RETRY_MULTIPLIER = 2.0
    RETRY_MAX_DELAY = 10.0  # seconds
    RETRY_JITTER_MS = 250  # milliseconds

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str,
        session: aiohttp.ClientSession,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Shopify Admin client.

        Args:
            shop_domain: e.g., "zoo-shop.myshopify.com"
            access_token: Admin API access token (never logged)
            api_version: e.g., "2024-10"
            session: Injected aiohttp ClientSession
            logger: Optional logger instance
        """
        self.shop_domain = shop_domain
        self._access_token = access_token
        self.api_version = api_version
        self.session = session
        self.logger = logger or logging.getLogger(__name__)

        self.graphql_endpoint = (
            f"https://{shop_domain}/admin/api/{api_version}/graphql.json"
        )

    async def execute(
        self,
        document: str,
        variables: Optional[dict[str, Any]] = None,
        retry: bool = True,
    ) -> dict:
        """Execute a GraphQL query or mutation.

        Args:
            document: GraphQL document string
            variables: Optional variables for the document
            retry: Whether to retry on transient errors

        Returns:
            Parsed JSON response (``{"data": ...}``)

        Raises:
            ShopifyApiError: On non-retryable HTTP errors or max retries exceeded
            ShopifyGraphQLError: If the response carries root-level errors
        """
        payload: dict[str, Any] = {"query": document}
        if variables is not None:
            payload["variables"] = variables

        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self._access_token,
        }

        attempt = 0
        while True:
            attempt += 1

            try:
                timeout = aiohttp.ClientTimeout(total=30, connect=10)
                async with self.session.post(
                    self.graphql_endpoint,
                    json=payload,
                    headers=headers,
                    timeout=timeout,
                ) as resp:
                    if resp.status == 429:
                        response_text = await resp.text()
                        if not retry or attempt > self.MAX_RETRY_ATTEMPTS:
                            raise ShopifyApiError(
                                f"HTTP 429 after {attempt} attempts: {response_text[:200]}"
                            )

                        delay = self._retry_after_delay(
                            resp.headers.get("Retry-After"), attempt
                        )
                        self.logger.warning(
                            "HTTP 429, delay=%.2fs, attempt=%s", delay, attempt
                        )
                        await asyncio.sleep(delay)
                        continue

                    if 500 <= resp.status < 600:
                        response_text = await resp.text()
                        if not retry or attempt > self.MAX_RETRY_ATTEMPTS:
                            raise ShopifyApiError(
                                f"HTTP {resp.status} after {attempt} attempts: {response_text[:200]}"
                            )

                        delay = self._calculate_backoff(attempt)
                        self.logger.warning(
                            "HTTP %s, backoff=%.2fs, attempt=%s",
                            resp.status,
                            delay,
                            attempt,
                        )
                        await asyncio.sleep(delay)
                        continue

                    if 400 <= resp.status < 500:
                        response_text = await resp.text()
                        raise ShopifyApiError(
                            f"HTTP {resp.status} (non-retryable): {response_text[:500]}"
                        )

                    resp.raise_for_status()
                    json_data = await resp.json()

                    # Root-level errors come back with HTTP 200 and no usable data
                    if "errors" in json_data and json_data["errors"]:
                        error_messages = [
                            e.get("message", str(e)) for e in json_data["errors"]
                        ]
                        raise ShopifyGraphQLError(
                            f"GraphQL root errors: {'; '.join(error_messages)}"
                        )

                    if json_data.get("data") is None:
                        raise ShopifyApiError("GraphQL response missing data")

                    return json_data

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if not retry or attempt > self.MAX_RETRY_ATTEMPTS:
                    raise ShopifyApiError(
                        f"Network error after {attempt} attempts: {e}"
                    ) from e

                delay = self._calculate_backoff(attempt)
                self.logger.warning(
                    "Network error: %s, backoff=%.2fs, attempt=%s", e, delay, attempt
                )
                await asyncio.sleep(delay)
                continue

    def _retry_after_delay(self, retry_after: Optional[str], attempt: int) -> float:
        """Use Retry-After seconds when numeric, else exponential backoff.

        HTTP-date values are not parsed.
        """
        if retry_after:
            try:
                return max(float(retry_after), 0.0)
            except ValueError:
                self.logger.debug("Unparseable Retry-After: %s", retry_after)
        return self._calculate_backoff(attempt)

    def _calculate_backoff(self, attempt: int) -> float:
        """Calculate exponential backoff with jitter.

        Args:
            attempt: Current retry attempt number (1-indexed)

        Returns:
            Delay in seconds
        """
        delay = min(
            self.RETRY_BASE_DELAY * (self.RETRY_MULTIPLIER ** (attempt - 1)),
            self.RETRY_MAX_DELAY,
        )
        jitter = random.uniform(0, self.RETRY_JITTER_MS / 1000.0)
        return delay + jitter
