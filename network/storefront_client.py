"""
Async client for the Shopify Storefront GraphQL API.

Built on httpx.AsyncClient with a single connection pool per client.
Responses are parsed into the frozen records of ``core.types``.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx
from pydantic import ValidationError as PydanticValidationError

from core.types import Collection, Product, Shop
from network.storefront_queries import GET_COLLECTION_PRODUCTS, GET_PRODUCT_BY_HANDLE, GET_SHOP
from utils.error_handling import ConfigurationError, StorefrontAPIError
from utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from services.api.config import Settings

logger = get_logger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"


class StorefrontClient:
    """
    Storefront API client.

    Usage:
        async with StorefrontClient(domain, token) as client:
            product = await client.get_product("classic-tee")
    """

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = "2025-01",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not store_domain:
            raise ConfigurationError("Shopify store domain is not configured")
        if not access_token:
            raise ConfigurationError("Storefront access token is not configured")

        domain = store_domain.strip().rstrip("/")
        if not domain.startswith(("http://", "https://")):
            domain = f"https://{domain}"

        self.endpoint = f"{domain}/api/{api_version}/graphql.json"
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                ACCESS_TOKEN_HEADER: access_token,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_settings(
        cls, settings: "Settings", transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "StorefrontClient":
        return cls(
            store_domain=settings.shopify_store_domain,
            access_token=settings.shopify_storefront_access_token,
            api_version=settings.shopify_api_version,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Execute a GraphQL document and return its ``data`` object.

        Raises:
            StorefrontAPIError: network failure, HTTP error status, invalid
                JSON or a GraphQL ``errors`` payload
        """
        payload = {"query": query, "variables": variables or {}}
        start = time.perf_counter()
        try:
            response = await self._client.post(self.endpoint, json=payload)
        except httpx.TimeoutException as exc:
            raise StorefrontAPIError(
                f"Timed out calling Storefront API: {exc}",
                status_code=504,
                context={"endpoint": self.endpoint},
            ) from exc
        except httpx.RequestError as exc:
            raise StorefrontAPIError(
                f"Network error while calling Storefront API: {exc}",
                context={"endpoint": self.endpoint},
            ) from exc

        elapsed = time.perf_counter() - start
        logger.debug(f"Storefront API {response.status_code} in {elapsed:.3f}s")

        if response.status_code >= 400:
            raise StorefrontAPIError(
                f"Storefront API call failed ({response.status_code}): {response.text[:200]}",
                status_code=502,
                context={"upstream_status": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise StorefrontAPIError("Storefront API returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise StorefrontAPIError("Storefront API response must be a JSON object")

        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise StorefrontAPIError(
                f"Storefront API returned errors: {messages}",
                context={"errors": errors},
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise StorefrontAPIError("Storefront API response is missing data")
        return data

    async def get_shop(self) -> Shop:
        data = await self.request(GET_SHOP)
        return self._parse(Shop, data.get("shop"), "shop")

    async def get_collection(self, handle: str, first: int = 20) -> Optional[Collection]:
        """Fetch the first ``first`` product cards of a collection."""
        data = await self.request(GET_COLLECTION_PRODUCTS, {"handle": handle, "first": first})
        collection = data.get("collection")
        if collection is None:
            logger.info(f"Collection not found: {handle}")
            return None
        return self._parse(Collection, collection, "collection")

    async def get_product(self, handle: str) -> Optional[Product]:
        """Fetch one product with its options and variants; None when unknown."""
        data = await self.request(GET_PRODUCT_BY_HANDLE, {"handle": handle})
        product = data.get("product")
        if product is None:
            return None
        return self._parse(Product, product, "product")

    @staticmethod
    def _parse(model, payload: Any, name: str):
        if payload is None:
            raise StorefrontAPIError(f"Storefront API response is missing {name}")
        try:
            return model.model_validate(payload)
        except PydanticValidationError as exc:
            raise StorefrontAPIError(
                f"Storefront API returned an invalid {name}: {exc.error_count()} error(s)",
                context={"errors": exc.errors(include_url=False)},
            ) from exc


__all__ = ["ACCESS_TOKEN_HEADER", "StorefrontClient"]
