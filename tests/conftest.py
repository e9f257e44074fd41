"""Shared fixtures: Storefront API payloads and a fake client."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Dict, List, Optional

import pytest

sys.path.append(str(Path(__file__).resolve().parent.parent))

from core.types import Collection, Product, Shop  # noqa: E402
from utils.error_handling import StorefrontAPIError  # noqa: E402


def _money(amount: str, currency: str = "USD") -> Dict[str, str]:
    return {"amount": amount, "currencyCode": currency}


def _variant(
    variant_id: str,
    color: str,
    size: str,
    available: bool,
    amount: str = "19.5",
    image_url: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": f"gid://shopify/ProductVariant/{variant_id}",
        "title": f"{color} / {size}",
        "availableForSale": available,
        "selectedOptions": [
            {"name": "Color", "value": color},
            {"name": "Size", "value": size},
        ],
        "price": _money(amount),
        "compareAtPrice": None,
        "image": (
            {"url": image_url, "altText": None, "width": 800, "height": 800}
            if image_url
            else None
        ),
    }


def tee_payload() -> Dict[str, Any]:
    """Color:[Red,Blue] x Size:[S,M] with Red/M sold out and Blue/M missing."""
    return {
        "id": "gid://shopify/Product/1",
        "title": "Classic Tee",
        "description": "Soft cotton tee",
        "handle": "classic-tee",
        "featuredImage": {
            "url": "https://cdn.example.com/tee.jpg",
            "altText": "Classic Tee",
            "width": 1000,
            "height": 1000,
        },
        "images": {"edges": []},
        "options": [
            {"id": "opt-color", "name": "Color", "values": ["Red", "Blue"]},
            {"id": "opt-size", "name": "Size", "values": ["S", "M"]},
        ],
        "variants": {
            "edges": [
                {"node": _variant("11", "Red", "S", True, image_url="https://cdn.example.com/red.jpg")},
                {"node": _variant("12", "Red", "M", False, amount="21.00")},
                {"node": _variant("13", "Blue", "S", True, amount="18.00")},
            ]
        },
    }


def gift_card_payload() -> Dict[str, Any]:
    """Product without options; its first variant is sold out."""
    return {
        "id": "gid://shopify/Product/2",
        "title": "Gift Card",
        "description": "",
        "handle": "gift-card",
        "featuredImage": None,
        "images": {"edges": []},
        "options": [],
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/ProductVariant/21",
                        "title": "Default",
                        "availableForSale": False,
                        "selectedOptions": [],
                        "price": _money("10.00"),
                        "compareAtPrice": None,
                        "image": None,
                    }
                },
                {
                    "node": {
                        "id": "gid://shopify/ProductVariant/22",
                        "title": "Default",
                        "availableForSale": True,
                        "selectedOptions": [],
                        "price": _money("25.00"),
                        "compareAtPrice": _money("30.00"),
                        "image": None,
                    }
                },
            ]
        },
    }


def collection_payload() -> Dict[str, Any]:
    return {
        "id": "gid://shopify/Collection/1",
        "title": "Home page",
        "products": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/Product/1",
                        "handle": "classic-tee",
                        "title": "Classic Tee",
                        "featuredImage": None,
                        "priceRange": {"minVariantPrice": _money("18.0")},
                    }
                },
                {
                    "node": {
                        "id": "gid://shopify/Product/2",
                        "handle": "gift-card",
                        "title": "Gift Card",
                        "featuredImage": None,
                        "priceRange": {"minVariantPrice": _money("1234.5")},
                    }
                },
            ]
        },
    }


class FakeStorefront:
    """In-memory substitute for StorefrontClient."""

    def __init__(
        self,
        products: Optional[List[Dict[str, Any]]] = None,
        collection: Optional[Dict[str, Any]] = None,
        fail: bool = False,
        fail_status: int = 502,
    ) -> None:
        self._products = {
            payload["handle"]: Product.model_validate(payload) for payload in products or []
        }
        self._collection = Collection.model_validate(collection) if collection else None
        self.fail = fail
        self.fail_status = fail_status
        self.calls: List[tuple] = []

    async def get_product(self, handle: str) -> Optional[Product]:
        self.calls.append(("get_product", handle))
        if self.fail:
            raise StorefrontAPIError("upstream unavailable", status_code=self.fail_status)
        return self._products.get(handle)

    async def get_collection(self, handle: str, first: int = 20) -> Optional[Collection]:
        self.calls.append(("get_collection", handle, first))
        if self.fail:
            raise StorefrontAPIError("upstream unavailable", status_code=self.fail_status)
        return self._collection

    async def get_shop(self) -> Shop:
        self.calls.append(("get_shop",))
        if self.fail:
            raise StorefrontAPIError("connection refused")
        return Shop(name="Demo Shop")


@pytest.fixture
def tee() -> Product:
    return Product.model_validate(tee_payload())


@pytest.fixture
def gift_card() -> Product:
    return Product.model_validate(gift_card_payload())


@pytest.fixture
def storefront() -> FakeStorefront:
    return FakeStorefront(
        products=[tee_payload(), gift_card_payload()],
        collection=collection_payload(),
    )
