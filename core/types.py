"""
Base data types for the storefront.

Records mirror the Storefront API response shapes (camelCase on the wire,
snake_case in Python). Every record is frozen: options and variants are
read-only for the lifetime of one quick-view session.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict as PydanticConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ============================================================================
# Type aliases
# ============================================================================

ProductHandle = str
OptionName = str
OptionValue = str
CurrencyCode = str

# Option name -> chosen value, built one click at a time
SelectionMap = Dict[OptionName, OptionValue]


def _flatten_connection(value: Any) -> Any:
    """Turn a GraphQL ``{"edges": [{"node": ...}]}`` connection into a list."""
    if isinstance(value, dict) and "edges" in value:
        return [edge.get("node") for edge in value.get("edges") or [] if edge]
    return value


class StorefrontModel(BaseModel):
    """Base record: camelCase aliases, immutable, tolerant of extra fields."""

    model_config = PydanticConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ============================================================================
# Catalog records
# ============================================================================


class Money(StorefrontModel):
    """Decimal string amount with an ISO 4217 currency code.

    Opaque for arithmetic; ``amount`` is only parsed for display.
    """

    amount: str = Field(..., description="Decimal amount as sent by the API")
    currency_code: CurrencyCode = Field(..., description="ISO 4217 code")


class Image(StorefrontModel):
    url: str
    alt_text: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class ProductOption(StorefrontModel):
    """A named axis of variation with its declared, ordered values."""

    id: str = ""
    name: OptionName
    values: List[OptionValue] = Field(default_factory=list)


class SelectedOption(StorefrontModel):
    """One concrete axis assignment carried by a variant."""

    name: OptionName
    value: OptionValue


class ProductVariant(StorefrontModel):
    """One purchasable combination of option values."""

    id: str
    title: str = ""
    available_for_sale: bool = False
    selected_options: List[SelectedOption] = Field(default_factory=list)
    price: Money
    compare_at_price: Optional[Money] = None
    image: Optional[Image] = None

    def option_value(self, name: OptionName) -> Optional[OptionValue]:
        for selected in self.selected_options:
            if selected.name == name:
                return selected.value
        return None


class Product(StorefrontModel):
    """Product detail record as returned by ``getProductByHandle``."""

    id: str
    title: str
    description: str = ""
    handle: ProductHandle
    featured_image: Optional[Image] = None
    images: List[Image] = Field(default_factory=list)
    options: List[ProductOption] = Field(default_factory=list)
    variants: List[ProductVariant] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _flatten_connections(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("images", "variants"):
                if key in data:
                    data[key] = _flatten_connection(data[key]) or []
        return data

    @property
    def has_options(self) -> bool:
        return len(self.options) > 0

    def get_option(self, name: OptionName) -> Optional[ProductOption]:
        for option in self.options:
            if option.name == name:
                return option
        return None


class PriceRange(StorefrontModel):
    min_variant_price: Money


class ProductListingNode(StorefrontModel):
    """One card of the collection grid."""

    id: str
    handle: ProductHandle
    title: str
    featured_image: Optional[Image] = None
    price_range: PriceRange


class Collection(StorefrontModel):
    id: str
    title: str
    products: List[ProductListingNode] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _flatten_products(cls, data: Any) -> Any:
        if isinstance(data, dict) and "products" in data:
            data = dict(data)
            data["products"] = _flatten_connection(data["products"]) or []
        return data


class Shop(StorefrontModel):
    name: str
    description: Optional[str] = None


__all__ = [
    "ProductHandle",
    "OptionName",
    "OptionValue",
    "CurrencyCode",
    "SelectionMap",
    "StorefrontModel",
    "Money",
    "Image",
    "ProductOption",
    "SelectedOption",
    "ProductVariant",
    "Product",
    "PriceRange",
    "ProductListingNode",
    "Collection",
    "Shop",
]
