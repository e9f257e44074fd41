"""Pydantic models for API request/response schemas."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime


class ApiModel(BaseModel):
    """Response/request base with camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCard(ApiModel):
    """
    One product card of the collection grid.

    Carries the cheapest variant price already formatted for display.
    """
    id: str = Field(..., description="Product GID")
    handle: str = Field(..., description="Product handle")
    title: str = Field(..., description="Product title")
    featured_image: Optional[Dict[str, Any]] = Field(default=None, description="Featured image")
    min_price: Dict[str, Any] = Field(..., description="Cheapest variant price")
    formatted_price: str = Field(..., description="Display price")


class CollectionResponse(ApiModel):
    """Collection listing response."""
    handle: str = Field(..., description="Collection handle")
    title: Optional[str] = Field(default=None, description="Collection title")
    products: List[ProductCard] = Field(default_factory=list, description="Product cards")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "handle": "frontpage",
                "title": "Home page",
                "products": [
                    {
                        "id": "gid://shopify/Product/1",
                        "handle": "classic-tee",
                        "title": "Classic Tee",
                        "featuredImage": None,
                        "minPrice": {"amount": "19.5", "currencyCode": "USD"},
                        "formattedPrice": "$19.50",
                    }
                ],
            }
        },
    )


class AddToBagRequest(ApiModel):
    """
    Request to add the variant matching a selection to the bag.

    Products without options may omit ``selectedOptions``.
    """
    handle: str = Field(..., description="Product handle")
    selected_options: Dict[str, str] = Field(default_factory=dict, description="Option name -> value")
    quantity: int = Field(default=1, ge=1, le=99, description="Units to add")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "handle": "classic-tee",
                "selectedOptions": {"Color": "Red", "Size": "S"},
                "quantity": 1,
            }
        },
    )


class BagLineResponse(ApiModel):
    """One line of the bag."""
    variant_id: str = Field(..., description="Variant GID")
    product_handle: str = Field(..., description="Product handle")
    product_title: str = Field(..., description="Product title")
    variant_title: str = Field(..., description="Variant title")
    quantity: int = Field(..., description="Units in the bag")
    price: Dict[str, Any] = Field(..., description="Unit price")
    formatted_price: str = Field(..., description="Display unit price")
    added_at: datetime = Field(..., description="First time the line was added")


class BagResponse(ApiModel):
    """Bag contents."""
    lines: List[BagLineResponse] = Field(default_factory=list)
    item_count: int = Field(default=0, description="Total units")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Overall health status")
    storefront: str = Field(..., description="Storefront API status")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "storefront": "ok"
            }
        }
    )


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str = Field(..., description="Error message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "Product not found"
            }
        }
    )
