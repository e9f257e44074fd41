"""Collection listing endpoint."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import Settings, get_settings
from ..dependencies import get_storefront
from ..models import CollectionResponse, ProductCard
from core.types import ProductListingNode
from network.storefront_client import StorefrontClient
from utils.error_handling import ErrorContext, StorefrontAPIError, log_error
from utils.logger import get_logger
from utils.money import format_money


logger = get_logger(__name__)

router = APIRouter()


def build_card(node: ProductListingNode) -> ProductCard:
    price = node.price_range.min_variant_price
    return ProductCard(
        id=node.id,
        handle=node.handle,
        title=node.title,
        featured_image=(
            node.featured_image.model_dump(by_alias=True) if node.featured_image else None
        ),
        min_price=price.model_dump(by_alias=True),
        formatted_price=format_money(price),
    )


@router.get("/collection", response_model=CollectionResponse)
async def get_collection(
    first: Optional[int] = Query(default=None, ge=1, le=250),
    storefront: StorefrontClient = Depends(get_storefront),
    settings: Settings = Depends(get_settings),
):
    """
    List the configured collection.

    A missing collection or a failing Storefront API yields an empty product
    list so the storefront can render its empty state.

    Args:
        first: Number of products (defaults to ``collection_page_size``)
        storefront: Storefront API client (injected)
        settings: Application settings (injected)

    Returns:
        CollectionResponse: Collection title and product cards
    """
    handle = settings.collection_handle
    try:
        collection = await storefront.get_collection(
            handle, first or settings.collection_page_size
        )
    except StorefrontAPIError as e:
        log_error(e, ErrorContext(operation="get_collection", handle=handle), log=logger)
        collection = None

    if collection is None:
        return CollectionResponse(handle=handle)

    return CollectionResponse(
        handle=handle,
        title=collection.title,
        products=[build_card(node) for node in collection.products],
    )
