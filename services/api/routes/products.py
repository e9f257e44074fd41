"""Product detail and quick-view endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from ..dependencies import get_storefront
from ..models import ErrorResponse
from core.quick_view import QuickViewSession
from core.types import Product
from network.storefront_client import StorefrontClient
from utils.error_handling import ErrorContext, StorefrontAPIError, log_error
from utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter()

PRODUCT_ERRORS = {
    404: {"model": ErrorResponse, "description": "Product not found"},
    502: {"model": ErrorResponse, "description": "Storefront API call failed"},
    504: {"model": ErrorResponse, "description": "Storefront API timed out"},
}


async def load_product(storefront: StorefrontClient, handle: str) -> Product:
    """
    Fetch a product or translate the failure into an HTTP error.

    Raises:
        HTTPException: 404 if the handle is unknown, 502 (504 on timeout) if
            the Storefront API call fails
    """
    try:
        product = await storefront.get_product(handle)
    except StorefrontAPIError as e:
        log_error(e, ErrorContext(operation="get_product", handle=handle), log=logger)
        raise HTTPException(status_code=e.status_code, detail="Failed to fetch product")

    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/product/{handle}", responses=PRODUCT_ERRORS)
async def get_product(
    handle: str,
    storefront: StorefrontClient = Depends(get_storefront)
):
    """
    Get product details.

    Returns the product with its declared options and flattened variant list.

    Args:
        handle: Product handle
        storefront: Storefront API client (injected)

    Returns:
        dict: ``{"product": {...}}``

    Raises:
        HTTPException: 404 if product not found, 502/504 on upstream failure

    Example response:
        ```json
        {
            "product": {
                "id": "gid://shopify/Product/1",
                "handle": "classic-tee",
                "title": "Classic Tee",
                "options": [{"id": "...", "name": "Color", "values": ["Red", "Blue"]}],
                "variants": [{"id": "...", "availableForSale": true, "...": "..."}]
            }
        }
        ```
    """
    product = await load_product(storefront, handle)
    return {"product": product.model_dump(by_alias=True)}


@router.get("/product/{handle}/quick-view", responses=PRODUCT_ERRORS)
async def get_quick_view(
    handle: str,
    request: Request,
    storefront: StorefrontClient = Depends(get_storefront)
):
    """
    Get the quick-view state for a selection.

    Every query parameter is an option selection
    (``?Color=Red&Size=S``); a repeated name keeps its last value.
    Names the product does not declare never match a variant.

    Args:
        handle: Product handle
        request: FastAPI request (selection is read from its query string)
        storefront: Storefront API client (injected)

    Returns:
        dict: Selected variant, display price/image, add-to-bag eligibility
        and per-value availability for every option

    Example response:
        ```json
        {
            "selectedOptions": {"Color": "Red"},
            "selectedVariant": null,
            "formattedPrice": "$19.50",
            "allOptionsSelected": false,
            "canAddToBag": false,
            "options": [
                {"name": "Size", "selectedValue": null,
                 "values": [{"value": "S", "selected": false, "available": true},
                            {"value": "M", "selected": false, "available": false}]}
            ]
        }
        ```
    """
    product = await load_product(storefront, handle)

    session = QuickViewSession(product)
    for name, value in request.query_params.multi_items():
        session = session.select(name, value)

    return session.to_view()
