"""Bag endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from ..bag import Bag, BagLine
from ..dependencies import get_bag, get_storefront
from ..models import AddToBagRequest, BagLineResponse, BagResponse
from .products import load_product
from core.quick_view import QuickViewSession
from network.storefront_client import StorefrontClient
from utils.logger import log_storefront_event
from utils.money import format_money


router = APIRouter()


def _line_response(line: BagLine) -> BagLineResponse:
    return BagLineResponse(
        variant_id=line.variant_id,
        product_handle=line.product_handle,
        product_title=line.product_title,
        variant_title=line.variant_title,
        quantity=line.quantity,
        price=line.price.model_dump(by_alias=True),
        formatted_price=format_money(line.price),
        added_at=line.added_at,
    )


async def _bag_response(bag: Bag) -> BagResponse:
    lines = await bag.lines()
    return BagResponse(
        lines=[_line_response(line) for line in lines],
        item_count=sum(line.quantity for line in lines),
    )


@router.post("/bag", response_model=BagResponse, status_code=201)
async def add_to_bag(
    req: AddToBagRequest,
    storefront: StorefrontClient = Depends(get_storefront),
    bag: Bag = Depends(get_bag)
):
    """
    Add the variant matching a selection to the bag.

    The selection must name a value for every option the product declares
    and resolve to a variant that is available for sale.

    Args:
        req: Product handle, selected options and quantity
        storefront: Storefront API client (injected)
        bag: Bag (injected)

    Returns:
        BagResponse: Bag contents after the add

    Raises:
        HTTPException: 404 if product not found, 409 if the selection is
            incomplete, matches no variant or the variant is sold out
    """
    product = await load_product(storefront, req.handle)

    session = QuickViewSession(product)
    for name, value in req.selected_options.items():
        session = session.select(name, value)

    variant = session.selected_variant
    if not session.all_options_selected:
        raise HTTPException(status_code=409, detail="Select a value for every option")
    if variant is None:
        raise HTTPException(status_code=409, detail="No variant matches the selected options")
    if not variant.available_for_sale:
        raise HTTPException(status_code=409, detail="Variant is sold out")

    line = await bag.add(product, variant, req.quantity)
    log_storefront_event(
        "bag_add",
        f"Added {variant.id} to bag",
        {"handle": product.handle, "variant_id": variant.id, "quantity": line.quantity},
    )
    return await _bag_response(bag)


@router.get("/bag", response_model=BagResponse)
async def get_bag_contents(bag: Bag = Depends(get_bag)):
    """List bag lines in the order they were first added."""
    return await _bag_response(bag)


@router.delete("/bag", status_code=204)
async def clear_bag(bag: Bag = Depends(get_bag)):
    """Empty the bag."""
    await bag.clear()
