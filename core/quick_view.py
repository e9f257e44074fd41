"""
Quick-view state for a single product.

``QuickViewSession`` is the explicit selection state of one open quick view;
each option click produces a new session. ``QuickViewController`` owns the
session lifecycle and makes sure a stale product fetch never lands in a
quick view that has since been closed or replaced.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .types import Image, Money, OptionName, OptionValue, Product, ProductVariant, SelectionMap
from .variants import available_option_values, default_variant, resolve_variant
from utils.money import format_money
from utils.logger import get_logger

logger = get_logger(__name__)

ProductLoader = Callable[[str], Awaitable[Optional[Product]]]


@dataclass(frozen=True)
class OptionValueState:
    value: OptionValue
    selected: bool
    available: bool

    @property
    def disabled(self) -> bool:
        return not self.available


@dataclass(frozen=True)
class OptionState:
    name: OptionName
    selected_value: Optional[OptionValue]
    values: List[OptionValueState]


@dataclass(frozen=True)
class QuickViewSession:
    """Selection state of one open quick view."""

    product: Product
    selection: SelectionMap = field(default_factory=dict)

    def select(self, option_name: OptionName, value: OptionValue) -> "QuickViewSession":
        """Return a new session with ``option_name`` set to ``value``."""
        selection = dict(self.selection)
        selection[option_name] = value
        return replace(self, selection=selection)

    @property
    def selected_variant(self) -> Optional[ProductVariant]:
        if self.product.has_options:
            return resolve_variant(self.product.variants, self.selection)
        return default_variant(self.product.variants)

    @property
    def display_image(self) -> Optional[Image]:
        variant = self.selected_variant
        if variant is not None and variant.image is not None:
            return variant.image
        return self.product.featured_image

    @property
    def display_price(self) -> Optional[Money]:
        variant = self.selected_variant
        if variant is not None:
            return variant.price
        if self.product.variants:
            return self.product.variants[0].price
        return None

    @property
    def compare_at_price(self) -> Optional[Money]:
        variant = self.selected_variant
        return variant.compare_at_price if variant is not None else None

    @property
    def all_options_selected(self) -> bool:
        return all(self.selection.get(option.name) for option in self.product.options)

    @property
    def can_add_to_bag(self) -> bool:
        variant = self.selected_variant
        return (
            variant is not None
            and variant.available_for_sale
            and self.all_options_selected
        )

    def available_values(self, option_name: OptionName) -> List[OptionValue]:
        return available_option_values(
            self.product.variants,
            self.product.options,
            self.selection,
            option_name,
        )

    def is_available(self, option_name: OptionName, value: OptionValue) -> bool:
        return value in self.available_values(option_name)

    def option_states(self) -> List[OptionState]:
        states = []
        for option in self.product.options:
            available = self.available_values(option.name)
            selected_value = self.selection.get(option.name)
            states.append(
                OptionState(
                    name=option.name,
                    selected_value=selected_value,
                    values=[
                        OptionValueState(
                            value=value,
                            selected=value == selected_value,
                            available=value in available,
                        )
                        for value in option.values
                    ],
                )
            )
        return states

    def to_view(self) -> Dict[str, Any]:
        """Serialisable snapshot of the quick view."""
        variant = self.selected_variant
        image = self.display_image
        price = self.display_price
        compare_at = self.compare_at_price

        return {
            "product": {
                "id": self.product.id,
                "handle": self.product.handle,
                "title": self.product.title,
                "description": self.product.description,
            },
            "selectedOptions": dict(self.selection),
            "selectedVariant": (
                variant.model_dump(by_alias=True) if variant is not None else None
            ),
            "image": image.model_dump(by_alias=True) if image is not None else None,
            "price": price.model_dump(by_alias=True) if price is not None else None,
            "formattedPrice": format_money(price) if price is not None else None,
            "compareAtPrice": (
                compare_at.model_dump(by_alias=True) if compare_at is not None else None
            ),
            "formattedCompareAtPrice": (
                format_money(compare_at) if compare_at is not None else None
            ),
            "allOptionsSelected": self.all_options_selected,
            "canAddToBag": self.can_add_to_bag,
            "options": [
                {
                    "name": state.name,
                    "selectedValue": state.selected_value,
                    "values": [
                        {
                            "value": value_state.value,
                            "selected": value_state.selected,
                            "available": value_state.available,
                        }
                        for value_state in state.values
                    ],
                }
                for state in self.option_states()
            ],
        }


class QuickViewController:
    """
    Owns the quick view that is currently open.

    Only the most recent ``open()`` may install a session: every open or close
    bumps a generation counter and cancels the previous fetch, and a fetch that
    finishes under an old generation is discarded.
    """

    def __init__(self, loader: ProductLoader):
        self._loader = loader
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self.handle: Optional[str] = None
        self.session: Optional[QuickViewSession] = None
        self.loading = False

    @property
    def is_open(self) -> bool:
        return self.handle is not None

    async def open(self, handle: str) -> Optional[QuickViewSession]:
        """Open ``handle`` and load it, replacing any quick view already open."""
        self._cancel_pending()
        self._generation += 1
        generation = self._generation

        self.handle = handle
        self.session = None
        self.loading = True

        self._task = asyncio.ensure_future(self._loader(handle))
        try:
            product = await self._task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug(f"Fetch for {handle} superseded")
                return None
            raise
        except Exception as e:
            logger.error(f"Error fetching product {handle}: {e}")
            if generation == self._generation:
                self.loading = False
            return None

        if generation != self._generation:
            logger.debug(f"Discarding stale fetch for {handle}")
            return None

        self.loading = False
        self._task = None
        if product is None:
            logger.info(f"Product {handle} not found")
            return None

        self.session = QuickViewSession(product)
        return self.session

    def select(self, option_name: OptionName, value: OptionValue) -> Optional[QuickViewSession]:
        if self.session is None:
            return None
        self.session = self.session.select(option_name, value)
        return self.session

    def close(self) -> None:
        """Discard the open quick view and any fetch still in flight."""
        self._cancel_pending()
        self._generation += 1
        self.handle = None
        self.session = None
        self.loading = False

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None


__all__ = [
    "ProductLoader",
    "OptionValueState",
    "OptionState",
    "QuickViewSession",
    "QuickViewController",
]
