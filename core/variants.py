"""
Variant resolution and option availability.

Everything here is pure: no I/O and no hidden state, so the functions can be
recomputed on every selection change.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .types import OptionName, OptionValue, ProductOption, ProductVariant


def variant_matches(
    variant: ProductVariant, pairs: Iterable[Tuple[OptionName, OptionValue]]
) -> bool:
    """True when ``variant`` carries every ``(name, value)`` pair.

    Matching is existential per pair; an empty ``pairs`` matches anything.
    """
    return all(
        any(
            selected.name == name and selected.value == value
            for selected in variant.selected_options
        )
        for name, value in pairs
    )


def resolve_variant(
    variants: Sequence[ProductVariant],
    selection: Mapping[OptionName, OptionValue],
) -> Optional[ProductVariant]:
    """
    Find the variant whose options satisfy every selected pair.

    Example:
        selection = {'Color': 'Red', 'Size': 'S'}
        -> the first variant carrying both Color=Red and Size=S

    Returns:
        First matching variant in catalog order, or None when the selection
        is empty or no variant satisfies it.
    """
    if not selection or not variants:
        return None

    pairs = list(selection.items())
    for variant in variants:
        if variant_matches(variant, pairs):
            return variant
    return None


def available_option_values(
    variants: Sequence[ProductVariant],
    options: Sequence[ProductOption],
    selection: Mapping[OptionName, OptionValue],
    option_name: OptionName,
) -> List[OptionValue]:
    """
    Given the current selection, return which values of ``option_name`` are
    still reachable.

    A value is reachable when some in-stock variant carries it and agrees with
    every other selected option. Before any choice is made the declared values
    are returned unfiltered.

    Example:
        selection = {'Color': 'Red'}
        option_name = 'Size'
        -> ['S'] when Red/M exists but is sold out

    Returns:
        Values in first-seen order, without duplicates.
    """
    if not selection:
        for option in options:
            if option.name == option_name:
                return list(option.values)
        return []

    other_selections = [
        (name, value) for name, value in selection.items() if name != option_name
    ]

    available: List[OptionValue] = []
    for variant in variants:
        if not variant.available_for_sale:
            continue
        if not variant_matches(variant, other_selections):
            continue
        value = variant.option_value(option_name)
        if value is not None and value not in available:
            available.append(value)
    return available


def default_variant(variants: Sequence[ProductVariant]) -> Optional[ProductVariant]:
    """First purchasable variant, falling back to the first one overall.

    Used for products that declare no options, where there is nothing for
    the shopper to select.
    """
    for variant in variants:
        if variant.available_for_sale:
            return variant
    return variants[0] if variants else None


__all__ = [
    "variant_matches",
    "resolve_variant",
    "available_option_values",
    "default_variant",
]
