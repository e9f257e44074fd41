#!/usr/bin/env python3
"""Terminal storefront: list the collection or inspect a product's variants.

Examples:
    python scripts/quick_view.py collection
    python scripts/quick_view.py product classic-tee --select Color=Red --select Size=S
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.quick_view import QuickViewController, QuickViewSession  # noqa: E402
from core.types import Collection  # noqa: E402
from network.storefront_client import StorefrontClient  # noqa: E402
from services.api.config import get_settings  # noqa: E402
from utils.error_handling import ProductNotFoundError, StorefrontError  # noqa: E402
from utils.logger import setup_logger  # noqa: E402
from utils.money import format_money  # noqa: E402
from utils.serialization import json_dumps  # noqa: E402


def parse_selection(pairs: Sequence[str]) -> List[Tuple[str, str]]:
    """Parse ``Name=Value`` arguments, keeping click order."""
    selection = []
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise argparse.ArgumentTypeError(f"Expected Name=Value, got {pair!r}")
        selection.append((name.strip(), value.strip()))
    return selection


def render_collection(console: Console, handle: str, collection: Optional[Collection]) -> None:
    if collection is None or not collection.products:
        console.print(
            f"[yellow]No products found in collection '{handle}'. "
            "Check SHOPIFY_STORE_DOMAIN and COLLECTION_HANDLE.[/]"
        )
        return

    table = Table(title=collection.title, box=box.SIMPLE_HEAVY)
    table.add_column("Handle", style="cyan")
    table.add_column("Title")
    table.add_column("From", justify="right", style="green")
    for node in collection.products:
        table.add_row(node.handle, node.title, format_money(node.price_range.min_variant_price))
    console.print(table)


def render_session(console: Console, session: QuickViewSession) -> None:
    product = session.product
    variant = session.selected_variant

    header = Text(product.title, style="bold")
    price = session.display_price
    if price is not None:
        header.append(f"  {format_money(price)}", style="green")
    if session.compare_at_price is not None:
        header.append(f"  {format_money(session.compare_at_price)}", style="strike dim")

    body = [header]
    if product.description:
        body.append(Text(product.description, style="dim"))
    console.print(Panel(Text("\n").join(body), box=box.ROUNDED))

    if product.has_options:
        table = Table(box=box.SIMPLE)
        table.add_column("Option", style="cyan")
        table.add_column("Values")
        for state in session.option_states():
            values = Text()
            for value_state in state.values:
                if value_state.selected:
                    style = "bold reverse"
                elif value_state.disabled:
                    style = "dim strike"
                else:
                    style = ""
                values.append(f" {value_state.value} ", style=style)
                values.append(" ")
            table.add_row(state.name, values)
        console.print(table)

    if variant is None:
        status = "[yellow]Select options to see availability[/]"
    elif session.can_add_to_bag:
        status = f"[green]Available:[/] {variant.title}"
    elif not variant.available_for_sale:
        status = f"[red]Sold out:[/] {variant.title}"
    else:
        status = "[yellow]Select a value for every option[/]"
    console.print(status)


async def run_collection(args: argparse.Namespace, console: Console) -> int:
    settings = get_settings()
    handle = args.handle or settings.collection_handle
    async with StorefrontClient.from_settings(settings) as client:
        collection = await client.get_collection(handle, args.first or settings.collection_page_size)

    if args.json:
        console.print_json(json_dumps(collection))
    else:
        render_collection(console, handle, collection)
    return 0


async def run_product(args: argparse.Namespace, console: Console) -> int:
    settings = get_settings()
    async with StorefrontClient.from_settings(settings) as client:
        controller = QuickViewController(client.get_product)
        session = await controller.open(args.handle)
        if session is None:
            raise ProductNotFoundError(args.handle)
        for name, value in args.select:
            session = controller.select(name, value)
        controller.close()

    if args.json:
        console.print_json(json_dumps(session.to_view()))
    else:
        render_session(console, session)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Browse the storefront from the terminal")
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of tables")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    collection_parser = subparsers.add_parser("collection", help="List collection products")
    collection_parser.add_argument("--handle", help="Collection handle (default from settings)")
    collection_parser.add_argument("--first", type=int, help="Number of products")

    product_parser = subparsers.add_parser("product", help="Quick view of one product")
    product_parser.add_argument("handle", help="Product handle")
    product_parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Select an option value (repeatable, applied in order)",
    )

    args = parser.parse_args(argv)
    if args.command == "product":
        try:
            args.select = parse_selection(args.select)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))

    setup_logger("storefront", "DEBUG" if args.verbose else "WARNING", log_file=None)
    console = Console()

    try:
        if args.command == "collection":
            return asyncio.run(run_collection(args, console))
        return asyncio.run(run_product(args, console))
    except StorefrontError as e:
        console.print(f"[red]Error:[/] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
