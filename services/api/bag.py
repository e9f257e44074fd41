"""In-memory shopping bag."""
import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from core.types import Money, Product, ProductVariant
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BagLine:
    variant_id: str
    product_handle: str
    product_title: str
    variant_title: str
    price: Money
    quantity: int = 1
    added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Bag:
    """
    Process-local bag shared by the API workers' requests.

    Adding the same variant twice increments its quantity.
    """

    def __init__(self) -> None:
        self._lines: Dict[str, BagLine] = {}
        self._lock = asyncio.Lock()

    async def add(self, product: Product, variant: ProductVariant, quantity: int = 1) -> BagLine:
        async with self._lock:
            line = self._lines.get(variant.id)
            if line is None:
                line = BagLine(
                    variant_id=variant.id,
                    product_handle=product.handle,
                    product_title=product.title,
                    variant_title=variant.title,
                    price=variant.price,
                    quantity=quantity,
                )
                self._lines[variant.id] = line
            else:
                line.quantity += quantity
            logger.info(f"Bag: {variant.id} x{line.quantity}")
            return line

    async def lines(self) -> List[BagLine]:
        async with self._lock:
            return sorted(self._lines.values(), key=lambda line: line.added_at)

    async def clear(self) -> None:
        async with self._lock:
            self._lines.clear()
