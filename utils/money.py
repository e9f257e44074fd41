"""Currency display helpers for Storefront ``Money`` values."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping, Optional, Union

from core.types import Money
from utils.error_handling import InvalidMoneyError
from utils.logger import get_logger

logger = get_logger(__name__)

MISSING_PRICE = "N/A"

# en-US currency symbols; codes missing here are rendered as "<CODE> 1.00"
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "MXN": "MX$",
    "BRL": "R$",
    "CNY": "CN¥",
    "INR": "₹",
    "KRW": "₩",
    "ILS": "₪",
    "VND": "₫",
    "HKD": "HK$",
    "TWD": "NT$",
}

# Minor units that differ from the usual two
CURRENCY_DIGITS = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "ISK": 0,
    "BHD": 3,
    "JOD": 3,
    "KWD": 3,
    "OMR": 3,
    "TND": 3,
}

MoneyLike = Union[Money, Mapping[str, Any]]


def _fields(money: MoneyLike) -> tuple[Any, str]:
    if isinstance(money, Money):
        return money.amount, money.currency_code
    return money.get("amount"), str(money.get("currencyCode") or "")


def parse_amount(money: MoneyLike) -> Decimal:
    """Parse the decimal amount of ``money``.

    Raises:
        InvalidMoneyError: amount is missing, non-numeric or not finite
    """
    amount, currency_code = _fields(money)
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidMoneyError(
            f"Invalid money amount: {amount!r}",
            {"amount": amount, "currency_code": currency_code},
        ) from exc
    if not value.is_finite():
        raise InvalidMoneyError(
            f"Invalid money amount: {amount!r}",
            {"amount": amount, "currency_code": currency_code},
        )
    return value


def format_amount(value: Decimal, currency_code: str) -> str:
    """Render a parsed amount in en-US currency style.

    Raises:
        InvalidMoneyError: amount has too many digits to round
    """
    code = (currency_code or "").upper()
    digits = CURRENCY_DIGITS.get(code, 2)
    quantum = Decimal(1).scaleb(-digits)
    try:
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidMoneyError(
            f"Money amount out of range: {value}",
            {"amount": str(value), "currency_code": code},
        ) from exc

    sign = "-" if rounded < 0 else ""
    number = f"{abs(rounded):,.{digits}f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{number}"
    return f"{sign}{code} {number}".strip()


def format_money(money: Optional[MoneyLike]) -> str:
    """
    Format a Money value for display.

    Args:
        money: Money record or ``{"amount", "currencyCode"}`` mapping

    Returns:
        Formatted currency string, e.g. ``$19.50``. Missing money or a
        non-numeric amount yields ``N/A`` instead of raising.
    """
    if money is None:
        return MISSING_PRICE

    _, currency_code = _fields(money)
    try:
        return format_amount(parse_amount(money), currency_code)
    except InvalidMoneyError as e:
        logger.warning(f"Cannot format money: {e}")
        return MISSING_PRICE


__all__ = [
    "MISSING_PRICE",
    "CURRENCY_SYMBOLS",
    "parse_amount",
    "format_amount",
    "format_money",
]
