"""Shared helpers for serialising storefront objects to JSON."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel


def prepare_for_json(value: Any) -> Any:
    """Recursively normalise objects into JSON-serialisable primitives."""

    if isinstance(value, BaseModel):
        return prepare_for_json(value.model_dump(by_alias=True))

    if isinstance(value, dict):
        return {str(key): prepare_for_json(val) for key, val in value.items()}

    if isinstance(value, (list, tuple, set)):
        return [prepare_for_json(item) for item in value]

    if is_dataclass(value) and not isinstance(value, type):
        return prepare_for_json(asdict(value))

    if isinstance(value, Decimal):
        return str(value)

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    return value


def json_dumps(
    value: Any,
    *,
    ensure_ascii: bool = False,
    sort_keys: bool = False,
    indent: int | None = None,
) -> str:
    """Serialise ``value`` to JSON after normalisation."""

    normalised = prepare_for_json(value)
    return json.dumps(normalised, ensure_ascii=ensure_ascii, sort_keys=sort_keys, indent=indent)


__all__ = ["prepare_for_json", "json_dumps"]
