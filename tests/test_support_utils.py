"""Tests for logging, error and serialisation helpers."""

from dataclasses import dataclass
from decimal import Decimal
import json
import logging
from pathlib import Path

import pytest

from core.types import Money
from services.api.routes import products
from utils.error_handling import (
    ErrorContext,
    NetworkError,
    ProductNotFoundError,
    StorefrontAPIError,
    StorefrontError,
    log_error,
)
from utils.logger import get_logger, log_storefront_event, setup_logger
from utils.serialization import json_dumps, prepare_for_json


def test_storefront_api_error_hierarchy() -> None:
    error = StorefrontAPIError("boom", status_code=503, context={"endpoint": "x"})

    assert isinstance(error, NetworkError)
    assert isinstance(error, StorefrontError)
    assert error.status_code == 503
    assert error.context == {"endpoint": "x"}


def test_product_not_found_error_carries_handle() -> None:
    error = ProductNotFoundError("classic-tee")

    assert error.handle == "classic-tee"
    assert "classic-tee" in str(error)


def test_log_error_includes_context(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("tests.errors")
    try:
        raise StorefrontAPIError("upstream down", context={"endpoint": "graphql"})
    except StorefrontAPIError as e:
        with caplog.at_level(logging.ERROR, logger="tests.errors"):
            payload = log_error(e, ErrorContext(operation="get_product", handle="tee"), log=log)

    assert payload["error_type"] == "StorefrontAPIError"
    assert payload["context"]["handle"] == "tee"
    assert payload["error_context"] == {"endpoint": "graphql"}
    assert "upstream down" in payload["stack_trace"]
    assert json.loads(caplog.records[0].getMessage())["error_message"] == "upstream down"


def test_setup_logger_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "storefront.log"
    logger = setup_logger("storefront.test", "debug", str(log_file), console=False)

    logger.debug("hello")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "hello" in log_file.read_text()


def test_setup_logger_replaces_handlers() -> None:
    logger = setup_logger("storefront.twice", log_file=None)
    setup_logger("storefront.twice", log_file=None)

    assert len(logger.handlers) == 1


def test_log_storefront_event_attaches_metadata(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="storefront.events"):
        log_storefront_event("bag_add", "added", {"variant_id": "v1"})

    record = caplog.records[0]
    assert record.event_type == "bag_add"
    assert record.event_data == {"variant_id": "v1"}


def test_get_logger_namespaces_names() -> None:
    assert get_logger("api").name == "storefront.api"
    assert get_logger("storefront.api").name == "storefront.api"


@dataclass
class _Line:
    price: Decimal


def test_prepare_for_json_normalises_models_and_decimals() -> None:
    value = {
        "money": Money(amount="1.00", currency_code="USD"),
        "line": _Line(price=Decimal("2.50")),
        "tags": ("a", "b"),
    }

    assert prepare_for_json(value) == {
        "money": {"amount": "1.00", "currencyCode": "USD"},
        "line": {"price": "2.50"},
        "tags": ["a", "b"],
    }
    assert json.loads(json_dumps(None)) is None


def test_structured_log_file_is_json_lines(tmp_path: Path) -> None:
    log_file = tmp_path / "events.jsonl"
    logger = setup_logger("storefront.structured", "INFO", str(log_file), console=False, structured=True)

    logger.info("bag updated", extra={"event_type": "bag_add", "event_data": {"quantity": 2}})
    for handler in logger.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text().splitlines()[0])
    assert entry["message"] == "bag updated"
    assert entry["event_type"] == "bag_add"
    assert entry["event_data"] == {"quantity": 2}


def test_module_loggers_reach_configured_file(tmp_path: Path) -> None:
    log_file = tmp_path / "storefront.log"
    root = setup_logger("storefront", "INFO", str(log_file), console=False)
    try:
        products.logger.error("route failure marker")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)

    assert products.logger.name == "storefront.services.api.routes.products"
    assert "route failure marker" in log_file.read_text()
