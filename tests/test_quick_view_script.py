"""Tests for the terminal quick-view script."""

import argparse
import json

import httpx
import pytest
from rich.console import Console

from core.quick_view import QuickViewSession
from core.types import Collection, Product
from scripts import quick_view as script
from conftest import collection_payload, tee_payload
from network.storefront_client import StorefrontClient


def _console() -> Console:
    return Console(record=True, width=100, color_system=None)


def test_parse_selection_keeps_order() -> None:
    assert script.parse_selection(["Color=Red", " Size = S "]) == [("Color", "Red"), ("Size", "S")]


@pytest.mark.parametrize("pair", ["Color", "=Red"])
def test_parse_selection_rejects_malformed_pairs(pair: str) -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        script.parse_selection([pair])


def test_render_collection_lists_cards() -> None:
    console = _console()
    script.render_collection(console, "frontpage", Collection.model_validate(collection_payload()))

    output = console.export_text()
    assert "classic-tee" in output
    assert "$1,234.50" in output


def test_render_collection_empty_state() -> None:
    console = _console()
    script.render_collection(console, "frontpage", None)

    assert "No products found in collection 'frontpage'" in console.export_text()


def test_render_session_reports_sold_out(tee: Product) -> None:
    console = _console()
    session = QuickViewSession(tee).select("Color", "Red").select("Size", "M")
    script.render_session(console, session)

    output = console.export_text()
    assert "Classic Tee" in output
    assert "$21.00" in output
    assert "Sold out: Red / M" in output


def test_render_session_prompts_for_selection(tee: Product) -> None:
    console = _console()
    script.render_session(console, QuickViewSession(tee))

    assert "Select options to see availability" in console.export_text()


def test_main_rejects_malformed_select() -> None:
    with pytest.raises(SystemExit) as exc_info:
        script.main(["product", "classic-tee", "--select", "Color"])

    assert exc_info.value.code == 2


def _patch_client(monkeypatch: pytest.MonkeyPatch, body: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    def _from_settings(settings, transport=None):
        return StorefrontClient(
            "demo.myshopify.com", "token", transport=httpx.MockTransport(handler)
        )

    monkeypatch.setattr(script.StorefrontClient, "from_settings", staticmethod(_from_settings))


def test_main_product_prints_json_view(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    _patch_client(monkeypatch, {"data": {"product": tee_payload()}})

    code = script.main(["--json", "product", "classic-tee", "--select", "Color=Red", "--select", "Size=S"])

    assert code == 0
    view = json.loads(capsys.readouterr().out)
    assert view["selectedOptions"] == {"Color": "Red", "Size": "S"}
    assert view["canAddToBag"] is True


def test_main_unknown_product_exits_with_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    _patch_client(monkeypatch, {"data": {"product": None}})

    code = script.main(["product", "missing"])

    assert code == 2
    assert "Product not found: missing" in capsys.readouterr().out
