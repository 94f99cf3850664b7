"""Tests for vision service."""

import asyncio
import json

from freshfocus.services.vision import VisionService, _to_data_url, parse_scan_items
from tests.conftest import FakeVisionClient


def _service(client: FakeVisionClient) -> VisionService:
    return VisionService(
        client=client,
        model="gpt-5.2",
        reasoning_effort="low",
        store=False,
    )


def test_vision_service_returns_scan_items() -> None:
    client = FakeVisionClient()

    items = asyncio.run(_service(client).analyze(b"\xff\xd8\xffimage"))

    assert [item.name for item in items] == ["Milk", "Spinach"]
    assert items[0].estimated_days_left == 3
    assert client.calls[0].startswith("data:image/jpeg;base64,")


def test_vision_service_malformed_output_yields_empty_list() -> None:
    client = FakeVisionClient(payload="not json at all")

    assert asyncio.run(_service(client).analyze(b"image")) == []


def test_parse_scan_items_accepts_bare_list() -> None:
    items = parse_scan_items('[{"name": "Eggs", "quantity": 6}]')

    assert items[0].name == "Eggs"
    assert items[0].estimated_days_left == 7


def test_parse_scan_items_rejects_wrong_shape() -> None:
    assert parse_scan_items('{"items": [{"name": ["bad"]}]}') == []
    assert parse_scan_items("") == []


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    data = b"unknown"
    url = _to_data_url(data)

    assert url.startswith("data:image/jpeg;base64,")


def test_parse_scan_items_defaults_null_fields() -> None:
    raw = json.dumps(
        [
            {"name": "Milk", "quantity": "1 carton", "estimatedDaysLeft": 3},
            {"name": "Cheese", "quantity": None, "estimatedDaysLeft": None},
            {"name": None, "quantity": "2", "estimatedDaysLeft": "soon"},
        ]
    )

    items = parse_scan_items(raw)

    assert [item.name for item in items] == ["Milk", "Cheese", ""]
    assert items[1].quantity == "1"
    assert items[1].estimated_days_left == 7
    assert items[2].estimated_days_left == 7


def test_parse_scan_items_skips_only_invalid_entries() -> None:
    raw = json.dumps({"items": [{"name": ["bad"]}, {"name": "Eggs"}]})

    assert [item.name for item in parse_scan_items(raw)] == ["Eggs"]
