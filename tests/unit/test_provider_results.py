from __future__ import annotations

from typing import Any

import pytest

from smm_catalog.domain.enums import AdapterMode, ProviderAction
from smm_catalog.services.providers.base import ProviderAdapter
from smm_catalog.services.providers.client import SmmApiClient
from smm_catalog.services.providers.errors import ConfigurationError, ProtocolError
from smm_catalog.services.providers.results import RemoteService, parse_multiple_status, parse_services


class RecordingAdapter(ProviderAdapter):
    mode = AdapterMode.LIVE

    def __init__(self, payload: Any) -> None:
        super().__init__("https://panel.example.com/api", "k")
        self.payload = payload
        self.calls: list[dict[str, str]] = []

    def call(self, action: ProviderAction, params: dict[str, Any] | None = None) -> Any:
        self.calls.append(self.build_params(action, params))
        return self.payload


def test_services_tolerate_loose_types() -> None:
    result = parse_services(
        [
            {"service": 5, "name": " Kick Takipçiler ", "rate": 25, "min": "100", "max": "1e3", "id": 77},
            {"service": "6", "name": "", "rate": "1.0", "min": None, "max": "lots"},
            "garbage",
        ]
    )
    assert result.rejected == 1
    first, second = result.services
    assert first == RemoteService("5", "Kick Takipçiler", None, None, "25", 100, 1000, "77")
    assert second.name is None and second.max is None and not second.has_required_fields


def test_services_must_be_a_list() -> None:
    with pytest.raises(ProtocolError):
        parse_services({"services": []})


def test_batch_status_keeps_per_order_errors() -> None:
    result = parse_multiple_status(
        {"1": {"status": "Partial", "charge": "0.27", "start_count": "3572", "remains": "157"}, "10": {"error": "Incorrect order ID"}}
    )
    assert result.orders["1"].start_count == 3572
    assert result.orders["10"].error == "Incorrect order ID"


def test_create_order_forwards_extras_and_omits_missing_quantity() -> None:
    adapter = RecordingAdapter({"order": 23501})
    order = SmmApiClient(adapter).create_order(1, "https://twitch.tv/someone", None, {"runs": 2, "interval": 5, "key": "x"})
    assert order.provider_order_id == "23501"
    assert adapter.calls == [
        {"key": "k", "action": "add", "runs": "2", "interval": "5", "service": "1", "link": "https://twitch.tv/someone"}
    ]


def test_create_order_requires_link() -> None:
    with pytest.raises(ConfigurationError):
        SmmApiClient(RecordingAdapter({})).create_order(1, " ")


def test_batch_status_joins_ids() -> None:
    adapter = RecordingAdapter({"1": {"status": "Completed"}, "2": {"status": "Pending"}})
    result = SmmApiClient(adapter).get_multiple_order_status([1, 2])
    assert adapter.calls[0]["orders"] == "1,2"
    assert result.orders["2"].status == "Pending"


def test_unexpected_shapes_raise_protocol_error() -> None:
    with pytest.raises(ProtocolError):
        SmmApiClient(RecordingAdapter({"currency": "USD"})).get_balance()
    with pytest.raises(ProtocolError):
        SmmApiClient(RecordingAdapter([])).create_order(1, "https://x")
    with pytest.raises(ProtocolError):
        SmmApiClient(RecordingAdapter({"charge": "1"})).get_order_status(1)
    with pytest.raises(ConfigurationError):
        SmmApiClient(RecordingAdapter({})).get_multiple_order_status([])
