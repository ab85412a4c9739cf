from __future__ import annotations

from typing import Any, Iterable

import httpx

from smm_catalog.core.config import Settings, get_settings
from smm_catalog.domain.enums import AdapterMode, ProviderAction
from smm_catalog.services.providers import http_adapter, mock_adapter  # noqa: F401  (registers adapters)
from smm_catalog.services.providers.base import ProviderAdapter
from smm_catalog.services.providers.errors import ConfigurationError
from smm_catalog.services.providers.registry import registry, resolve_mode
from smm_catalog.services.providers.results import (
    BalanceResult,
    OrderResult,
    RefillResult,
    RemoteOrder,
    ServicesResult,
    StatusResult,
    parse_balance,
    parse_multiple_status,
    parse_order,
    parse_order_status,
    parse_refill,
    parse_services,
)


class SmmApiClient:
    """Typed operations over a provider adapter."""

    def __init__(self, adapter: ProviderAdapter) -> None:
        self.adapter = adapter

    @property
    def mode(self) -> AdapterMode:
        return self.adapter.mode

    def list_services(self) -> ServicesResult:
        return parse_services(self.adapter.call(ProviderAction.SERVICES))

    def get_balance(self) -> BalanceResult:
        return parse_balance(self.adapter.call(ProviderAction.BALANCE))

    def create_order(
        self,
        service_id: str | int,
        link: str,
        quantity: int | None = None,
        extra_params: dict[str, Any] | None = None,
    ) -> OrderResult:
        if not str(service_id).strip() or not link or not link.strip():
            raise ConfigurationError("Service ID and link are required")
        params: dict[str, Any] = dict(extra_params or {})
        params.update({"service": service_id, "link": link.strip()})
        if quantity:
            params["quantity"] = quantity
        return parse_order(self.adapter.call(ProviderAction.ADD, params))

    def get_order_status(self, order_id: str | int) -> RemoteOrder:
        payload = self.adapter.call(ProviderAction.STATUS, {"order": order_id})
        return parse_order_status(str(order_id), payload)

    def get_multiple_order_status(self, order_ids: Iterable[str | int]) -> StatusResult:
        ids = [str(order_id).strip() for order_id in order_ids if str(order_id).strip()]
        if not ids:
            raise ConfigurationError("Order IDs are required")
        payload = self.adapter.call(ProviderAction.STATUS, {"orders": ",".join(ids)})
        return parse_multiple_status(payload)

    def refill_order(self, order_id: str | int) -> RefillResult:
        payload = self.adapter.call(ProviderAction.REFILL, {"order": order_id})
        return parse_refill(str(order_id), payload)


def build_client(
    api_url: str,
    api_key: str,
    *,
    force_mock: bool = False,
    settings: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> SmmApiClient:
    settings = settings or get_settings()
    mode = resolve_mode(api_url, api_key, force_mock=force_mock or settings.force_mock)
    options: dict[str, Any] = {}
    if mode is AdapterMode.LIVE:
        options = {"timeout": settings.http_timeout_seconds, "user_agent": settings.user_agent, "transport": transport}
    adapter = registry.create(mode, api_url, api_key, **options)
    return SmmApiClient(adapter)
