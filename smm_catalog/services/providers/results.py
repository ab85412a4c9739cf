"""Typed views over the loosely shaped JSON returned by reseller panels.

Panels differ in field names and types, so every field here is optional and
parsing never trusts the remote shape beyond what is checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from smm_catalog.services.providers.errors import ProtocolError


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


@dataclass(slots=True)
class RemoteService:
    external_service_id: str | None
    name: str | None
    category: str | None = None
    type: str | None = None
    rate: str | None = None
    min: int | None = None
    max: int | None = None
    external_product_id: str | None = None

    @classmethod
    def from_payload(cls, item: dict[str, Any]) -> RemoteService:
        return cls(
            external_service_id=_text(item.get("service")),
            name=_text(item.get("name")),
            category=_text(item.get("category")),
            type=_text(item.get("type")),
            rate=_text(item.get("rate")),
            min=_int(item.get("min")),
            max=_int(item.get("max")),
            external_product_id=_text(item.get("id")),
        )

    @property
    def has_required_fields(self) -> bool:
        return bool(self.external_service_id and self.name and self.rate)


@dataclass(slots=True)
class ServicesResult:
    services: list[RemoteService]
    rejected: int = 0


@dataclass(slots=True)
class BalanceResult:
    balance: str
    currency: str | None = None


@dataclass(slots=True)
class OrderResult:
    provider_order_id: str


@dataclass(slots=True)
class RemoteOrder:
    provider_order_id: str
    status: str | None = None
    charge: str | None = None
    start_count: int | None = None
    remains: int | None = None
    currency: str | None = None
    error: str | None = None

    @classmethod
    def from_payload(cls, provider_order_id: str, item: dict[str, Any]) -> RemoteOrder:
        return cls(
            provider_order_id=provider_order_id,
            status=_text(item.get("status")),
            charge=_text(item.get("charge")),
            start_count=_int(item.get("start_count")),
            remains=_int(item.get("remains")),
            currency=_text(item.get("currency")),
            error=_text(item.get("error")),
        )


@dataclass(slots=True)
class StatusResult:
    orders: dict[str, RemoteOrder] = field(default_factory=dict)


@dataclass(slots=True)
class RefillResult:
    provider_order_id: str
    refill_id: str | None = None
    raw: Any = None


def parse_services(payload: Any) -> ServicesResult:
    if not isinstance(payload, list):
        raise ProtocolError("Unexpected services payload: expected a list")
    services: list[RemoteService] = []
    rejected = 0
    for item in payload:
        if not isinstance(item, dict):
            rejected += 1
            continue
        services.append(RemoteService.from_payload(item))
    return ServicesResult(services=services, rejected=rejected)


def parse_balance(payload: Any) -> BalanceResult:
    if not isinstance(payload, dict) or payload.get("balance") is None:
        raise ProtocolError("Unexpected balance payload: missing balance")
    return BalanceResult(balance=str(payload["balance"]), currency=_text(payload.get("currency")))


def parse_order(payload: Any) -> OrderResult:
    order_id = _text(payload.get("order")) if isinstance(payload, dict) else None
    if order_id is None:
        raise ProtocolError("Unexpected add payload: missing order id")
    return OrderResult(provider_order_id=order_id)


def parse_order_status(order_id: str, payload: Any) -> RemoteOrder:
    if not isinstance(payload, dict) or "status" not in payload:
        raise ProtocolError("Unexpected status payload: missing status")
    return RemoteOrder.from_payload(order_id, payload)


def parse_multiple_status(payload: Any) -> StatusResult:
    if not isinstance(payload, dict):
        raise ProtocolError("Unexpected status payload: expected a map of orders")
    result = StatusResult()
    for order_id, item in payload.items():
        if not isinstance(item, dict):
            raise ProtocolError(f"Unexpected status payload for order {order_id}")
        result.orders[str(order_id)] = RemoteOrder.from_payload(str(order_id), item)
    return result


def parse_refill(order_id: str, payload: Any) -> RefillResult:
    refill_id = _text(payload.get("refill")) if isinstance(payload, dict) else None
    return RefillResult(provider_order_id=order_id, refill_id=refill_id, raw=payload)
