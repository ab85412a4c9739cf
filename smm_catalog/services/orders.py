"""Order placement, status polling and refills against a provider.

Nothing here is persisted. Whoever places an order must record the returned
``provider_order_id`` against its own purchase, since a later status or refill
call is only possible with that id.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy.orm import Session

from smm_catalog.core.logging import get_logger
from smm_catalog.services.providers.client import SmmApiClient, build_client
from smm_catalog.services.providers.results import OrderResult, RefillResult, RemoteOrder, StatusResult
from smm_catalog.services.providers.store import get_provider

logger = get_logger("smm_catalog.orders")


class OrderLifecycleManager:
    def __init__(self, client: SmmApiClient) -> None:
        self.client = client

    def create_order(
        self,
        service_id: str | int,
        link: str,
        quantity: int | None = None,
        extra_params: dict[str, Any] | None = None,
    ) -> OrderResult:
        result = self.client.create_order(service_id, link, quantity, extra_params)
        logger.info("Placed order %s for service %s", result.provider_order_id, service_id)
        return result

    def get_order_status(self, order_id: str | int) -> RemoteOrder:
        return self.client.get_order_status(order_id)

    def get_multiple_order_status(self, order_ids: Iterable[str | int]) -> StatusResult:
        return self.client.get_multiple_order_status(order_ids)

    def refill_order(self, order_id: str | int) -> RefillResult:
        result = self.client.refill_order(order_id)
        logger.info("Requested refill for order %s", order_id)
        return result


def for_provider(db: Session, provider_id: int, force_mock: bool = False) -> OrderLifecycleManager:
    provider = get_provider(db, provider_id)
    return OrderLifecycleManager(build_client(provider.api_url, provider.api_key, force_mock=force_mock))
