from __future__ import annotations

from dataclasses import dataclass

from smm_catalog.core.logging import get_logger
from smm_catalog.domain.money import parse_rate
from smm_catalog.services.catalog.taxonomy import classify_category
from smm_catalog.services.providers.client import SmmApiClient
from smm_catalog.services.providers.results import RemoteService

logger = get_logger("smm_catalog.discovery")

DEFAULT_MIN_QUANTITY = 1
DEFAULT_MAX_QUANTITY = 1000
DEFAULT_SERVICE_TYPE = "Default"


@dataclass(slots=True)
class ServiceDescriptor:
    id: str
    name: str
    rate: float
    min: int
    max: int
    type: str
    category: str


def is_discoverable(service: RemoteService) -> bool:
    if not service.has_required_fields:
        return False
    try:
        parse_rate(service.rate)
    except ValueError:
        return False
    return True


def discover(client: SmmApiClient) -> list[RemoteService]:
    """Fetch the provider's service list and drop entries that cannot be priced or named."""
    result = client.list_services()
    services = [service for service in result.services if is_discoverable(service)]
    dropped = result.rejected + len(result.services) - len(services)
    logger.info("Discovered %s services (%s dropped as invalid)", len(services), dropped)
    return services


def describe(service: RemoteService) -> ServiceDescriptor:
    category = service.category or classify_category(service.name).value
    return ServiceDescriptor(
        id=service.external_service_id or "",
        name=service.name or "",
        rate=parse_rate(service.rate or "0"),
        min=service.min or DEFAULT_MIN_QUANTITY,
        max=service.max or DEFAULT_MAX_QUANTITY,
        type=service.type or DEFAULT_SERVICE_TYPE,
        category=category,
    )


def group_by_category(services: list[RemoteService]) -> dict[str, list[ServiceDescriptor]]:
    grouped: dict[str, list[ServiceDescriptor]] = {}
    for service in services:
        descriptor = describe(service)
        grouped.setdefault(descriptor.category, []).append(descriptor)
    return grouped
