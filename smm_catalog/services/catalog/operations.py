from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Iterable, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from smm_catalog.core.logging import get_logger
from smm_catalog.db.models import Platform, SmmProvider
from smm_catalog.domain.enums import ImportStatus
from smm_catalog.services.catalog.discovery import ServiceDescriptor, discover, group_by_category
from smm_catalog.services.catalog.taxonomy import DEFAULT_PLATFORMS, PlatformRef
from smm_catalog.services.providers.client import SmmApiClient, build_client
from smm_catalog.services.providers.results import BalanceResult, RemoteService
from smm_catalog.services.providers.store import get_provider
from smm_catalog.services.sync.dedupe import normalize_service_ids
from smm_catalog.services.sync.engine import ImportOutcome, synchronizer
from smm_catalog.services.sync.store import SqlCatalogStore

logger = get_logger("smm_catalog.catalog")


class NoMatchingServicesError(LookupError):
    pass


@dataclass(slots=True)
class DiscoveryView:
    services_by_category: dict[str, list[ServiceDescriptor]]
    platforms: list[PlatformRef]


@dataclass(slots=True)
class SyncReport:
    imported_count: int
    results: list[ImportOutcome] = field(default_factory=list)


def ensure_default_platforms(db: Session) -> int:
    if db.scalar(select(func.count()).select_from(Platform)):
        return 0
    for name, slug in DEFAULT_PLATFORMS:
        db.add(Platform(name=name, slug=slug))
    db.commit()
    logger.info("Seeded %s default platforms", len(DEFAULT_PLATFORMS))
    return len(DEFAULT_PLATFORMS)


def list_platforms(db: Session) -> list[PlatformRef]:
    rows = db.scalars(select(Platform).order_by(Platform.id.asc())).all()
    return [PlatformRef(id=row.id, name=row.name, slug=row.slug) for row in rows]


def client_for(provider: SmmProvider, force_mock: bool = False) -> SmmApiClient:
    return build_client(provider.api_url, provider.api_key, force_mock=force_mock)


def discover_and_group(db: Session, provider_id: int, force_mock: bool = False) -> DiscoveryView:
    provider = get_provider(db, provider_id)
    services = discover(client_for(provider, force_mock))
    return DiscoveryView(services_by_category=group_by_category(services), platforms=list_platforms(db))


def synchronize(
    db: Session,
    provider_id: int,
    selected_service_ids: Iterable[str | int],
    platform_overrides: Mapping[str, int] | None = None,
    force_mock: bool = False,
) -> SyncReport:
    provider = get_provider(db, provider_id)
    selected = normalize_service_ids(selected_service_ids)
    if not selected:
        raise NoMatchingServicesError("Service IDs are required for import")

    offered = client_for(provider, force_mock).list_services().services
    wanted = set(selected)
    to_import: list[RemoteService] = [s for s in offered if s.external_service_id in wanted]
    if not to_import:
        raise NoMatchingServicesError("No matching services found to import")

    overrides = {str(key): value for key, value in (platform_overrides or {}).items()}
    results = synchronizer.sync_services(
        provider,
        to_import,
        list_platforms(db),
        SqlCatalogStore(db, provider.id),
        overrides,
    )
    imported_count = sum(1 for outcome in results if outcome.status is ImportStatus.IMPORTED)

    provider.last_sync_at = datetime.now(UTC)
    db.commit()
    return SyncReport(imported_count=imported_count, results=results)


def test_connection(api_url: str, api_key: str, force_mock: bool = False) -> list[RemoteService]:
    return discover(build_client(api_url, api_key, force_mock=force_mock))


def get_balance(db: Session, provider_id: int, force_mock: bool = False) -> BalanceResult:
    return client_for(get_provider(db, provider_id), force_mock).get_balance()
