from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Sequence

from smm_catalog.core.logging import get_logger
from smm_catalog.db.models import SmmProvider
from smm_catalog.domain.enums import ImportStatus
from smm_catalog.domain.money import rate_to_cents
from smm_catalog.services.catalog.discovery import DEFAULT_MAX_QUANTITY, DEFAULT_MIN_QUANTITY
from smm_catalog.services.catalog.taxonomy import PlatformRef, classify_category, match_platform
from smm_catalog.services.providers.results import RemoteService
from smm_catalog.services.sync.store import CatalogDraft, CatalogStore, CatalogUpdate

logger = get_logger("smm_catalog.sync")

DEFAULT_CATALOG_SERVICE_TYPE = "instant"
REASON_MISSING_FIELDS = "Missing required fields"
REASON_NO_PLATFORM = "No matching platform found"
REASON_UNKNOWN_OVERRIDE = "Unknown platform override"


@dataclass(slots=True)
class ImportOutcome:
    external_service_id: str | None
    name: str | None
    status: ImportStatus
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass(slots=True)
class SyncStep:
    outcome: ImportOutcome
    insert: CatalogDraft | None = None
    update: CatalogUpdate | None = None


def _resolve_platform(
    service: RemoteService,
    platforms: Sequence[PlatformRef],
    overrides: Mapping[str, int],
) -> tuple[PlatformRef | None, str]:
    override_id = overrides.get(service.external_service_id or "")
    if override_id is not None:
        for platform in platforms:
            if str(platform.id) == str(override_id).strip():
                return platform, ""
        return None, REASON_UNKNOWN_OVERRIDE
    platform = match_platform(service.name, platforms)
    return platform, "" if platform else REASON_NO_PLATFORM


def plan_service(
    service: RemoteService,
    known_ids: set[str],
    platforms: Sequence[PlatformRef],
    overrides: Mapping[str, int],
    provider_name: str,
) -> SyncStep:
    """Decide what one remote service does to the catalog. No I/O."""
    service_id = service.external_service_id
    if not service.has_required_fields:
        outcome = ImportOutcome(service_id, service.name or "Unknown", ImportStatus.SKIPPED, REASON_MISSING_FIELDS)
        return SyncStep(outcome)

    platform, reason = _resolve_platform(service, platforms, overrides)
    if platform is None:
        return SyncStep(ImportOutcome(service_id, service.name, ImportStatus.SKIPPED, reason))

    try:
        price_cents = rate_to_cents(service.rate)
    except ValueError as exc:
        return SyncStep(ImportOutcome(service_id, service.name, ImportStatus.ERROR, str(exc)))

    min_quantity = service.min or DEFAULT_MIN_QUANTITY
    max_quantity = service.max or DEFAULT_MAX_QUANTITY
    if service_id in known_ids:
        changes = CatalogUpdate(
            name=service.name,
            price_cents=price_cents,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
        )
        return SyncStep(ImportOutcome(service_id, service.name, ImportStatus.UPDATED), update=changes)

    draft = CatalogDraft(
        name=service.name,
        description=service.name,
        price_cents=price_cents,
        platform_id=platform.id,
        category=classify_category(service.name).value,
        service_type=DEFAULT_CATALOG_SERVICE_TYPE,
        external_product_id=service.external_product_id,
        external_service_id=service_id,
        provider_name=provider_name,
        min_quantity=min_quantity,
        max_quantity=max_quantity,
    )
    return SyncStep(ImportOutcome(service_id, service.name, ImportStatus.IMPORTED), insert=draft)


def plan_sync(
    services: Sequence[RemoteService],
    known_ids: set[str],
    platforms: Sequence[PlatformRef],
    overrides: Mapping[str, int] | None = None,
    provider_name: str = "",
) -> list[SyncStep]:
    known = set(known_ids)
    steps: list[SyncStep] = []
    for service in services:
        step = plan_service(service, known, platforms, overrides or {}, provider_name)
        if step.insert is not None:
            known.add(step.insert.external_service_id)
        steps.append(step)
    return steps


def apply_plan(steps: Sequence[SyncStep], store: CatalogStore) -> list[ImportOutcome]:
    outcomes: list[ImportOutcome] = []
    for step in steps:
        outcome = step.outcome
        try:
            if step.insert is not None:
                store.insert(step.insert)
            elif step.update is not None:
                store.update(outcome.external_service_id, step.update)
        except Exception as exc:
            logger.warning("Catalog write failed for service %s: %s", outcome.external_service_id, exc)
            outcome = ImportOutcome(outcome.external_service_id, outcome.name, ImportStatus.ERROR, str(exc))
        outcomes.append(outcome)
    return outcomes


def count_outcomes(outcomes: Sequence[ImportOutcome]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for outcome in outcomes:
        counts[outcome.status.value] = counts.get(outcome.status.value, 0) + 1
    return counts


@dataclass(slots=True)
class CatalogSynchronizer:
    locks: dict[int, threading.Lock] = field(default_factory=dict)
    guard: threading.Lock = field(default_factory=threading.Lock)

    def lock_for(self, provider_id: int) -> threading.Lock:
        with self.guard:
            return self.locks.setdefault(provider_id, threading.Lock())

    def sync_services(
        self,
        provider: SmmProvider,
        services: Sequence[RemoteService],
        platforms: Sequence[PlatformRef],
        store: CatalogStore,
        overrides: Mapping[str, int] | None = None,
    ) -> list[ImportOutcome]:
        with self.lock_for(provider.id):
            candidate_ids = {s.external_service_id for s in services if s.external_service_id}
            known_ids = {sid for sid in candidate_ids if store.get_by_external_id(sid) is not None}
            steps = plan_sync(services, known_ids, platforms, overrides, provider.name)
            outcomes = apply_plan(steps, store)
        logger.info("Synchronized provider %s: %s", provider.name, count_outcomes(outcomes))
        return outcomes


synchronizer = CatalogSynchronizer()
