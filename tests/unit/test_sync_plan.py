from __future__ import annotations

import threading
import time
from dataclasses import asdict

from smm_catalog.db.models import SmmProvider
from smm_catalog.domain.enums import ImportStatus
from smm_catalog.services.catalog.taxonomy import PlatformRef
from smm_catalog.services.providers.results import RemoteService
from smm_catalog.services.sync.engine import CatalogSynchronizer, plan_sync
from smm_catalog.services.sync.store import CatalogDraft, CatalogUpdate

PLATFORMS = [PlatformRef(1, "Instagram", "instagram"), PlatformRef(2, "Twitch", "twitch"), PlatformRef(3, "YouTube", "youtube")]


class InMemoryCatalogStore:
    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.entries: dict[str, dict] = {}
        self.fail_on = fail_on or set()

    def get_by_external_id(self, external_service_id: str) -> dict | None:
        return self.entries.get(external_service_id)

    def insert(self, draft: CatalogDraft) -> None:
        if draft.external_service_id in self.fail_on:
            raise RuntimeError("UNIQUE constraint failed: catalog_entries.external_service_id")
        self.entries[draft.external_service_id] = asdict(draft)

    def update(self, external_service_id: str, changes: CatalogUpdate) -> None:
        self.entries[external_service_id].update(asdict(changes))


class SlowLookupCatalogStore(InMemoryCatalogStore):
    def get_by_external_id(self, external_service_id: str) -> dict | None:
        time.sleep(0.05)
        return super().get_by_external_id(external_service_id)


def _service(service_id: int, name: str = "Instagram Takipçiler", rate: str | None = "10.80", **extra) -> RemoteService:
    return RemoteService(external_service_id=str(service_id), name=name, rate=rate, min=100, max=5000, **extra)


def _provider() -> SmmProvider:
    return SmmProvider(id=7, name="Panel One", api_url="https://panel.example.com/api", api_key="k")


def test_new_service_is_planned_as_insert() -> None:
    [step] = plan_sync([_service(1)], set(), PLATFORMS, provider_name="Panel One")
    assert step.outcome.status is ImportStatus.IMPORTED
    assert step.insert.price_cents == 1080
    assert step.insert.platform_id == 1
    assert step.insert.category == "followers"
    assert step.insert.description == "Instagram Takipçiler"
    assert step.insert.service_type == "instant"
    assert step.insert.provider_name == "Panel One"


def test_known_service_is_planned_as_narrow_update() -> None:
    [step] = plan_sync([_service(1, rate="12.00")], {"1"}, PLATFORMS)
    assert step.outcome.status is ImportStatus.UPDATED
    assert step.insert is None
    assert step.update == CatalogUpdate(name="Instagram Takipçiler", price_cents=1200, min_quantity=100, max_quantity=5000)


def test_missing_fields_and_unmatched_platform_are_skipped() -> None:
    services = [
        RemoteService(external_service_id="1", name=None, rate="1.00"),
        _service(2, rate=None),
        _service(3, name="VK Play İzleyiciler"),
    ]
    steps = plan_sync(services, set(), PLATFORMS)
    assert [(s.outcome.status, s.outcome.reason) for s in steps] == [
        (ImportStatus.SKIPPED, "Missing required fields"),
        (ImportStatus.SKIPPED, "Missing required fields"),
        (ImportStatus.SKIPPED, "No matching platform found"),
    ]
    assert steps[0].outcome.name == "Unknown"


def test_platform_override_beats_name_match() -> None:
    [step] = plan_sync([_service(4, name="Generic Followers")], set(), PLATFORMS, {"4": 2})
    assert step.insert.platform_id == 2
    assert step.insert.category == "followers"

    [step] = plan_sync([_service(5, name="Instagram Likes")], set(), PLATFORMS, {"5": 99})
    assert step.outcome.status is ImportStatus.SKIPPED
    assert step.outcome.reason == "Unknown platform override"


def test_unparseable_rate_is_an_error_outcome() -> None:
    [step] = plan_sync([_service(6, rate="call us")], set(), PLATFORMS)
    assert step.outcome.status is ImportStatus.ERROR
    assert "Invalid rate" in step.outcome.reason


def test_duplicate_ids_in_one_batch_insert_once() -> None:
    steps = plan_sync([_service(8), _service(8, rate="11.00")], set(), PLATFORMS)
    assert [s.outcome.status for s in steps] == [ImportStatus.IMPORTED, ImportStatus.UPDATED]


def test_one_failing_write_does_not_abort_the_batch() -> None:
    store = InMemoryCatalogStore(fail_on={"3"})
    services = [_service(i) for i in range(1, 6)]

    outcomes = CatalogSynchronizer().sync_services(_provider(), services, PLATFORMS, store)

    assert len(outcomes) == 5
    errors = [o for o in outcomes if o.status is ImportStatus.ERROR]
    assert [o.external_service_id for o in errors] == ["3"]
    assert "UNIQUE constraint failed" in errors[0].reason
    assert sum(1 for o in outcomes if o.status is not ImportStatus.ERROR) == 4
    assert sorted(store.entries) == ["1", "2", "4", "5"]


def test_second_run_is_idempotent() -> None:
    store = InMemoryCatalogStore()
    synchronizer = CatalogSynchronizer()
    services = [_service(1), _service(2, name="Twitch Takipçiler"), _service(3, name="Unmatched")]

    first = synchronizer.sync_services(_provider(), services, PLATFORMS, store)
    snapshot = {key: dict(value) for key, value in store.entries.items()}
    second = synchronizer.sync_services(_provider(), services, PLATFORMS, store)

    assert [o.status for o in first] == [ImportStatus.IMPORTED, ImportStatus.IMPORTED, ImportStatus.SKIPPED]
    assert [o.status for o in second] == [ImportStatus.UPDATED, ImportStatus.UPDATED, ImportStatus.SKIPPED]
    assert store.entries == snapshot


def test_update_keeps_first_import_category_and_platform() -> None:
    store = InMemoryCatalogStore()
    synchronizer = CatalogSynchronizer()
    synchronizer.sync_services(_provider(), [_service(1)], PLATFORMS, store)
    store.entries["1"]["category"] = "likes"

    renamed = _service(1, name="Twitch Views", rate="9.99")
    [outcome] = synchronizer.sync_services(_provider(), [renamed], PLATFORMS, store)

    assert outcome.status is ImportStatus.UPDATED
    entry = store.entries["1"]
    assert (entry["name"], entry["price_cents"]) == ("Twitch Views", 999)
    assert (entry["category"], entry["platform_id"]) == ("likes", 1)


def test_locks_are_per_provider() -> None:
    synchronizer = CatalogSynchronizer()
    assert synchronizer.lock_for(1) is synchronizer.lock_for(1)
    assert synchronizer.lock_for(1) is not synchronizer.lock_for(2)


def test_outcome_serializes_status_value() -> None:
    [step] = plan_sync([_service(1)], set(), PLATFORMS)
    assert step.outcome.to_dict() == {
        "external_service_id": "1",
        "name": "Instagram Takipçiler",
        "status": "imported",
        "reason": None,
    }


def test_out_of_range_rate_errors_only_that_service() -> None:
    store = InMemoryCatalogStore()
    services = [_service(1), _service(2, rate="1e30"), _service(3)]

    outcomes = CatalogSynchronizer().sync_services(_provider(), services, PLATFORMS, store)

    assert [o.status for o in outcomes] == [ImportStatus.IMPORTED, ImportStatus.ERROR, ImportStatus.IMPORTED]
    assert "Invalid rate" in outcomes[1].reason
    assert sorted(store.entries) == ["1", "3"]


def test_concurrent_runs_for_one_provider_are_serialized() -> None:
    store = SlowLookupCatalogStore()
    synchronizer = CatalogSynchronizer()
    start = threading.Barrier(2)
    statuses: list[ImportStatus] = []

    def run() -> None:
        start.wait()
        statuses.extend(o.status for o in synchronizer.sync_services(_provider(), [_service(1)], PLATFORMS, store))

    workers = [threading.Thread(target=run) for _ in range(2)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(timeout=5)

    assert sorted(statuses) == [ImportStatus.IMPORTED, ImportStatus.UPDATED]
    assert list(store.entries) == ["1"]
