from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from smm_catalog.db.models import CatalogEntry


@dataclass(slots=True)
class CatalogDraft:
    name: str
    description: str
    price_cents: int
    platform_id: int
    category: str
    service_type: str
    external_product_id: str | None
    external_service_id: str
    provider_name: str
    min_quantity: int
    max_quantity: int


@dataclass(slots=True)
class CatalogUpdate:
    name: str
    price_cents: int
    min_quantity: int
    max_quantity: int


class CatalogStore(Protocol):
    def get_by_external_id(self, external_service_id: str) -> object | None: ...

    def insert(self, draft: CatalogDraft) -> None: ...

    def update(self, external_service_id: str, changes: CatalogUpdate) -> None: ...


class SqlCatalogStore:
    """Catalog entries for one provider; every write commits on its own."""

    def __init__(self, db: Session, provider_id: int) -> None:
        self.db = db
        self.provider_id = provider_id

    def get_by_external_id(self, external_service_id: str) -> CatalogEntry | None:
        return self.db.scalar(
            select(CatalogEntry)
            .where(
                CatalogEntry.provider_id == self.provider_id,
                CatalogEntry.external_service_id == external_service_id,
            )
            .limit(1)
        )

    def insert(self, draft: CatalogDraft) -> None:
        entry = CatalogEntry(
            name=draft.name,
            description=draft.description,
            price_cents=draft.price_cents,
            platform_id=draft.platform_id,
            category=draft.category,
            service_type=draft.service_type,
            provider_id=self.provider_id,
            external_product_id=draft.external_product_id,
            external_service_id=draft.external_service_id,
            provider_name=draft.provider_name,
            min_quantity=draft.min_quantity,
            max_quantity=draft.max_quantity,
            is_active=True,
        )
        self.db.add(entry)
        self._commit()

    def update(self, external_service_id: str, changes: CatalogUpdate) -> None:
        entry = self.get_by_external_id(external_service_id)
        if entry is None:
            raise LookupError(f"Catalog entry for service {external_service_id} disappeared")
        entry.name = changes.name
        entry.price_cents = changes.price_cents
        entry.min_quantity = changes.min_quantity
        entry.max_quantity = changes.max_quantity
        entry.updated_at = datetime.now(UTC)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
