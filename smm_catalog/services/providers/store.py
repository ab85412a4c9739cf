from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smm_catalog.core.logging import get_logger, mask_secret
from smm_catalog.db.models import CatalogEntry, SmmProvider

logger = get_logger("smm_catalog.providers")


class ProviderNotFoundError(LookupError):
    def __init__(self, provider_id: int) -> None:
        super().__init__(f"SMM provider not found: {provider_id}")
        self.provider_id = provider_id


class ProviderValidationError(ValueError):
    pass


def _clean_fields(name: str, api_url: str, api_key: str) -> tuple[str, str, str]:
    cleaned = (name or "").strip(), (api_url or "").strip(), (api_key or "").strip()
    if not all(cleaned):
        raise ProviderValidationError("Name, API URL and API key are required")
    return cleaned


def list_providers(db: Session) -> list[SmmProvider]:
    return list(db.scalars(select(SmmProvider).order_by(SmmProvider.id.asc())).all())


def get_provider(db: Session, provider_id: int) -> SmmProvider:
    provider = db.get(SmmProvider, provider_id)
    if provider is None:
        raise ProviderNotFoundError(provider_id)
    return provider


def create_provider(db: Session, name: str, api_url: str, api_key: str, is_active: bool = True) -> SmmProvider:
    name, api_url, api_key = _clean_fields(name, api_url, api_key)
    provider = SmmProvider(name=name, api_url=api_url, api_key=api_key, is_active=is_active)
    db.add(provider)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ProviderValidationError(f"SMM provider already exists: {name}") from exc
    logger.info("Created SMM provider %s (%s) key_prefix=%s", provider.id, name, mask_secret(api_key))
    return provider


def update_provider(
    db: Session,
    provider_id: int,
    name: str,
    api_url: str,
    api_key: str,
    is_active: bool | None = None,
) -> SmmProvider:
    provider = get_provider(db, provider_id)
    name, api_url, api_key = _clean_fields(name, api_url, api_key)
    key_rotated = provider.api_key != api_key
    provider.name = name
    provider.api_url = api_url
    provider.api_key = api_key
    if is_active is not None:
        provider.is_active = is_active
    provider.updated_at = datetime.now(UTC)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ProviderValidationError(f"SMM provider already exists: {name}") from exc
    logger.info("Updated SMM provider %s (%s) key_rotated=%s", provider_id, name, key_rotated)
    return provider


def delete_provider(db: Session, provider_id: int) -> None:
    provider = get_provider(db, provider_id)
    # Imported entries outlive their provider; they keep provider_name and external ids.
    detached = db.execute(
        update(CatalogEntry).where(CatalogEntry.provider_id == provider.id).values(provider_id=None)
    ).rowcount or 0
    db.delete(provider)
    db.commit()
    logger.info("Deleted SMM provider %s, detached %s catalog entries", provider_id, detached)
