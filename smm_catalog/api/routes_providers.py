from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from smm_catalog.api.deps import get_db
from smm_catalog.api.schemas import (
    BalanceOut,
    ConnectionTestIn,
    DiscoveryOut,
    ImportIn,
    ImportOut,
    ImportOutcomeOut,
    PlatformOut,
    ProviderIn,
    ProviderOut,
    ProviderUpdate,
    RemoteServiceOut,
    ServiceDescriptorOut,
)
from smm_catalog.core.logging import get_logger
from smm_catalog.services.catalog import operations
from smm_catalog.services.providers import store

router = APIRouter(prefix="/providers", tags=["providers"])
logger = get_logger()


@router.get("", response_model=list[ProviderOut])
def list_providers(db: Session = Depends(get_db)) -> list[ProviderOut]:
    return [ProviderOut.from_model(provider) for provider in store.list_providers(db)]


@router.post("", response_model=ProviderOut, status_code=201)
def create_provider(body: ProviderIn, db: Session = Depends(get_db)) -> ProviderOut:
    provider = store.create_provider(db, body.name, body.api_url, body.api_key, body.is_active)
    return ProviderOut.from_model(provider)


@router.post("/test-connection", response_model=list[RemoteServiceOut])
def test_connection(body: ConnectionTestIn, mock: bool = Query(False)) -> list[RemoteServiceOut]:
    services = operations.test_connection(body.api_url, body.api_key, force_mock=mock)
    return [RemoteServiceOut.model_validate(service) for service in services]


@router.get("/{provider_id}", response_model=ProviderOut)
def get_provider(provider_id: int, db: Session = Depends(get_db)) -> ProviderOut:
    return ProviderOut.from_model(store.get_provider(db, provider_id))


@router.put("/{provider_id}", response_model=ProviderOut)
def update_provider(
    provider_id: int,
    body: ProviderUpdate,
    db: Session = Depends(get_db),
) -> ProviderOut:
    provider = store.update_provider(db, provider_id, body.name, body.api_url, body.api_key, body.is_active)
    return ProviderOut.from_model(provider)


@router.delete("/{provider_id}")
def delete_provider(provider_id: int, db: Session = Depends(get_db)) -> dict[str, str]:
    store.delete_provider(db, provider_id)
    return {"message": "SMM provider deleted successfully"}


@router.get("/{provider_id}/services", response_model=DiscoveryOut)
def list_provider_services(provider_id: int, mock: bool = Query(False), db: Session = Depends(get_db)) -> DiscoveryOut:
    view = operations.discover_and_group(db, provider_id, force_mock=mock)
    return DiscoveryOut(
        services={
            category: [ServiceDescriptorOut.model_validate(item) for item in items]
            for category, items in view.services_by_category.items()
        },
        platforms=[PlatformOut.model_validate(platform) for platform in view.platforms],
    )


@router.post("/{provider_id}/import-services", response_model=ImportOut)
def import_services(
    provider_id: int,
    body: ImportIn,
    mock: bool = Query(False),
    db: Session = Depends(get_db),
) -> ImportOut:
    report = operations.synchronize(
        db,
        provider_id,
        body.service_ids,
        body.platform_overrides,
        force_mock=mock or body.use_mock_data,
    )
    provider = store.get_provider(db, provider_id)
    logger.info("Import from provider %s finished: %s imported", provider.id, report.imported_count)
    return ImportOut(
        message=f"Successfully imported {report.imported_count} services from {provider.name}",
        imported_count=report.imported_count,
        results=[ImportOutcomeOut(**outcome.to_dict()) for outcome in report.results],
    )


@router.get("/{provider_id}/balance", response_model=BalanceOut)
def provider_balance(provider_id: int, mock: bool = Query(False), db: Session = Depends(get_db)) -> BalanceOut:
    return BalanceOut.model_validate(operations.get_balance(db, provider_id, force_mock=mock))
