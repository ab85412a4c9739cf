from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from smm_catalog.core.logging import mask_secret


class ProviderIn(BaseModel):
    name: str
    api_url: str
    api_key: str
    is_active: bool = True


class ProviderUpdate(BaseModel):
    name: str
    api_url: str
    api_key: str
    is_active: bool | None = None


class ProviderOut(BaseModel):
    id: int
    name: str
    api_url: str
    api_key_hint: str
    is_active: bool
    last_sync_at: datetime | None = None

    @classmethod
    def from_model(cls, provider: Any) -> ProviderOut:
        return cls(
            id=provider.id,
            name=provider.name,
            api_url=provider.api_url,
            api_key_hint=mask_secret(provider.api_key),
            is_active=provider.is_active,
            last_sync_at=provider.last_sync_at,
        )


class ConnectionTestIn(BaseModel):
    api_url: str
    api_key: str


class PlatformOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class ServiceDescriptorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    rate: float
    min: int
    max: int
    type: str
    category: str


class RemoteServiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    external_service_id: str | None
    name: str | None
    category: str | None = None
    type: str | None = None
    rate: str | None = None
    min: int | None = None
    max: int | None = None


class DiscoveryOut(BaseModel):
    services: dict[str, list[ServiceDescriptorOut]]
    platforms: list[PlatformOut]


class ImportIn(BaseModel):
    service_ids: list[str | int] = Field(min_length=1)
    platform_overrides: dict[str, int] = Field(default_factory=dict)
    use_mock_data: bool = False


class ImportOutcomeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    external_service_id: str | None
    name: str | None
    status: str
    reason: str | None = None


class ImportOut(BaseModel):
    message: str
    imported_count: int
    results: list[ImportOutcomeOut]


class BalanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    balance: str
    currency: str | None = None


class OrderIn(BaseModel):
    service_id: str | int
    link: str = Field(min_length=1)
    quantity: int | None = Field(default=None, ge=1)
    extra_params: dict[str, Any] = Field(default_factory=dict)


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    provider_order_id: str


class RemoteOrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    provider_order_id: str
    status: str | None = None
    charge: str | None = None
    start_count: int | None = None
    remains: int | None = None
    currency: str | None = None
    error: str | None = None


class OrderStatusBatchIn(BaseModel):
    order_ids: list[str | int] = Field(min_length=1)


class RefillOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    provider_order_id: str
    refill_id: str | None = None
    raw: Any = None


class CatalogEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    price_cents: int
    platform_id: int
    category: str
    service_type: str
    provider_id: int | None = None
    external_product_id: str | None = None
    external_service_id: str | None = None
    provider_name: str | None = None
    min_quantity: int
    max_quantity: int
    is_active: bool
