from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from smm_catalog.api.deps import get_db
from smm_catalog.api.schemas import CatalogEntryOut, PlatformOut
from smm_catalog.db.models import CatalogEntry
from smm_catalog.services.catalog.operations import list_platforms

router = APIRouter(tags=["catalog"])


@router.get("/platforms", response_model=list[PlatformOut])
def platforms(db: Session = Depends(get_db)) -> list[PlatformOut]:
    return [PlatformOut.model_validate(platform) for platform in list_platforms(db)]


@router.get("/catalog", response_model=list[CatalogEntryOut])
def catalog_entries(provider_id: int | None = Query(None, alias="providerId"), db: Session = Depends(get_db)):
    query = select(CatalogEntry).order_by(CatalogEntry.id.asc())
    if provider_id is not None:
        query = query.where(CatalogEntry.provider_id == provider_id)
    return [CatalogEntryOut.model_validate(entry) for entry in db.scalars(query).all()]
