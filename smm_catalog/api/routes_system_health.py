from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smm_catalog.api.deps import get_db
from smm_catalog.core.config import get_settings
from smm_catalog.core.logging import get_logger
from smm_catalog.db.models import CatalogEntry, SmmProvider
from smm_catalog.services.providers.registry import registry

router = APIRouter(prefix="/health", tags=["health"])
logger = get_logger()


@router.get("")
def health(db: Session = Depends(get_db)) -> dict:
    try:
        providers = db.scalar(select(func.count()).select_from(SmmProvider)) or 0
        catalog_entries = db.scalar(select(func.count()).select_from(CatalogEntry)) or 0
    except SQLAlchemyError as exc:
        logger.error("Health check could not reach the catalog database: %s", exc)
        return {"status": "degraded", "database": "unreachable", "adapter_modes": registry.list_modes()}
    return {
        "status": "ok",
        "database": "ok",
        "providers": providers,
        "catalog_entries": catalog_entries,
        "adapter_modes": registry.list_modes(),
        "force_mock": get_settings().force_mock,
    }
