from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from smm_catalog.api import routes_catalog, routes_orders, routes_providers, routes_system_health
from smm_catalog.core.config import get_settings
from smm_catalog.core.logging import get_logger
from smm_catalog.db import models  # noqa: F401
from smm_catalog.db.base import Base, db_session, engine, ensure_runtime_schema
from smm_catalog.services.catalog.operations import NoMatchingServicesError, ensure_default_platforms
from smm_catalog.services.providers.errors import ConfigurationError, ProviderError, SmmApiError
from smm_catalog.services.providers.store import ProviderNotFoundError, ProviderValidationError

logger = get_logger()
settings = get_settings()

app = FastAPI(title=settings.app_name)

app.include_router(routes_providers.router)
app.include_router(routes_orders.router)
app.include_router(routes_catalog.router)
app.include_router(routes_system_health.router)


def _error_response(status_code: int, exc: Exception, message: str) -> JSONResponse:
    return JSONResponse({"message": message, "error": type(exc).__name__}, status_code=status_code)


@app.exception_handler(ProviderNotFoundError)
async def provider_not_found_handler(request: Request, exc: ProviderNotFoundError) -> JSONResponse:
    return _error_response(404, exc, "SMM provider not found")


@app.exception_handler(NoMatchingServicesError)
async def no_matching_services_handler(request: Request, exc: NoMatchingServicesError) -> JSONResponse:
    return _error_response(404, exc, str(exc))


@app.exception_handler(ProviderValidationError)
async def provider_validation_handler(request: Request, exc: ProviderValidationError) -> JSONResponse:
    return _error_response(400, exc, str(exc))


@app.exception_handler(SmmApiError)
async def smm_api_error_handler(request: Request, exc: SmmApiError) -> JSONResponse:
    status_code = 400 if isinstance(exc, (ConfigurationError, ProviderError)) else 502
    logger.warning("Provider call failed at path %s: %s", request.url.path, exc.message)
    return _error_response(status_code, exc, exc.message)


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=engine)
    ensure_runtime_schema()
    with db_session() as db:
        ensure_default_platforms(db)
    logger.info("Application started (%s)", settings.environment)
