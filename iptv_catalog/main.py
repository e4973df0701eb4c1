from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from iptv_catalog.config import settings, setup_logging
from iptv_catalog.dependencies import build_services
from iptv_catalog.errors import CatalogError, FetchError, NoParserError, ParseError
from iptv_catalog.schemas import ErrorDetail, StandardErrorResponse
from iptv_catalog.services.scheduler_service import refresh_scheduler

from iptv_catalog.routers import main_router


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info("Starting IPTV Catalog Service...")

    # Tests may attach their own services before startup
    services = getattr(app.state, "services", None)
    owns_services = services is None
    if owns_services:
        services = build_services(settings)
        app.state.services = services

    try:
        if settings.refresh_enabled:
            logger.info("Starting scheduler...")
            refresh_scheduler.start(
                services.repository,
                settings.refresh_cron,
                settings.refresh_misfire_grace_sec,
            )
        logger.info("IPTV Catalog Service started successfully")
    except Exception as e:
        logger.error(f"Failed to start IPTV Catalog Service: {e}", exc_info=True)
        if owns_services:
            await services.aclose()
        raise

    yield

    logger.info("Shutting down IPTV Catalog Service...")

    try:
        refresh_scheduler.shutdown()
    except Exception as e:
        logger.error(f"Error during scheduler shutdown: {e}", exc_info=True)

    if owns_services:
        await services.aclose()
        del app.state.services
    logger.info("IPTV Catalog Service stopped")


app = FastAPI(
    title="IPTV Catalog Service",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(main_router)


def _error_status(exc: CatalogError) -> tuple[int, str]:
    if isinstance(exc, FetchError):
        return 502, "FETCH_FAILED"
    if isinstance(exc, NoParserError):
        return 422, "NO_PARSER"
    if isinstance(exc, ParseError):
        return 422, "PARSE_FAILED"
    return 500, "CATALOG_FAILED"


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError):
    """Map catalog failures to the standard error response"""
    status_code, code = _error_status(exc)
    logger.error(f"{request.method} {request.url.path} failed with {code}: {exc}")

    context = {"reason": exc.reason} if isinstance(exc, FetchError) else None
    body = StandardErrorResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=ErrorDetail(code=code, message=str(exc), context=context),
    )

    return JSONResponse(status_code=status_code, content=body.model_dump())
