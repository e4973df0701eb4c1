from datetime import datetime, timezone
from typing import Annotated
from fastapi import APIRouter, Depends, Query
import logging

from iptv_catalog.config import settings
from iptv_catalog.dependencies import get_repository
from iptv_catalog.schemas import CatalogResponse, RefreshResponse
from iptv_catalog.services import IptvRepository, refresh_scheduler


logger = logging.getLogger(__name__)

main_router = APIRouter()

@main_router.get("/")
async def root() -> dict:
    """Root endpoint with service information"""
    next_run = refresh_scheduler.get_next_run_time()

    return {
        "service": "IPTV Catalog Service",
        "version": "0.1.0",
        "next_scheduled_refresh": next_run.isoformat() if next_run else None,
        "endpoints": {
            "channels": "/channels - Get the channel catalog",
            "refresh": "/refresh - Force a source refetch (POST)",
            "cache": "/cache - Clear the cached source (DELETE)",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check() -> dict:
    """Health check endpoint"""
    next_run = refresh_scheduler.get_next_run_time()
    return {
        "status": "ok",
        "scheduler_running": refresh_scheduler.is_running(),
        "next_refresh": next_run.isoformat() if next_run else None
    }


@main_router.get("/channels", response_model=CatalogResponse)
async def get_channels(
    repository: Annotated[IptvRepository, Depends(get_repository)],
    cache_time: Annotated[int | None, Query(ge=0, description="Maximum cache age in seconds")] = None,
    simplify: Annotated[bool | None, Query(description="Keep only CCTV and satellite channels")] = None,
) -> CatalogResponse:
    """
    Get the channel catalog of the configured source

    Args:
        cache_time: Maximum cache age in seconds (defaults to configured value)
        simplify: Reduce to the simplified channel subset (defaults to configured value)

    Returns:
        Channel groups with their channels
    """
    effective_cache_time = settings.cache_time_sec if cache_time is None else cache_time
    effective_simplify = settings.simplify if simplify is None else simplify

    groups = await repository.get_channel_group_list(effective_cache_time, effective_simplify)

    return CatalogResponse.from_groups(
        groups,
        timestamp=datetime.now(timezone.utc).isoformat(),
        source_url=repository.source_url,
        simplified=effective_simplify,
    )


@main_router.post("/refresh", response_model=RefreshResponse)
async def trigger_refresh(
    repository: Annotated[IptvRepository, Depends(get_repository)],
) -> RefreshResponse:
    """
    Manually refetch the source, bypassing the cache
    """
    logger.info("Manual source refresh triggered via API")
    groups = await repository.get_channel_group_list(cache_time=0)

    return RefreshResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        group_count=len(groups),
        channel_count=groups.channel_count,
    )


@main_router.delete("/cache")
async def clear_cache(
    repository: Annotated[IptvRepository, Depends(get_repository)],
) -> dict:
    """Remove the cached source text"""
    removed = await repository.clear_cache()
    return {"status": "ok", "removed": removed}
