"""
Dependency Injection Configuration

Builds the catalog services once per application and exposes them to
request handlers. The HTTP client is created here and passed down explicitly
so tests can substitute a fake transport.
"""
import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from iptv_catalog.config import CustomSettings
from iptv_catalog.services.cache_service import FileCacheGate
from iptv_catalog.services.iptv_repository_service import IptvRepository
from iptv_catalog.services.parser_registry import ParserRegistry
from iptv_catalog.services.source_fetch_service import SourceFetcher, build_http_client


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogServices:
    """Application-scoped service instances."""
    http_client: httpx.AsyncClient
    repository: IptvRepository

    async def aclose(self) -> None:
        await self.http_client.aclose()
        logger.debug("HTTP client closed")


def build_services(
    config: CustomSettings,
    http_client: httpx.AsyncClient | None = None,
) -> CatalogServices:
    """
    Wire cache, fetcher, parser registry and repository together.

    Args:
        config: Application settings
        http_client: Client to use instead of a freshly built one

    Returns:
        The service container for the application
    """
    client = http_client or build_http_client(config.http_timeout_sec, config.http_user_agent)
    registry = ParserRegistry()
    logger.debug("Registered parsers: %s", ", ".join(parser.name for parser in registry.parsers))

    repository = IptvRepository(
        source_url=config.iptv_source_url,
        cache=FileCacheGate(config.cache_dir),
        fetcher=SourceFetcher(client),
        registry=registry,
    )
    return CatalogServices(http_client=client, repository=repository)


def get_services(request: Request) -> CatalogServices:
    """Return the services attached to the running application."""
    return request.app.state.services


def get_repository(request: Request) -> IptvRepository:
    """FastAPI dependency providing the IPTV repository."""
    return get_services(request).repository
