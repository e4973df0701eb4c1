"""
IPTV Repository

Runs the fetch -> cache -> parse -> simplify pipeline for one source URL.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from iptv_catalog.errors import CatalogError
from iptv_catalog.models import ChannelGroupList
from iptv_catalog.services.cache_service import FileCacheGate, cache_key_for
from iptv_catalog.services.catalog_service import (
    ChannelPredicate,
    build_catalog,
    default_simplify_predicate,
    simplify_catalog,
)
from iptv_catalog.services.parser_registry import ParserRegistry
from iptv_catalog.services.source_fetch_service import SourceFetcher


logger = logging.getLogger(__name__)


class IptvRepository:
    """
    Channel catalog for a single IPTV source.

    Only the raw source text is cached; the catalog is re-parsed on every call.
    """

    def __init__(
        self,
        source_url: str,
        cache: FileCacheGate,
        fetcher: SourceFetcher,
        registry: ParserRegistry | None = None,
        simplify_predicate: ChannelPredicate = default_simplify_predicate,
    ) -> None:
        self.source_url = source_url
        self.cache_key = cache_key_for(source_url)
        self._cache = cache
        self._fetcher = fetcher
        self._registry = registry or ParserRegistry()
        self._simplify_predicate = simplify_predicate

    async def _fetch_source(self) -> str:
        return await self._fetcher.fetch(self.source_url)

    async def get_channel_group_list(
        self,
        cache_time: timedelta | float,
        simplify: bool = False,
    ) -> ChannelGroupList:
        """
        Get the source's channel groups

        Args:
            cache_time: Maximum age of cached source text (timedelta or seconds);
                0 forces a refetch
            simplify: Keep only channels accepted by the simplify predicate

        Returns:
            Parsed (and optionally simplified) catalog

        Raises:
            CatalogError: FetchError, NoParserError, ParseError, or CatalogError
                wrapping any unexpected failure
        """
        try:
            source_text = await self._cache.resolve(self.cache_key, cache_time, self._fetch_source)
            groups = build_catalog(source_text, self.source_url, self._registry)

            if simplify:
                groups = simplify_catalog(groups, self._simplify_predicate)
                logger.info(
                    f"Simplified catalog: {len(groups)} groups, {groups.channel_count} channels"
                )

            return groups
        except CatalogError as e:
            logger.error(f"Failed to get channel groups for {self.source_url}: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to get channel groups for {self.source_url}: {e}", exc_info=True)
            raise CatalogError(f"Failed to get channel groups: {e}") from e

    async def clear_cache(self) -> bool:
        """Remove the cached source text."""
        return await self._cache.clear(self.cache_key)
