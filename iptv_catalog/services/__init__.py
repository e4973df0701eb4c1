"""
Services package for IPTV Catalog Service

This package contains the catalog pipeline: cache, fetch, parse, simplify.
"""
from iptv_catalog.services.cache_service import FileCacheGate, cache_key_for
from iptv_catalog.services.catalog_service import build_catalog, simplify_catalog
from iptv_catalog.services.iptv_repository_service import IptvRepository
from iptv_catalog.services.parser_registry import ParserRegistry
from iptv_catalog.services.scheduler_service import refresh_scheduler
from iptv_catalog.services.source_fetch_service import SourceFetcher

__all__ = [
    'FileCacheGate',
    'cache_key_for',
    'build_catalog',
    'simplify_catalog',
    'IptvRepository',
    'ParserRegistry',
    'refresh_scheduler',
    'SourceFetcher',
]
