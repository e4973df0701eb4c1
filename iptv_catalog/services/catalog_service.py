"""
Catalog building and simplification

Turns raw source text into a ChannelGroupList and optionally reduces it to
the channels accepted by a predicate.
"""
import logging
from typing import Callable

from iptv_catalog.errors import CatalogError, ParseError
from iptv_catalog.models import Channel, ChannelGroup, ChannelGroupList
from iptv_catalog.services.parser_registry import ParserRegistry
from iptv_catalog.utils.logging_helpers import log_catalog_summary


logger = logging.getLogger(__name__)

ChannelPredicate = Callable[[ChannelGroup, Channel], bool]


def build_catalog(raw_text: str, url: str, registry: ParserRegistry) -> ChannelGroupList:
    """
    Parse raw source text with the first matching parser

    Args:
        raw_text: Source document
        url: Source URL (used for parser selection)
        registry: Parsers to choose from

    Returns:
        Parsed catalog

    Raises:
        NoParserError: If no parser accepts the source
        ParseError: If the selected parser fails
    """
    parser = registry.select(url, raw_text)

    try:
        groups = parser.parse(raw_text)
    except CatalogError:
        logger.error(f"Parser '{parser.name}' rejected source {url}", exc_info=True)
        raise
    except Exception as e:
        logger.error(f"Parser '{parser.name}' failed on source {url}: {e}", exc_info=True)
        raise ParseError(parser.name, str(e)) from e

    log_catalog_summary(logger, len(groups), groups.channel_count)
    return groups


def default_simplify_predicate(group: ChannelGroup, channel: Channel) -> bool:
    """Keep CCTV channels and provincial satellite channels (names ending in 卫视)."""
    return channel.name.lower().startswith("cctv") or channel.name.endswith("卫视")


def simplify_catalog(
    groups: ChannelGroupList,
    predicate: ChannelPredicate = default_simplify_predicate,
) -> ChannelGroupList:
    """Drop channels rejected by ``predicate``, then drop groups left empty."""
    simplified = []
    for group in groups:
        channels = tuple(channel for channel in group.channels if predicate(group, channel))
        if channels:
            simplified.append(ChannelGroup(name=group.name, channels=channels))
    return ChannelGroupList(simplified)
