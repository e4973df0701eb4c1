"""
Parser Registry

Holds the ordered, fixed set of source parsers and picks the first one that
accepts a given source.
"""
import logging
from collections.abc import Iterable

from iptv_catalog.errors import NoParserError
from iptv_catalog.parsers import IptvParser, default_parsers


logger = logging.getLogger(__name__)


class ParserRegistry:
    """Ordered parser list; earlier registrations win."""

    def __init__(self, parsers: Iterable[IptvParser] | None = None):
        self._parsers = tuple(default_parsers() if parsers is None else parsers)

    @property
    def parsers(self) -> tuple[IptvParser, ...]:
        return self._parsers

    def select(self, url: str, content: str) -> IptvParser:
        """
        Return the first parser supporting (url, content)

        Raises:
            NoParserError: If no registered parser accepts the source
        """
        for parser in self._parsers:
            if parser.supports(url, content):
                logger.debug(f"Selected parser '{parser.name}' for {url}")
                return parser

        logger.error(f"No parser supports source {url} ({len(self._parsers)} registered)")
        raise NoParserError(url)
