"""
Source format parsers

Registration order matters: the first parser whose ``supports`` accepts a
source is used, so specific formats come before generic ones.
"""
from iptv_catalog.parsers.base import IptvParser
from iptv_catalog.parsers.m3u import M3uParser
from iptv_catalog.parsers.txt import TxtParser


def default_parsers() -> tuple[IptvParser, ...]:
    return (M3uParser(), TxtParser())


__all__ = [
    'IptvParser',
    'M3uParser',
    'TxtParser',
    'default_parsers',
]
