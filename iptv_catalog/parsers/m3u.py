"""M3U / M3U8 playlist parser."""
import re

from iptv_catalog.errors import ParseError
from iptv_catalog.parsers.base import DEFAULT_GROUP_NAME, GroupCollector, IptvParser
from iptv_catalog.models import ChannelGroupList


_ATTR_RE = re.compile(r'([\w-]+)="([^"]*)"')
_KNOWN_ATTRS = {"tvg-name", "tvg-logo", "group-title"}


def _first_line(content: str) -> str:
    for line in content.splitlines():
        stripped = line.lstrip("\ufeff").strip()
        if stripped:
            return stripped
    return ""


def _parse_extinf(line: str) -> tuple[str, dict[str, str]]:
    """Split an #EXTINF line into (display name, attributes)"""
    body = line[len("#EXTINF:"):]

    # The display name follows the first comma outside quoted attribute values
    in_quotes = False
    split_at = -1
    for idx, char in enumerate(body):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            split_at = idx
            break

    if split_at < 0:
        header, name = body, ""
    else:
        header, name = body[:split_at], body[split_at + 1:]

    attrs = {key: value.strip() for key, value in _ATTR_RE.findall(header)}
    return name.strip(), attrs


class M3uParser(IptvParser):
    """Parser for extended M3U playlists (``#EXTM3U`` header)."""

    name = "m3u"

    def supports(self, url: str, content: str) -> bool:
        return _first_line(content).upper().startswith("#EXTM3U")

    def parse(self, content: str) -> ChannelGroupList:
        collector = GroupCollector()
        pending: tuple[str, dict[str, str]] | None = None

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line:
                continue

            if line.upper().startswith("#EXTINF:"):
                pending = _parse_extinf(line)
                continue

            if line.startswith("#"):
                continue

            if pending is None:
                continue

            name, attrs = pending
            pending = None
            name = name or attrs.get("tvg-name", "")
            if not name:
                continue

            collector.add(
                group_name=attrs.get("group-title") or DEFAULT_GROUP_NAME,
                channel_name=name,
                urls=[line],
                logo=attrs.get("tvg-logo") or None,
                epg_name=attrs.get("tvg-name") or name,
                metadata={k: v for k, v in attrs.items() if k not in _KNOWN_ATTRS},
            )

        groups = collector.build()
        if not groups.channel_count:
            raise ParseError(self.name, "playlist contains no channels")
        return groups
