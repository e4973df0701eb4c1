"""Plain-text ``name,url`` lists with ``Group,#genre#`` section markers."""
from iptv_catalog.errors import ParseError
from iptv_catalog.parsers.base import DEFAULT_GROUP_NAME, GroupCollector, IptvParser
from iptv_catalog.models import ChannelGroupList


GENRE_MARKER = "#genre#"


class TxtParser(IptvParser):
    name = "txt"

    def supports(self, url: str, content: str) -> bool:
        return GENRE_MARKER in content

    def parse(self, content: str) -> ChannelGroupList:
        collector = GroupCollector()
        group_name = DEFAULT_GROUP_NAME

        for raw_line in content.splitlines():
            line = raw_line.lstrip("\ufeff").strip()
            if not line or "," not in line:
                continue

            name, value = (part.strip() for part in line.split(",", 1))
            if value == GENRE_MARKER:
                group_name = name or DEFAULT_GROUP_NAME
                continue

            # Several streams for one channel are separated by '#'
            urls = [url.strip() for url in value.split("#") if url.strip()]
            if not name or not urls:
                continue

            collector.add(group_name=group_name, channel_name=name, urls=urls, epg_name=name)

        groups = collector.build()
        if not groups.channel_count:
            raise ParseError(self.name, "no channel lines found")
        return groups
