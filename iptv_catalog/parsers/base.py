from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType

from iptv_catalog.models import Channel, ChannelGroup, ChannelGroupList


DEFAULT_GROUP_NAME = "Other"


class IptvParser(ABC):
    """Interface for a source format parser.

    Parsers are stateless: ``supports`` is a cheap probe with no side effects,
    ``parse`` turns the whole document into a catalog.
    """

    name: str = "parser"

    @abstractmethod
    def supports(self, url: str, content: str) -> bool:
        ...

    @abstractmethod
    def parse(self, content: str) -> ChannelGroupList:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class GroupCollector:
    """
    Accumulates channels into groups in first-seen order

    Entries sharing a name within one group are merged into a single channel
    whose URL list keeps every stream in source order.
    """

    def __init__(self) -> None:
        self._groups: dict[str, dict[str, dict]] = {}

    def add(
        self,
        group_name: str,
        channel_name: str,
        urls: list[str],
        logo: str | None = None,
        epg_name: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> None:
        group = self._groups.setdefault(group_name or DEFAULT_GROUP_NAME, {})
        entry = group.get(channel_name)
        if entry is None:
            group[channel_name] = {
                "urls": [],
                "logo": logo,
                "epg_name": epg_name,
                "metadata": dict(metadata or {}),
            }
            entry = group[channel_name]
        else:
            entry["logo"] = entry["logo"] or logo
            entry["epg_name"] = entry["epg_name"] or epg_name

        for url in urls:
            if url not in entry["urls"]:
                entry["urls"].append(url)

    def build(self) -> ChannelGroupList:
        groups = []
        for group_name, channels in self._groups.items():
            built = tuple(
                Channel(
                    name=name,
                    url_list=tuple(entry["urls"]),
                    logo=entry["logo"],
                    epg_name=entry["epg_name"],
                    metadata=MappingProxyType(entry["metadata"]),
                )
                for name, entry in channels.items()
                if entry["urls"]
            )
            if built:
                groups.append(ChannelGroup(name=group_name, channels=built))
        return ChannelGroupList(groups)
