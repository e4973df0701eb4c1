"""
Immutable dataclasses describing a parsed channel catalog (channels, groups, group lists).
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Channel:
    """A single playable entry; one channel may carry several stream URLs."""
    name: str
    url_list: tuple[str, ...]
    logo: str | None = None
    epg_name: str | None = None
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    @property
    def url(self) -> str:
        return self.url_list[0]


@dataclass(frozen=True, slots=True)
class ChannelGroup:
    """Named, ordered collection of channels."""
    name: str
    channels: tuple[Channel, ...] = ()


class ChannelGroupList:
    """Ordered, immutable sequence of channel groups (one full catalog)."""

    __slots__ = ("_groups",)

    def __init__(self, groups: Iterable[ChannelGroup] = ()) -> None:
        self._groups = tuple(groups)

    def __iter__(self) -> Iterator[ChannelGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __getitem__(self, index: int) -> ChannelGroup:
        return self._groups[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChannelGroupList):
            return self._groups == other._groups
        return NotImplemented

    def __repr__(self) -> str:
        return f"ChannelGroupList({list(self._groups)!r})"

    @property
    def channel_count(self) -> int:
        return sum(len(group.channels) for group in self._groups)


__all__ = ["Channel", "ChannelGroup", "ChannelGroupList"]
