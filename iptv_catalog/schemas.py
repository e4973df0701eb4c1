from pydantic import BaseModel, Field

from iptv_catalog.models import Channel, ChannelGroupList


class ChannelResponse(BaseModel):
    """Single channel"""
    name: str = Field(..., description="Channel display name")
    urls: list[str] = Field(..., min_length=1, description="Stream URLs, preferred first")
    logo: str | None = Field(None, description="URL to channel logo")
    epg_name: str | None = Field(None, description="Name used for programme guide lookups")
    metadata: dict[str, str] = Field(default_factory=dict, description="Extra source attributes")

    @classmethod
    def from_channel(cls, channel: Channel) -> "ChannelResponse":
        return cls(
            name=channel.name,
            urls=list(channel.url_list),
            logo=channel.logo,
            epg_name=channel.epg_name,
            metadata=dict(channel.metadata),
        )


class ChannelGroupResponse(BaseModel):
    """Named group of channels"""
    name: str
    channels: list[ChannelResponse]


class CatalogResponse(BaseModel):
    """Channel catalog response"""
    timestamp: str
    source_url: str
    simplified: bool
    group_count: int
    channel_count: int
    groups: list[ChannelGroupResponse]

    @classmethod
    def from_groups(
        cls,
        groups: ChannelGroupList,
        *,
        timestamp: str,
        source_url: str,
        simplified: bool,
    ) -> "CatalogResponse":
        return cls(
            timestamp=timestamp,
            source_url=source_url,
            simplified=simplified,
            group_count=len(groups),
            channel_count=groups.channel_count,
            groups=[
                ChannelGroupResponse(
                    name=group.name,
                    channels=[ChannelResponse.from_channel(ch) for ch in group.channels],
                )
                for group in groups
            ],
        )


class RefreshResponse(BaseModel):
    """Result of a forced source refresh"""
    status: str = "success"
    timestamp: str
    group_count: int
    channel_count: int


class ErrorDetail(BaseModel):
    """Standard error detail"""
    code: str = Field(..., description="Error code (e.g., 'FETCH_FAILED', 'NO_PARSER')")
    message: str = Field(..., description="Human-readable error message")
    context: dict | None = Field(None, description="Additional context about the error")


class StandardErrorResponse(BaseModel):
    """Standardized error response for all endpoints"""
    status: str = Field("error", description="Status indicator")
    timestamp: str = Field(..., description="ISO8601 timestamp of error")
    error: ErrorDetail = Field(..., description="Error details")
