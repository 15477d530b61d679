from typing import Any

from pydantic import Field

from alerts_client.models import BaseModel
from alerts_client.models.enums import ChannelType


class ChannelLinks(BaseModel):
    policy_ids: list[int] = Field(default_factory=list)


class Channel(BaseModel):
    """
    A notification destination for alert delivery.

    `id` stays unset until the service assigns one on creation. Single channel
    responses, such as the one of a delete, may leave out `name` and `type`.
    The keys in `configuration` depend on the channel type and are validated by
    the service only.
    """

    id: int | None = None
    name: str | None = None
    # types added to the service later are kept as plain strings
    type: ChannelType | str | None = Field(default=None, union_mode="left_to_right")
    configuration: dict[str, Any] = Field(default_factory=dict)
    links: ChannelLinks = Field(default_factory=ChannelLinks)


class ChannelsResponse(BaseModel):
    """Envelope of list and create responses, one page of channels."""

    channels: list[Channel] = Field(default_factory=list)


class ChannelResponse(BaseModel):
    """Envelope of single channel responses."""

    channel: Channel


class ChannelRequestBody(BaseModel):
    channel: Channel

    def to_payload(self) -> dict[str, Any]:
        # the service rejects an explicit null id
        exclude = {"channel": {"id"}} if self.channel.id is None else None
        return self.model_dump(mode="json", exclude=exclude)
