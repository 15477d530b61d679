import logging
from typing import Any

from alerts_client.auth import ApiKeyAuth
from alerts_client.clients.base import AsyncHttpClient
from alerts_client.config import AlertsSettings
from alerts_client.exceptions import ChannelNotFoundError, MalformedResponseError
from alerts_client.models.channels import Channel, ChannelRequestBody, ChannelResponse, ChannelsResponse
from alerts_client.utilities.logger import configure_logger
from alerts_client.utilities.pagination import LinkHeaderPager, PageAggregator, Pager

logger = logging.getLogger(__name__)

CHANNELS_ENDPOINT = "/alerts_channels.json"
CHANNEL_ENDPOINT = "/alerts_channels/{channel_id}.json"


class AlertsClient(AsyncHttpClient):
    """
    Alerts Client used to manage the notification channels of an account.
    """

    def __init__(self, *args: Any, pager: Pager | None = None, page_buffer_size: int = 1, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.pager = pager or LinkHeaderPager()
        self.page_buffer_size = page_buffer_size

    @classmethod
    def from_settings(cls, settings: AlertsSettings, **kwargs: Any) -> "AlertsClient":
        """
        Build a client for the account, region and tuning described by the settings.
        kwargs: passed through to the constructor, e.g. a custom transport
        """
        if settings.CONFIGURE_LOGGING:
            configure_logger(settings)
        return cls(
            base_url=settings.api_base_url,
            api_version=settings.API_VERSION,
            auth=ApiKeyAuth(settings.API_KEY),
            timeout=settings.TIMEOUT,
            max_retries=settings.MAX_RETRIES,
            retry_delay=settings.RETRY_DELAY,
            user_agent=settings.USER_AGENT,
            page_buffer_size=settings.PAGE_BUFFER_SIZE,
            **kwargs,
        )

    async def list_channels(self) -> list[Channel]:
        """
        List all notification channels of the account, walking every page.
        Any error while paginating is raised and no partial list is returned.

        Returns: list of channels, in the order the pages were received
        """
        aggregator: PageAggregator[Channel] = PageAggregator(
            to_page=lambda page: page.channels, buffer_size=self.page_buffer_size
        )
        channels = await aggregator.collect(
            lambda sink: self.get_pages(
                CHANNELS_ENDPOINT, params=None, result_sink=sink, pager=self.pager, response_model=ChannelsResponse
            )
        )
        logger.debug("Listed %d alert channels", len(channels))
        return channels

    async def get_channel(self, channel_id: int) -> Channel:
        """
        Get a notification channel by id.
        The API has no single channel endpoint, so this lists all channels and scans them.
        channel_id: id of the channel

        Raises: ChannelNotFoundError if no channel has the given id
        """
        channels = await self.list_channels()
        for channel in channels:
            if channel.id == channel_id:
                return channel
        raise ChannelNotFoundError(channel_id)

    async def create_channel(self, channel: Channel) -> Channel:
        """
        Create a notification channel.
        The configuration options differ per channel type and are validated by the service.
        channel: channel definition, without id

        Returns: the channel as created by the service, with its id
        """
        body = ChannelRequestBody(channel=channel)
        created = await self.post(CHANNELS_ENDPOINT, data=body.to_payload(), response_model=ChannelsResponse)
        if not created.channels:
            raise MalformedResponseError(f"Create response for channel '{channel.name}' contains no channels")
        logger.info("Created alert channel %s (%s)", created.channels[0].id, created.channels[0].name)
        return created.channels[0]

    async def delete_channel(self, channel_id: int) -> Channel:
        """
        Delete a notification channel.
        channel_id: id of the channel

        Returns: the deleted channel, as reported by the service
        """
        deleted = await self.delete(CHANNEL_ENDPOINT.format(channel_id=channel_id), response_model=ChannelResponse)
        logger.info("Deleted alert channel %s", channel_id)
        return deleted.channel
