__version__ = "0.1.0"

from alerts_client.clients.alerts import AlertsClient  # noqa: E402
from alerts_client.clients.base import HttpClientError  # noqa: E402
from alerts_client.exceptions import ChannelNotFoundError, MalformedResponseError  # noqa: E402
from alerts_client.models.channels import Channel, ChannelLinks  # noqa: E402
from alerts_client.models.enums import ChannelType  # noqa: E402

__all__ = [
    "AlertsClient",
    "Channel",
    "ChannelLinks",
    "ChannelType",
    "ChannelNotFoundError",
    "HttpClientError",
    "MalformedResponseError",
]
