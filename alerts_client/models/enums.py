from enum import Enum


class StrEnum(str, Enum):
    """
    A string Enum.
    """


class Environment(StrEnum):
    DEV = "dev"
    PROD = "prod"


class Region(StrEnum):
    """Data center region of the account."""

    US = "us"
    EU = "eu"


class ChannelType(StrEnum):
    """Delivery mechanism of a notification channel"""

    USER = "user"
    EMAIL = "email"
    OPSGENIE = "opsgenie"
    PAGERDUTY = "pagerduty"
    SLACK = "slack"
    VICTOROPS = "victorops"
    WEBHOOK = "webhook"
    XMATTERS = "xmatters"
    CAMPFIRE = "campfire"
    HIPCHAT = "hipchat"
