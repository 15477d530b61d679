from functools import lru_cache

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from alerts_client import __version__
from alerts_client.models.enums import Environment, Region

REGION_BASE_URLS: dict[Region, str] = {
    Region.US: "https://api.newrelic.com",
    Region.EU: "https://api.eu.newrelic.com",
}


class AlertsSettings(BaseSettings):
    API_KEY: str
    REGION: Region = Region.US
    BASE_URL: AnyHttpUrl | None = None  # overrides the region default
    API_VERSION: str = "v2"

    TIMEOUT: float = Field(60, gt=0, description="Request timeout in seconds")
    MAX_RETRIES: int = Field(3, ge=1, description="Attempts per request, including the first one")
    RETRY_DELAY: float = Field(1.0, ge=0, description="Seconds to wait between attempts")
    # backpressure between page fetching and merging
    PAGE_BUFFER_SIZE: int = Field(1, ge=1)
    USER_AGENT: str = f"alerts-client/{__version__}"

    ENV: Environment = Environment.DEV
    LOGGING_LEVEL: str = "INFO"
    # false leaves the alerts_client loggers to the host application
    CONFIGURE_LOGGING: bool = True

    # pydantic settings config
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_prefix="ALERTS_")

    @property
    def api_base_url(self) -> str:
        if self.BASE_URL is not None:
            return str(self.BASE_URL)
        return REGION_BASE_URLS[Region(self.REGION)]


@lru_cache
def get_settings() -> AlertsSettings:
    return AlertsSettings()  # type: ignore
