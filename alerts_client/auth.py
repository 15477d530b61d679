import logging
from collections.abc import Generator

from httpx import Auth, Request, Response

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"


class ApiKeyAuth(Auth):
    def __init__(self, api_key: str):
        """
        Account API key auth for the REST API. The key is sent on every request,
        including the follow-up page requests of a paginated listing.

        Args:
            api_key (str): The user or admin API key of the account.
        """
        if not api_key:
            raise ValueError("API key must not be empty")
        self.api_key = api_key

    def auth_flow(self, request: Request) -> Generator[Request, Response, None]:
        """
        Add the API key header to the request.

        Args:
            request (Request): A Request object.

        Yields:
            Request: The modified request with the API key header.
        """
        request.headers[API_KEY_HEADER] = self.api_key
        logger.debug("Authenticated request to %s", request.url)
        yield request
