import asyncio
import logging
import re
from http import HTTPStatus
from json import JSONDecodeError
from typing import Any, TypeVar

from httpx import (
    AsyncBaseTransport,
    AsyncClient,
    Auth,
    HTTPStatusError,
    InvalidURL,
    Response,
    TransportError,
)
from pydantic import AnyHttpUrl, BaseModel, ValidationError

from alerts_client import __version__
from alerts_client.exceptions import MalformedResponseError
from alerts_client.utilities.pagination import Pager
from alerts_client.utilities.retries import retry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

RETRYABLE_STATUS_CODES = frozenset(
    {
        HTTPStatus.TOO_MANY_REQUESTS,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
    }
)


class HttpClientError(Exception):
    def __init__(
        self, message: str, status_code: int | None = None, content: dict | None = None, url: str | None = None
    ):
        self.message = message
        self.status_code = status_code
        self.content = content
        self.url = url
        super().__init__(self.message)


class RetryableStatusError(HTTPStatusError):
    """Error response the service may answer differently on a later attempt."""


class AsyncHttpClient:
    """Asynchronous HTTP client for the alerting REST API."""

    def __init__(
        self,
        base_url: str | AnyHttpUrl,
        api_version: str = "v2",
        auth: Auth | None = None,
        timeout: float = 60,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        user_agent: str = f"alerts-client/{__version__}",
        transport: AsyncBaseTransport | None = None,
    ):
        self.base_url = self.get_base_url_with_version(base_url, api_version)
        self.auth = auth
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.user_agent = user_agent
        self.transport = transport

    @staticmethod
    def get_base_url_with_version(base_url: str | AnyHttpUrl, api_version: str = "v2") -> str:
        """
        Get the base URL with the API version.
        If the base URL ends with a slash, it is removed.
        If the base URL does not end with the API version, it is appended.

        Args:
            base_url (str | AnyHttpUrl): The base URL to be modified.
            api_version (str, optional): The API version to be appended to the base URL. Defaults to "v2".

        Returns:
            str: The base URL with the API version.
        """
        base_url = str(base_url)
        if not api_version:
            return base_url
        if base_url.endswith("/"):
            base_url = base_url[:-1]
        if not re.search(rf"/{api_version}$", base_url):
            base_url = f"{base_url}/{api_version}"
        return base_url

    @staticmethod
    def _get_url(base_url: str | AnyHttpUrl, endpoint: str) -> str:
        """
        Join base_url and endpoint, absolute endpoints (pagination links) are kept as they are
        """
        if re.match(r"^https?://", endpoint):
            return endpoint
        path = str(base_url).rstrip("/") + "/" + endpoint.lstrip("/")
        return path

    def _client(self) -> AsyncClient:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        return AsyncClient(auth=self.auth, headers=headers, timeout=self.timeout, transport=self.transport)

    def _handle_error_response(self, e: HTTPStatusError, url: str) -> None:
        """Handle error responses from HTTP requests."""
        content = None
        if e.response is not None:
            try:
                content = e.response.json()
            except (JSONDecodeError, UnicodeDecodeError):
                content = None

        status_code = e.response.status_code if e.response is not None else None
        if status_code == HTTPStatus.UNAUTHORIZED:
            raise HttpClientError("Authentication failed", status_code=status_code, content=content, url=url) from e
        elif status_code == HTTPStatus.FORBIDDEN:
            raise HttpClientError("Access forbidden", status_code=status_code, content=content, url=url) from e
        elif status_code == HTTPStatus.NOT_FOUND:
            raise HttpClientError("Resource not found", status_code=status_code, content=content, url=url) from e
        elif status_code == HTTPStatus.UNPROCESSABLE_ENTITY:
            raise HttpClientError("Invalid input", status_code=status_code, content=content, url=url) from e
        else:
            raise HttpClientError(f"HTTP error occurred: {e}", status_code=status_code, content=content, url=url) from e

    async def _send(self, client: AsyncClient, method: str, url: str, **kwargs) -> Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RetryableStatusError(
                f"Server error '{response.status_code}' for url '{url}'", request=response.request, response=response
            )
        response.raise_for_status()
        return response

    async def _request(self, client: AsyncClient, method: str, endpoint: str, **kwargs) -> Response:  # type: ignore
        url = self._get_url(self.base_url, endpoint)
        send = retry(
            retries=self.max_retries, delay=self.retry_delay, exceptions=(TransportError, RetryableStatusError)
        )(self._send)
        try:
            return await send(client, method, url, **kwargs)
        except HTTPStatusError as e:
            self._handle_error_response(e, url)
        except InvalidURL as e:
            raise HttpClientError(f"Invalid URL: {e}", url=url) from e
        except Exception as e:
            raise HttpClientError(f"Request failed: {e}", url=url) from e

    async def _make_request(self, method: str, endpoint: str, **kwargs) -> Response:
        async with self._client() as client:
            return await self._request(client, method, endpoint, **kwargs)

    @staticmethod
    def _decode(response: Response, response_model: type[ModelT]) -> ModelT:
        try:
            return response_model.model_validate(response.json())
        except (JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise MalformedResponseError(
                f"Unexpected {response_model.__name__} body from {response.request.url}: {e}"
            ) from e

    async def get_pages(
        self,
        endpoint: str,
        params: dict[str, Any] | None,
        result_sink: asyncio.Queue,
        pager: Pager,
        response_model: type[BaseModel],
    ) -> Response:
        """
        Walks a paginated listing and pushes every decoded page into result_sink.

        Pages are requested one after the other over a single connection; the next
        one is requested only after the previous page was handed to the sink. The
        first error aborts the walk and is raised, later pages are not fetched.

        Args:
            endpoint: absolute or relative url of the first page
            params: query parameters of the first page, follow-up links carry their own
            result_sink: queue receiving one `response_model` instance per page
            pager: decides the url of the next page from the current response
            response_model: pydantic model of a page body

        Returns:
            Response: the raw response of the last page
        """
        seen: set[str] = set()
        page_number = 0
        async with self._client() as client:
            url: str | None = endpoint
            while url is not None:
                response = await self._request(client, "GET", url, params=params)
                page_number += 1
                seen.add(str(response.request.url))
                logger.debug("Fetched page %d from %s", page_number, response.request.url)

                await result_sink.put(self._decode(response, response_model))

                url = pager.next_page_url(response)
                params = None
                if url is not None and self._get_url(self.base_url, url) in seen:
                    raise HttpClientError("Pagination loop detected", url=url)
        return response

    async def post(self, endpoint: str, data: dict[str, Any] | None, response_model: type[ModelT]) -> ModelT:
        """
        Makes a async http post request and decodes the body into response_model.
        endpoint: absolute or relative url
        data: request body
        """
        response = await self._make_request("POST", endpoint, json=data)
        return self._decode(response, response_model)

    async def delete(self, endpoint: str, response_model: type[ModelT]) -> ModelT:
        """
        Makes a async http delete request and decodes the body into response_model.
        endpoint: absolute or relative url
        """
        response = await self._make_request("DELETE", endpoint)
        return self._decode(response, response_model)
