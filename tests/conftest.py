import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from alerts_client.clients.alerts import AlertsClient

BASE_URL = "https://api.test.example"


def channel_payload(channel_id: int, name: str | None = None, channel_type: str = "email") -> dict[str, Any]:
    return {
        "id": channel_id,
        "name": name or f"channel-{channel_id}",
        "type": channel_type,
        "configuration": {"recipients": f"team-{channel_id}@example.com"},
        "links": {"policy_ids": []},
    }


def paged_handler(pages: list[list[dict[str, Any]]], fail_on_page: int | None = None) -> Callable:
    """
    Request handler serving `pages` from /v2/alerts_channels.json?page=N,
    linking each page to the next one through the Link header.
    """
    requested: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", 1))
        requested.append(page)
        if fail_on_page is not None and page == fail_on_page:
            return httpx.Response(400, json={"error": {"title": f"page {page} failed"}})
        channels = pages[page - 1] if pages else []
        headers = {}
        if page < len(pages):
            next_url = f"{BASE_URL}/v2/alerts_channels.json?page={page + 1}"
            headers["Link"] = f'<{next_url}>; rel="next", <{BASE_URL}/v2/alerts_channels.json?page={len(pages)}>; rel="last"'
        return httpx.Response(200, json={"channels": channels}, headers=headers)

    handler.requested = requested  # type: ignore[attr-defined]
    return handler


@pytest.fixture
def make_alerts_client():
    def _make(handler: Callable, **kwargs) -> AlertsClient:
        kwargs.setdefault("max_retries", 1)
        kwargs.setdefault("retry_delay", 0)
        return AlertsClient(base_url=BASE_URL, transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture(autouse=True)
def restore_client_logger():
    client_logger = logging.getLogger("alerts_client")
    handlers, level, propagate = list(client_logger.handlers), client_logger.level, client_logger.propagate
    yield
    client_logger.handlers = handlers
    client_logger.setLevel(level)
    client_logger.propagate = propagate
