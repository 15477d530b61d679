import logging
from unittest.mock import AsyncMock, patch

import pytest

from alerts_client.utilities.retries import retry


@pytest.mark.asyncio
async def test_retry_success():
    """Test that function succeeds on first try."""
    mock_func = AsyncMock(return_value="success")
    decorated = retry()(mock_func)

    result = await decorated()

    assert result == "success"
    assert mock_func.call_count == 1


@pytest.mark.asyncio
async def test_retry_fails_then_succeeds():
    """Test that function retries after failure and eventually succeeds."""
    mock_func = AsyncMock(side_effect=[ValueError("error"), ValueError("error"), "success"])
    decorated = retry(retries=3, delay=0, exceptions=(ValueError,))(mock_func)

    result = await decorated()

    assert result == "success"
    assert mock_func.call_count == 3


@pytest.mark.asyncio
async def test_retry_all_attempts_fail():
    """Test that the last exception is raised after all attempts fail."""
    mock_func = AsyncMock(side_effect=[ValueError("first"), ValueError("last")])
    decorated = retry(retries=2, delay=0, exceptions=(ValueError,))(mock_func)

    with pytest.raises(ValueError, match="last"):
        await decorated()

    assert mock_func.call_count == 2


@pytest.mark.asyncio
async def test_retry_unhandled_exception():
    """Test that unspecified exceptions are not retried."""
    mock_func = AsyncMock(side_effect=KeyError("error"))
    decorated = retry(retries=3, exceptions=(ValueError,))(mock_func)

    with pytest.raises(KeyError, match="error"):
        await decorated()

    assert mock_func.call_count == 1


@pytest.mark.asyncio
async def test_retry_custom_delay():
    """Test that retry sleeps for the specified delay between attempts only."""
    mock_func = AsyncMock(side_effect=[ValueError("error"), ValueError("error"), "success"])
    decorated = retry(retries=3, delay=0.5, exceptions=(ValueError,))(mock_func)

    with patch("alerts_client.utilities.retries.asyncio.sleep", new_callable=AsyncMock) as sleep_mock:
        result = await decorated()

    assert result == "success"
    assert sleep_mock.await_count == 2
    sleep_mock.assert_awaited_with(0.5)


@pytest.mark.asyncio
async def test_retry_single_attempt_does_not_sleep():
    mock_func = AsyncMock(side_effect=ValueError("error"))
    decorated = retry(retries=1, delay=5, exceptions=(ValueError,))(mock_func)

    with patch("alerts_client.utilities.retries.asyncio.sleep", new_callable=AsyncMock) as sleep_mock:
        with pytest.raises(ValueError):
            await decorated()

    sleep_mock.assert_not_awaited()


def test_retry_requires_an_attempt():
    with pytest.raises(ValueError, match="at least 1"):
        retry(retries=0)


@pytest.mark.asyncio
async def test_retry_logs_each_failed_attempt_but_the_last(caplog):
    async def fetch_page():
        raise ConnectionError("connection reset")

    decorated = retry(retries=3, delay=0, exceptions=(ConnectionError,))(fetch_page)

    with caplog.at_level(logging.WARNING, logger="alerts_client.utilities.retries"):
        with pytest.raises(ConnectionError):
            await decorated()

    assert [record.getMessage() for record in caplog.records] == [
        "test_retry_logs_each_failed_attempt_but_the_last.<locals>.fetch_page failed (connection reset), "
        "attempt 1 of 3, next try in 0.0s",
        "test_retry_logs_each_failed_attempt_but_the_last.<locals>.fetch_page failed (connection reset), "
        "attempt 2 of 3, next try in 0.0s",
    ]
