r"""Unit tests for AsyncRetryPolicy."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, call

import httpx
import pytest

from aresclient.backoff import ConstantBackoff
from aresclient.exceptions import RequestCancelledError
from aresclient.retry import AsyncRetryPolicy, RetryConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

TEST_URL = "https://api.example.com/data"


def scripted_send(outcomes: Iterable[httpx.Response | Exception]) -> Callable[[], Any]:
    outcomes = list(outcomes)
    calls = []

    async def send_once() -> httpx.Response:
        calls.append(len(calls))
        outcome = outcomes[min(len(calls), len(outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    send_once.calls = calls  # type: ignore[attr-defined]
    return send_once


async def execute(policy: AsyncRetryPolicy, send_once: Any, **kwargs: Any) -> httpx.Response:
    return await policy.execute(send_once, url=TEST_URL, method="GET", **kwargs)


def test_async_retry_policy_default_config() -> None:
    policy = AsyncRetryPolicy()
    assert policy.config == RetryConfig()
    assert policy.decider.status_forcelist == (429, 503)


def test_async_retry_policy_repr() -> None:
    assert repr(AsyncRetryPolicy()).startswith("AsyncRetryPolicy(config=RetryConfig(")


@pytest.mark.asyncio
async def test_async_retry_policy_success_first_attempt(mock_asleep: Any) -> None:
    send_once = scripted_send([httpx.Response(200)])
    response = await execute(AsyncRetryPolicy(), send_once)
    assert response.status_code == 200
    assert len(send_once.calls) == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_policy_retries_transient_status(mock_asleep: Any) -> None:
    send_once = scripted_send([httpx.Response(503), httpx.Response(429), httpx.Response(200)])
    response = await execute(AsyncRetryPolicy(), send_once)
    assert response.status_code == 200
    assert len(send_once.calls) == 3
    assert mock_asleep.call_args_list == [call(2.0), call(4.0)]


@pytest.mark.asyncio
async def test_async_retry_policy_returns_last_transient_response(mock_asleep: Any) -> None:
    """Test that the last response is returned once the retries are spent."""
    send_once = scripted_send([httpx.Response(503)])
    response = await execute(AsyncRetryPolicy(), send_once)
    assert response.status_code == 503
    assert len(send_once.calls) == 4
    assert mock_asleep.call_args_list == [call(2.0), call(4.0), call(8.0)]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 404, 500, 502])
async def test_async_retry_policy_final_status(mock_asleep: Any, status_code: int) -> None:
    send_once = scripted_send([httpx.Response(status_code)])
    response = await execute(AsyncRetryPolicy(), send_once)
    assert response.status_code == status_code
    assert len(send_once.calls) == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_policy_recovers_from_transport_error(mock_asleep: Any) -> None:
    send_once = scripted_send([httpx.ConnectError("refused"), httpx.Response(200)])
    response = await execute(AsyncRetryPolicy(), send_once)
    assert response.status_code == 200
    mock_asleep.assert_called_once_with(2.0)


@pytest.mark.asyncio
async def test_async_retry_policy_reraises_last_transport_error(mock_asleep: Any) -> None:
    send_once = scripted_send([httpx.ConnectError("first"), httpx.ConnectError("last")])
    with pytest.raises(httpx.ConnectError, match=r"last"):
        await execute(AsyncRetryPolicy(), send_once)
    assert len(send_once.calls) == 4
    assert mock_asleep.call_count == 3


@pytest.mark.asyncio
async def test_async_retry_policy_other_exception_propagates(mock_asleep: Any) -> None:
    send_once = scripted_send([ValueError("boom")])
    with pytest.raises(ValueError, match=r"boom"):
        await execute(AsyncRetryPolicy(), send_once)
    assert len(send_once.calls) == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_policy_zero_retries(mock_asleep: Any) -> None:
    send_once = scripted_send([httpx.Response(503)])
    response = await execute(AsyncRetryPolicy(RetryConfig(max_retries=0)), send_once)
    assert response.status_code == 503
    assert len(send_once.calls) == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_policy_custom_backoff(mock_asleep: Any) -> None:
    config = RetryConfig(max_retries=2, backoff_strategy=ConstantBackoff(delay=0.5))
    send_once = scripted_send([httpx.Response(503)])
    await execute(AsyncRetryPolicy(config), send_once)
    assert mock_asleep.call_args_list == [call(0.5), call(0.5)]


@pytest.mark.asyncio
async def test_async_retry_policy_max_wait_time(mock_asleep: Any) -> None:
    config = RetryConfig(max_wait_time=3.0)
    send_once = scripted_send([httpx.Response(503)])
    await execute(AsyncRetryPolicy(config), send_once)
    assert mock_asleep.call_args_list == [call(2.0), call(3.0), call(3.0)]


@pytest.mark.asyncio
async def test_async_retry_policy_respect_retry_after(mock_asleep: Any) -> None:
    config = RetryConfig(respect_retry_after=True)
    send_once = scripted_send([httpx.Response(429, headers={"Retry-After": "7"}), httpx.Response(200)])
    await execute(AsyncRetryPolicy(config), send_once)
    mock_asleep.assert_called_once_with(7.0)


@pytest.mark.asyncio
async def test_async_retry_policy_ignores_retry_after_by_default(mock_asleep: Any) -> None:
    send_once = scripted_send([httpx.Response(429, headers={"Retry-After": "7"}), httpx.Response(200)])
    await execute(AsyncRetryPolicy(), send_once)
    mock_asleep.assert_called_once_with(2.0)


@pytest.mark.asyncio
async def test_async_retry_policy_retry_if(mock_asleep: Any) -> None:
    config = RetryConfig(retry_if=lambda response, _: response is not None and response.status_code == 500)
    send_once = scripted_send([httpx.Response(500), httpx.Response(503)])
    response = await execute(AsyncRetryPolicy(config), send_once)
    assert response.status_code == 503
    assert len(send_once.calls) == 2


@pytest.mark.asyncio
async def test_async_retry_policy_retry_if_final_exception(mock_asleep: Any) -> None:
    config = RetryConfig(retry_if=lambda _, exc: exc is not None and isinstance(exc, httpx.ConnectError))
    send_once = scripted_send([httpx.ReadTimeout("slow")])
    with pytest.raises(httpx.ReadTimeout):
        await execute(AsyncRetryPolicy(config), send_once)
    assert len(send_once.calls) == 1


@pytest.mark.asyncio
async def test_async_retry_policy_closes_discarded_responses(mock_asleep: Any) -> None:
    first, last = httpx.Response(503), httpx.Response(200)
    first.aclose = AsyncMock()
    last.aclose = AsyncMock()
    response = await execute(AsyncRetryPolicy(), scripted_send([first, last]))
    assert response is last
    first.aclose.assert_awaited_once()
    last.aclose.assert_not_awaited()


@pytest.mark.asyncio
async def test_async_retry_policy_cancel_event_set() -> None:
    cancel_event = asyncio.Event()
    cancel_event.set()
    send_once = scripted_send([httpx.Response(200)])
    with pytest.raises(RequestCancelledError):
        await execute(AsyncRetryPolicy(), send_once, cancel_event=cancel_event)
    assert len(send_once.calls) == 0


@pytest.mark.asyncio
async def test_async_retry_policy_cancel_event_during_backoff() -> None:
    cancel_event = asyncio.Event()
    config = RetryConfig(backoff_strategy=ConstantBackoff(delay=10.0))
    send_once = scripted_send([httpx.Response(503)])
    task = asyncio.create_task(execute(AsyncRetryPolicy(config), send_once, cancel_event=cancel_event))
    await asyncio.sleep(0.01)
    cancel_event.set()
    with pytest.raises(RequestCancelledError):
        await task
    assert len(send_once.calls) == 1
