r"""Helpers making the network send and the backoff wait interruptible
by a caller-supplied ``asyncio.Event``.

Cancelling the task that runs a request works out of the box with
asyncio. The helpers below add a second channel: an event the caller can
set from anywhere (another task, a callback, a signal handler) to abort
the request at its next suspension point.
"""

from __future__ import annotations

__all__ = ["check_cancelled", "run_cancellable", "sleep_cancellable"]

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from aresclient.exceptions import RequestCancelledError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


def check_cancelled(cancel_event: asyncio.Event | None, method: str, url: str) -> None:
    """Raise ``RequestCancelledError`` if ``cancel_event`` is set.

    Args:
        cancel_event: The optional cancel event of the request.
        method: The HTTP method, used in the error message.
        url: The URL, used in the error message.

    Raises:
        RequestCancelledError: If the event is set.
    """
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelledError(method=method, url=url)


async def run_cancellable(
    func: Callable[[], Awaitable[T]],
    cancel_event: asyncio.Event | None,
    *,
    method: str,
    url: str,
) -> T:
    """Await ``func()`` unless ``cancel_event`` fires first.

    When the event fires before ``func()`` completes, the pending
    operation is cancelled and awaited so its resources are released, then
    ``RequestCancelledError`` is raised. The same cleanup happens before
    the cancellation of the calling task propagates.

    Args:
        func: Zero-argument callable returning the awaitable to run.
        cancel_event: Optional cancel event. ``None`` simply awaits ``func()``.
        method: The HTTP method, used in the error message.
        url: The URL, used in the error message.

    Returns:
        The result of ``func()``.

    Raises:
        RequestCancelledError: If the event is set before or while running.
    """
    check_cancelled(cancel_event, method, url)
    if cancel_event is None:
        return await func()

    operation = asyncio.ensure_future(func())
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({operation, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        operation.cancel()
        waiter.cancel()
        await asyncio.gather(operation, waiter, return_exceptions=True)
        raise
    waiter.cancel()
    if operation.done():
        return operation.result()

    logger.debug(f"{method} request to {url} cancelled while in flight")
    operation.cancel()
    await asyncio.wait({operation})
    raise RequestCancelledError(method=method, url=url)


async def sleep_cancellable(
    delay: float,
    cancel_event: asyncio.Event | None,
    *,
    method: str,
    url: str,
) -> None:
    """Sleep for ``delay`` seconds unless ``cancel_event`` fires first.

    Args:
        delay: The number of seconds to sleep.
        cancel_event: Optional cancel event. ``None`` falls back to
            ``asyncio.sleep``.
        method: The HTTP method, used in the error message.
        url: The URL, used in the error message.

    Raises:
        RequestCancelledError: If the event is set before or during the sleep.
    """
    check_cancelled(cancel_event, method, url)
    if cancel_event is None:
        await asyncio.sleep(delay)
        return
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    logger.debug(f"{method} request to {url} cancelled during backoff")
    raise RequestCancelledError(method=method, url=url)
