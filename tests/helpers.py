r"""Shared test helpers: sample payload types and mock transports.

Requests are served by ``httpx.MockTransport`` so the whole pipeline,
including httpx request building and response reading, runs without
network access.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "Item",
    "NewItem",
    "ScriptedHandler",
    "StatusPayload",
    "create_api_client",
    "json_response",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from aresclient import AsyncApiClient, ClientConfig

if TYPE_CHECKING:
    from collections.abc import Iterable

TEST_URL = "https://api.example.com/data"


@dataclass
class Item:
    id: int
    name: str


@dataclass
class NewItem:
    name: str


@dataclass
class StatusPayload:
    status: str


def json_response(status_code: int = 200, payload: Any = None, **kwargs: Any) -> httpx.Response:
    """Create a response with a JSON body (no body if ``payload`` is None)."""
    if payload is None:
        return httpx.Response(status_code, **kwargs)
    return httpx.Response(status_code, json=payload, **kwargs)


class ScriptedHandler:
    """MockTransport handler replaying a list of outcomes.

    Each outcome is either an ``httpx.Response`` or an exception to raise.
    The last outcome is repeated once the script is exhausted. Every
    received request is recorded in ``requests``.
    """

    def __init__(self, outcomes: Iterable[httpx.Response | Exception]) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
            request=request,
        )


def create_api_client(handler: Any, config: ClientConfig | None = None) -> AsyncApiClient:
    """Create an ``AsyncApiClient`` sending through ``httpx.MockTransport``."""
    config = config if config is not None else ClientConfig()
    transport = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=config.base_url or "",
        headers=config.build_headers(),
    )
    return AsyncApiClient(config=config, client=transport)
