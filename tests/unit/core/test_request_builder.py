r"""Unit tests for build_request."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import httpx
import pytest

from aresclient.core.request_builder import BODY_METHODS, build_request
from aresclient.exceptions import SerializationError
from aresclient.serialization import NamingConvention, SerializationOptions
from tests.helpers import TEST_URL, NewItem


@dataclass
class Event:
    created_at: datetime


@pytest.fixture
def client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


def test_body_methods() -> None:
    assert BODY_METHODS == {"POST", "PUT", "PATCH"}


def test_build_request_get(client: httpx.AsyncClient) -> None:
    request = build_request(client, "get", TEST_URL)
    assert request.method == "GET"
    assert request.url == httpx.URL(TEST_URL)
    assert request.headers["Accept"] == "application/json"
    assert "Authorization" not in request.headers
    assert request.content == b""


def test_build_request_bearer_token(client: httpx.AsyncClient) -> None:
    request = build_request(client, "GET", TEST_URL, bearer_token="secret")
    assert request.headers["Authorization"] == "Bearer secret"


def test_build_request_empty_bearer_token(client: httpx.AsyncClient) -> None:
    request = build_request(client, "GET", TEST_URL, bearer_token="")
    assert "Authorization" not in request.headers


@pytest.mark.parametrize("method", sorted(BODY_METHODS))
def test_build_request_body(client: httpx.AsyncClient, method: str) -> None:
    request = build_request(client, method, TEST_URL, body=NewItem(name="Lamp"))
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b'{"name":"Lamp"}'


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_build_request_body_dropped(client: httpx.AsyncClient, method: str) -> None:
    request = build_request(client, method, TEST_URL, body={"name": "Lamp"})
    assert request.content == b""
    assert "Content-Type" not in request.headers


def test_build_request_serialization_options(client: httpx.AsyncClient) -> None:
    request = build_request(
        client,
        "POST",
        TEST_URL,
        body=Event(created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)),
        serialization=SerializationOptions(naming=NamingConvention.PASCAL, date_format="%Y-%m-%d"),
    )
    assert request.content == b'{"CreatedAt":"2024-01-02"}'


def test_build_request_mapping_body_keys_unchanged(client: httpx.AsyncClient) -> None:
    request = build_request(client, "POST", TEST_URL, body={"item_name": "Lamp", "EU_WEST": 3})
    assert request.content == b'{"item_name":"Lamp","EU_WEST":3}'


def test_build_request_extra_headers(client: httpx.AsyncClient) -> None:
    request = build_request(client, "GET", TEST_URL, headers={"X-Trace": "abc"})
    assert request.headers["X-Trace"] == "abc"


def test_build_request_base_url() -> None:
    client = httpx.AsyncClient(base_url="https://api.example.com/v1")
    request = build_request(client, "GET", "items/1")
    assert request.url == httpx.URL("https://api.example.com/v1/items/1")


def test_build_request_relative_url_without_base_url(client: httpx.AsyncClient) -> None:
    with pytest.raises(httpx.InvalidURL, match=r"not an absolute http\(s\) URL"):
        build_request(client, "GET", "/items/1")


def test_build_request_unsupported_scheme(client: httpx.AsyncClient) -> None:
    with pytest.raises(httpx.InvalidURL):
        build_request(client, "GET", "ftp://files.example.com/items")


def test_build_request_unserializable_body(client: httpx.AsyncClient) -> None:
    with pytest.raises(SerializationError, match=r"Could not serialize value of type object"):
        build_request(client, "POST", TEST_URL, body=object())
