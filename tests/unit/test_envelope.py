from __future__ import annotations

import dataclasses

import pytest

from aresclient import ApiResponse

#################################
#     Tests for ApiResponse     #
#################################


def test_api_response_ok() -> None:
    response = ApiResponse.ok({"id": 1}, status_code=200)
    assert response.success
    assert response.data == {"id": 1}
    assert response.error_message is None
    assert response.error_data is None
    assert response.status_code == 200


def test_api_response_ok_without_data() -> None:
    response = ApiResponse.ok(None, status_code=204)
    assert response.success
    assert response.data is None


def test_api_response_fail() -> None:
    response = ApiResponse.fail("HTTP Error 500", error_data='{"error": "boom"}', status_code=500)
    assert not response.success
    assert response.data is None
    assert response.error_message == "HTTP Error 500"
    assert response.error_data == '{"error": "boom"}'
    assert response.status_code == 500


def test_api_response_fail_defaults() -> None:
    response = ApiResponse.fail("URL cannot be null.")
    assert response.error_data is None
    assert response.status_code is None


def test_api_response_failure_with_data_is_rejected() -> None:
    with pytest.raises(ValueError, match=r"cannot carry data"):
        ApiResponse(success=False, data={"id": 1}, error_message="oops")


def test_api_response_success_with_error_is_rejected() -> None:
    with pytest.raises(ValueError, match=r"cannot carry error details"):
        ApiResponse(success=True, data=1, error_message="oops")


def test_api_response_is_immutable() -> None:
    response = ApiResponse.ok(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        response.success = False  # type: ignore[misc]


def test_api_response_equality() -> None:
    assert ApiResponse.ok([1, 2], status_code=200) == ApiResponse.ok([1, 2], status_code=200)
    assert ApiResponse.ok([1, 2]) != ApiResponse.ok([1, 3])
