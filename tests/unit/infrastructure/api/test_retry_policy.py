"""Unit tests for the retry policy."""

from collections.abc import Callable

import pytest
import requests

from crowdtangle_api.infrastructure.api.retry_policy import RetryPolicy
from crowdtangle_api.infrastructure.exceptions.api_exceptions import (
    BadRequestError,
    MalformedResponseError,
)


def http_error(response: requests.Response) -> requests.HTTPError:
    return requests.HTTPError(f"{response.status_code}", response=response)


@pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504])
def test_transient_statuses_are_retryable(
    make_response: Callable[..., requests.Response], status_code: int
) -> None:
    """Test that rate limiting and server errors retry."""
    policy = RetryPolicy()

    assert policy.is_retryable(http_error(make_response(status_code)))
    assert not policy.should_give_up(http_error(make_response(status_code)))


@pytest.mark.parametrize("status_code", [401, 403, 404, 501])
def test_other_statuses_are_not_retryable(
    make_response: Callable[..., requests.Response], status_code: int
) -> None:
    """Test that permanent failures give up at once."""
    assert RetryPolicy().should_give_up(http_error(make_response(status_code)))


def test_bad_request_is_never_retryable(
    make_response: Callable[..., requests.Response],
) -> None:
    """Test that vendor rejections are never retried."""
    error = BadRequestError(make_response(400), "bad filter", 12)

    assert not RetryPolicy().is_retryable(error)
    assert not RetryPolicy(retryable_statuses={400, 409}).is_retryable(error)


def test_malformed_response_is_not_retryable() -> None:
    """Test that decode failures are not retried."""
    assert not RetryPolicy().is_retryable(MalformedResponseError("bad json"))


def test_connection_errors() -> None:
    """Test that connection failures follow the policy flag."""
    assert RetryPolicy().is_retryable(requests.ConnectionError("refused"))
    assert RetryPolicy().is_retryable(requests.Timeout("slow"))
    assert not RetryPolicy(retry_on_connection_errors=False).is_retryable(
        requests.ConnectionError("refused")
    )


def test_http_error_without_response() -> None:
    """Test that an HTTPError lacking a response is not retried."""
    assert not RetryPolicy().is_retryable(requests.HTTPError("no response"))


def test_max_attempts_validation() -> None:
    """Test that at least one attempt is required."""
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)

    assert RetryPolicy.no_retry().max_attempts == 1
