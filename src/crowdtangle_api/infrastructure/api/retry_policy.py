"""Retry policy for CrowdTangle API requests.

Only transient failures are retried: rate limiting (429), server-side errors
and, optionally, connection failures and timeouts. Rejections carrying the
vendor's error envelope (400/409) and any other client error are raised on the
first attempt.
"""

import logging
from typing import Any

import requests

# Configure logger
logger = logging.getLogger(__name__)

DEFAULT_RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class RetryPolicy:
    """Bounded retry settings consumed by the request executor.

    Attributes
    ----------
        max_attempts: Total number of attempts, including the first one
        retryable_statuses: HTTP statuses worth another attempt
        retry_on_connection_errors: Whether connection errors and timeouts retry
        backoff_factor: Multiplier for the exponential wait between attempts
        max_wait: Upper bound in seconds for a single wait
    """

    def __init__(
        self,
        max_attempts: int = 3,
        retryable_statuses: frozenset[int] | set[int] = DEFAULT_RETRYABLE_STATUSES,
        retry_on_connection_errors: bool = True,
        backoff_factor: float = 1.0,
        max_wait: float = 30.0,
    ) -> None:
        """Initialize the retry policy.

        Args:
            max_attempts: Total number of attempts, at least 1
            retryable_statuses: HTTP statuses worth another attempt
            retry_on_connection_errors: Whether connection errors and timeouts retry
            backoff_factor: Multiplier for the exponential wait between attempts
            max_wait: Upper bound in seconds for a single wait

        Raises
        ------
            ValueError: If max_attempts is lower than 1
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.max_attempts = max_attempts
        self.retryable_statuses = frozenset(retryable_statuses)
        self.retry_on_connection_errors = retry_on_connection_errors
        self.backoff_factor = backoff_factor
        self.max_wait = max_wait

    @classmethod
    def no_retry(cls) -> "RetryPolicy":
        """Policy performing a single attempt."""
        return cls(max_attempts=1)

    def is_retryable(self, error: Exception) -> bool:
        """Check whether a failed attempt may be tried again.

        Args:
            error: The exception raised by the attempt

        Returns
        -------
            True if the failure is transient under this policy
        """
        if isinstance(error, requests.HTTPError):
            response = error.response
            return (
                response is not None
                and response.status_code in self.retryable_statuses
            )
        if isinstance(
            error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)
        ):
            return self.retry_on_connection_errors
        return False

    def should_give_up(self, error: Exception) -> bool:
        """Inverse of ``is_retryable``, in the shape ``backoff`` expects."""
        return not self.is_retryable(error)

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(max_attempts={self.max_attempts}, "
            f"retryable_statuses={sorted(self.retryable_statuses)})"
        )


def log_retry(details: dict[str, Any]) -> None:
    """Log a scheduled retry. Used as backoff's ``on_backoff`` handler."""
    logger.warning(
        f"Request to {details['args'][0]} failed: {details['exception']}. "
        f"Retrying in {details['wait']:.2f}s (attempt {details['tries']})"
    )


def log_give_up(details: dict[str, Any]) -> None:
    """Log the final failure. Used as backoff's ``on_giveup`` handler."""
    # Non-retryable failures give up on the first attempt
    if details["tries"] == 1:
        return
    logger.error(
        f"Giving up on {details['args'][0]} after {details['tries']} attempt(s): "
        f"{details['exception']}"
    )
