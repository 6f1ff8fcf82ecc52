"""Exceptions related to CrowdTangle API operations.

This module provides custom exceptions for handling errors that occur
when interacting with the CrowdTangle API. Failures that do not carry the
vendor's error envelope, such as network or server errors, are not part of
this hierarchy: they surface as the ``requests`` exceptions raised by the
transport.
"""

from typing import Any

import requests


class CrowdTangleApiError(Exception):
    """Base exception for all CrowdTangle API errors."""

    pass


class MissingTokenError(CrowdTangleApiError):
    """Exception raised when no API token can be resolved."""

    pass


class MalformedResponseError(CrowdTangleApiError):
    """Exception raised when a response body cannot be decoded as expected."""

    def __init__(self, message: str, response_text: str | None = None) -> None:
        """Initialize MalformedResponseError.

        Args:
            message: Error message
            response_text: The raw response text that couldn't be parsed
        """
        super().__init__(message)
        self.response_text = response_text


class MalformedErrorBodyError(MalformedResponseError):
    """Exception raised when a 400/409 error body is not valid JSON."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_text: str | None = None,
    ) -> None:
        """Initialize MalformedErrorBodyError.

        Args:
            message: Error message
            status_code: HTTP status of the failed response
            response_text: The raw response text that couldn't be parsed
        """
        super().__init__(message, response_text=response_text)
        self.status_code = status_code


class BadRequestError(CrowdTangleApiError):
    """Exception raised when the API rejects a request with its error envelope.

    CrowdTangle answers HTTP 400 and 409 with a JSON body of the form
    ``{"code": <int>, "message": <str>}``. The ``code`` is the vendor's own
    error code and is kept for programmatic branching.

    Attributes
    ----------
        response: The HTTP response that carried the error
        status_code: HTTP status of the response
        message: The vendor's human-readable message ("" when degenerate)
        code: The vendor's error code, if supplied
        is_degenerate: True when the body was valid JSON but not an error object
    """

    def __init__(
        self,
        response: requests.Response,
        message: str = "",
        code: int | None = None,
        is_degenerate: bool = False,
    ) -> None:
        """Initialize BadRequestError.

        Args:
            response: The HTTP response that carried the error
            message: The vendor's message
            code: The vendor's error code
            is_degenerate: Whether the envelope was missing or unusable
        """
        super().__init__(message)
        self.response = response
        self.status_code = response.status_code
        self.message = message
        self.code = code
        self.is_degenerate = is_degenerate

    @property
    def crowdtangle_code(self) -> int | None:
        """Alias for ``code`` matching the vendor's naming."""
        return self.code

    @classmethod
    def from_response(cls, response: requests.Response) -> "BadRequestError":
        """Build the error from a 400/409 response body.

        Args:
            response: The failed HTTP response

        Returns
        -------
            A BadRequestError carrying the decoded envelope

        Raises
        ------
            MalformedErrorBodyError: If the body is not valid JSON
        """
        try:
            body: Any = response.json()
        except ValueError as e:
            raise MalformedErrorBodyError(
                f"Failed to parse error body of HTTP {response.status_code}: {e}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

        if not isinstance(body, dict):
            return cls(response, is_degenerate=True)

        code = body.get("code")
        message = body.get("message")
        if not isinstance(message, str):
            return cls(response, code=code, is_degenerate=True)

        return cls(response, message=message, code=code)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"code={self.code!r}, message={self.message!r})"
        )
