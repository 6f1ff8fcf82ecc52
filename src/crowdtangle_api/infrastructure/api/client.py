"""Base client for accessing the CrowdTangle API.

This module provides the request executor every endpoint goes through: it
builds the endpoint URL, attaches the API token, issues the GET, decodes the
JSON body and applies error classification and the bounded retry policy.
"""

import logging
from typing import Any

import backoff
import requests
from ratelimit import limits, sleep_and_retry

from ..auth.token_provider import InMemoryTokenProvider, TokenProvider
from ..exceptions.api_exceptions import CrowdTangleApiError, MalformedResponseError
from .error_classifier import classify_error
from .retry_policy import RetryPolicy, log_give_up, log_retry

# Configure logger
logger = logging.getLogger(__name__)


class CrowdTangleClient:
    """Base client for interacting with the CrowdTangle API.

    The HTTP session is injected; the client never creates one. Use
    ``crowdtangle_api.factory.create_client`` for a ready-made instance.

    Attributes
    ----------
        token_provider: Source of the token sent with every request
        session: The requests session used for API calls
        timeout: Request timeout in seconds
        base_url: Origin every endpoint path is appended to
        retry_policy: Bounded retry settings
    """

    BASE_URL = "https://api.crowdtangle.com/"
    TOKEN_HEADER = "x-api-token"

    def __init__(
        self,
        token_provider: TokenProvider,
        session: requests.Session,
        timeout: int = 30,
        base_url: str | None = None,
        retry_policy: RetryPolicy | None = None,
        calls_per_period: int | None = None,
        period_seconds: float = 60.0,
    ) -> None:
        """Initialize the CrowdTangle API client.

        Args:
            token_provider: Source of the API token
            session: Requests session to use for API calls
            timeout: Request timeout in seconds
            base_url: Optional custom base URL (primarily for testing)
            retry_policy: Retry settings, defaults to ``RetryPolicy()``
            calls_per_period: Optional client-side cap on calls per period
            period_seconds: Length of the throttling period in seconds
        """
        self.token_provider = token_provider
        self.session = session
        self.timeout = timeout
        self.base_url = base_url or self.BASE_URL
        self.retry_policy = retry_policy or RetryPolicy()

        send = self._send
        if calls_per_period is not None:
            send = sleep_and_retry(limits(calls=calls_per_period, period=period_seconds)(send))

        self._send_with_retry = backoff.on_exception(
            backoff.expo,
            (requests.exceptions.RequestException, CrowdTangleApiError),
            max_tries=self.retry_policy.max_attempts,
            giveup=self.retry_policy.should_give_up,
            jitter=backoff.full_jitter,
            on_backoff=log_retry,
            on_giveup=log_give_up,
            factor=self.retry_policy.backoff_factor,
            max_value=self.retry_policy.max_wait,
        )(send)

    @classmethod
    def from_token(
        cls, token: str, session: requests.Session, **kwargs: Any
    ) -> "CrowdTangleClient":
        """Create a client holding a fixed token.

        Args:
            token: The API token
            session: Requests session to use for API calls
            kwargs: Further constructor arguments

        Returns
        -------
            A new client using an InMemoryTokenProvider
        """
        return cls(InMemoryTokenProvider(token), session, **kwargs)

    def get_access_token(self) -> str:
        """Return the token the next request will carry."""
        return self.token_provider.get_token()

    def set_access_token(self, token: str) -> "CrowdTangleClient":
        """Replace the token provider with one holding ``token``."""
        self.token_provider = InMemoryTokenProvider(token)
        return self

    def set_token_provider(self, token_provider: TokenProvider) -> "CrowdTangleClient":
        """Replace the token provider wholesale."""
        self.token_provider = token_provider
        return self

    def get_endpoint_url(self, endpoint: str) -> str:
        """Resolve an endpoint path to a full URL.

        Args:
            endpoint: API endpoint path, e.g. ``posts`` or ``lists/12/accounts``

        Returns
        -------
            The full URL
        """
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def get_headers(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        """Build request headers carrying the current token.

        Args:
            headers: Optional extra headers, which take precedence

        Returns
        -------
            Header mapping for one request
        """
        merged = {
            "Accept": "application/json",
            self.TOKEN_HEADER: self.token_provider.get_token(),
        }
        if headers:
            merged.update(headers)
        return merged

    def _send(self, url: str, parameters: dict[str, Any] | None) -> requests.Response:
        """Issue a single GET and raise the classified error on failure."""
        response = self.session.get(
            url,
            headers=self.get_headers(),
            params=parameters,
            timeout=self.timeout,
        )
        if not 200 <= response.status_code < 300:
            raise classify_error(response)
        return response

    def endpoint_request(
        self, endpoint: str, parameters: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Make a GET request to an API endpoint.

        Args:
            endpoint: API endpoint path (without base URL)
            parameters: Optional query parameters

        Returns
        -------
            The decoded JSON object; an empty body or JSON null gives ``{}``

        Raises
        ------
            BadRequestError: If the API rejects the request (HTTP 400/409)
            MalformedErrorBodyError: If a 400/409 body is not valid JSON
            MalformedResponseError: If a successful body is not a JSON object
            requests.HTTPError: For any other failed status, after retries
            requests.RequestException: For transport failures, after retries
        """
        url = self.get_endpoint_url(endpoint)
        logger.debug(f"Making GET request to {url} with params: {parameters}")

        response = self._send_with_retry(url, parameters)
        return self._decode_body(response)

    @staticmethod
    def _decode_body(response: requests.Response) -> dict[str, Any]:
        if not response.content:
            return {}

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Failed to parse JSON response: {e}", response_text=response.text
            ) from e

        if body is None:
            return {}
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Expected JSON object, got {type(body).__name__}",
                response_text=response.text,
            )
        return body
