"""Convenience construction of a ready-to-use CrowdTangle client.

The API clients require their HTTP session and token provider to be passed
in. This module is the outer layer that supplies defaults: a fresh
``requests.Session`` and a token taken from the argument or the
``CROWDTANGLE_API_TOKEN`` environment variable.
"""

import logging
from typing import Any

import requests

from crowdtangle_api.infrastructure.api.resource_client import (
    CrowdTangleResourceClient,
)
from crowdtangle_api.infrastructure.auth.token_provider import (
    TOKEN_ENV_VAR,
    EnvironmentTokenProvider,
    InMemoryTokenProvider,
    TokenProvider,
)

logger = logging.getLogger(__name__)


def create_client(
    token: str | None = None,
    token_provider: TokenProvider | None = None,
    session: requests.Session | None = None,
    **kwargs: Any,
) -> CrowdTangleResourceClient:
    """Create a CrowdTangle client with default collaborators.

    Args:
        token: API token; ignored when token_provider is given
        token_provider: Custom token source
        session: Optional requests session, a new one is created when None
        kwargs: Further CrowdTangleResourceClient arguments
            (timeout, base_url, retry_policy, calls_per_period, period_seconds)

    Returns
    -------
        A configured CrowdTangleResourceClient

    Raises
    ------
        MissingTokenError: If neither a token nor a provider is given and the
            environment has no token
    """
    if token_provider is None:
        if token:
            token_provider = InMemoryTokenProvider(token)
        else:
            logger.debug(f"No token given, falling back to ${TOKEN_ENV_VAR}")
            token_provider = EnvironmentTokenProvider()

    return CrowdTangleResourceClient(
        token_provider, session or requests.Session(), **kwargs
    )
