"""Client library for the CrowdTangle API."""

from crowdtangle_api.factory import create_client
from crowdtangle_api.infrastructure.api import (
    CrowdTangleClient,
    CrowdTangleResourceClient,
    RetryPolicy,
)
from crowdtangle_api.infrastructure.auth import (
    EnvironmentTokenProvider,
    InMemoryTokenProvider,
    TokenProvider,
)
from crowdtangle_api.infrastructure.exceptions.api_exceptions import (
    BadRequestError,
    CrowdTangleApiError,
    MalformedErrorBodyError,
    MalformedResponseError,
    MissingTokenError,
)

__version__ = "0.1.0"

__all__ = [
    "BadRequestError",
    "CrowdTangleApiError",
    "CrowdTangleClient",
    "CrowdTangleResourceClient",
    "EnvironmentTokenProvider",
    "InMemoryTokenProvider",
    "MalformedErrorBodyError",
    "MalformedResponseError",
    "MissingTokenError",
    "RetryPolicy",
    "TokenProvider",
    "create_client",
]
