"""Token providers for authenticating against the CrowdTangle API."""

from crowdtangle_api.infrastructure.auth.token_provider import (
    EnvironmentTokenProvider,
    InMemoryTokenProvider,
    TokenProvider,
)

__all__ = [
    "EnvironmentTokenProvider",
    "InMemoryTokenProvider",
    "TokenProvider",
]
