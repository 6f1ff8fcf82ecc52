"""Token providers supplying the CrowdTangle API token.

The client asks its provider for the token once per outgoing request, so a
provider is free to rotate the token between calls.
"""

import logging
import os
from abc import ABC, abstractmethod

from ..exceptions.api_exceptions import MissingTokenError

# Configure logger
logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "CROWDTANGLE_API_TOKEN"


class TokenProvider(ABC):
    """Source of the API token sent with every request.

    Implementations must be cheap to call and safe to read from several
    threads at once.
    """

    @abstractmethod
    def get_token(self) -> str:
        """Return the current API token."""


class InMemoryTokenProvider(TokenProvider):
    """Provider holding a fixed token for its whole lifetime."""

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self) -> str:
        return self._token


class EnvironmentTokenProvider(TokenProvider):
    """Provider reading the token from an environment variable on each call."""

    def __init__(self, variable: str = TOKEN_ENV_VAR) -> None:
        """Initialize the provider.

        Args:
            variable: Name of the environment variable holding the token

        Raises
        ------
            MissingTokenError: If the variable is unset or empty
        """
        self.variable = variable
        if not os.environ.get(variable):
            raise MissingTokenError(f"Environment variable {variable} is not set")
        logger.debug(f"Reading API token from ${variable}")

    def get_token(self) -> str:
        token = os.environ.get(self.variable)
        if not token:
            raise MissingTokenError(
                f"Environment variable {self.variable} is no longer set"
            )
        return token
