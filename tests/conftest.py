"""Shared fixtures for the CrowdTangle API client tests."""

from collections.abc import Callable
from unittest.mock import Mock

import pytest
import requests

from tests.helpers import build_response


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Fixture that provides the response builder."""
    return build_response


@pytest.fixture
def session() -> Mock:
    """Fixture that provides a mock requests session."""
    return Mock(spec=requests.Session)
