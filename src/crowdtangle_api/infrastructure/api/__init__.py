"""API client module for the CrowdTangle API.

This package provides the request executor, error classification, retry
policy, pagination and the per-resource client for the CrowdTangle API.
"""

from crowdtangle_api.infrastructure.api.client import CrowdTangleClient
from crowdtangle_api.infrastructure.api.error_classifier import (
    STRUCTURED_ERROR_STATUSES,
    classify_error,
)
from crowdtangle_api.infrastructure.api.pagination_mixin import PaginationMixin
from crowdtangle_api.infrastructure.api.resource_client import (
    CrowdTangleResourceClient,
)
from crowdtangle_api.infrastructure.api.retry_policy import RetryPolicy

__all__ = [
    "STRUCTURED_ERROR_STATUSES",
    "CrowdTangleClient",
    "CrowdTangleResourceClient",
    "PaginationMixin",
    "RetryPolicy",
    "classify_error",
]
