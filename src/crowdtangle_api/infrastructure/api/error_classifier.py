"""Classification of failed CrowdTangle API responses.

CrowdTangle encodes request rejections as HTTP 400 or 409 with a JSON error
envelope. Those become ``BadRequestError``; every other failure is left as the
transport's own ``requests.HTTPError``.
"""

import logging

import requests

from ..exceptions.api_exceptions import BadRequestError

# Configure logger
logger = logging.getLogger(__name__)

STRUCTURED_ERROR_STATUSES = frozenset({400, 409})


def classify_error(response: requests.Response) -> BadRequestError | requests.HTTPError:
    """Build the exception matching a failed response.

    Args:
        response: An HTTP response with a non-2xx status

    Returns
    -------
        BadRequestError for 400/409, otherwise the HTTPError the transport raises

    Raises
    ------
        MalformedErrorBodyError: If a 400/409 body is not valid JSON
    """
    if response.status_code in STRUCTURED_ERROR_STATUSES:
        error = BadRequestError.from_response(response)
        logger.debug(f"API rejected request with {error!r}")
        return error

    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        return e

    # Statuses below 400 (e.g. an unfollowed 3xx) are not failures to requests
    return requests.HTTPError(
        f"{response.status_code} Unexpected status for url: {response.url}",
        response=response,
    )
