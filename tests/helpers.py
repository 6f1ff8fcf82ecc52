"""Helpers for building CrowdTangle responses in tests."""

import json
from typing import Any

import requests

_NO_BODY = object()


def build_response(
    status_code: int = 200,
    body: Any = _NO_BODY,
    raw: bytes | None = None,
    url: str = "https://api.crowdtangle.com/posts",
) -> requests.Response:
    """Build a real requests.Response without touching the network.

    Args:
        status_code: HTTP status of the response
        body: Object to serialize as the JSON body
        raw: Raw body bytes, overrides body
        url: URL the response claims to come from

    Returns
    -------
        The response
    """
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if raw is None:
        raw = b"" if body is _NO_BODY else json.dumps(body).encode("utf-8")
    response._content = raw
    return response


def page_body(
    collection_key: str, items: list[Any], next_page: bool = False
) -> dict[str, Any]:
    """Build a CrowdTangle paginated response body."""
    pagination = {"nextPage": "https://api.crowdtangle.com/next"} if next_page else {}
    return {"status": 200, "result": {collection_key: items, "pagination": pagination}}
