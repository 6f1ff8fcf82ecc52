"""Pagination mixin for CrowdTangle API clients.

This module provides a mixin class that turns a single logical request for up
to ``max_records`` items into successive offset-based page requests.
CrowdTangle wraps every page as ``{"result": {<collection>: [...],
"pagination": {"nextPage": ...}}}``.
"""

import copy
import logging
from collections.abc import Generator
from typing import Any

from ..exceptions.api_exceptions import MalformedResponseError

# Configure logger
logger = logging.getLogger(__name__)


def extract_result(body: dict[str, Any]) -> dict[str, Any]:
    """Return the ``result`` object of a response envelope.

    Args:
        body: The decoded response body

    Returns
    -------
        The ``result`` mapping, empty when absent or null

    Raises
    ------
        MalformedResponseError: If ``result`` is not a JSON object
    """
    result = body.get("result")
    if result is None:
        return {}
    if not isinstance(result, dict):
        raise MalformedResponseError(
            f"Expected 'result' object, got {type(result).__name__}"
        )
    return result


class PaginationMixin:
    """Mixin that adds offset pagination to API clients.

    This mixin assumes the existence of an endpoint_request() method on the
    class it's mixed into.

    Attributes
    ----------
        MAX_PAGE_SIZE: The API's hard ceiling on items per page
    """

    MAX_PAGE_SIZE = 100

    def resolve_page_size(
        self, parameters: dict[str, Any] | None, max_records: int
    ) -> int:
        """Determine how many items to request per page.

        Args:
            parameters: Caller query parameters, possibly holding ``count``
            max_records: Maximum number of records the caller wants

        Returns
        -------
            The caller's ``count`` when it is an integer between 1 and
            MAX_PAGE_SIZE, otherwise ``min(MAX_PAGE_SIZE, max_records)``,
            never lower than 1
        """
        raw_count = (parameters or {}).get("count")
        if raw_count is not None and not isinstance(raw_count, bool):
            try:
                count = int(raw_count)
            except (ValueError, TypeError):
                logger.warning(f"Invalid count parameter: {raw_count!r}")
            else:
                if isinstance(raw_count, float) and not raw_count.is_integer():
                    logger.warning(f"Non-integral count parameter: {raw_count!r}")
                elif 1 <= count <= self.MAX_PAGE_SIZE:
                    return count

        return max(1, min(self.MAX_PAGE_SIZE, max_records))

    @staticmethod
    def _extract_page(
        body: dict[str, Any], collection_key: str
    ) -> tuple[list[Any], bool]:
        """Split a page body into its items and the next-page indicator."""
        result = extract_result(body)
        items = result.get(collection_key) or []
        pagination = result.get("pagination") or {}
        has_next = isinstance(pagination, dict) and bool(pagination.get("nextPage"))
        return list(items), has_next

    def iter_pages(
        self,
        endpoint: str,
        collection_key: str,
        parameters: dict[str, Any] | None = None,
        max_records: int = 1000,
    ) -> Generator[list[Any], None, None]:
        """Iterator that yields the items of each page in delivery order.

        Args:
            endpoint: API endpoint path
            collection_key: Key under ``result`` holding the page's items
            parameters: Optional query parameters (never modified)
            max_records: Stop requesting pages once this many items arrived

        Yields
        ------
            The item list of each page

        Note:
            The first page is always requested. Further pages are requested
            while fewer than ``max_records`` items arrived and the previous
            page reports a next page, so the total may exceed ``max_records``
            by up to one page.
        """
        params = {} if parameters is None else copy.copy(parameters)
        page_size = self.resolve_page_size(params, max_records)
        params["count"] = page_size

        logger.debug(f"Requesting first page of {endpoint} with count={page_size}")
        body = self.endpoint_request(endpoint, copy.copy(params))  # type: ignore[attr-defined]
        items, has_next = self._extract_page(body, collection_key)
        received = len(items)
        yield items

        page = 1
        # An empty page ends pagination even when nextPage is reported
        while received < max_records and has_next and items:
            params["offset"] = page_size * page
            logger.debug(f"Requesting page {page} of {endpoint} at offset {params['offset']}")
            body = self.endpoint_request(endpoint, copy.copy(params))  # type: ignore[attr-defined]
            items, has_next = self._extract_page(body, collection_key)
            received += len(items)
            yield items
            page += 1

        logger.debug(
            f"Pagination of {endpoint} stopped after {page} page(s): "
            f"received={received}, max_records={max_records}, next_page={has_next}"
        )

    def get_paginated_resource(
        self,
        endpoint: str,
        collection_key: str,
        parameters: dict[str, Any] | None = None,
        max_records: int = 1000,
    ) -> list[Any]:
        """Get up to ``max_records`` items across pages as a single list.

        Args:
            endpoint: API endpoint path
            collection_key: Key under ``result`` holding the page's items
            parameters: Optional query parameters (never modified)
            max_records: Maximum number of records to retrieve across pages

        Returns
        -------
            All items from all fetched pages

        Note:
            A failure on any page propagates and the items gathered so far are
            discarded. Use iter_pages to keep partial results.
        """
        results: list[Any] = []
        try:
            for items in self.iter_pages(endpoint, collection_key, parameters, max_records):
                results.extend(items)
        except Exception as e:
            logger.error(f"Error during pagination of {endpoint}: {e}")
            raise

        logger.info(f"Retrieved {len(results)} total items from {endpoint}")
        return results
