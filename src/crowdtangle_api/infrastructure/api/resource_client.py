"""Client for the CrowdTangle lists, accounts and posts endpoints.

This module maps each supported CrowdTangle resource to its endpoint path and
decides whether the request is paginated.
"""

import logging
from collections.abc import Generator
from typing import Any

from ..exceptions.api_exceptions import MalformedResponseError
from .client import CrowdTangleClient
from .pagination_mixin import PaginationMixin, extract_result

# Configure logger
logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORDS = 1000


class CrowdTangleResourceClient(CrowdTangleClient, PaginationMixin):
    """Client for retrieving lists, list accounts and posts.

    See https://github.com/CrowdTangle/API/wiki for the endpoint reference.
    """

    def get_lists(self) -> list[dict[str, Any]]:
        """Retrieve the lists, saved searches and saved post lists of the dashboard.

        Returns
        -------
            The ``result.lists`` collection

        Raises
        ------
            BadRequestError: If the API rejects the request
            MalformedResponseError: If ``result`` is not an object
        """
        body = self.endpoint_request("lists")
        lists = extract_result(body).get("lists") or []
        logger.info(f"Retrieved {len(lists)} lists")
        return lists

    def iter_accounts_for_list(
        self,
        list_id: int | str,
        parameters: dict[str, Any] | None = None,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> Generator[list[dict[str, Any]], None, None]:
        """Iterator that yields the accounts of a list page by page."""
        return self.iter_pages(
            f"lists/{list_id}/accounts", "accounts", parameters, max_records
        )

    def get_accounts_for_list(
        self,
        list_id: int | str,
        parameters: dict[str, Any] | None = None,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> list[dict[str, Any]]:
        """Retrieve the accounts of a list.

        Accounts only exist for lists of type LIST; saved searches and saved
        post lists are rejected by the API.

        Args:
            list_id: ID of the list
            parameters: Optional query parameters (``count`` is honored up to 100)
            max_records: Maximum number of records to retrieve across pages

        Returns
        -------
            The accumulated ``result.accounts`` items
        """
        return self.get_paginated_resource(
            f"lists/{list_id}/accounts", "accounts", parameters, max_records
        )

    def iter_posts(
        self,
        parameters: dict[str, Any] | None = None,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> Generator[list[dict[str, Any]], None, None]:
        """Iterator that yields posts matching the filters page by page."""
        return self.iter_pages("posts", "posts", parameters, max_records)

    def get_posts(
        self,
        parameters: dict[str, Any] | None = None,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> list[dict[str, Any]]:
        """Retrieve posts matching the given filters.

        Args:
            parameters: Optional query parameters such as ``listIds``,
                ``startDate`` or ``searchTerm``
            max_records: Maximum number of records to retrieve across pages

        Returns
        -------
            The accumulated ``result.posts`` items
        """
        return self.get_paginated_resource("posts", "posts", parameters, max_records)

    def get_post(self, post_id: str) -> dict[str, Any]:
        """Retrieve a single post.

        The ID format differs per platform: ``[page_id]_[post_id]`` for
        Facebook and ``[post_id]_[page_id]`` for Instagram. It is passed
        through as is.

        Args:
            post_id: ID of the post

        Returns
        -------
            The post, or an empty dict when the API returns none

        Raises
        ------
            MalformedResponseError: If ``result`` or ``result.posts`` has the
                wrong shape
        """
        body = self.endpoint_request(f"post/{post_id}")
        posts = extract_result(body).get("posts") or []
        if not isinstance(posts, list):
            raise MalformedResponseError(
                f"Expected 'posts' array, got {type(posts).__name__}"
            )
        if not posts or not posts[0]:
            logger.debug(f"No post returned for {post_id}")
            return {}
        return posts[0]
