"""
Pagination support for snspush.

SNS list operations return at most one page of results plus an opaque
``NextToken``. This module provides the page container and the single
traversal used for every collection (endpoints, applications, topics,
subscriptions).

The traversal assumes the backend issues tokens in a forward-only sequence
that always terminates. A token that points back at an already-seen page
loops forever; no cycle detection is attempted.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ._logging import logger

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """
    Represents a single page of results with its continuation token.

    Attributes:
        items: Items in the order the backend returned them
        next_token: Cursor for the next page (None if this is the last page)
    """

    items: list[T] = field(default_factory=list)
    next_token: str | None = None

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available. Empty strings count as exhausted."""
        return bool(self.next_token)

    @property
    def count(self) -> int:
        return len(self.items)


PageFetcher = Callable[[str | None], Page[T]]


def iter_pages(fetch_page: PageFetcher[T]) -> Iterator[Page[T]]:
    """
    Lazily walks a paginated collection.

    The next page is only requested when the consumer advances the iterator,
    so callers may finish processing one page before the next is fetched.
    Errors raised by ``fetch_page`` propagate unchanged.
    """
    next_token: str | None = None
    page_number = 0
    while True:
        page = fetch_page(next_token)
        page_number += 1
        logger.debug(
            "Fetched page",
            extra={"page": page_number, "count": page.count, "has_more": page.has_more},
        )
        yield page
        if not page.has_more:
            return
        next_token = page.next_token


def iter_items(fetch_page: PageFetcher[T]) -> Iterator[T]:
    """Yields every item of every page, in page order then within-page order."""
    for page in iter_pages(fetch_page):
        yield from page.items


def fetch_all(fetch_page: PageFetcher[T]) -> list[T]:
    """
    Fetches every page until the cursor is exhausted and concatenates the items.

    All-or-nothing: if any page fetch raises, the exception propagates
    and no partial list is returned.

    Usage:
        topics = fetch_all(backend.list_topics_page)
        endpoints = fetch_all(functools.partial(backend.list_endpoints_page, app_arn))
    """
    return list(iter_items(fetch_page))
