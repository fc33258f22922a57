"""
Unit tests for pagination functionality.

Tests the Page dataclass and the fetch_all / iter_pages traversal.
"""

import pytest

from snspush.exceptions import ListingError
from snspush.pagination import Page, fetch_all, iter_items, iter_pages


class FakePager:
    """Serves a fixed list of pages keyed by token and records every call."""

    def __init__(self, pages: list[Page], fail_on_call: int | None = None, error=None):
        self.pages = pages
        self.calls: list[str | None] = []
        self.fail_on_call = fail_on_call
        self.error = error or ListingError("ListTopics")

    def __call__(self, next_token: str | None) -> Page:
        self.calls.append(next_token)
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise self.error
        index = 0 if next_token is None else int(next_token.split("-")[1])
        return self.pages[index]


def build_pages(page_count: int, per_page: int, last_page_items: int = 0) -> list[Page]:
    """page_count pages of per_page items with tokens, then a final page without token."""
    pages = []
    counter = 0
    for index in range(page_count):
        items = list(range(counter, counter + per_page))
        counter += per_page
        pages.append(Page(items=items, next_token=f"tok-{index + 1}"))
    pages.append(Page(items=list(range(counter, counter + last_page_items)), next_token=None))
    return pages


@pytest.mark.unit
class TestPage:
    """Test the Page dataclass."""

    def test_has_more_true(self):
        page = Page(items=["a", "b"], next_token="abc")
        assert page.has_more is True

    def test_has_more_false_without_token(self):
        page = Page(items=["a", "b"], next_token=None)
        assert page.has_more is False

    def test_empty_token_counts_as_exhausted(self):
        page = Page(items=["a"], next_token="")
        assert page.has_more is False

    def test_empty_page_can_still_have_more(self):
        """An empty item list does not mean the collection is exhausted."""
        page = Page(items=[], next_token="abc")
        assert page.has_more is True
        assert page.count == 0

    def test_count_matches_items_length(self):
        page = Page(items=[1, 2, 3])
        assert page.count == 3


@pytest.mark.unit
class TestFetchAll:
    """Test the fetch_all traversal."""

    @pytest.mark.parametrize("page_count,per_page,last", [(0, 0, 3), (1, 2, 0), (3, 4, 2), (5, 1, 1)])
    def test_returns_every_item_in_order(self, page_count, per_page, last):
        pager = FakePager(build_pages(page_count, per_page, last))

        items = fetch_all(pager)

        assert items == list(range(page_count * per_page + last))
        assert len(pager.calls) == page_count + 1

    def test_first_call_has_no_token_then_threads_tokens(self):
        pager = FakePager(build_pages(2, 1, 1))

        fetch_all(pager)

        assert pager.calls == [None, "tok-1", "tok-2"]

    def test_single_empty_page(self):
        pager = FakePager([Page(items=[], next_token=None)])
        assert fetch_all(pager) == []
        assert pager.calls == [None]

    def test_empty_middle_page_is_followed(self):
        pages = [
            Page(items=[1], next_token="tok-1"),
            Page(items=[], next_token="tok-2"),
            Page(items=[2], next_token=None),
        ]
        pager = FakePager(pages)

        assert fetch_all(pager) == [1, 2]
        assert len(pager.calls) == 3

    def test_mid_pagination_failure_propagates_exact_error(self):
        error = ListingError("ListEndpointsByPlatformApplication", code="InternalError")
        pager = FakePager(build_pages(3, 2), fail_on_call=2, error=error)

        with pytest.raises(ListingError) as exc_info:
            fetch_all(pager)

        assert exc_info.value is error
        # Nothing after the failing page is requested
        assert pager.calls == [None, "tok-1"]

    def test_non_sns_errors_propagate_unchanged(self):
        pager = FakePager(build_pages(1, 1), fail_on_call=1, error=RuntimeError("network"))

        with pytest.raises(RuntimeError, match="network"):
            fetch_all(pager)

    def test_works_with_any_item_type(self):
        pages = [Page(items=[{"TopicArn": "a"}], next_token="tok-1"), Page(items=[{"TopicArn": "b"}])]
        assert fetch_all(FakePager(pages)) == [{"TopicArn": "a"}, {"TopicArn": "b"}]


@pytest.mark.unit
class TestIterPages:
    """Test the lazy page iterator."""

    def test_next_page_fetched_only_when_advanced(self):
        pager = FakePager(build_pages(2, 2))
        pages = iter_pages(pager)

        assert pager.calls == []

        first = next(pages)
        assert first.items == [0, 1]
        assert pager.calls == [None]

        next(pages)
        assert pager.calls == [None, "tok-1"]

    def test_stops_after_page_without_token(self):
        pager = FakePager(build_pages(1, 1, 1))
        assert len(list(iter_pages(pager))) == 2

    def test_iter_items_flattens(self):
        pager = FakePager(build_pages(2, 3, 1))
        assert list(iter_items(pager)) == list(range(7))
