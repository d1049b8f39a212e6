"""Unit tests for the pagination strategies."""

from apiwrap import BasePager, CursorPager, DefaultPager, PageNumberPager
from apiwrap.pagination import DEFAULT_PAGE_SIZE
from apiwrap.protocols import PagerProtocol
from apiwrap.types import PageCursor


class TestPageCursor:
    def test_advance(self):
        cursor = PageCursor()
        cursor.advance()
        cursor.advance()
        assert cursor.page_index == 2
        assert not cursor.done


class TestDefaultPager:
    """DefaultPager yields exactly one page."""

    def test_more_pages_true_exactly_once(self):
        pager = DefaultPager()
        assert pager.more_pages() is True
        assert pager.next_page({"any": "body"}) is False
        assert pager.more_pages() is False
        assert pager.next_page() is False
        assert pager.more_pages() is False

    def test_no_page_options(self):
        assert DefaultPager().page_options() == {}

    def test_data_is_identity(self):
        body = {"id": 1}
        assert DefaultPager.data(body) is body
        assert DefaultPager.data(None) is None

    def test_page_size_default(self):
        assert DefaultPager().page_size == DEFAULT_PAGE_SIZE
        assert DefaultPager(None).page_size == DEFAULT_PAGE_SIZE
        assert DefaultPager(20).page_size == 20

    def test_satisfies_protocol(self):
        assert isinstance(DefaultPager(), PagerProtocol)
        assert issubclass(DefaultPager, BasePager)


class TestPageNumberPager:
    """Tests for PageNumberPager."""

    def test_first_page_options(self):
        assert PageNumberPager(2).page_options() == {"page": 1, "per_page": 2}

    def test_advances_on_full_page(self):
        pager = PageNumberPager(2)
        assert pager.next_page({"data": [{"id": 1}, {"id": 2}]}) is True
        assert pager.page_options() == {"page": 2, "per_page": 2}

    def test_stops_on_short_page(self):
        pager = PageNumberPager(2)
        assert pager.next_page({"data": [{"id": 1}]}) is False

    def test_stops_on_empty_or_missing_payload(self):
        assert PageNumberPager(2).next_page({"data": []}) is False
        assert PageNumberPager(2).next_page({}) is False
        assert PageNumberPager(2).next_page(None) is False

    def test_stops_at_total_pages(self):
        pager = PageNumberPager(1)
        assert pager.next_page({"data": [{"id": 1}], "total_pages": 2}) is True
        assert pager.next_page({"data": [{"id": 2}], "total_pages": 2}) is False

    def test_data_reads_envelope(self):
        assert PageNumberPager.data({"data": [1, 2]}) == [1, 2]
        assert PageNumberPager.data({"other": 1}) is None
        assert PageNumberPager.data([1, 2]) == [1, 2]

    def test_bare_list_body(self):
        pager = PageNumberPager(2)
        assert pager.next_page([{"id": 1}, {"id": 2}]) is True
        assert pager.next_page([{"id": 3}]) is False

    def test_custom_parameter_names(self):
        class OffsetPager(PageNumberPager):
            page_param = "p"
            size_param = "size"
            envelope_key = "items"
            first_page = 0

        pager = OffsetPager(10)
        assert pager.page_options() == {"p": 0, "size": 10}
        assert OffsetPager.data({"items": [1]}) == [1]


class TestCursorPager:
    """Tests for CursorPager."""

    def test_first_request_has_no_cursor(self):
        assert CursorPager(25).page_options() == {"limit": 25}

    def test_follows_next_cursor(self):
        pager = CursorPager(25)
        assert pager.next_page({"data": [1], "next_cursor": "abc"}) is True
        assert pager.page_options() == {"limit": 25, "cursor": "abc"}

    def test_stops_without_next_cursor(self):
        pager = CursorPager(25)
        pager.next_page({"data": [1], "next_cursor": "abc"})
        assert pager.next_page({"data": [2], "next_cursor": None}) is False
        assert pager.more_pages() is False

    def test_stops_on_non_mapping_body(self):
        assert CursorPager().next_page([1, 2]) is False

    def test_data_reads_envelope(self):
        assert CursorPager.data({"data": [{"id": 1}]}) == [{"id": 1}]
