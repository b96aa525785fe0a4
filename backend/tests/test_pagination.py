"""
Tests for the offset pagination helpers.
"""

from hrm.pagination import PageParams, next_page


class TestNextPage:
    def test_more_rows_remaining(self):
        assert next_page(PageParams(page=1, limit=10), total=25) == 2
        assert next_page(PageParams(page=2, limit=10), total=25) == 3

    def test_last_page(self):
        assert next_page(PageParams(page=3, limit=10), total=25) is None

    def test_exact_fit(self):
        assert next_page(PageParams(page=2, limit=10), total=20) is None

    def test_empty(self):
        assert next_page(PageParams(page=1, limit=10), total=0) is None

    def test_offset(self):
        assert PageParams(page=3, limit=20).offset == 40
