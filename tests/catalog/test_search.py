"""Tests for paginated product search."""

import pytest

from app.catalog.predicates import SearchCriteria
from app.catalog.search import Page, PageRequest


class TestPageRequest:
    """Tests for PageRequest."""

    def test_offset(self) -> None:
        """Offset is page times size."""
        assert PageRequest(page=0, size=5).offset == 0
        assert PageRequest(page=2, size=5).offset == 10

    @pytest.mark.parametrize(("page", "size"), [(-1, 5), (0, 0)])
    def test_invalid_values(self, page: int, size: int) -> None:
        """Negative pages and empty sizes are rejected."""
        with pytest.raises(ValueError):
            PageRequest(page=page, size=size)


class TestPage:
    """Tests for Page derived values."""

    def test_total_pages(self) -> None:
        """Partial last pages count as a page."""
        assert Page(items=[], total=12, page=0, size=5).total_pages == 3
        assert Page(items=[], total=10, page=0, size=5).total_pages == 2
        assert Page(items=[], total=0, page=0, size=5).total_pages == 0

    def test_navigation(self) -> None:
        """has_next and has_previous follow the page index."""
        first = Page(items=[], total=12, page=0, size=5)
        last = Page(items=[], total=12, page=2, size=5)

        assert first.has_next and not first.has_previous
        assert last.has_previous and not last.has_next


class TestProductSearch:
    """Tests for searching through the service."""

    @pytest.fixture
    async def twelve_products(self, create_product) -> list:
        """Store twelve matching products."""
        return [await create_product(name=f"Watch {i}") for i in range(12)]

    async def test_first_page(self, service, twelve_products) -> None:
        """page=0,size=5 over 12 matches returns 5 items and total 12."""
        page = await service.list_products(PageRequest(page=0, size=5), SearchCriteria(name="watch"))

        assert len(page.items) == 5
        assert page.total == 12
        assert page.total_pages == 3

    async def test_last_page(self, service, twelve_products) -> None:
        """page=2,size=5 over 12 matches returns the remaining 2."""
        page = await service.list_products(PageRequest(page=2, size=5), SearchCriteria(name="watch"))

        assert len(page.items) == 2
        assert page.total == 12
        assert not page.has_next

    async def test_page_past_end(self, service, twelve_products) -> None:
        """Pages after the last one are empty but keep the total."""
        page = await service.list_products(PageRequest(page=5, size=5))

        assert page.items == []
        assert page.total == 12

    async def test_pages_do_not_overlap(self, service, twelve_products) -> None:
        """Consecutive pages return distinct products in id order."""
        seen = []
        for index in range(3):
            page = await service.list_products(PageRequest(page=index, size=5))
            seen.extend(p.id for p in page.items)

        assert seen == sorted(seen)
        assert len(set(seen)) == 12
