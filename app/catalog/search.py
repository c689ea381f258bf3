"""Paginated product search.

Runs built filter conditions against the product table and returns one
page of results with the total match count.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog

from app.catalog.models import Product
from app.catalog.predicates import SearchCriteria, build_conditions
from app.catalog.repository import ProductRepository

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass
class PageRequest:
    """Pagination parameters.

    Attributes:
        page: Page number (0-indexed).
        size: Items per page.
    """

    page: int = 0
    size: int = 5

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return self.page * self.size

    @property
    def limit(self) -> int:
        """Get limit (alias for size)."""
        return self.size


@dataclass
class Page(Generic[T]):
    """One page of results.

    Attributes:
        items: Items on this page.
        total: Total matches across all pages.
        page: Current page (0-indexed).
        size: Requested page size.
    """

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 0


class ProductSearch:
    """Executes product searches with pagination."""

    def __init__(self, repository: ProductRepository) -> None:
        self.repository = repository

    async def search(self, criteria: SearchCriteria, page_request: PageRequest) -> Page[Product]:
        """Get one page of products matching the criteria.

        With no criteria the archived products are left out; with criteria
        they are kept unless ``criteria.include_deleted`` says otherwise.

        Args:
            criteria: Search parameters.
            page_request: Page index and size.

        Returns:
            Page of products and total match count.

        Raises:
            InvalidPriceRangeError: If the price range cannot be parsed.
        """
        conditions = build_conditions(criteria)
        exclude_deleted = criteria.exclude_deleted

        items, total = await self.repository.find_page(
            conditions,
            exclude_deleted=exclude_deleted,
            offset=page_request.offset,
            limit=page_request.limit,
        )

        logger.debug(
            "Product search executed",
            conditions=len(conditions),
            exclude_deleted=exclude_deleted,
            page=page_request.page,
            size=page_request.size,
            total=total,
        )

        return Page(items=items, total=total, page=page_request.page, size=page_request.size)
