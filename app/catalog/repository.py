"""Product repository for database operations.

Provides CRUD operations for products and translates storage-neutral
filter conditions into SQLAlchemy clauses.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Product
from app.catalog.predicates import FieldCondition, Operator

# Attributes a condition may refer to
FILTERABLE_COLUMNS: dict[str, Any] = {
    "code": Product.code,
    "name": Product.name,
    "category": Product.category,
    "inventory_status": Product.inventory_status,
    "price": Product.price,
    "deleted": Product.deleted,
}


def condition_to_clause(condition: FieldCondition) -> ColumnElement[bool]:
    """Translate one condition into a SQLAlchemy boolean clause.

    Args:
        condition: Storage-neutral condition.

    Returns:
        Clause usable in ``Select.where``.

    Raises:
        ValueError: For an unknown field or operator.
    """
    column = FILTERABLE_COLUMNS.get(condition.field)
    if column is None:
        raise ValueError(f"Cannot filter on field '{condition.field}'")

    if condition.operator is Operator.CONTAINS:
        return column.icontains(str(condition.value), autoescape=True)

    if condition.operator is Operator.EQUALS:
        return column == condition.value

    if condition.operator is Operator.BETWEEN:
        low, high = condition.value
        return column.between(low, high)

    raise ValueError(f"Unsupported operator '{condition.operator}'")


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            items, total = await repo.find_page(
                [FieldCondition("name", Operator.CONTAINS, "chair")],
                offset=0,
                limit=5,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Insert or update a product.

        Args:
            product: Product to save.

        Returns:
            Saved product with its id populated.

        Raises:
            sqlalchemy.exc.IntegrityError: If the code is already taken.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(self, product_id: int) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        return await self.session.get(Product, product_id)

    async def exists_by_code(self, code: str) -> bool:
        """Check whether any product (archived included) has this code."""
        query = select(Product.id).where(Product.code == code).limit(1)
        result = await self.session.execute(query)
        return result.first() is not None

    async def find_last_code(self) -> str | None:
        """Get the code that sorts last in descending code order."""
        query = select(Product.code).order_by(Product.code.desc()).limit(1)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def delete(self, product: Product) -> None:
        """Permanently remove a product.

        Args:
            product: Product to delete.
        """
        await self.session.delete(product)
        await self.session.flush()

    async def find_page(
        self,
        conditions: Sequence[FieldCondition] = (),
        exclude_deleted: bool = False,
        offset: int = 0,
        limit: int = 5,
    ) -> tuple[list[Product], int]:
        """Find one window of matching products and the total match count.

        Args:
            conditions: Conditions combined with AND.
            exclude_deleted: Drop soft-deleted products.
            offset: Number of matches to skip.
            limit: Maximum number of products returned.

        Returns:
            Tuple of (products in the window, total matches).
        """
        clauses = [condition_to_clause(c) for c in conditions]
        if exclude_deleted:
            clauses.append(Product.deleted.is_(False))

        count_query = select(func.count(Product.id))
        page_query = select(Product).order_by(Product.id.asc()).offset(offset).limit(limit)
        if clauses:
            count_query = count_query.where(and_(*clauses))
            page_query = page_query.where(and_(*clauses))

        total = (await self.session.execute(count_query)).scalar_one()
        result = await self.session.execute(page_query)
        return list(result.scalars().all()), total
