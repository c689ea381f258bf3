"""Tests for ProductRepository and condition translation."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.catalog.models import InventoryStatus, Product
from app.catalog.predicates import FieldCondition, Operator
from app.catalog.repository import ProductRepository, condition_to_clause


def make_product(code: str, **kwargs) -> Product:
    """Build an unsaved product."""
    defaults = {
        "name": f"Product {code}",
        "category": "Accessories",
        "price": Decimal("10.00"),
        "inventory_status": InventoryStatus.INSTOCK,
    }
    defaults.update(kwargs)
    return Product(code=code, **defaults)


@pytest.fixture
def repository(session) -> ProductRepository:
    """Repository bound to the test session."""
    return ProductRepository(session)


class TestConditionToClause:
    """Tests for translating conditions into SQL clauses."""

    def test_unknown_field_rejected(self) -> None:
        """Only known product columns can be filtered."""
        with pytest.raises(ValueError, match="Cannot filter"):
            condition_to_clause(FieldCondition("password", Operator.EQUALS, "x"))

    def test_contains_is_case_insensitive_like(self) -> None:
        """CONTAINS renders a LIKE on lowered values."""
        clause = condition_to_clause(FieldCondition("name", Operator.CONTAINS, "Watch"))
        assert "like" in str(clause).lower()


class TestProductRepository:
    """Tests for repository operations."""

    async def test_save_assigns_id(self, repository: ProductRepository) -> None:
        """Saving a product populates its id."""
        product = await repository.save(make_product("PRODUCT001"))
        assert product.id is not None
        assert product.deleted is False

    async def test_get_by_id(self, repository: ProductRepository) -> None:
        """Products can be fetched by id."""
        product = await repository.save(make_product("PRODUCT001"))

        found = await repository.get_by_id(product.id)

        assert found is not None
        assert found.code == "PRODUCT001"

    async def test_get_by_id_missing(self, repository: ProductRepository) -> None:
        """Unknown ids return None."""
        assert await repository.get_by_id(999) is None

    async def test_exists_by_code_includes_archived(self, repository: ProductRepository) -> None:
        """Archived products still occupy their code."""
        await repository.save(make_product("PRODUCT001", deleted=True))

        assert await repository.exists_by_code("PRODUCT001") is True
        assert await repository.exists_by_code("PRODUCT002") is False

    async def test_find_last_code(self, repository: ProductRepository) -> None:
        """The last code is the greatest in descending order."""
        assert await repository.find_last_code() is None

        await repository.save(make_product("PRODUCT002"))
        await repository.save(make_product("PRODUCT010"))
        await repository.save(make_product("PRODUCT001"))

        assert await repository.find_last_code() == "PRODUCT010"

    async def test_duplicate_code_violates_constraint(self, repository: ProductRepository) -> None:
        """Codes are unique at the storage level."""
        await repository.save(make_product("PRODUCT001"))

        with pytest.raises(IntegrityError):
            await repository.save(make_product("PRODUCT001"))

    async def test_delete(self, repository: ProductRepository) -> None:
        """Deleted products are gone."""
        product = await repository.save(make_product("PRODUCT001"))
        product_id = product.id

        await repository.delete(product)

        assert await repository.get_by_id(product_id) is None


class TestFindPage:
    """Tests for filtered, paginated queries."""

    @pytest.fixture
    async def catalog(self, repository: ProductRepository) -> list[Product]:
        """Store a small mixed catalog."""
        products = [
            make_product("PRODUCT001", name="Bamboo Watch", price=Decimal("9.99")),
            make_product("PRODUCT002", name="Black Watch", price=Decimal("10.00")),
            make_product(
                "PRODUCT003",
                name="Blue T-Shirt",
                category="Clothing",
                price=Decimal("15.00"),
                inventory_status=InventoryStatus.LOWSTOCK,
            ),
            make_product("PRODUCT004", name="Gold Ring", price=Decimal("20.00")),
            make_product(
                "PRODUCT005",
                name="Yoga Mat",
                category="Fitness",
                price=Decimal("20.01"),
                inventory_status=InventoryStatus.OUTOFSTOCK,
                deleted=True,
            ),
        ]
        for product in products:
            await repository.save(product)
        return products

    async def test_no_conditions_returns_all(self, repository, catalog) -> None:
        """Without conditions every product matches."""
        items, total = await repository.find_page()
        assert total == 5
        assert [p.code for p in items] == ["PRODUCT001", "PRODUCT002", "PRODUCT003", "PRODUCT004", "PRODUCT005"]

    async def test_exclude_deleted(self, repository, catalog) -> None:
        """Archived products can be excluded."""
        items, total = await repository.find_page(exclude_deleted=True, limit=10)
        assert total == 4
        assert all(not p.deleted for p in items)

    async def test_contains_ignores_case(self, repository, catalog) -> None:
        """Substring search is case-insensitive."""
        conditions = [FieldCondition("name", Operator.CONTAINS, "WATCH")]

        items, total = await repository.find_page(conditions)

        assert total == 2
        assert {p.name for p in items} == {"Bamboo Watch", "Black Watch"}

    async def test_code_substring(self, repository, catalog) -> None:
        """Codes are matched by substring."""
        conditions = [FieldCondition("code", Operator.CONTAINS, "duct00")]

        _, total = await repository.find_page(conditions)

        assert total == 5

    async def test_contains_treats_wildcards_literally(self, repository, catalog) -> None:
        """LIKE wildcards in the search text do not match everything."""
        conditions = [FieldCondition("name", Operator.CONTAINS, "%")]

        _, total = await repository.find_page(conditions)

        assert total == 0

    async def test_equals_category(self, repository, catalog) -> None:
        """Category must match exactly."""
        items, total = await repository.find_page(
            [FieldCondition("category", Operator.EQUALS, "Clothing")]
        )
        assert total == 1
        assert items[0].code == "PRODUCT003"

        _, total = await repository.find_page(
            [FieldCondition("category", Operator.EQUALS, "cloth")]
        )
        assert total == 0

    async def test_equals_inventory_status(self, repository, catalog) -> None:
        """Inventory status must match exactly."""
        items, total = await repository.find_page(
            [FieldCondition("inventory_status", Operator.EQUALS, "LOWSTOCK")]
        )
        assert total == 1
        assert items[0].inventory_status is InventoryStatus.LOWSTOCK

    async def test_price_between_is_inclusive(self, repository, catalog) -> None:
        """Both price bounds are included."""
        items, total = await repository.find_page(
            [FieldCondition("price", Operator.BETWEEN, (10.0, 20.0))]
        )

        assert total == 3
        assert {p.price for p in items} == {Decimal("10.00"), Decimal("15.00"), Decimal("20.00")}

    async def test_conditions_are_combined_with_and(self, repository, catalog) -> None:
        """Every condition narrows the result."""
        conditions = [
            FieldCondition("name", Operator.CONTAINS, "watch"),
            FieldCondition("price", Operator.BETWEEN, (10.0, 20.0)),
        ]

        items, total = await repository.find_page(conditions)

        assert total == 1
        assert items[0].name == "Black Watch"

    async def test_window_and_total(self, repository, catalog) -> None:
        """Offset and limit select a window; total counts all matches."""
        items, total = await repository.find_page(offset=2, limit=2)

        assert total == 5
        assert [p.code for p in items] == ["PRODUCT003", "PRODUCT004"]
