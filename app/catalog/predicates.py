"""Search criteria and filter conditions.

Translates optional search parameters into a list of storage-neutral
``FieldCondition`` triples. The repository turns them into SQL.
"""

import enum
from dataclasses import dataclass
from typing import Any

from app.catalog.models import InventoryStatus
from app.domain.exceptions import InvalidPriceRangeError


class Operator(str, enum.Enum):
    """Comparison applied by a condition."""

    CONTAINS = "contains"  # case-insensitive substring
    EQUALS = "equals"
    BETWEEN = "between"  # inclusive (low, high)


@dataclass(frozen=True)
class FieldCondition:
    """A single ``field operator value`` filter.

    Attributes:
        field: Product attribute name.
        operator: Comparison to apply.
        value: Operand; a ``(low, high)`` tuple for BETWEEN.
    """

    field: str
    operator: Operator
    value: Any


@dataclass
class SearchCriteria:
    """Optional search parameters for product listing.

    Attributes:
        code: Substring of the product code.
        name: Substring of the product name.
        category: Exact category.
        inventory_status: Exact inventory status.
        price_range: Inclusive range formatted as ``"<min>-<max>"``.
        include_deleted: Soft-delete handling. ``None`` excludes archived
            products only when no other criterion is given, ``False``
            always excludes them, ``True`` always includes them.
    """

    code: str | None = None
    name: str | None = None
    category: str | None = None
    inventory_status: InventoryStatus | str | None = None
    price_range: str | None = None
    include_deleted: bool | None = None

    @property
    def is_empty(self) -> bool:
        """True when no search field is supplied."""
        return all(
            value is None
            for value in (
                self.code,
                self.name,
                self.category,
                self.inventory_status,
                self.price_range,
            )
        )

    @property
    def exclude_deleted(self) -> bool:
        """Whether archived products are filtered out for these criteria."""
        if self.include_deleted is None:
            return self.is_empty
        return not self.include_deleted


def parse_price_range(value: str) -> tuple[float, float]:
    """Parse ``"<min>-<max>"`` into inclusive float bounds.

    Args:
        value: Raw range string, e.g. ``"10-20"`` or ``"9.5-100"``.

    Returns:
        Tuple of (min, max).

    Raises:
        InvalidPriceRangeError: If the string is not two numbers
            separated by ``-`` or min is greater than max.
    """
    parts = value.split("-")
    if len(parts) != 2:
        raise InvalidPriceRangeError(value, "expected exactly one '-' separator")

    try:
        low, high = float(parts[0]), float(parts[1])
    except ValueError:
        raise InvalidPriceRangeError(value, "bounds must be numbers") from None

    if low > high:
        raise InvalidPriceRangeError(value, "min is greater than max")

    return low, high


def build_conditions(criteria: SearchCriteria) -> list[FieldCondition]:
    """Build the AND-combined conditions for the supplied criteria.

    Args:
        criteria: Search parameters; unset fields impose no constraint.

    Returns:
        List of conditions (empty when nothing is supplied).
    """
    conditions: list[FieldCondition] = []

    if criteria.code is not None:
        conditions.append(FieldCondition("code", Operator.CONTAINS, criteria.code))

    if criteria.name is not None:
        conditions.append(FieldCondition("name", Operator.CONTAINS, criteria.name))

    if criteria.category is not None:
        conditions.append(FieldCondition("category", Operator.EQUALS, criteria.category))

    if criteria.inventory_status is not None:
        status = criteria.inventory_status
        if isinstance(status, InventoryStatus):
            status = status.value
        conditions.append(FieldCondition("inventory_status", Operator.EQUALS, status))

    if criteria.price_range is not None:
        conditions.append(
            FieldCondition("price", Operator.BETWEEN, parse_price_range(criteria.price_range))
        )

    return conditions
