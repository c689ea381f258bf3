"""SQLAlchemy models for product catalog.

Defines the Product table for persistent storage.
"""

import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, DateTime, Enum, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database import Base


class InventoryStatus(str, enum.Enum):
    """Stock availability tag."""

    INSTOCK = "INSTOCK"
    LOWSTOCK = "LOWSTOCK"
    OUTOFSTOCK = "OUTOFSTOCK"


# Fields a caller may change after creation; images are only set by upload
MUTABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "category",
        "price",
        "quantity",
        "rating",
        "inventory_status",
    }
)


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: System-assigned identifier.
        code: Unique human-readable code (e.g. "PRODUCT001"), assigned once.
        name: Product name.
        description: Product description.
        category: Category name.
        price: Unit price.
        quantity: Units available.
        rating: Average rating (0.0-5.0).
        inventory_status: Stock availability tag.
        image: Stored image filename.
        deleted: Soft-delete (archived) flag.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating: Mapped[Decimal] = mapped_column(Numeric(2, 1), nullable=False, default=Decimal("0.0"))
    inventory_status: Mapped[InventoryStatus] = mapped_column(
        Enum(InventoryStatus, name="inventory_status", native_enum=False, length=20),
        nullable=False,
        default=InventoryStatus.INSTOCK,
        index=True,
    )
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, code={self.code}, name={self.name[:30]})>"

    @property
    def archived(self) -> bool:
        """Whether the product has been soft-deleted."""
        return self.deleted

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "rating": self.rating,
            "inventory_status": self.inventory_status,
            "image": self.image,
            "deleted": self.deleted,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
