"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.catalog.models import InventoryStatus


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number (0-based)")
    size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")
    has_more: bool = Field(..., description="Whether there are more pages")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(BaseModel):
    """Fields for a new product.

    The code and id are assigned by the service.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    category: str = Field(..., min_length=1, max_length=100, description="Category name")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Unit price")
    description: str | None = Field(default=None, description="Product description")
    quantity: int = Field(default=0, ge=0, description="Units available")
    rating: Decimal = Field(default=Decimal("0.0"), ge=0, le=5, description="Average rating")
    inventory_status: InventoryStatus = Field(
        default=InventoryStatus.INSTOCK, description="Stock availability"
    )


class ProductUpdateRequest(BaseModel):
    """Partial product update. Only supplied fields are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    description: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    rating: Decimal | None = Field(default=None, ge=0, le=5)
    inventory_status: InventoryStatus | None = None

    @field_validator("name", "category", "price", "quantity", "rating", "inventory_status")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Refuse explicit nulls for fields that cannot be cleared."""
        if value is None:
            raise ValueError("may not be null")
        return value


class ProductResponse(BaseModel):
    """Product representation."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Product identifier")
    code: str = Field(..., description="Unique product code, e.g. PRODUCT001")
    name: str
    description: str | None = None
    category: str
    price: float
    quantity: int
    rating: float
    inventory_status: InventoryStatus
    image: str | None = Field(default=None, description="Stored image filename")
    deleted: bool = Field(..., description="Whether the product is archived")
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def image_url(self) -> str | None:
        """Path the image can be downloaded from."""
        if self.image is None:
            return None
        return f"/api/products/images/{self.image}"


class ProductPageResponse(PaginatedResponse):
    """Paginated list of products."""

    items: list[ProductResponse] = Field(..., description="Products on this page")
