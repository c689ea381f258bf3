"""Domain layer - business errors raised by the catalog.

Example usage:
    from app.domain import ProductNotFoundError

    try:
        product = await service.get_product(42)
    except ProductNotFoundError as e:
        print(e.message, e.details)
"""

from app.domain.exceptions import (
    CodeAllocationError,
    DomainError,
    ImageNotFoundError,
    InvalidPriceRangeError,
    ProductError,
    ProductNotFoundError,
)

__all__ = [
    "CodeAllocationError",
    "DomainError",
    "ImageNotFoundError",
    "InvalidPriceRangeError",
    "ProductError",
    "ProductNotFoundError",
]
