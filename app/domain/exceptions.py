"""Domain exceptions.

All domain-level errors raised by the catalog. The API layer maps each
of them to an HTTP status and a machine-readable error code.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Product Errors
# ============================================================================


class ProductError(DomainError):
    """Base class for product-related errors."""

    pass


class ProductNotFoundError(ProductError):
    """Raised when a product id does not exist."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int | None, message: str = "Product not found") -> None:
        """Initialize product not found error.

        Args:
            product_id: The requested product id (may be None).
            message: Localized message.
        """
        super().__init__(message, details={"product_id": product_id})
        self.product_id = product_id


class CodeAllocationError(ProductError):
    """Raised when no unique product code could be stored."""

    error_code = "CODE_ALLOCATION_FAILED"

    def __init__(self, attempts: int, message: str | None = None) -> None:
        """Initialize code allocation error.

        Args:
            attempts: Number of insert attempts made.
            message: Localized message.
        """
        super().__init__(
            message or f"Could not allocate a unique product code after {attempts} attempts",
            details={"attempts": attempts},
        )
        self.attempts = attempts


class ImageNotFoundError(ProductError):
    """Raised when a stored product image does not exist."""

    error_code = "IMAGE_NOT_FOUND"

    def __init__(self, filename: str, message: str = "Image not found") -> None:
        """Initialize image not found error.

        Args:
            filename: Requested image filename.
            message: Localized message.
        """
        super().__init__(message, details={"filename": filename})
        self.filename = filename


# ============================================================================
# Search Errors
# ============================================================================


class InvalidPriceRangeError(DomainError):
    """Raised when a price range is not of the form ``<min>-<max>``."""

    error_code = "INVALID_PRICE_RANGE"

    def __init__(self, value: str, reason: str, message: str | None = None) -> None:
        """Initialize invalid price range error.

        Args:
            value: The raw price range string.
            reason: Why the value was rejected.
            message: Optional localized message; defaults to a generic one.
        """
        super().__init__(
            message or f"Invalid price range '{value}': {reason}",
            details={"value": value, "reason": reason},
        )
        self.value = value
        self.reason = reason
