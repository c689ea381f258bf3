"""Product lifecycle service.

High-level service that combines repository operations with the code
generator, search and image storage:
- Creating products with a unique sequential code and optional image
- Listing/searching products page by page
- Fetching and updating products
- Archiving (soft delete) and permanently deleting products
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.code_generator import CodeGenerator
from app.catalog.models import MUTABLE_FIELDS, InventoryStatus, Product
from app.catalog.predicates import SearchCriteria
from app.catalog.repository import ProductRepository
from app.catalog.search import Page, PageRequest, ProductSearch
from app.domain.exceptions import (
    CodeAllocationError,
    ImageNotFoundError,
    InvalidPriceRangeError,
    ProductNotFoundError,
)
from app.infrastructure.config import settings
from app.infrastructure.image_store import ImageStore
from app.infrastructure.messages import (
    CODE_ALLOCATION_FAILED,
    IMAGE_NOT_FOUND,
    INVALID_PRICE_RANGE,
    PRODUCT_NOT_FOUND,
    MessageCatalog,
)

logger = structlog.get_logger()


# ============================================================================
# Service Input Types
# ============================================================================


@dataclass
class ProductInput:
    """Fields supplied when creating a product."""

    name: str
    category: str
    price: Decimal
    description: str | None = None
    quantity: int = 0
    rating: Decimal = Decimal("0.0")
    inventory_status: InventoryStatus = InventoryStatus.INSTOCK
    image: str | None = None


@dataclass
class ImageUpload:
    """An uploaded image file."""

    filename: str | None
    content: bytes = field(repr=False, default=b"")


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Service for product lifecycle operations.

    Mutating operations commit the session themselves so that a product
    and its code are stored together or not at all.

    Example usage:
        async with async_session_factory() as session:
            service = ProductService(session, get_image_store())
            product = await service.create_product(
                ProductInput(name="Desk", category="Furniture", price=Decimal("99.90"))
            )
            page = await service.list_products(PageRequest(0, 5), SearchCriteria(name="desk"))
    """

    def __init__(
        self,
        session: AsyncSession,
        image_store: ImageStore,
        messages: MessageCatalog | None = None,
        code_allocation_attempts: int | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session: Async SQLAlchemy session.
            image_store: Storage for product images.
            messages: Message catalog for user-facing errors.
            code_allocation_attempts: Insert attempts before giving up on
                a code collision. Defaults to ``settings.code_allocation_attempts``.
        """
        self.session = session
        self.repository = ProductRepository(session)
        self.code_generator = CodeGenerator(self.repository)
        self.search = ProductSearch(self.repository)
        self.image_store = image_store
        self.messages = messages or MessageCatalog()
        self.code_allocation_attempts = (
            code_allocation_attempts
            if code_allocation_attempts is not None
            else settings.code_allocation_attempts
        )

    async def create_product(
        self,
        data: ProductInput,
        image: ImageUpload | None = None,
    ) -> Product:
        """Create a product with a fresh code.

        Args:
            data: Product fields.
            image: Optional image to store alongside the product.

        Returns:
            The stored product.

        Raises:
            OSError: If the image cannot be written.
            CodeAllocationError: If every attempt hit a taken code.
        """
        logger.debug("Creating product", name=data.name, category=data.category)

        stored_image: str | None = None
        if image is not None and image.content:
            stored_image = await self.image_store.save(image.filename, image.content)

        try:
            product = await self._insert_with_unique_code(data, stored_image or data.image)
        except Exception:
            if stored_image is not None:
                await self.image_store.delete(stored_image)
            raise

        logger.info("Product created", product_id=product.id, code=product.code)
        return product

    async def _insert_with_unique_code(self, data: ProductInput, image: str | None) -> Product:
        """Insert the product, regenerating the code on a collision."""
        for attempt in range(1, self.code_allocation_attempts + 1):
            code = await self.code_generator.next_code()
            product = Product(
                code=code,
                name=data.name,
                description=data.description,
                category=data.category,
                price=data.price,
                quantity=data.quantity,
                rating=data.rating,
                inventory_status=data.inventory_status,
                image=image,
                deleted=False,
            )

            try:
                await self.repository.save(product)
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                # Only a concurrent insert of the same code is retried
                if not await self.repository.exists_by_code(code):
                    raise
                logger.warning("Product code collision", code=code, attempt=attempt)
                continue

            await self.session.refresh(product)
            return product

        raise CodeAllocationError(
            self.code_allocation_attempts,
            self.messages.get(CODE_ALLOCATION_FAILED, attempts=self.code_allocation_attempts),
        )

    async def list_products(
        self,
        page_request: PageRequest,
        criteria: SearchCriteria | None = None,
    ) -> Page[Product]:
        """Get one page of products.

        Args:
            page_request: Page index and size.
            criteria: Optional search parameters.

        Returns:
            Page of products with total match count.

        Raises:
            InvalidPriceRangeError: If the price range cannot be parsed.
        """
        try:
            return await self.search.search(criteria or SearchCriteria(), page_request)
        except InvalidPriceRangeError as e:
            raise InvalidPriceRangeError(
                e.value,
                e.reason,
                self.messages.get(INVALID_PRICE_RANGE, value=e.value),
            ) from e

    async def get_product(self, product_id: int | None) -> Product:
        """Get product by ID.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self.repository.get_by_id(product_id) if product_id is not None else None
        if product is None:
            raise ProductNotFoundError(product_id, self.messages.get(PRODUCT_NOT_FOUND))
        return product

    async def update_product(self, product_id: int, changes: Mapping[str, Any]) -> Product:
        """Apply field changes to a product.

        Only mutable fields are applied; ``id`` and ``code`` never change.

        Args:
            product_id: Product ID.
            changes: Field name to new value, for the fields to change.

        Returns:
            The updated product.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self.get_product(product_id)

        ignored = sorted(set(changes) - MUTABLE_FIELDS)
        if ignored:
            logger.debug("Ignoring immutable fields on update", product_id=product_id, fields=ignored)

        for name, value in changes.items():
            if name in MUTABLE_FIELDS:
                setattr(product, name, value)

        await self.repository.save(product)
        await self.session.commit()
        await self.session.refresh(product)

        logger.info("Product updated", product_id=product_id, fields=sorted(set(changes) & MUTABLE_FIELDS))
        return product

    async def archive_product(self, product_id: int | None) -> None:
        """Soft delete a product by setting its deleted flag.

        Raises:
            ProductNotFoundError: If the id is None or unknown.
        """
        product = await self.get_product(product_id)
        product.deleted = True
        await self.repository.save(product)
        await self.session.commit()

        logger.info("Product archived", product_id=product_id, code=product.code)

    async def delete_product(self, product_id: int) -> None:
        """Permanently delete a product and its stored image.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self.get_product(product_id)
        image = product.image
        code = product.code

        await self.repository.delete(product)
        await self.session.commit()

        if image:
            try:
                await self.image_store.delete(image)
            except (OSError, ValueError) as e:
                logger.warning("Could not remove product image", image=image, error=str(e))

        logger.info("Product deleted", product_id=product_id, code=code)

    async def get_image_path(self, filename: str) -> Path:
        """Resolve a stored image filename to a readable path.

        Raises:
            ImageNotFoundError: If no such image is stored.
        """
        if not await self.image_store.exists(filename):
            raise ImageNotFoundError(filename, self.messages.get(IMAGE_NOT_FOUND))
        return self.image_store.path_for(filename)
