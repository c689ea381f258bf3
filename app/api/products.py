"""Product API endpoints.

Provides endpoints for the product lifecycle:
- POST /api/products - create a product (multipart, optional image)
- GET /api/products - list/search products (paginated)
- GET /api/products/{id} - product details
- PATCH /api/products/{id} - update product fields
- DELETE /api/products/{id} - delete a product permanently
- DELETE /api/products/archive/{id} - archive (soft delete) a product
- GET /api/products/images/{filename} - download a product image
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, Response, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import (
    ErrorResponse,
    ProductCreateRequest,
    ProductPageResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from app.catalog.models import InventoryStatus
from app.catalog.predicates import SearchCriteria
from app.catalog.search import PageRequest
from app.catalog.service import ImageUpload, ProductInput, ProductService
from app.domain.exceptions import CodeAllocationError, DomainError
from app.infrastructure.config import settings
from app.infrastructure.database import get_session
from app.infrastructure.image_store import ImageStore, get_image_store
from app.infrastructure.messages import MessageCatalog

logger = structlog.get_logger()

router = APIRouter(prefix="/api/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_messages(request: Request) -> MessageCatalog:
    """Get message catalog for the request's Accept-Language."""
    return MessageCatalog.from_accept_language(request.headers.get("Accept-Language"))


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    messages: Annotated[MessageCatalog, Depends(get_messages)],
) -> ProductService:
    """Get product service bound to the request session."""
    return ProductService(session, image_store, messages)


# ============================================================================
# Error Mapping
# ============================================================================


def domain_error(exc: DomainError, status_code: int) -> HTTPException:
    """Convert a domain error into an HTTPException with the error envelope."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": [
                {"field": key, "message": str(value)} for key, value in exc.details.items()
            ],
        },
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create product",
    description="Create a product from a JSON `product` part and an optional `imageFile` part.",
)
async def create_product(
    service: Annotated[ProductService, Depends(get_service)],
    product: str = Form(..., description="Product fields as a JSON document"),
    image_file: UploadFile | None = File(default=None, alias="imageFile"),
) -> ProductResponse:
    """Create a new product.

    Args:
        service: Product service.
        product: JSON encoded ProductCreateRequest.
        image_file: Optional product image.

    Returns:
        The created product with its assigned code.
    """
    try:
        payload = ProductCreateRequest.model_validate_json(product)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error_code": "VALIDATION_ERROR",
                "message": "Invalid product payload",
                "details": [
                    {"field": ".".join(str(p) for p in err["loc"]) or None, "message": err["msg"]}
                    for err in e.errors()
                ],
            },
        ) from e

    logger.info("Adding new product", name=payload.name, category=payload.category)

    image = None
    if image_file is not None and image_file.filename:
        image = ImageUpload(filename=image_file.filename, content=await image_file.read())

    try:
        created = await service.create_product(
            ProductInput(
                name=payload.name,
                category=payload.category,
                price=payload.price,
                description=payload.description,
                quantity=payload.quantity,
                rating=payload.rating,
                inventory_status=payload.inventory_status,
            ),
            image,
        )
    except CodeAllocationError as e:
        raise domain_error(e, status.HTTP_409_CONFLICT) from e

    return ProductResponse.model_validate(created)


@router.get(
    "",
    response_model=ProductPageResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List products",
    description="Get a page of products, optionally filtered by code, name, "
    "category, inventory status and price range.",
)
async def list_products(
    service: Annotated[ProductService, Depends(get_service)],
    page: int = Query(default=0, ge=0, description="Page number (0-based)"),
    size: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
    search_by_code: str | None = Query(
        default=None, alias="searchByCode", description="Code substring (case-insensitive)"
    ),
    search_by_name: str | None = Query(
        default=None, alias="searchByName", description="Name substring (case-insensitive)"
    ),
    search_by_category: str | None = Query(
        default=None, alias="searchByCategory", description="Exact category"
    ),
    search_by_inventory_status: InventoryStatus | None = Query(
        default=None, alias="searchByInventoryStatus", description="Exact inventory status"
    ),
    search_by_price_range: str | None = Query(
        default=None, alias="searchByPriceRange", description="Inclusive range, e.g. 10-20"
    ),
    include_deleted: bool | None = Query(
        default=None,
        alias="includeDeleted",
        description="Include archived products. When omitted, archived products "
        "are hidden only if no search parameter is given.",
    ),
) -> ProductPageResponse:
    """List products with pagination and filtering.

    Returns:
        Paginated list of products.
    """
    criteria = SearchCriteria(
        code=search_by_code,
        name=search_by_name,
        category=search_by_category,
        inventory_status=search_by_inventory_status,
        price_range=search_by_price_range,
        include_deleted=include_deleted,
    )

    try:
        result = await service.list_products(PageRequest(page=page, size=size), criteria)
    except DomainError as e:
        raise domain_error(e, status.HTTP_400_BAD_REQUEST) from e

    return ProductPageResponse(
        items=[ProductResponse.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        size=result.size,
        total_pages=result.total_pages,
        has_more=result.has_next,
    )


@router.get(
    "/images/{filename}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product image",
)
async def get_product_image(
    filename: str,
    service: Annotated[ProductService, Depends(get_service)],
) -> FileResponse:
    """Download a stored product image."""
    try:
        path = await service.get_image_path(filename)
    except DomainError as e:
        raise domain_error(e, status.HTTP_404_NOT_FOUND) from e

    return FileResponse(path)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Get a product by ID."""
    logger.info("Get product by id", product_id=product_id)
    try:
        product = await service.get_product(product_id)
    except DomainError as e:
        raise domain_error(e, status.HTTP_404_NOT_FOUND) from e

    return ProductResponse.model_validate(product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update product",
)
async def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Update the supplied fields of a product."""
    logger.info("Update product", product_id=product_id)
    try:
        product = await service.update_product(product_id, body.model_dump(exclude_unset=True))
    except DomainError as e:
        raise domain_error(e, status.HTTP_404_NOT_FOUND) from e

    return ProductResponse.model_validate(product)


@router.delete(
    "/archive/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Archive product",
)
async def archive_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> Response:
    """Archive (soft delete) a product."""
    logger.info("Archive product", product_id=product_id)
    try:
        await service.archive_product(product_id)
    except DomainError as e:
        raise domain_error(e, status.HTTP_404_NOT_FOUND) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> Response:
    """Delete a product permanently."""
    logger.info("Delete product", product_id=product_id)
    try:
        await service.delete_product(product_id)
    except DomainError as e:
        raise domain_error(e, status.HTTP_404_NOT_FOUND) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)
