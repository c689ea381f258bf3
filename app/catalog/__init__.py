"""Product Catalog Service.

Provides product persistence, sequential code generation, filtered
search with pagination, and the product lifecycle operations.
"""

from app.catalog.code_generator import CodeGenerator
from app.catalog.models import InventoryStatus, Product
from app.catalog.predicates import FieldCondition, Operator, SearchCriteria, build_conditions
from app.catalog.repository import ProductRepository
from app.catalog.search import Page, PageRequest, ProductSearch
from app.catalog.service import ImageUpload, ProductInput, ProductService

__all__ = [
    # Models
    "InventoryStatus",
    "Product",
    # Search
    "FieldCondition",
    "Operator",
    "SearchCriteria",
    "build_conditions",
    "Page",
    "PageRequest",
    "ProductSearch",
    # Codes
    "CodeGenerator",
    # Repository
    "ProductRepository",
    # Service
    "ImageUpload",
    "ProductInput",
    "ProductService",
]
