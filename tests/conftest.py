"""Shared fixtures for catalog tests.

Each test gets its own SQLite database file and image directory.
"""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.catalog.models import InventoryStatus, Product
from app.catalog.service import ProductInput, ProductService
from app.infrastructure.database import Base, get_session
from app.infrastructure.image_store import ImageStore, get_image_store
from app.infrastructure.messages import MessageCatalog
from app.main import app


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine with the schema in place."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session for one test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def image_store(tmp_path: Path) -> ImageStore:
    """Image store in a temporary directory."""
    store = ImageStore(tmp_path / "images")
    store.ensure_directory()
    return store


@pytest.fixture
def service(session: AsyncSession, image_store: ImageStore) -> ProductService:
    """Product service backed by the test database."""
    return ProductService(session, image_store, MessageCatalog("en"))


def product_input(
    name: str = "Bamboo Watch",
    category: str = "Accessories",
    price: str | Decimal = "65.00",
    inventory_status: InventoryStatus = InventoryStatus.INSTOCK,
    **kwargs,
) -> ProductInput:
    """Build product input with sensible defaults."""
    return ProductInput(
        name=name,
        category=category,
        price=Decimal(str(price)),
        inventory_status=inventory_status,
        **kwargs,
    )


@pytest.fixture
def create_product(service: ProductService):
    """Factory fixture that stores a product through the service."""

    async def _create(**kwargs) -> Product:
        return await service.create_product(product_input(**kwargs))

    return _create


# ============================================================================
# API Client
# ============================================================================


@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """Test client backed by a temporary database and image directory."""
    db_path = tmp_path / "api.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    api_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    factory = async_sessionmaker(api_engine, class_=AsyncSession, expire_on_commit=False)
    store = ImageStore(tmp_path / "api-images")
    store.ensure_directory()

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_image_store] = lambda: store

    yield TestClient(app)

    app.dependency_overrides.clear()
