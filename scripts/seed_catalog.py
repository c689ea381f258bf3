#!/usr/bin/env python3
"""Seed product catalog script.

Creates the schema and inserts a sample set of products through the
product service, so every product receives a generated code.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --count 40
    python scripts/seed_catalog.py --archive 3
    python scripts/seed_catalog.py --reset
"""

import argparse
import asyncio
import random
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.catalog.models import InventoryStatus
from app.catalog.service import ProductInput, ProductService
from app.infrastructure.database import async_session_factory, create_tables, drop_tables, engine
from app.infrastructure.image_store import get_image_store

CATEGORIES = {
    "Accessories": ["Bamboo Watch", "Leather Wallet", "Silver Ring", "Sunglasses"],
    "Clothing": ["Blue T-Shirt", "Wool Sweater", "Denim Jacket", "Running Shorts"],
    "Electronics": ["Bluetooth Speaker", "Wireless Mouse", "USB-C Hub", "Headphones"],
    "Fitness": ["Yoga Mat", "Jump Rope", "Kettlebell", "Water Bottle"],
}


def build_products(count: int, seed: int) -> list[ProductInput]:
    """Build deterministic sample products.

    Args:
        count: Number of products.
        seed: Random seed.

    Returns:
        Product inputs.
    """
    rng = random.Random(seed)
    products = []
    for i in range(count):
        category = rng.choice(sorted(CATEGORIES))
        name = rng.choice(CATEGORIES[category])
        quantity = rng.randint(0, 50)
        if quantity == 0:
            status = InventoryStatus.OUTOFSTOCK
        elif quantity < 10:
            status = InventoryStatus.LOWSTOCK
        else:
            status = InventoryStatus.INSTOCK

        products.append(
            ProductInput(
                name=f"{name} #{i + 1}",
                category=category,
                price=Decimal(rng.randint(500, 15000)) / 100,
                description=f"Sample {name.lower()}",
                quantity=quantity,
                rating=Decimal(rng.randint(0, 50)) / 10,
                inventory_status=status,
            )
        )
    return products


async def seed(count: int, archive: int, seed_value: int) -> dict[str, int]:
    """Insert sample products.

    Args:
        count: Number of products to create.
        archive: Number of created products to archive.
        seed_value: Random seed.

    Returns:
        Seeding result with counts.
    """
    async with async_session_factory() as session:
        service = ProductService(session, get_image_store())
        created = []
        for data in build_products(count, seed_value):
            created.append(await service.create_product(data))

        for product in created[:archive]:
            await service.archive_product(product.id)

    return {"created": len(created), "archived": min(archive, len(created))}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with sample products",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=20,
        help="Number of products to create (default: 20)",
    )
    parser.add_argument(
        "--archive",
        type=int,
        default=0,
        help="Archive the first N created products (default: 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for deterministic data (default: 42)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing products before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)

    if args.reset:
        print("Dropping existing tables...")
        await drop_tables()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    try:
        result = await seed(args.count, args.archive, args.seed)
    finally:
        await engine.dispose()

    print(f"  ✓ Created: {result['created']} products")
    print(f"  ✓ Archived: {result['archived']} products")
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
