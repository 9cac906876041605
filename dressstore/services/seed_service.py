"""
DressStore Backend: Seed Routine
==================================

What:  Inserts the sample catalogue (six products) at startup.
When:  Once per process, from the lifespan handler, after the database
       connection is established.

Behavior:
    only_if_empty=True   → insert only when the products table is empty
                           (restarts do not duplicate the catalogue)
    only_if_empty=False  → insert unconditionally on every start

Each distinct category label in the seed data is also registered in the
`categories` table if no category with that name exists yet.

Failures are logged and swallowed: a broken seed must not stop the server.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import func, select

from dressstore.database import Database
from dressstore.models.category import Category
from dressstore.models.product import Product

logger = logging.getLogger(__name__)


SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Jacket",
        "description": "Leather Jacket with Fur",
        "price": 100,
        "quantity": 10,
        "category": "Men",
    },
    {
        "name": "Sweater",
        "description": "Warm wool sweater",
        "price": 50,
        "quantity": 20,
        "category": "Women",
    },
    {
        "name": "Jeans",
        "description": "Blue denim jeans",
        "price": 40,
        "quantity": 50,
        "category": "Men",
    },
    {
        "name": "Dress",
        "description": "Summer floral dress",
        "price": 80,
        "quantity": 15,
        "category": "Women",
    },
    {
        "name": "Shoes",
        "description": "Running shoes",
        "price": 60,
        "quantity": 25,
        "category": "Unisex",
    },
    {
        "name": "Hat",
        "description": "Baseball cap",
        "price": 20,
        "quantity": 30,
        "category": "Men",
    },
]


async def seed_products(database: Database, only_if_empty: bool = True) -> int:
    """
    Insert SEED_PRODUCTS into the store.

    Returns:
        Number of products inserted (0 when skipped or on failure).
    """
    try:
        async with database.session_factory() as session:
            if only_if_empty:
                existing = await session.scalar(select(func.count(Product.id)))
                if existing:
                    logger.info("Products already present (%d), skipping seed", existing)
                    return 0

            labels = sorted({p["category"] for p in SEED_PRODUCTS if p.get("category")})
            known = set(
                (await session.scalars(
                    select(Category.name).where(Category.name.in_(labels))
                )).all()
            )
            for label in labels:
                if label not in known:
                    session.add(Category(name=label))

            for data in SEED_PRODUCTS:
                session.add(Product(**data))
            await session.commit()

        logger.info("Products seeded successfully! (%d inserted)", len(SEED_PRODUCTS))
        return len(SEED_PRODUCTS)

    except Exception as e:
        logger.error("Error seeding products: %s", str(e))
        return 0
