"""
DressStore Backend: Seed Routine Tests
========================================

What:  Tests for seed_products against a real SQLite store.

What we test:
    ✅ Empty store receives the six sample products
    ✅ only_if_empty skips a store that already has products
    ✅ only_if_empty=False duplicates the catalogue (original behavior)
    ✅ Category labels are registered once
    ✅ Failures are logged, not raised
"""

import logging

import pytest
from sqlalchemy import func, select

from dressstore.database import Database
from dressstore.models.category import Category
from dressstore.models.product import Product
from dressstore.services.seed_service import SEED_PRODUCTS, seed_products


async def count_products(database):
    async with database.session_factory() as session:
        return await session.scalar(select(func.count(Product.id)))


async def category_names(database):
    async with database.session_factory() as session:
        return sorted((await session.scalars(select(Category.name))).all())


class TestSeedProducts:

    @pytest.mark.asyncio
    async def test_seeds_empty_store(self, database):
        inserted = await seed_products(database)

        assert inserted == 6
        assert await count_products(database) == 6

        async with database.session_factory() as session:
            jacket = (await session.scalars(
                select(Product).where(Product.name == "Jacket")
            )).one()
        assert jacket.description == "Leather Jacket with Fur"
        assert jacket.price == 100
        assert jacket.quantity == 10
        assert jacket.category == "Men"

    @pytest.mark.asyncio
    async def test_registers_categories(self, database):
        await seed_products(database)

        assert await category_names(database) == ["Men", "Unisex", "Women"]

    @pytest.mark.asyncio
    async def test_skips_when_products_exist(self, database):
        await seed_products(database)

        inserted = await seed_products(database, only_if_empty=True)

        assert inserted == 0
        assert await count_products(database) == 6

    @pytest.mark.asyncio
    async def test_unconditional_seed_duplicates(self, database):
        await seed_products(database, only_if_empty=False)
        await seed_products(database, only_if_empty=False)

        assert await count_products(database) == 2 * len(SEED_PRODUCTS)
        assert await category_names(database) == ["Men", "Unisex", "Women"]

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, tmp_path, caplog):
        # Tables never created: every statement fails
        database = Database(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        try:
            with caplog.at_level(logging.ERROR, logger="dressstore.services.seed_service"):
                inserted = await seed_products(database)
        finally:
            await database.dispose()

        assert inserted == 0
        assert "Error seeding products" in caplog.text
