"""
DressStore Backend: Product Service
=====================================

What:  The five product operations: list, get, create, update, delete.
Why:   Keeps persistence calls and outcome mapping out of the route handlers.
How:   Each method performs one persistence operation on the session it is
       given and returns a response model, or raises:
         - NotFoundError     when no product has the identifier
         - PersistenceError  for anything else (malformed id, constraint
                             violation, lost connection, ...)
Who:   Called by routes/products.py.

Design Decision:
    ProductService is stateless. It receives the db session for each call,
    so tests can pass a mock session and no state is shared across requests.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dressstore.exceptions import DressStoreError, NotFoundError, PersistenceError
from dressstore.models.product import Product
from dressstore.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger(__name__)


def parse_product_id(product_id: str) -> uuid.UUID:
    """
    Convert a path identifier to a UUID.

    A malformed identifier is a persistence failure (500), not a missing
    record (404).
    """
    try:
        return uuid.UUID(str(product_id))
    except ValueError as e:
        raise PersistenceError(
            message=f"Invalid product id '{product_id}': {e}",
            context={"product_id": product_id},
        ) from e


class ProductService:
    """
    Business logic layer for product operations.

    Error Handling Strategy:
        Application exceptions raised inside a method propagate unchanged.
        Every other exception is wrapped in PersistenceError carrying the
        original message, which the global handler returns as {"error": ...}.
    """

    async def list_products(
        self,
        db: AsyncSession,
        name: Optional[str] = None,
    ) -> List[ProductResponse]:
        """
        List all products, or only those whose name equals `name` exactly.

        The comparison is case-sensitive. Results are in insertion order.
        """
        try:
            query = select(Product)
            if name:
                query = query.where(Product.name == name)
            query = query.order_by(Product.created_at)

            result = await db.execute(query)
            products = result.scalars().all()
            return [ProductResponse.model_validate(p) for p in products]

        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise PersistenceError(
                message=str(e),
                context={"name": name, "error_type": type(e).__name__},
            ) from e

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductResponse:
        """
        Retrieve a single product by identifier.

        Raises:
            NotFoundError:    No product has this identifier (→ 404)
            PersistenceError: Malformed identifier or query failure (→ 500)
        """
        key = parse_product_id(product_id)
        try:
            product = await db.get(Product, key)
            if product is None:
                raise NotFoundError(resource="Product", resource_id=str(key))
            return ProductResponse.model_validate(product)

        except DressStoreError:
            raise
        except Exception as e:
            logger.error("Database error fetching product %s: %s", key, str(e))
            raise PersistenceError(
                message=str(e),
                context={"product_id": str(key), "error_type": type(e).__name__},
            ) from e

    async def create_product(self, db: AsyncSession, payload: ProductCreate) -> ProductResponse:
        """
        Persist a new product.

        The identifier and creation time are assigned on insert; quantity
        defaults to 1 when the payload leaves it out.
        """
        try:
            product = Product(**payload.model_dump())
            db.add(product)
            await db.commit()
            logger.info("Product created: %s (%s)", product.id, product.name)
            return ProductResponse.model_validate(product)

        except Exception as e:
            logger.error("Database error creating product: %s", str(e))
            raise PersistenceError(
                message=str(e),
                context={"error_type": type(e).__name__},
            ) from e

    async def update_product(
        self,
        db: AsyncSession,
        product_id: str,
        payload: ProductUpdate,
    ) -> ProductResponse:
        """
        Apply the fields present in `payload` to an existing product.

        Fields absent from the request body are left unchanged.
        """
        key = parse_product_id(product_id)
        changes = payload.model_dump(exclude_unset=True)
        try:
            product = await db.get(Product, key)
            if product is None:
                raise NotFoundError(resource="Product", resource_id=str(key))

            for field, value in changes.items():
                setattr(product, field, value)
            await db.commit()
            logger.info("Product %s updated: %s", key, sorted(changes))
            return ProductResponse.model_validate(product)

        except DressStoreError:
            raise
        except Exception as e:
            logger.error("Database error updating product %s: %s", key, str(e))
            raise PersistenceError(
                message=str(e),
                context={"product_id": str(key), "error_type": type(e).__name__},
            ) from e

    async def delete_product(self, db: AsyncSession, product_id: str) -> MessageResponse:
        """Remove a product and return a confirmation message."""
        key = parse_product_id(product_id)
        try:
            product = await db.get(Product, key)
            if product is None:
                raise NotFoundError(resource="Product", resource_id=str(key))

            await db.delete(product)
            await db.commit()
            logger.info("Product %s deleted", key)
            return MessageResponse(message="Product deleted")

        except DressStoreError:
            raise
        except Exception as e:
            logger.error("Database error deleting product %s: %s", key, str(e))
            raise PersistenceError(
                message=str(e),
                context={"product_id": str(key), "error_type": type(e).__name__},
            ) from e


# Stateless; one shared instance
product_service = ProductService()
