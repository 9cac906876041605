"""
DressStore Backend: Product Route Handlers
============================================

What:  CRUD endpoints under /product.
How:   Extract path/query/body, delegate to ProductService, return JSON.
       Errors are raised as application exceptions and turned into HTTP
       responses by the global handlers in main.py:
           NotFoundError    → 404 {"message": "Product not found"}
           PersistenceError → 500 {"error": "<failure text>"}

The `product_id` path parameter is accepted as a plain string so that a
malformed identifier reaches the service and fails as a persistence error
(500) rather than FastAPI's 422.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dressstore.database import get_db_session
from dressstore.schemas.product import (
    ErrorResponse,
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from dressstore.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/product", tags=["Products"])


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List products",
    description="Returns all products, or only those whose name matches `name` exactly.",
)
async def list_products(
    name: Optional[str] = Query(default=None, description="Exact, case-sensitive name filter"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products(db=db, name=name)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": MessageResponse},
        500: {"description": "Server error or malformed id", "model": ErrorResponse},
    },
    summary="Get a product by ID",
)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get_product(db=db, product_id=product_id)


@router.post(
    "",
    response_model=ProductResponse,
    responses={500: {"description": "Validation or server error", "model": ErrorResponse}},
    summary="Create a product",
    description="Stores a new product. `quantity` defaults to 1 when omitted.",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    """
    Create a product and return the stored record.

    Responds 200 (not 201): the stored record is the whole response.
    """
    logger.info("Creating product: name=%s", payload.name)
    return await product_service.create_product(db=db, payload=payload)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": MessageResponse},
        500: {"description": "Validation or server error", "model": ErrorResponse},
    },
    summary="Update a product",
    description="Applies only the fields present in the body.",
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.update_product(db=db, product_id=product_id, payload=payload)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Product not found", "model": MessageResponse},
        500: {"description": "Server error or malformed id", "model": ErrorResponse},
    },
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await product_service.delete_product(db=db, product_id=product_id)
