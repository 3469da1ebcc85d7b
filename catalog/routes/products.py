"""
Catalog Backend: Product Route Handlers
=======================================

What:  GET/POST /api/products and GET/PUT/DELETE /api/products/{id}.
How:   Extract path/body, delegate to ProductService, return the model.
       Reads are public; every mutation depends on `require_admin`.
Who:   Called by the storefront (reads) and the admin UI (writes).

Errors are raised as application exceptions and rendered by the global
handlers in main.py: 400 missing name, 401 bad token, 404 unknown id,
500 store failure.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from catalog.dependencies import get_product_store, require_admin
from catalog.schemas.product import (
    AckResponse,
    ErrorResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from catalog.services.product_service import product_service
from catalog.services.store_base import ProductStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])

NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}
UNAUTHORIZED = {401: {"description": "Missing or wrong admin token", "model": ErrorResponse}}


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={**SERVER_ERROR},
    summary="List all products, newest first",
)
async def list_products(
    store: ProductStore = Depends(get_product_store),
) -> List[ProductResponse]:
    return await product_service.list_products(store)


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a single product by ID",
)
async def get_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    return await product_service.get_product(store, product_id)


@router.post(
    "/products",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"description": "Name is required", "model": ErrorResponse},
        **UNAUTHORIZED,
        **SERVER_ERROR,
    },
    summary="Create a product (admin)",
)
async def create_product(
    payload: Optional[ProductCreate] = Body(default=None),
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    """
    Create a product.

    A missing body is treated like a body without `name` (400).
    """
    return await product_service.create_product(store, payload or ProductCreate())


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
    responses={**UNAUTHORIZED, **NOT_FOUND, **SERVER_ERROR},
    summary="Update fields of a product (admin)",
)
async def update_product(
    product_id: str,
    payload: Optional[ProductUpdate] = Body(default=None),
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    """
    Overwrite the supplied fields only; omitted fields keep their values.
    """
    return await product_service.update_product(
        store, product_id, payload or ProductUpdate()
    )


@router.delete(
    "/products/{product_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_admin)],
    responses={**UNAUTHORIZED, **NOT_FOUND, **SERVER_ERROR},
    summary="Delete a product (admin)",
)
async def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
) -> AckResponse:
    await product_service.delete_product(store, product_id)
    return AckResponse()
