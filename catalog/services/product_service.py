"""
Catalog Backend: Product Service (Business Logic)
=================================================

What:  The five product operations: list, get, create, update, delete.
How:   Validates the one rule the API enforces (a non-empty name on create),
       delegates to a ProductStore, converts documents into response models,
       and translates store outcomes into application exceptions:

           store returned None/False  → NotFoundError  (404)
           store raised anything else → DatabaseError  (500)

Who:   Called by the product routes; receives the store for each call.

Design Decision:
    ProductService is stateless; the store is passed in per call so a test
    can hand it any ProductStore implementation.

Update semantics:
    Create-time validation is not reapplied on update. A client may set
    `name` to "" through PUT; the store accepts it as-is.
"""

import logging
from typing import List

from catalog.exceptions import DatabaseError, NotFoundError, ValidationError
from catalog.models.product import new_product_document, update_fields
from catalog.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from catalog.services.store_base import ProductStore

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic layer for product operations.

    Error Handling Strategy:
        Anything raised by the store is logged with its type and wrapped in
        DatabaseError so the client only ever sees "Server error".
    """

    async def list_products(self, store: ProductStore) -> List[ProductResponse]:
        """Return every product, newest first. An empty store gives []."""
        try:
            documents = await store.list_all()
        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return [ProductResponse.from_document(doc) for doc in documents]

    async def get_product(self, store: ProductStore, product_id: str) -> ProductResponse:
        """
        Retrieve a single product.

        Raises:
            NotFoundError: unknown or malformed identifier (→ 404)
            DatabaseError: store failure (→ 500)
        """
        try:
            document = await store.get_by_id(product_id)
        except Exception as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(context={"product_id": product_id})

        if document is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return ProductResponse.from_document(document)

    async def create_product(
        self, store: ProductStore, payload: ProductCreate
    ) -> ProductResponse:
        """
        Persist a new product.

        `name` must be present and non-empty; nothing is written otherwise.
        `createdAt` is set here, `_id` by the store, `price` defaults to 0.

        Raises:
            ValidationError: missing name (→ 400)
            DatabaseError: store failure (→ 500)
        """
        if not payload.name:
            raise ValidationError(message="Name is required", field="name")

        document = new_product_document(payload.model_dump(by_alias=True))

        try:
            stored = await store.insert(document)
        except Exception as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Product created: %s (%s)", stored["_id"], stored.get("name"))
        return ProductResponse.from_document(stored)

    async def update_product(
        self, store: ProductStore, product_id: str, payload: ProductUpdate
    ) -> ProductResponse:
        """
        Overwrite the fields present in the request; leave the rest alone.

        Raises:
            NotFoundError: unknown or malformed identifier (→ 404)
            DatabaseError: store failure (→ 500)
        """
        fields = update_fields(payload.model_dump(by_alias=True, exclude_unset=True))

        try:
            document = await store.update_by_id(product_id, fields)
        except Exception as e:
            logger.error("Database error updating product %s: %s", product_id, str(e))
            raise DatabaseError(context={"product_id": product_id})

        if document is None:
            raise NotFoundError(resource="product", resource_id=product_id)

        logger.info("Product updated: %s fields=%s", product_id, sorted(fields))
        return ProductResponse.from_document(document)

    async def delete_product(self, store: ProductStore, product_id: str) -> None:
        """
        Remove a product.

        Raises:
            NotFoundError: unknown or malformed identifier (→ 404)
            DatabaseError: store failure (→ 500)
        """
        try:
            removed = await store.delete_by_id(product_id)
        except Exception as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e))
            raise DatabaseError(context={"product_id": product_id})

        if not removed:
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product deleted: %s", product_id)


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
