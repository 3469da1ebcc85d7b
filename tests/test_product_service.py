"""
Catalog Backend: Product Service Unit Tests
===========================================

What:  Tests for ProductService business logic.
How:   Uses a mock ProductStore (AsyncMock per method); no database.

What we test:
    ✅ Create validates the name before touching the store
    ✅ Create fills defaults and ignores immutable fields
    ✅ Update passes only the fields that were sent
    ✅ None/False from the store → NotFoundError
    ✅ Store exceptions → DatabaseError
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect

from catalog.exceptions import DatabaseError, NotFoundError, ValidationError
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.services.product_service import ProductService

CREATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_document(**fields):
    document = {"_id": ObjectId(), "name": "Soap", "price": 0, "createdAt": CREATED_AT}
    document.update(fields)
    return document


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.list_all = AsyncMock(return_value=[])
    store.get_by_id = AsyncMock(return_value=None)
    store.insert = AsyncMock(side_effect=lambda doc: {**doc, "_id": ObjectId()})
    store.update_by_id = AsyncMock(return_value=None)
    store.delete_by_id = AsyncMock(return_value=False)
    return store


class TestCreateProduct:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_missing_name_never_reaches_store(self, mock_store):
        with pytest.raises(ValidationError, match="Name is required"):
            await self.service.create_product(mock_store, ProductCreate(brand="X"))
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, mock_store):
        with pytest.raises(ValidationError):
            await self.service.create_product(mock_store, ProductCreate(name=""))

    @pytest.mark.asyncio
    async def test_document_passed_to_store(self, mock_store):
        payload = ProductCreate(name="Soap", brand="Jubilate", imageUrl="https://x/y.jpg")

        result = await self.service.create_product(mock_store, payload)

        document = mock_store.insert.await_args.args[0]
        assert document["name"] == "Soap"
        assert document["brand"] == "Jubilate"
        assert document["imageUrl"] == "https://x/y.jpg"
        assert document["price"] == 0
        assert document["createdAt"].tzinfo is not None
        assert "_id" not in document
        assert "size" not in document
        assert result.image_url == "https://x/y.jpg"
        assert result.price == 0

    @pytest.mark.asyncio
    async def test_timestamp_has_millisecond_precision(self, mock_store):
        await self.service.create_product(mock_store, ProductCreate(name="Soap"))

        created_at = mock_store.insert.await_args.args[0]["createdAt"]
        assert created_at.microsecond % 1000 == 0

    @pytest.mark.asyncio
    async def test_store_failure(self, mock_store):
        mock_store.insert = AsyncMock(side_effect=AutoReconnect("connection lost"))
        with pytest.raises(DatabaseError):
            await self.service.create_product(mock_store, ProductCreate(name="Soap"))


class TestReadProducts:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_list_preserves_store_order(self, mock_store):
        newer = make_document(name="Newer")
        older = make_document(name="Older")
        mock_store.list_all = AsyncMock(return_value=[newer, older])

        result = await self.service.list_products(mock_store)

        assert [p.name for p in result] == ["Newer", "Older"]
        assert result[0].id == str(newer["_id"])

    @pytest.mark.asyncio
    async def test_list_store_failure(self, mock_store):
        mock_store.list_all = AsyncMock(side_effect=AutoReconnect("down"))
        with pytest.raises(DatabaseError):
            await self.service.list_products(mock_store)

    @pytest.mark.asyncio
    async def test_get_found(self, mock_store):
        document = make_document(size="250ml")
        mock_store.get_by_id = AsyncMock(return_value=document)

        result = await self.service.get_product(mock_store, str(document["_id"]))

        assert result.size == "250ml"
        assert result.created_at == CREATED_AT

    @pytest.mark.asyncio
    async def test_sparse_document_gets_defaults(self, mock_store):
        mock_store.get_by_id = AsyncMock(return_value={"_id": ObjectId(), "name": "Imported"})

        result = await self.service.get_product(mock_store, "id")

        assert result.price == 0
        assert result.created_at is None

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_store):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_product(mock_store, "missing")
        assert exc_info.value.message == "Not found"
        assert exc_info.value.context["resource_id"] == "missing"


class TestUpdateProduct:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_only_sent_fields_forwarded(self, mock_store):
        document = make_document(price=5)
        mock_store.update_by_id = AsyncMock(return_value=document)

        await self.service.update_product(
            mock_store, str(document["_id"]), ProductUpdate(price=5)
        )

        fields = mock_store.update_by_id.await_args.args[1]
        assert fields == {"price": 5}

    @pytest.mark.asyncio
    async def test_image_url_uses_stored_name(self, mock_store):
        mock_store.update_by_id = AsyncMock(return_value=make_document())

        await self.service.update_product(
            mock_store, "id", ProductUpdate(image_url="https://x/new.png")
        )

        assert mock_store.update_by_id.await_args.args[1] == {"imageUrl": "https://x/new.png"}

    @pytest.mark.asyncio
    async def test_explicit_null_is_forwarded(self, mock_store):
        mock_store.update_by_id = AsyncMock(return_value=make_document(brand=None))

        await self.service.update_product(mock_store, "id", ProductUpdate(brand=None))

        assert mock_store.update_by_id.await_args.args[1] == {"brand": None}

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_store):
        with pytest.raises(NotFoundError):
            await self.service.update_product(mock_store, "missing", ProductUpdate(name="X"))

    @pytest.mark.asyncio
    async def test_update_store_failure(self, mock_store):
        mock_store.update_by_id = AsyncMock(side_effect=AutoReconnect("down"))
        with pytest.raises(DatabaseError):
            await self.service.update_product(mock_store, "id", ProductUpdate(name="X"))


class TestDeleteProduct:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_delete_found(self, mock_store):
        mock_store.delete_by_id = AsyncMock(return_value=True)
        await self.service.delete_product(mock_store, "id")
        mock_store.delete_by_id.assert_awaited_once_with("id")

    @pytest.mark.asyncio
    async def test_delete_not_found(self, mock_store):
        with pytest.raises(NotFoundError):
            await self.service.delete_product(mock_store, "id")

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, mock_store):
        mock_store.delete_by_id = AsyncMock(side_effect=AutoReconnect("down"))
        with pytest.raises(DatabaseError):
            await self.service.delete_product(mock_store, "id")
