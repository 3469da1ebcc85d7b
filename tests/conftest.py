"""
Catalog Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app is built with `create_app()` around an in-memory ProductStore
       and a fake MediaHost, so no MongoDB or Cloudinary account is needed.
       Requests go through HTTPX's ASGITransport (no server, no lifespan).

Fixture Hierarchy (all function-scoped):
    ├── test_settings:  Settings with known admin secrets and a tmp staging dir
    ├── store:          InMemoryProductStore
    ├── media_host:     FakeMediaHost (records uploads, can be told to fail)
    ├── app:            FastAPI app wired to the three above
    ├── test_client:    HTTPX AsyncClient for endpoint tests
    └── admin_headers:  {"x-admin-token": <token>}
"""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

# Keep module-level app construction away from the working directory
os.environ.setdefault("UPLOAD_TMP_DIR", tempfile.mkdtemp(prefix="catalog_test_"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

import bson
import pytest
import pytest_asyncio
from bson import ObjectId
from bson.codec_options import CodecOptions
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ServerSelectionTimeoutError

from catalog.config import Settings
from catalog.exceptions import DatabaseError
from catalog.main import create_app
from catalog.models.product import parse_object_id
from catalog.services.media_base import MediaHost, UploadResult
from catalog.services.store_base import ProductStore

ADMIN_PASSWORD = "correct horse battery staple"
ADMIN_TOKEN = "test-admin-token"

SERVER_CODEC_OPTIONS = CodecOptions(tz_aware=True)

# Sorts below any real timestamp, as a missing field does in MongoDB
NO_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


def as_stored(document: Mapping[str, Any]) -> Dict[str, Any]:
    """What MongoDB keeps of `document`: BSON types, millisecond UTC dates."""
    return bson.decode(bson.encode(dict(document)), codec_options=SERVER_CODEC_OPTIONS)


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

class InMemoryProductStore(ProductStore):
    """
    ProductStore over a dict, with MongoDB's id and ordering behaviour.

    Set `fail = True` to make every call raise a driver error, as an
    unreachable server would.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.fail = False
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            raise ServerSelectionTimeoutError("No servers available")

    def __len__(self) -> int:
        return len(self.documents)

    async def list_all(self) -> List[Dict[str, Any]]:
        self._check()
        return sorted(
            (dict(doc) for doc in self.documents.values()),
            key=lambda doc: (doc.get("createdAt") or NO_TIMESTAMP, doc["_id"]),
            reverse=True,
        )

    async def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        self._check()
        oid = parse_object_id(product_id)
        if oid is None or oid not in self.documents:
            return None
        return dict(self.documents[oid])

    async def insert(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        self._check()
        # Like insert_one: the caller keeps its own values, the server keeps BSON
        inserted = dict(document)
        inserted["_id"] = ObjectId()
        self.documents[inserted["_id"]] = as_stored(inserted)
        return inserted

    async def update_by_id(
        self, product_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        self._check()
        oid = parse_object_id(product_id)
        if oid is None or oid not in self.documents:
            return None
        self.documents[oid] = as_stored({**self.documents[oid], **fields})
        return dict(self.documents[oid])

    async def delete_by_id(self, product_id: str) -> bool:
        self._check()
        oid = parse_object_id(product_id)
        if oid is None or oid not in self.documents:
            return False
        del self.documents[oid]
        return True

    async def ping(self) -> None:
        if self.fail:
            raise DatabaseError(context={"error": "No servers available"})

    async def close(self) -> None:
        self.closed = True


class FakeMediaHost(MediaHost):
    """
    Media host double.

    Records, for each upload, the folder, whether the staged file existed
    at call time and its bytes. `error` (an exception instance) is raised
    instead of uploading when set.
    """

    def __init__(self):
        self.uploads: List[Dict[str, Any]] = []
        self.error: Optional[Exception] = None
        self.healthy = True

    async def upload(self, file_path: str, folder: str) -> UploadResult:
        path = Path(file_path)
        self.uploads.append(
            {
                "path": file_path,
                "folder": folder,
                "existed": path.exists(),
                "content": path.read_bytes() if path.exists() else None,
            }
        )
        if self.error is not None:
            raise self.error
        public_id = f"{folder}/{path.stem}"
        return UploadResult(
            url=f"https://res.cloudinary.com/demo/image/upload/v1/{public_id}{path.suffix}",
            public_id=public_id,
        )

    async def health_check(self) -> bool:
        return self.healthy


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def staging_dir(tmp_path) -> Path:
    return tmp_path / "staging"


@pytest.fixture
def test_settings(staging_dir) -> Settings:
    return Settings(
        mongo_uri="",
        admin_password=ADMIN_PASSWORD,
        admin_token=ADMIN_TOKEN,
        upload_tmp_dir=str(staging_dir),
        log_level="WARNING",
    )


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore()


@pytest.fixture
def media_host() -> FakeMediaHost:
    return FakeMediaHost()


@pytest.fixture
def app(test_settings, store, media_host):
    return create_app(settings=test_settings, store=store, media_host=media_host)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/products")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_token() -> str:
    return ADMIN_TOKEN


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def admin_headers(admin_token) -> Dict[str, str]:
    return {"x-admin-token": admin_token}


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Smallest valid JPEG: SOI + JFIF header + EOI."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xd9"
    )


@pytest.fixture
def sample_product() -> Dict[str, Any]:
    return {
        "name": "Lavender Soap",
        "brand": "Jubilate",
        "size": "100g",
        "description": "Cold-process soap with lavender oil",
        "price": 4.5,
        "imageUrl": "https://res.cloudinary.com/demo/image/upload/v1/jubilate_products/soap.jpg",
    }

