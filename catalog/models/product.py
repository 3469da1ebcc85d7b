"""
Catalog Backend: Product Document
=================================

What:  Shape of a product as stored in the `products` MongoDB collection.
How:   Documents are plain dicts; this module owns field names, defaults,
       and ObjectId parsing so the store and the schemas agree on them.

Document layout:
    {
        "_id":         ObjectId,   # store-assigned, immutable
        "name":        str,        # required on create
        "brand":       str,        # optional
        "size":        str,        # optional
        "description": str,        # optional
        "price":       float,      # defaults to 0
        "imageUrl":    str,        # optional
        "createdAt":   datetime,   # UTC, set once at creation
    }

Optional fields that were not submitted are not written at all.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId

# Fields a client may set on create or update
MUTABLE_FIELDS = ("name", "brand", "size", "description", "price", "imageUrl")

# Never accepted from a request body
IMMUTABLE_FIELDS = ("_id", "createdAt")

DEFAULT_PRICE = 0


def parse_object_id(value: str) -> Optional[ObjectId]:
    """
    Convert a path identifier into an ObjectId.

    Returns None for anything that is not a valid 24-hex ObjectId, which
    callers treat exactly like a missing record.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def to_millisecond_precision(moment: datetime) -> datetime:
    """Drop sub-millisecond digits; BSON dates carry milliseconds only."""
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def new_product_document(
    fields: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build a document ready for insertion.

    Submitted fields are copied verbatim (only MUTABLE_FIELDS, None values
    dropped); `price` falls back to 0 and `createdAt` to the current UTC time,
    truncated to the millisecond so the returned record matches what is stored.
    The `_id` is left for the store to assign.
    """
    document: Dict[str, Any] = {
        key: value
        for key, value in fields.items()
        if key in MUTABLE_FIELDS and value is not None
    }
    document.setdefault("price", DEFAULT_PRICE)
    document["createdAt"] = to_millisecond_precision(now or datetime.now(timezone.utc))
    return document


def update_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Filter an update payload down to the fields a client may overwrite."""
    return {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
