"""
Catalog Backend: Abstract Product Store Interface
=================================================

What:  Abstract base class defining the persistence contract for products.
How:   MongoProductStore implements it against MongoDB; the test suite
       provides an in-memory implementation. ProductService only ever sees
       this interface.

Contract summary:
    list_all()            → every document, newest createdAt first
    get_by_id(id)         → document or None
    insert(document)      → stored document including its assigned `_id`
    update_by_id(id, set) → post-update document or None
    delete_by_id(id)      → True if a document was removed
    ping()                → raises if the store is unreachable
    close()               → release connections

"Not found" is always signalled by None/False, never by an exception;
identifiers the store cannot parse count as not found. Any other failure
propagates as the driver's own exception and is mapped by ProductService.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional


class ProductStore(ABC):
    """Persistence capability set required by the product handlers."""

    @abstractmethod
    async def list_all(self) -> List[Dict[str, Any]]:
        """Return all product documents ordered by createdAt descending."""
        ...

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Return the document with this identifier, or None."""
        ...

    @abstractmethod
    async def insert(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Persist a new document.

        Args:
            document: Fields to store, without `_id`.

        Returns:
            The stored document, `_id` included.
        """
        ...

    @abstractmethod
    async def update_by_id(
        self, product_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Overwrite the given fields of one document; other fields stay as-is.

        Returns the document as it reads after the update, or None when no
        document matches. An empty `fields` mapping is a read.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, product_id: str) -> bool:
        """Remove one document. Returns False when nothing matched."""
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Raise DatabaseError if the store cannot be reached."""
        ...

    async def close(self) -> None:
        """Release any held connections. No-op by default."""
        return None
