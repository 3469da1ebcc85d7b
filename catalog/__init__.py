"""
Catalog Backend: Application Package
====================================

What: Product catalog API (MongoDB persistence, Cloudinary image hosting).
How:  Layered the same way throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, error mapping
    ├─────────────────────────────────────┤
    │     Schemas & Documents (Data)      │  ← Pydantic + BSON documents
    ├─────────────────────────────────────┤
    │   Store / Media host (External)     │  ← MongoDB, Cloudinary
    └─────────────────────────────────────┘

    Routes never talk to MongoDB or Cloudinary directly; they go through
    the ProductStore and MediaHost interfaces so both can be replaced in tests.
"""

__version__ = "1.0.0"
