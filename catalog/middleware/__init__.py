# Middleware package init
"""
Catalog Backend: Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every handler log
    carry the same ID; the ID is also returned in `X-Request-ID`.
"""
