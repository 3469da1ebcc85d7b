# Routes package init
"""
Catalog Backend: API Routes Package
===================================

Route Inventory:
    - auth.py:      POST   /api/login
    - products.py:  GET    /api/products
                    GET    /api/products/{id}
                    POST   /api/products          (admin)
                    PUT    /api/products/{id}     (admin)
                    DELETE /api/products/{id}     (admin)
    - upload.py:    POST   /api/upload            (admin)
    - health.py:    GET    /health

Routes stay thin: pull data out of the request, call a service, return the
model. Status codes for failures come from the global exception handlers.
"""
