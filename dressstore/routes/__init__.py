# Routes package init
"""
DressStore Backend: API Routes Package
========================================

Route Inventory:
    - health.py:    GET    /                 (welcome text)
                    GET    /health           (service health check)
    - products.py:  GET    /product          (list, optional ?name=)
                    GET    /product/{id}     (get one)
                    POST   /product          (create)
                    PUT    /product/{id}     (partial update)
                    DELETE /product/{id}     (delete)

Routes stay thin: extract request data, call ProductService, return the
response model. Status codes for failures come from the global exception
handlers in main.py.
"""
