# Routes package init
"""
Storefront Backend - API Routes Package
========================================

Route Inventory:
    - catalog.py: GET    /api/categories, /api/categories/{name}, /api/<alias>
    - orders.py:  GET    /api/orders
                  POST   /api/orders
                  DELETE /api/orders/{id}, /api/orders?username=U
                  POST   /api/hideOrder
    - health.py:  GET    /health

Routes stay thin: extract request data, call a service, pick the status code.
"""
