# Routes package init
"""
Product API - Routes Package
=============================

Route Inventory:
    - products.py: GET/POST /api/Product, GET/PUT/DELETE /api/Product/{id}
    - health.py:   GET /health

Routes stay thin: bind the request, call the service, shape the response.
"""
