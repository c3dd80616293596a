# Services package init
"""
Product API - Services Layer
=============================

Service Inventory:
    - ProductService: list, get, create, replace and delete against the
      product collection passed in by the route.
"""
