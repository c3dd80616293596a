"""
Product API - Application Package
==================================

Layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, headers, bodies
    ├─────────────────────────────────────┤
    │       Services (Persistence Map)    │  ← one driver call per operation
    ├─────────────────────────────────────┤
    │   Schemas & Document Mapping (Data) │  ← Pydantic wire model ↔ BSON
    ├─────────────────────────────────────┤
    │    Database (Collection Accessor)   │  ← shared AsyncMongoClient
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
