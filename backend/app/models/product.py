"""
Product API - Product Document Mapping
=======================================

What:  Maps Product schemas to and from the BSON documents in MongoDB.
Who:   Used by ProductService for every read and write.

Stored document layout:
    {
        "_id":         ObjectId,          # store-assigned primary key
        "Name":        str | None,
        "Description": str | None,
        "Quantity":    int
    }

The capitalised element names are the collection's existing layout and must
be kept so documents written by other clients stay readable.
"""

from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId

from app.schemas.product import Product

# ── Element Names ─────────────────────────────────────────────────────────
ID_FIELD = "_id"
NAME_FIELD = "Name"
DESCRIPTION_FIELD = "Description"
QUANTITY_FIELD = "Quantity"


def parse_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """
    Convert a wire id into an ObjectId.

    Returns None for anything that is not a 24-character hex string; such an
    id cannot match a stored document.
    """
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def id_filter(object_id: ObjectId) -> Dict[str, Any]:
    """Equality filter on the primary key."""
    return {ID_FIELD: object_id}


def to_document(product: Product) -> Dict[str, Any]:
    """
    Build the stored document for a product.

    Never includes _id: on insert the store assigns it, on replace the filter
    decides which document is overwritten and its _id is kept.
    """
    return {
        NAME_FIELD: product.name,
        DESCRIPTION_FIELD: product.description,
        QUANTITY_FIELD: product.quantity,
    }


def from_document(document: Mapping[str, Any]) -> Product:
    """
    Build a Product from a stored document. Missing elements read as null (Quantity as 0).

    Elements of the wrong type (a fractional or out-of-range Quantity, a
    non-string Name) raise pydantic's ValidationError. The document is not
    coerced, and the request that read it fails with a 500.
    """
    raw_id = document.get(ID_FIELD)
    return Product(
        id=str(raw_id) if raw_id is not None else None,
        name=document.get(NAME_FIELD),
        description=document.get(DESCRIPTION_FIELD),
        quantity=document.get(QUANTITY_FIELD) or 0,
    )
