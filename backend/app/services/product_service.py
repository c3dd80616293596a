"""
Product API - Product Service
==============================

What:  The five product operations expressed against the MongoDB collection.
How:   Each method receives the collection for the current request, awaits a
       single driver call, and returns a schema object or raises an
       application exception.
Who:   Called by the route handlers in app/routes/products.py.

ProductService is stateless; the collection is passed in per call, so one
module-level instance serves every request.

Error Handling:
    Driver errors (PyMongoError and subclasses) are not caught here. They
    propagate to the global handler registered in main.py, which answers
    with a generic 500. Nothing is retried.
"""

import logging
from typing import List, Optional

from pymongo.asynchronous.collection import AsyncCollection

from app.exceptions import DatabaseError, NotFoundError
from app.models.product import from_document, id_filter, parse_object_id, to_document
from app.schemas.product import Product

logger = logging.getLogger(__name__)


class ProductService:
    """
    Persistence mapping for products.

    Responsibilities:
        - list_products():   every document, store order
        - get_product():     first document with the given id, or None
        - create_product():  insert, store assigns the id
        - replace_product(): full-document replace by id
        - delete_product():  delete by id
    """

    async def list_products(self, collection: AsyncCollection) -> List[Product]:
        """Return all products in the order the store yields them."""
        documents = await collection.find({}).to_list()
        return [from_document(doc) for doc in documents]

    async def get_product(
        self,
        collection: AsyncCollection,
        product_id: str,
    ) -> Optional[Product]:
        """
        Look up one product.

        Returns None when nothing matches, including when product_id is not a
        valid ObjectId (no round-trip to the store in that case). Whether a
        miss becomes a 404 is the route's decision.
        """
        object_id = parse_object_id(product_id)
        if object_id is None:
            return None

        document = await collection.find_one(id_filter(object_id))
        if document is None:
            return None
        return from_document(document)

    async def create_product(self, collection: AsyncCollection, product: Product) -> Product:
        """
        Insert a new product.

        Any id on the incoming product is discarded; the returned copy carries
        the id the store assigned.
        """
        result = await collection.insert_one(to_document(product))
        created = product.model_copy(update={"id": str(result.inserted_id)})
        logger.info("Product created: %s", created.id)
        return created

    async def replace_product(
        self,
        collection: AsyncCollection,
        product_id: str,
        product: Product,
    ) -> None:
        """
        Overwrite the whole document identified by product_id.

        Fields absent from `product` are cleared, not merged. The id inside
        `product` plays no part in matching and the stored _id never changes.

        Raises:
            NotFoundError: no document matched product_id
            DatabaseError: the write was not acknowledged
        """
        object_id = parse_object_id(product_id)
        if object_id is None:
            raise NotFoundError(resource="product", resource_id=product_id)

        result = await collection.replace_one(id_filter(object_id), to_document(product))
        if not result.acknowledged:
            raise DatabaseError(context={"operation": "replace_one", "product_id": product_id})
        if result.matched_count == 0:
            raise NotFoundError(resource="product", resource_id=product_id)

        logger.info("Product replaced: %s", product_id)

    async def delete_product(self, collection: AsyncCollection, product_id: str) -> None:
        """
        Delete the product identified by product_id.

        Raises:
            NotFoundError: nothing was deleted
            DatabaseError: the write was not acknowledged
        """
        object_id = parse_object_id(product_id)
        if object_id is None:
            raise NotFoundError(resource="product", resource_id=product_id)

        result = await collection.delete_one(id_filter(object_id))
        if not result.acknowledged:
            raise DatabaseError(context={"operation": "delete_one", "product_id": product_id})
        if result.deleted_count == 0:
            raise NotFoundError(resource="product", resource_id=product_id)

        logger.info("Product deleted: %s", product_id)


product_service = ProductService()
