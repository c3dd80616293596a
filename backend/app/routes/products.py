"""
Product API - Product Route Handlers
=====================================

What:  The CRUD surface under /api/Product.
How:   Each handler gets the product collection through Depends, delegates to
       ProductService, and maps the outcome to a status code and body.
       Application exceptions (NotFoundError, DatabaseError) and driver
       errors are turned into responses by the handlers in main.py.

Route Inventory:
    GET    /api/Product/        GetAllProducts   200 [Product]
    GET    /api/Product/{id}    GetProductById   200 Product | null (404 when strict)
    POST   /api/Product/        CreateProduct    201 Product + Location
    PUT    /api/Product/{id}    UpdateProduct    200 empty | 404
    DELETE /api/Product/{id}    DeleteProduct    200 empty | 404

The collection routes answer both with and without the trailing slash.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from pymongo.asynchronous.collection import AsyncCollection

from app.config import settings
from app.database import get_product_collection
from app.exceptions import NotFoundError
from app.schemas.product import ErrorResponse, Product
from app.services.product_service import product_service

logger = logging.getLogger(__name__)

PRODUCT_ROUTE_PREFIX = "/api/Product"

router = APIRouter(prefix=PRODUCT_ROUTE_PREFIX, tags=["Product"])

_server_error = {500: {"description": "Storage error", "model": ErrorResponse}}
_not_found = {404: {"description": "Product not found", "model": ErrorResponse}}


@router.get(
    "/",
    response_model=List[Product],
    operation_id="GetAllProducts",
    summary="List all products",
    responses=_server_error,
)
@router.get("", response_model=List[Product], include_in_schema=False)
async def list_products(
    products: AsyncCollection = Depends(get_product_collection),
) -> List[Product]:
    """Every stored product, in store order. No paging, no filtering."""
    return await product_service.list_products(products)


@router.get(
    "/{id}",
    response_model=Optional[Product],
    operation_id="GetProductById",
    summary="Get a product by id",
    responses={**_not_found, **_server_error},
)
async def get_product(
    id: str,
    products: AsyncCollection = Depends(get_product_collection),
) -> Optional[Product]:
    """
    Return the product with this id.

    An unknown id yields 200 with a null body unless STRICT_NOT_FOUND is set,
    in which case it yields 404.
    """
    product = await product_service.get_product(products, id)
    if product is None and settings.strict_not_found:
        raise NotFoundError(resource="product", resource_id=id)
    return product


@router.post(
    "/",
    status_code=201,
    response_model=Product,
    operation_id="CreateProduct",
    summary="Create a product",
    responses=_server_error,
)
@router.post("", status_code=201, response_model=Product, include_in_schema=False)
async def create_product(
    product: Product,
    response: Response,
    products: AsyncCollection = Depends(get_product_collection),
) -> Product:
    """Insert the product; the store assigns its id. The Location header points at the new record."""
    created = await product_service.create_product(products, product)
    response.headers["Location"] = f"{PRODUCT_ROUTE_PREFIX}/{created.id}"
    return created


@router.put(
    "/{id}",
    response_class=Response,
    operation_id="UpdateProduct",
    summary="Replace a product",
    responses={200: {"description": "Product replaced"}, **_not_found, **_server_error},
)
async def update_product(
    id: str,
    product: Product,
    products: AsyncCollection = Depends(get_product_collection),
) -> Response:
    """Full replacement: fields missing from the body are cleared. The path id governs."""
    await product_service.replace_product(products, id, product)
    return Response(status_code=200)


@router.delete(
    "/{id}",
    response_class=Response,
    operation_id="DeleteProduct",
    summary="Delete a product",
    responses={200: {"description": "Product deleted"}, **_not_found, **_server_error},
)
async def delete_product(
    id: str,
    products: AsyncCollection = Depends(get_product_collection),
) -> Response:
    """Delete the product with this id; 404 when nothing was deleted."""
    await product_service.delete_product(products, id)
    return Response(status_code=200)
