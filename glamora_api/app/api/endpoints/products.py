"""
Product endpoints.

Listing is open to everyone.  Adding a product accepts the product
fields as the request body; anything that prevents the insert
(missing or mistyped fields, a ``productId`` that already exists, a
store failure) is reported as a 400.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from glamora_api.app.api.deps import get_product_service
from glamora_api.app.core.errors import StoreError
from glamora_api.app.schemas.product import ProductCreate, ProductRead
from glamora_api.app.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products(service: ProductService = Depends(get_product_service)) -> List[ProductRead]:
    """Return all products, unfiltered and unpaginated."""
    try:
        return await service.list_products()
    except StoreError:
        logger.exception("Failed to fetch products")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch products",
        )


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def add_product(
    payload: Dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Add a product to the catalog and return the stored record."""
    try:
        data = ProductCreate.model_validate(payload)
        return await service.add_product(data)
    except (ValidationError, StoreError) as exc:
        logger.warning("Rejected product %r: %s", payload.get("productId"), exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to add product. Ensure ProductID is unique.",
        )
