"""
Order endpoints.

Orders are placed with the buyer's email, the line items and the
total computed by the client.  History is looked up by email.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from glamora_api.app.api.deps import get_order_service
from glamora_api.app.core.errors import StoreError
from glamora_api.app.schemas.order import OrderCreate, OrderRead
from glamora_api.app.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: Dict[str, Any] = Body(...),
    service: OrderService = Depends(get_order_service),
) -> OrderRead:
    """Store an order and return it with its id, status and timestamp."""
    try:
        data = OrderCreate.model_validate(payload)
        return await service.create_order(data)
    except (ValidationError, StoreError) as exc:
        logger.warning("Rejected order for %r: %s", payload.get("userEmail"), exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to place order")


@router.get("/{email}", response_model=List[OrderRead])
async def list_orders(
    email: str,
    service: OrderService = Depends(get_order_service),
) -> List[OrderRead]:
    """Return the orders placed with ``email``, newest first."""
    try:
        return await service.list_orders_for_user(email)
    except StoreError:
        logger.exception("Failed to fetch orders for %s", email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch orders",
        )
