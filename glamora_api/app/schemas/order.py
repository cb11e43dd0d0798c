"""
Pydantic models for orders.

An order is a snapshot taken at checkout: the buyer's email, the line
items as sent by the client and the client-computed total.  Line items
are stored as given, conceptually ``{name, price, quantity}``.
``status`` and ``createdAt`` are filled in server-side when absent.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_ORDER_STATUS = "Processing"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderBase(BaseModel):
    userEmail: str = Field(..., min_length=1, examples=["a@example.com"])
    items: List[Any] = Field(
        default_factory=list,
        examples=[[{"name": "Silk Scarf", "price": 49.99, "quantity": 2}]],
    )
    totalAmount: Optional[float] = Field(None, examples=[99.98])
    status: str = Field(DEFAULT_ORDER_STATUS, examples=[DEFAULT_ORDER_STATUS])
    createdAt: datetime = Field(default_factory=utcnow)

    @field_validator("createdAt")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are taken to be UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class OrderCreate(OrderBase):
    """Schema for placing an order."""
    pass


class OrderRead(OrderBase):
    """Schema for reading an order from the API."""

    id: str = Field(..., alias="_id")

    model_config = {
        "populate_by_name": True,
    }
