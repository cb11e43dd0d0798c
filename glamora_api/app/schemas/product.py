"""
Pydantic models for catalog products.

``productId`` is the natural key clients use to refer to a product and
must be unique; the storage identity is exposed separately as ``_id``.
Fields not listed here are dropped when a product is created.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    productId: str = Field(..., min_length=1, examples=["GLM-001"], description="Unique product code")
    name: str = Field(..., min_length=1, examples=["Silk Scarf"])
    price: float = Field(..., examples=[49.99])
    category: Optional[str] = Field(None, examples=["Accessories"])
    image: Optional[str] = Field(None, examples=["https://cdn.example.com/scarf.jpg"])
    description: Optional[str] = Field(None, examples=["Hand-printed mulberry silk"])

    # Numbers sent for text fields (e.g. ``"productId": 17``) are stored
    # as their string form.
    model_config = {
        "coerce_numbers_to_str": True,
    }


class ProductCreate(ProductBase):
    """Schema for adding a product to the catalog."""
    pass


class ProductRead(ProductBase):
    """Schema for reading a product from the API."""

    id: str = Field(..., alias="_id")

    model_config = {
        "coerce_numbers_to_str": True,
        "populate_by_name": True,
    }
