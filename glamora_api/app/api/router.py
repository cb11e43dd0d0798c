"""
Top-level router for the ``/api`` namespace.

This router aggregates the domain routers (products, accounts,
orders).  When a new domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import orders, products, users

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
# Signup and login live directly under /api.
router.include_router(users.router, tags=["users"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
