"""
FastAPI dependencies that hand services to the endpoints.

The store and the password hasher are created once per application
and kept on ``app.state``; each request builds lightweight service
objects around them.
"""

from fastapi import Depends, Request

from glamora_api.app.core.db import DocumentStore
from glamora_api.app.core.security import PasswordHasher
from glamora_api.app.services.order_service import OrderService
from glamora_api.app.services.product_service import ProductService
from glamora_api.app.services.user_service import UserService


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_product_service(store: DocumentStore = Depends(get_store)) -> ProductService:
    return ProductService(store)


def get_user_service(
    store: DocumentStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_hasher),
) -> UserService:
    return UserService(store, hasher)


def get_order_service(store: DocumentStore = Depends(get_store)) -> OrderService:
    return OrderService(store)
