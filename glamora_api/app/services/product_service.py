"""
Business logic for the product catalog.

Products are created once and listed; the service never updates or
deletes them.
"""

import logging
from typing import List

from glamora_api.app.core.db import DocumentStore
from glamora_api.app.schemas.product import ProductCreate, ProductRead

logger = logging.getLogger(__name__)

COLLECTION = "products"


class ProductService:
    """Catalog operations over the shared document store."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def list_products(self) -> List[ProductRead]:
        """Return every product in storage order."""
        documents = await self.store.find_many(COLLECTION)
        return [ProductRead.model_validate(doc) for doc in documents]

    async def add_product(self, data: ProductCreate) -> ProductRead:
        """Insert a new product.

        Raises ``ConstraintError`` if ``productId`` is already taken.
        """
        stored = await self.store.insert(COLLECTION, data.model_dump())
        logger.info("Added product %s", data.productId)
        return ProductRead.model_validate(stored)
