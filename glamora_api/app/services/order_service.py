"""
Business logic for orders.

Orders are stored exactly as the client sends them.  ``userEmail`` is
not checked against the users collection and ``totalAmount`` is not
recomputed from ``items``.
"""

import logging
from typing import List

from glamora_api.app.core.db import DocumentStore
from glamora_api.app.schemas.order import OrderCreate, OrderRead

logger = logging.getLogger(__name__)

COLLECTION = "orders"


class OrderService:
    """Order placement and per-user history."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def create_order(self, data: OrderCreate) -> OrderRead:
        stored = await self.store.insert(COLLECTION, data.model_dump())
        logger.info("Placed order %s for %s", stored["_id"], data.userEmail)
        return OrderRead.model_validate(stored)

    async def list_orders_for_user(self, email: str) -> List[OrderRead]:
        """Return ``email``'s orders, most recent first."""
        documents = await self.store.find_many(
            COLLECTION,
            {"userEmail": email},
            sort=[("createdAt", -1)],
        )
        return [OrderRead.model_validate(doc) for doc in documents]
