from __future__ import annotations

import logging

from .models import Restaurant
from .store import RestaurantTable

logger = logging.getLogger(__name__)


class ListingStore:
    def __init__(self, table: RestaurantTable):
        self.table = table
        self.restaurants: list[Restaurant] = []

    @property
    def count(self) -> int:
        return len(self.restaurants)

    def get(self, restaurant_id: str) -> Restaurant | None:
        return next((r for r in self.restaurants if r.id == restaurant_id), None)

    async def refresh(self) -> None:
        res = await self.table.select_ordered()
        # No toast here: a failed refresh keeps the previous list on screen.
        if res.error or res.data is None:
            logger.warning("Restaurant list refresh failed: %s", res.error)
            return
        self.restaurants = res.data
