from __future__ import annotations

from typing import Callable, Optional

from .form import FormBuffer
from .listing import ListingStore
from .models import Restaurant
from .notify import Notifier
from .settings import DELETE_CONFIRM_MESSAGE
from .store import RestaurantTable

Confirm = Callable[[str], bool]


class MutationDispatcher:
    def __init__(self, table: RestaurantTable, listing: ListingStore, notifier: Notifier):
        self.table = table
        self.listing = listing
        self.notifier = notifier

    async def submit(
        self,
        buffer: FormBuffer,
        editing: Optional[Restaurant],
        on_saved: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Insert or update from the form buffer. True when the write landed.

        ``on_saved`` runs after the success toast and before the list refresh.
        """
        record = buffer.to_record()
        if editing is not None:
            res = await self.table.update(editing.id, record)
            failed, done = "Failed to update restaurant", "Restaurant updated successfully"
        else:
            res = await self.table.insert(record)
            failed, done = "Failed to add restaurant", "Restaurant added successfully"

        if res.error:
            self.notifier.error(failed)
            return False
        self.notifier.success(done)
        if on_saved is not None:
            on_saved()
        await self.listing.refresh()
        return True

    async def delete(self, restaurant_id: str, confirm: Confirm) -> bool:
        if not confirm(DELETE_CONFIRM_MESSAGE):
            return False

        res = await self.table.delete(restaurant_id)
        if res.error:
            self.notifier.error("Failed to delete restaurant")
            return False
        self.notifier.success("Restaurant deleted successfully")
        await self.listing.refresh()
        return True
