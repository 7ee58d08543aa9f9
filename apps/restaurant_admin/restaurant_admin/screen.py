from __future__ import annotations

import asyncio
import logging

from .dispatcher import Confirm, MutationDispatcher
from .form import FormClosedError, RestaurantForm
from .listing import ListingStore
from .locations import LocationResolver
from .models import Restaurant
from .notify import Notifier
from .schemas import FormRead, RestaurantRead, ScreenState
from .settings import FOOD_TYPES, REGION_MATCH_ATTEMPTS

logger = logging.getLogger(__name__)


class ManageRestaurantsScreen:
    """One admin session of the Manage Restaurants panel.

    Listing, location cascade, form and writes are separate objects; this
    class only wires them together.
    """

    def __init__(
        self,
        listing: ListingStore,
        resolver: LocationResolver,
        form: RestaurantForm,
        dispatcher: MutationDispatcher,
        notifier: Notifier,
    ):
        self.listing = listing
        self.resolver = resolver
        self.form = form
        self.dispatcher = dispatcher
        self.notifier = notifier

    async def mount(self) -> None:
        await asyncio.gather(self.listing.refresh(), self.resolver.load_regions())

    def open_add(self) -> None:
        self.form.open_create()
        self.resolver.clear_subdivisions()

    async def open_edit(self, restaurant: Restaurant) -> bool:
        """Load the record into the form and restore its barangay options.

        Returns False when the stored municipality could not be matched to a
        loaded region; the form stays open either way.
        """
        self.form.open_edit(restaurant)
        self.resolver.clear_subdivisions()
        generation = self.resolver.generation
        name = restaurant.municipality
        if not name:
            return False

        for attempt in range(REGION_MATCH_ATTEMPTS):
            if attempt:
                await self.resolver.load_regions()
            if self._superseded(generation, name):
                logger.info("Edit lookup for %s superseded by a newer selection", restaurant.id)
                return False
            code = self.resolver.region_code_for(name)
            if code:
                await self.resolver.load_subdivisions(code)
                return True

        logger.info("Municipality %r of %s not found in regions", name, restaurant.id)
        return False

    def _superseded(self, generation: int, name: str) -> bool:
        return (
            self.resolver.generation != generation
            or self.form.buffer.municipality != name
        )

    async def select_region(self, code: str) -> None:
        # Location is invalidated before the barangay fetch starts.
        self.form.update(municipality=self.resolver.select_region(code), location="")
        if code:
            await self.resolver.load_subdivisions(code)

    def select_location(self, code: str) -> None:
        self.form.update(location=self.resolver.subdivision_name_for(code))

    def toggle_food_type(self, tag: str) -> list[str]:
        return self.form.toggle_food_type(tag)

    def update_fields(self, **values: str) -> None:
        self.form.update(**values)

    async def submit(self) -> bool:
        if not self.form.is_open:
            raise FormClosedError("No restaurant form is open")

        self.form.is_saving = True
        try:
            return await self.dispatcher.submit(
                self.form.buffer, self.form.editing, on_saved=self.cancel
            )
        finally:
            self.form.is_saving = False

    def cancel(self) -> None:
        self.form.close()
        self.resolver.clear_subdivisions()

    async def delete(self, restaurant_id: str, confirm: Confirm) -> bool:
        return await self.dispatcher.delete(restaurant_id, confirm)

    def form_view(self) -> FormRead:
        buf = self.form.buffer
        return FormRead(
            mode=self.form.mode.value,
            title=self.form.title,
            editing_id=self.form.editing.id if self.form.editing else None,
            is_saving=self.form.is_saving,
            name=buf.name,
            food_type=list(buf.food_type),
            location=buf.location,
            municipality=buf.municipality,
            description=buf.description,
            image_url=buf.image_url,
            missing_fields=buf.missing_fields() if self.form.is_open else [],
        )

    def snapshot(self) -> ScreenState:
        buf = self.form.buffer
        return ScreenState(
            heading=f"Restaurants ({self.listing.count})",
            restaurants=[RestaurantRead.model_validate(r) for r in self.listing.restaurants],
            regions=list(self.resolver.regions),
            subdivisions=list(self.resolver.subdivisions),
            selected_region_code=self.resolver.region_code_for(buf.municipality),
            selected_subdivision_code=self.resolver.subdivision_code_for(buf.location),
            food_types=list(FOOD_TYPES),
            form=self.form_view(),
            toasts=self.notifier.peek(),
        )


def build_screen(table, client) -> ManageRestaurantsScreen:
    notifier = Notifier()
    listing = ListingStore(table)
    return ManageRestaurantsScreen(
        listing=listing,
        resolver=LocationResolver(client, notifier),
        form=RestaurantForm(),
        dispatcher=MutationDispatcher(table, listing, notifier),
        notifier=notifier,
    )
