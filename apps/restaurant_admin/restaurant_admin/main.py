from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from sqlalchemy.engine import Engine

from .db import init_db, make_engine
from .form import FormClosedError
from .geo import PsgcClient
from .schemas import (
    CodeSelection,
    FormFieldsUpdate,
    FormRead,
    HealthResponse,
    Region,
    RestaurantRead,
    ScreenState,
    Subdivision,
    Toast,
)
from .screen import ManageRestaurantsScreen, build_screen
from .settings import FOOD_TYPES
from .store import RestaurantTable


def get_screen(request: Request) -> ManageRestaurantsScreen:
    return request.app.state.screen


def _restaurants(screen: ManageRestaurantsScreen) -> list[RestaurantRead]:
    return [RestaurantRead.model_validate(r) for r in screen.listing.restaurants]


def create_app(engine: Optional[Engine] = None, client: Optional[PsgcClient] = None) -> FastAPI:
    engine = engine if engine is not None else make_engine()
    client = client if client is not None else PsgcClient()
    screen = build_screen(RestaurantTable(engine), client)

    app = FastAPI(title="Restaurant Admin", version="0.1.0")
    app.state.screen = screen

    @app.on_event("startup")
    async def _startup():
        init_db(engine)
        await screen.mount()

    @app.on_event("shutdown")
    async def _shutdown():
        await client.aclose()

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(ok=True, db=str(engine.url))

    @app.get("/screen", response_model=ScreenState)
    def get_screen_state(screen: ManageRestaurantsScreen = Depends(get_screen)):
        return screen.snapshot()

    @app.get("/restaurants", response_model=list[RestaurantRead])
    def get_restaurants(screen: ManageRestaurantsScreen = Depends(get_screen)):
        return _restaurants(screen)

    @app.post("/restaurants/refresh", response_model=list[RestaurantRead])
    async def refresh_restaurants(screen: ManageRestaurantsScreen = Depends(get_screen)):
        await screen.listing.refresh()
        return _restaurants(screen)

    @app.delete("/restaurants/{restaurant_id}")
    async def delete_restaurant(
        restaurant_id: str,
        confirm: bool = False,
        screen: ManageRestaurantsScreen = Depends(get_screen),
    ):
        """Destructive and irreversible. Requires confirm=true."""
        if not confirm:
            raise HTTPException(status_code=400, detail="Pass confirm=true")

        deleted = await screen.delete(restaurant_id, lambda _msg: confirm)
        return {"ok": deleted}

    @app.get("/food-types", response_model=list[str])
    def get_food_types():
        return FOOD_TYPES

    @app.get("/regions", response_model=list[Region])
    def get_regions(screen: ManageRestaurantsScreen = Depends(get_screen)):
        return screen.resolver.regions

    @app.post("/regions/reload", response_model=list[Region])
    async def reload_regions(screen: ManageRestaurantsScreen = Depends(get_screen)):
        await screen.resolver.load_regions()
        return screen.resolver.regions

    @app.get("/subdivisions", response_model=list[Subdivision])
    def get_subdivisions(screen: ManageRestaurantsScreen = Depends(get_screen)):
        return screen.resolver.subdivisions

    @app.post("/form/add", response_model=FormRead)
    def open_add_form(screen: ManageRestaurantsScreen = Depends(get_screen)):
        screen.open_add()
        return screen.form_view()

    @app.post("/form/edit/{restaurant_id}", response_model=FormRead)
    async def open_edit_form(restaurant_id: str, screen: ManageRestaurantsScreen = Depends(get_screen)):
        r = screen.listing.get(restaurant_id)
        if not r:
            raise HTTPException(status_code=404, detail="Restaurant not found")
        await screen.open_edit(r)
        return screen.form_view()

    @app.post("/form/municipality", response_model=FormRead)
    async def choose_municipality(
        payload: CodeSelection, screen: ManageRestaurantsScreen = Depends(get_screen)
    ):
        _require_open(screen)
        await screen.select_region(payload.code)
        return screen.form_view()

    @app.post("/form/location", response_model=FormRead)
    def choose_location(payload: CodeSelection, screen: ManageRestaurantsScreen = Depends(get_screen)):
        _require_open(screen)
        screen.select_location(payload.code)
        return screen.form_view()

    @app.post("/form/food-types/{tag}", response_model=FormRead)
    def toggle_food_type(tag: str, screen: ManageRestaurantsScreen = Depends(get_screen)):
        _require_open(screen)
        try:
            screen.toggle_food_type(tag)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        return screen.form_view()

    @app.patch("/form", response_model=FormRead)
    def update_form(payload: FormFieldsUpdate, screen: ManageRestaurantsScreen = Depends(get_screen)):
        _require_open(screen)
        screen.update_fields(**payload.model_dump(exclude_none=True))
        return screen.form_view()

    @app.post("/form/submit", response_model=FormRead)
    async def submit_form(screen: ManageRestaurantsScreen = Depends(get_screen)):
        if screen.form.is_saving:
            raise HTTPException(status_code=409, detail="Restaurant is already being saved")
        missing = screen.form.missing_fields() if screen.form.is_open else []
        if missing:
            raise HTTPException(status_code=422, detail=f"Required: {', '.join(missing)}")
        try:
            await screen.submit()
        except FormClosedError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return screen.form_view()

    @app.post("/form/cancel", response_model=FormRead)
    def cancel_form(screen: ManageRestaurantsScreen = Depends(get_screen)):
        screen.cancel()
        return screen.form_view()

    @app.get("/toasts", response_model=list[Toast])
    def drain_toasts(screen: ManageRestaurantsScreen = Depends(get_screen)):
        return screen.notifier.drain()

    return app


def _require_open(screen: ManageRestaurantsScreen) -> None:
    if not screen.form.is_open:
        raise HTTPException(status_code=409, detail="No restaurant form is open")


app = create_app()
