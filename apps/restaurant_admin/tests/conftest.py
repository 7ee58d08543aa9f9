from __future__ import annotations

import httpx
import pytest

from restaurant_admin.db import init_db, make_engine
from restaurant_admin.geo import PsgcClient
from restaurant_admin.locations import LocationResolver
from restaurant_admin.notify import Notifier
from restaurant_admin.screen import build_screen
from restaurant_admin.settings import PROVINCE_CODE
from restaurant_admin.store import QueryResult, RestaurantTable

BASE_URL = "https://psgc.test/api"

DARAGA = "050507000"
CAMALIG = "050504000"
LEGAZPI = "050506000"

MUNICIPALITIES = [
    {"code": DARAGA, "name": "Daraga", "oldName": "Locsin", "isCapital": False},
    {"code": "050501000", "name": "Bacacay"},
    {"code": CAMALIG, "name": "camalig"},
]

CITIES = [
    {"code": "050517000", "name": "City of Tabaco"},
    {"code": LEGAZPI, "name": "City of Legazpi", "isCapital": True},
]

MUNICIPALITY_BARANGAYS = {
    DARAGA: [
        {"code": "050507040", "name": "Tagas"},
        {"code": "050507002", "name": "Bañag"},
        {"code": "050507001", "name": "Anislag"},
        {"code": "050507005", "name": "binitayan"},
    ],
    CAMALIG: [
        {"code": "050504001", "name": "Anoling"},
        {"code": "050504030", "name": "Poblacion"},
    ],
}

CITY_BARANGAYS = {
    LEGAZPI: [
        {"code": "050506065", "name": "Sagpon"},
        {"code": "050506020", "name": "Dap-dap"},
    ],
}


class FakePsgc:
    """Route table for httpx.MockTransport mimicking psgc.gitlab.io."""

    def __init__(self):
        self.calls: list[str] = []
        self.overrides: dict[str, object] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.calls.append(path)

        if path in self.overrides:
            override = self.overrides[path]
            if isinstance(override, Exception):
                raise override
            return override

        parts = [p for p in path.split("/") if p]
        if parts == ["provinces", PROVINCE_CODE, "municipalities"]:
            return httpx.Response(200, json=MUNICIPALITIES)
        if parts == ["provinces", PROVINCE_CODE, "cities"]:
            return httpx.Response(200, json=CITIES)
        if len(parts) == 3 and parts[2] == "barangays":
            table = MUNICIPALITY_BARANGAYS if parts[0] == "municipalities" else CITY_BARANGAYS
            if parts[1] in table:
                return httpx.Response(200, json=table[parts[1]])
        return httpx.Response(404, json={"message": "Not Found"})

    def count(self, suffix: str) -> int:
        return sum(1 for c in self.calls if c.endswith(suffix))


class SpyTable(RestaurantTable):
    """Records every persistence call; individual ops can be forced to fail."""

    def __init__(self, engine):
        super().__init__(engine)
        self.calls: list[str] = []
        self.fail: set[str] = set()

    async def select_ordered(self):
        self.calls.append("select")
        if "select" in self.fail:
            return QueryResult(error="select failed")
        return await super().select_ordered()

    async def insert(self, record):
        self.calls.append("insert")
        if "insert" in self.fail:
            return QueryResult(error="insert failed")
        return await super().insert(record)

    async def update(self, restaurant_id, record):
        self.calls.append("update")
        if "update" in self.fail:
            return QueryResult(error="update failed")
        return await super().update(restaurant_id, record)

    async def delete(self, restaurant_id):
        self.calls.append("delete")
        if "delete" in self.fail:
            return QueryResult(error="delete failed")
        return await super().delete(restaurant_id)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def table(engine):
    return SpyTable(engine)


@pytest.fixture
def psgc():
    return FakePsgc()


@pytest.fixture
def client(psgc):
    return PsgcClient(base_url=BASE_URL, transport=httpx.MockTransport(psgc))


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def resolver(client, notifier):
    return LocationResolver(client, notifier)


@pytest.fixture
def screen(table, client):
    return build_screen(table, client)
