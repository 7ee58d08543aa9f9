from __future__ import annotations

from typing import Optional

import httpx

from .settings import PSGC_BASE_URL


class PsgcClient:
    """Thin async wrapper over the public PSGC endpoints.

    Responses are returned as-is; status and payload checks are up to the
    caller.
    """

    def __init__(
        self,
        base_url: str = PSGC_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def province_municipalities(self, province_code: str) -> httpx.Response:
        return await self._http.get(f"/provinces/{province_code}/municipalities/")

    async def province_cities(self, province_code: str) -> httpx.Response:
        return await self._http.get(f"/provinces/{province_code}/cities/")

    async def municipality_barangays(self, code: str) -> httpx.Response:
        return await self._http.get(f"/municipalities/{code}/barangays/")

    async def city_barangays(self, code: str) -> httpx.Response:
        return await self._http.get(f"/cities/{code}/barangays/")

    async def aclose(self) -> None:
        await self._http.aclose()
