from __future__ import annotations

import asyncio
import locale
import logging
import unicodedata
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .geo import PsgcClient
from .notify import Notifier
from .schemas import Region, Subdivision
from .settings import PROVINCE_CODE

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

REGIONS_FAILED = "Failed to load municipalities and cities"
REGIONS_MALFORMED = "Unexpected data format for municipalities/cities"
SUBDIVISIONS_FAILED = "Failed to load barangays"
SUBDIVISIONS_MALFORMED = "Unexpected data format for barangays"


class MalformedPayload(ValueError):
    pass


def name_sort_key(name: str) -> tuple[str, str]:
    """Collation key: accents and case folded, then the process locale."""
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return locale.strxfrm(folded), name


def _sorted_by_name(items: list[M]) -> list[M]:
    return sorted(items, key=lambda it: name_sort_key(it.name))


def _parse_list(payload: Any, model: type[M]) -> list[M]:
    if not isinstance(payload, list):
        raise MalformedPayload(f"expected a list, got {type(payload).__name__}")
    try:
        return TypeAdapter(list[model]).validate_python(payload)
    except ValidationError as exc:
        raise MalformedPayload(str(exc)) from exc


class LocationResolver:
    """Municipality/city -> barangay cascade backed by the PSGC API."""

    def __init__(self, client: PsgcClient, notifier: Notifier, province: str = PROVINCE_CODE):
        self.client = client
        self.notifier = notifier
        self.province = province
        self.regions: list[Region] = []
        self.subdivisions: list[Subdivision] = []
        # Bumped by every subdivision fetch or clear; stale fetches are dropped.
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def load_regions(self) -> bool:
        try:
            muni_res, city_res = await asyncio.gather(
                self.client.province_municipalities(self.province),
                self.client.province_cities(self.province),
            )
            muni_res.raise_for_status()
            city_res.raise_for_status()
            merged = _parse_list(muni_res.json(), Region) + _parse_list(city_res.json(), Region)
        except MalformedPayload as exc:
            logger.error("Unexpected municipalities/cities payload: %s", exc)
            self.notifier.error(REGIONS_MALFORMED)
            return False
        except (httpx.HTTPError, ValueError):
            logger.exception("Error fetching municipalities and cities")
            self.notifier.error(REGIONS_FAILED)
            return False

        self.regions = _sorted_by_name(merged)
        return True

    async def load_subdivisions(self, code: str) -> bool:
        self._generation += 1
        token = self._generation
        try:
            res = await self.client.municipality_barangays(code)
            if not res.is_success:
                logger.info("No municipality %s, retrying as a city", code)
                res = await self.client.city_barangays(code)
            res.raise_for_status()
            found = _parse_list(res.json(), Subdivision)
        except MalformedPayload as exc:
            logger.error("Unexpected barangays payload for %s: %s", code, exc)
            if token == self._generation:
                self.notifier.error(SUBDIVISIONS_MALFORMED)
            return False
        except (httpx.HTTPError, ValueError):
            logger.exception("Error fetching barangays for %s", code)
            if token == self._generation:
                self.notifier.error(SUBDIVISIONS_FAILED)
            return False

        if token != self._generation:
            logger.debug("Dropping stale barangays for %s", code)
            return False
        self.subdivisions = _sorted_by_name(found)
        return True

    def clear_subdivisions(self) -> None:
        self._generation += 1
        self.subdivisions = []

    def select_region(self, code: str) -> str:
        """Invalidate the dependent barangay list and return the region name.

        The caller stores the name and then awaits ``load_subdivisions``.
        """
        self.clear_subdivisions()
        return self.region_name_for(code)

    def region_name_for(self, code: str) -> str:
        r = next((r for r in self.regions if r.code == code), None)
        return r.name if r else ""

    def region_code_for(self, name: Optional[str]) -> str:
        if not name:
            return ""
        r = next((r for r in self.regions if r.name == name), None)
        return r.code if r else ""

    def subdivision_name_for(self, code: str) -> str:
        s = next((s for s in self.subdivisions if s.code == code), None)
        return s.name if s else ""

    def subdivision_code_for(self, name: Optional[str]) -> str:
        if not name:
            return ""
        s = next((s for s in self.subdivisions if s.name == name), None)
        return s.code if s else ""
