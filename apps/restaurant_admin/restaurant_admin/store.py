from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from starlette.concurrency import run_in_threadpool

from .db import session_for
from .models import Restaurant

logger = logging.getLogger(__name__)

T = TypeVar("T")

WRITABLE_FIELDS = ("name", "food_type", "location", "municipality", "description", "image_url")


@dataclass
class QueryResult(Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _clean(record: dict[str, Any]) -> dict[str, Any]:
    unknown = set(record) - set(WRITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown restaurant fields: {sorted(unknown)}")
    return dict(record)


class RestaurantTable:
    """The ``restaurants`` table, exposed as awaitable result/error calls."""

    def __init__(self, engine: Engine):
        self.engine = engine

    async def select_ordered(self) -> QueryResult[list[Restaurant]]:
        return await run_in_threadpool(self._guard, "select", self._select_ordered)

    async def insert(self, record: dict[str, Any]) -> QueryResult[Restaurant]:
        return await run_in_threadpool(self._guard, "insert", self._insert, _clean(record))

    async def update(self, restaurant_id: str, record: dict[str, Any]) -> QueryResult[Restaurant]:
        return await run_in_threadpool(
            self._guard, "update", self._update, restaurant_id, _clean(record)
        )

    async def delete(self, restaurant_id: str) -> QueryResult[str]:
        return await run_in_threadpool(self._guard, "delete", self._delete, restaurant_id)

    def _guard(self, op: str, fn, *args) -> QueryResult:
        try:
            return fn(*args)
        except SQLAlchemyError as exc:
            logger.error("restaurants %s failed: %s", op, exc)
            return QueryResult(error=str(exc))

    def _select_ordered(self) -> QueryResult[list[Restaurant]]:
        with session_for(self.engine) as session:
            rows = list(session.exec(select(Restaurant).order_by(Restaurant.name)))
        return QueryResult(data=rows)

    def _insert(self, record: dict[str, Any]) -> QueryResult[Restaurant]:
        r = Restaurant(**record)
        with session_for(self.engine) as session:
            session.add(r)
            session.commit()
            session.refresh(r)
        return QueryResult(data=r)

    def _update(self, restaurant_id: str, record: dict[str, Any]) -> QueryResult[Restaurant]:
        with session_for(self.engine) as session:
            r = session.get(Restaurant, restaurant_id)
            if not r:
                return QueryResult(error=f"Restaurant {restaurant_id} not found")
            for key, value in record.items():
                setattr(r, key, value)
            session.add(r)
            session.commit()
            session.refresh(r)
        return QueryResult(data=r)

    def _delete(self, restaurant_id: str) -> QueryResult[str]:
        with session_for(self.engine) as session:
            r = session.get(Restaurant, restaurant_id)
            if not r:
                return QueryResult(error=f"Restaurant {restaurant_id} not found")
            session.delete(r)
            session.commit()
        return QueryResult(data=restaurant_id)
