from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Restaurant(SQLModel, table=True):
    __tablename__ = "restaurants"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(index=True)

    # Tags joined with ", " e.g. "Filipino, Cafe"
    food_type: Optional[str] = None

    # Barangay and municipality/city are stored by name, never by PSGC code.
    location: str
    municipality: Optional[str] = None

    description: Optional[str] = None
    image_url: Optional[str] = None

    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))

