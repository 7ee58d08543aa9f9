from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from .models import Restaurant
from .settings import FOOD_TYPE_SEPARATOR, FOOD_TYPES

REQUIRED_FIELDS = ("name", "location")
TEXT_FIELDS = ("name", "location", "municipality", "description", "image_url")


class FormMode(str, enum.Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


class FormClosedError(RuntimeError):
    pass


def split_food_types(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [t.strip() for t in value.split(FOOD_TYPE_SEPARATOR) if t.strip()]


def join_food_types(tags: list[str]) -> Optional[str]:
    return FOOD_TYPE_SEPARATOR.join(tags) if tags else None


@dataclass
class FormBuffer:
    name: str = ""
    food_type: list[str] = field(default_factory=list)
    location: str = ""
    municipality: str = ""
    description: str = ""
    image_url: str = ""

    @classmethod
    def from_restaurant(cls, r: Restaurant) -> "FormBuffer":
        return cls(
            name=r.name,
            food_type=split_food_types(r.food_type),
            location=r.location,
            municipality=r.municipality or "",
            description=r.description or "",
            image_url=r.image_url or "",
        )

    def to_record(self) -> dict[str, Any]:
        """Shape written to the restaurants table; blank optionals become NULL."""
        return {
            "name": self.name,
            "food_type": join_food_types(self.food_type),
            "location": self.location,
            "municipality": self.municipality or None,
            "description": self.description or None,
            "image_url": self.image_url or None,
        }

    def missing_fields(self) -> list[str]:
        return [f for f in REQUIRED_FIELDS if not getattr(self, f).strip()]


class RestaurantForm:
    """Add/Edit dialog state: closed, create, or edit (with a target record)."""

    def __init__(self):
        self.buffer = FormBuffer()
        self.editing: Optional[Restaurant] = None
        self.mode = FormMode.CLOSED
        self.is_saving = False

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def title(self) -> str:
        return "Edit Restaurant" if self.editing else "Add Restaurant"

    def open_create(self) -> None:
        self.buffer = FormBuffer()
        self.editing = None
        self.mode = FormMode.CREATE

    def open_edit(self, restaurant: Restaurant) -> None:
        self.buffer = FormBuffer.from_restaurant(restaurant)
        self.editing = restaurant
        self.mode = FormMode.EDIT

    def close(self) -> None:
        self.buffer = FormBuffer()
        self.editing = None
        self.mode = FormMode.CLOSED
        self.is_saving = False

    def toggle_food_type(self, tag: str) -> list[str]:
        tags = self.buffer.food_type
        if tag in tags:
            self.buffer.food_type = [t for t in tags if t != tag]
        elif tag in FOOD_TYPES:
            self.buffer.food_type = tags + [tag]
        else:
            raise ValueError(f"Unknown food type: {tag!r}")
        return self.buffer.food_type

    def update(self, **values: str) -> None:
        unknown = set(values) - set(TEXT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown form fields: {sorted(unknown)}")
        for key, value in values.items():
            setattr(self.buffer, key, value)

    def missing_fields(self) -> list[str]:
        return self.buffer.missing_fields()
