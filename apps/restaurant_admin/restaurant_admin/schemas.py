from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Region(BaseModel):
    """Municipality or city from the PSGC API (only code and name are kept)."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class Subdivision(BaseModel):
    """Barangay under the selected region."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class RestaurantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    food_type: Optional[str] = None
    location: str
    municipality: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None


class Toast(BaseModel):
    kind: Literal["success", "error"]
    message: str


class FormRead(BaseModel):
    mode: Literal["closed", "create", "edit"]
    title: str
    editing_id: Optional[str] = None
    is_saving: bool = False
    name: str = ""
    food_type: list[str] = Field(default_factory=list)
    location: str = ""
    municipality: str = ""
    description: str = ""
    image_url: str = ""
    missing_fields: list[str] = Field(default_factory=list)


class FormFieldsUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class CodeSelection(BaseModel):
    code: str = ""


class ScreenState(BaseModel):
    heading: str
    restaurants: list[RestaurantRead]
    regions: list[Region]
    subdivisions: list[Subdivision]
    selected_region_code: str = ""
    selected_subdivision_code: str = ""
    food_types: list[str]
    form: FormRead
    toasts: list[Toast]


class HealthResponse(BaseModel):
    ok: bool
    db: str
