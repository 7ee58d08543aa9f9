from __future__ import annotations

from itertools import combinations

import pytest

from restaurant_admin.form import (
    FormBuffer,
    FormMode,
    RestaurantForm,
    join_food_types,
    split_food_types,
)
from restaurant_admin.models import Restaurant
from restaurant_admin.settings import FOOD_TYPES


def _restaurant(**kw) -> Restaurant:
    base = dict(
        id="r1",
        name="Small Talk Cafe",
        food_type="Filipino, Cafe",
        location="Dap-dap",
        municipality="City of Legazpi",
        description=None,
        image_url=None,
    )
    base.update(kw)
    return Restaurant(**base)


@pytest.mark.parametrize("size", [0, 1, 2, 3])
def test_food_type_join_then_split_keeps_the_tag_set(size):
    for tags in combinations(FOOD_TYPES, size):
        assert set(split_food_types(join_food_types(list(tags)))) == set(tags)


def test_empty_tags_serialize_to_none():
    assert join_food_types([]) is None
    assert split_food_types(None) == []
    assert split_food_types("") == []


def test_split_trims_whitespace():
    assert split_food_types(" Korean, Buffet ") == ["Korean", "Buffet"]
    assert split_food_types("Korean, , Buffet") == ["Korean", "Buffet"]
    # only ", " separates tags
    assert split_food_types("Korean,Buffet") == ["Korean,Buffet"]


def test_toggle_twice_is_a_no_op():
    form = RestaurantForm()
    form.open_create()
    form.toggle_food_type("Filipino")
    before = list(form.buffer.food_type)

    form.toggle_food_type("Cafe")
    form.toggle_food_type("Cafe")
    assert form.buffer.food_type == before


def test_toggle_appends_in_selection_order():
    form = RestaurantForm()
    form.open_create()
    for tag in ("Sea Food", "Korean", "Buffet"):
        form.toggle_food_type(tag)
    assert form.buffer.food_type == ["Sea Food", "Korean", "Buffet"]

    form.toggle_food_type("Korean")
    assert form.buffer.food_type == ["Sea Food", "Buffet"]


def test_toggle_rejects_unknown_tag_but_can_remove_legacy_one():
    form = RestaurantForm()
    form.open_edit(_restaurant(food_type="Filipino, Street Food"))
    with pytest.raises(ValueError):
        form.toggle_food_type("Vegan")

    form.toggle_food_type("Street Food")
    assert form.buffer.food_type == ["Filipino"]


def test_open_edit_populates_buffer_from_record():
    form = RestaurantForm()
    r = _restaurant()
    form.open_edit(r)

    assert form.mode is FormMode.EDIT
    assert form.editing is r
    assert form.title == "Edit Restaurant"
    assert set(form.buffer.food_type) == {"Filipino", "Cafe"}
    assert form.buffer.municipality == "City of Legazpi"
    assert form.buffer.description == ""
    assert form.buffer.image_url == ""


def test_open_create_discards_previous_edit():
    form = RestaurantForm()
    form.open_edit(_restaurant())
    form.open_create()

    assert form.mode is FormMode.CREATE
    assert form.editing is None
    assert form.buffer == FormBuffer()
    assert form.title == "Add Restaurant"


def test_close_resets_everything():
    form = RestaurantForm()
    form.open_edit(_restaurant())
    form.is_saving = True
    form.close()

    assert form.mode is FormMode.CLOSED
    assert not form.is_open
    assert form.editing is None
    assert form.buffer == FormBuffer()
    assert form.is_saving is False


def test_update_overwrites_text_fields_only():
    form = RestaurantForm()
    form.open_create()
    form.update(name="Joe's Grill", description="Burgers")
    assert form.buffer.name == "Joe's Grill"
    assert form.buffer.description == "Burgers"

    with pytest.raises(ValueError):
        form.update(food_type="Cafe")


def test_to_record_nulls_blank_optionals():
    buf = FormBuffer(
        name="Joe's Grill",
        food_type=["Fast Food"],
        location="Poblacion",
        municipality="Pili",
    )
    assert buf.to_record() == {
        "name": "Joe's Grill",
        "food_type": "Fast Food",
        "location": "Poblacion",
        "municipality": "Pili",
        "description": None,
        "image_url": None,
    }
    assert FormBuffer(name="x", location="y").to_record()["municipality"] is None


def test_missing_fields():
    assert FormBuffer().missing_fields() == ["name", "location"]
    assert FormBuffer(name="  ", location="Sagpon").missing_fields() == ["name"]
    assert FormBuffer(name="A", location="Sagpon").missing_fields() == []
