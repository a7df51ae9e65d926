"""Test parameter schema and field validation."""
import math

import pytest

from verticals.combo_builder.schema import (
    PARAMETERS,
    SCHEMA,
    ParamKind,
    default_values,
    get_descriptor,
)
from verticals.combo_builder.validation import coerce_bool, normalize, parse_number

NUMERIC = [d for d in PARAMETERS if d.kind.is_numeric]
RAW_INPUTS = ["", "abc", None, True, -5, "-5", 0, "12", 12.6, "12.4", 9999, "1e9", math.nan, math.inf, [], {}]


def test_keys_unique():
    assert len(SCHEMA) == len(PARAMETERS)


def test_defaults_within_bounds():
    for d in NUMERIC:
        assert d.minimum <= d.default <= d.maximum, d.key
    for d in PARAMETERS:
        if d.kind == ParamKind.ENUM:
            assert d.default in d.choices, d.key


def test_default_values_cover_schema():
    values = default_values()
    assert set(values) == set(SCHEMA)
    assert values["max_selections"] == 3
    assert values["selected_discount_id"] is None


def test_get_descriptor_unknown():
    assert get_descriptor("no_such_key") is None
    assert get_descriptor("banner_width_desktop").kind == ParamKind.PERCENTAGE


def test_bounds():
    assert get_descriptor("max_selections").bounds == (1, 10)
    assert get_descriptor("preview_item_shape").bounds == ("circle", "square", "rectangle")
    assert get_descriptor("preview_bg_color").bounds is None


@pytest.mark.parametrize("descriptor", NUMERIC, ids=lambda d: d.key)
def test_numeric_normalize_idempotent_and_bounded(descriptor):
    for raw in RAW_INPUTS:
        once = normalize(descriptor, raw)
        assert normalize(descriptor, once) == once
        assert descriptor.minimum <= once <= descriptor.maximum
        assert isinstance(once, int)


def test_numeric_unparseable_falls_to_floor():
    d = get_descriptor("banner_height_desktop")
    assert normalize(d, "abc") == 150
    assert normalize(d, None) == 150
    assert normalize(d, math.nan) == 150


def test_numeric_clamps():
    d = get_descriptor("max_selections")
    assert normalize(d, 11) == 10
    assert normalize(d, "0") == 1
    assert normalize(d, "4") == 4


def test_weight_clamps_without_snapping():
    d = get_descriptor("heading_weight")
    assert normalize(d, 650) == 650
    assert normalize(d, 900) == 700
    assert normalize(d, 100) == 400


def test_enum_fallback_to_default():
    d = get_descriptor("preview_item_shape")
    assert normalize(d, "rectangle") == "rectangle"
    assert normalize(d, "hexagon") == "circle"


def test_enum_numeric_input_compared_as_string():
    d = get_descriptor("desktop_columns")
    assert normalize(d, 4) == "4"
    assert normalize(d, 4.0) == "4"
    assert normalize(d, 7) == "3"


def test_text_passthrough():
    d = get_descriptor("collection_title")
    assert normalize(d, "Pick three") == "Pick three"
    assert normalize(d, None) == "Build Your Combo"
    assert normalize(get_descriptor("preview_bg_color"), "#fff") == "#fff"


def test_boolean_coercion():
    d = get_descriptor("show_banner")
    assert normalize(d, "on") is True
    assert normalize(d, "false") is False
    assert normalize(d, "") is False
    assert coerce_bool("YES") is True
    assert coerce_bool(0) is False


def test_discount_reference():
    d = get_descriptor("selected_discount_id")
    assert normalize(d, "3") == 3
    assert normalize(d, 0) is None
    assert normalize(d, "x") is None
    assert normalize(d, 2.5) is None


def test_parse_number():
    assert parse_number(" 12 ") == 12.0
    assert parse_number(True) is None
    assert parse_number("inf") is None
