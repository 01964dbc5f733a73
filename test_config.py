#!/usr/bin/env python3
"""Tests for layout settings and page size lookup."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(__file__))

from cardsheet.config import LayoutSettings, PageDimensions, PageSize, get_page_dimensions, parse_page_size
from cardsheet.units import mm_factor, mm_to_pt, mm_to_px, pt_to_mm, px_to_mm


def test_standard_page_sizes():
    assert get_page_dimensions(LayoutSettings(page_size=PageSize.A4)) == PageDimensions(210, 297)
    assert get_page_dimensions(LayoutSettings(page_size=PageSize.A3)) == PageDimensions(297, 420)


def test_custom_page_size():
    settings = LayoutSettings(page_size=PageSize.CUSTOM, custom_width=100, custom_height=150)

    assert settings.page_dimensions() == PageDimensions(100, 150)


def test_custom_page_size_requires_dimensions():
    with pytest.raises(ValueError, match="custom_height"):
        LayoutSettings(page_size=PageSize.CUSTOM, custom_width=100)


@pytest.mark.parametrize("field", ["margin", "spacing"])
def test_negative_lengths_rejected(field):
    with pytest.raises(ValueError):
        LayoutSettings(**{field: -1.0})


def test_page_size_names():
    assert parse_page_size("a4") is PageSize.A4
    assert parse_page_size(" Custom ") is PageSize.CUSTOM
    with pytest.raises(ValueError, match="Unsupported page size"):
        parse_page_size("letter")


def test_settings_from_camel_case_dict():
    settings = LayoutSettings.from_dict({
        "pageSize": "custom",
        "customWidth": 120,
        "customHeight": 180,
        "margin": 4,
        "spacing": 2,
    })

    assert settings.page_size is PageSize.CUSTOM
    assert settings.margin == 4.0
    assert settings.spacing == 2.0
    assert settings.page_dimensions() == PageDimensions(120, 180)


def test_settings_from_dict_with_string_numbers():
    settings = LayoutSettings.from_dict({
        "pageSize": "custom",
        "customWidth": "120",
        "customHeight": "180",
        "margin": "4",
        "spacing": "2",
    })

    assert settings.custom_width == 120.0
    assert settings.custom_height == 180.0
    assert settings.margin == 4.0
    assert settings.page_dimensions() == PageDimensions(120, 180)


def test_settings_from_dict_rejects_non_numeric_length():
    with pytest.raises(ValueError, match="custom_width"):
        LayoutSettings.from_dict({"pageSize": "custom", "customWidth": "wide", "customHeight": "180"})


def test_settings_from_dict_defaults():
    settings = LayoutSettings.from_dict({"page_size": "A3"})

    assert settings.page_size is PageSize.A3
    assert settings.margin == 10.0
    assert settings.spacing == 5.0


def test_unit_conversions():
    assert mm_to_pt(25.4) == pytest.approx(72.0)
    assert pt_to_mm(72.0) == pytest.approx(25.4)
    assert mm_to_px(63.0, 300) == 744
    assert px_to_mm(300, 300) == pytest.approx(25.4)
    assert mm_factor("mm") == 1.0
    assert mm_factor("pt") == pytest.approx(72.0 / 25.4)
    with pytest.raises(ValueError):
        mm_factor("in")


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
