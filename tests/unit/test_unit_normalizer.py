"""Tests for unit normalization."""

import pytest

from pantrylog.services.unit_normalizer import COUNT_UNIT, normalize


@pytest.mark.parametrize("quantity,unit,expected", [
    (2, "kg", (2000, "g")),
    (1.5, "Kilo", (1500, "g")),
    (1, "kilogram", (1000, "g")),
    (250, "gram", (250, "g")),
    (100, " GR ", (100, "g")),
    (1, "l", (1000, "ml")),
    (0.5, "Liter", (500, "ml")),
    (330, "milliliter", (330, "ml")),
    (20, "ml", (20, "ml")),
])
def test_known_aliases(quantity, unit, expected):
    assert normalize(quantity, unit) == expected


def test_absent_unit_is_count():
    assert normalize(3, None) == (3, COUNT_UNIT)
    assert normalize(3) == (3, "count")


def test_blank_unit_is_count():
    assert normalize(4, "   ") == (4, "count")


def test_unknown_unit_passes_through_lowercased():
    assert normalize(5, "Stück") == (5, "stück")
    assert normalize(2, "  Packs ") == (2, "packs")


def test_result_fields():
    result = normalize(2, "kg")
    assert result.quantity == 2000
    assert result.unit == "g"
