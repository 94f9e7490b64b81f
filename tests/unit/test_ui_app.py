"""Tests for the Streamlit page helpers."""

import pytest

from ui.app import display_name


@pytest.mark.parametrize("name, expected", [
    ("greek yogurt", "Greek yogurt"),
    ("Greek Yogurt", "Greek Yogurt"),
    ("APPLE", "APPLE"),
    ("eggs", "Eggs"),
    ("", ""),
])
def test_display_name_keeps_recorded_case(name, expected):
    assert display_name(name) == expected
