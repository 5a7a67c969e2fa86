from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.common.validators import (
    optional_int_in_range,
    optional_text,
    require_float_in_range,
    require_int_in_range,
    require_non_empty,
    to_int,
)
from src.workforce_hub.workforce_hub.core.exceptions import OutOfRangeError, ValidationError


@pytest.mark.parametrize("value, expected", [(7, 7), (" 7 ", 7), (7.0, 7), ("-3", -3)])
def test_to_int_accepts_whole_numbers(value, expected):
    assert to_int(value, "Score") == expected


@pytest.mark.parametrize("value", [True, None, 7.5, float("nan"), "seven", "", "7.5", [7]])
def test_to_int_rejects_everything_else(value):
    with pytest.raises(ValidationError, match="Score must be a whole number"):
        to_int(value, "Score")


def test_int_range_is_inclusive():
    assert require_int_in_range("1", "Score", 1, 10) == 1
    assert require_int_in_range(10, "Score", 1, 10) == 10
    with pytest.raises(OutOfRangeError, match="between 1 and 10"):
        require_int_in_range(11, "Score", 1, 10)


def test_optional_int_blank_is_none():
    assert optional_int_in_range("  ", "Blood sugar", 20, 600) is None
    assert optional_int_in_range(None, "Blood sugar", 20, 600) is None
    assert optional_int_in_range("95", "Blood sugar", 20, 600) == 95


def test_float_range():
    assert require_float_in_range("70.5", "Weight", 1, 500) == 70.5
    with pytest.raises(ValidationError):
        require_float_in_range("inf", "Weight", 1, 500)
    with pytest.raises(OutOfRangeError):
        require_float_in_range(0.5, "Weight", 1, 500)


def test_text_helpers():
    assert require_non_empty("  Hall A ", "Location") == "Hall A"
    with pytest.raises(ValidationError, match="Location is required"):
        require_non_empty("   ", "Location")
    assert optional_text("   ") is None
    assert optional_text(" note ") == "note"
