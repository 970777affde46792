"""Pagination Policy — verifies offset/limit clamping and defaults.

Tests:
    - Missing values fall back to (0, default)
    - Negative offsets clamp to 0, limits clamp into [1, max]
    - Offsets beyond the 64-bit range clamp to MAX_SQL_INT
    - Garbage strings are treated as missing, never raise
"""

import pytest

from snapfeed.core.domain_types import MAX_SQL_INT, PageWindow
from snapfeed.core.pagination import DEFAULT_LIMIT, MAX_LIMIT, normalize_window


def test_missing_values_use_defaults():
    assert normalize_window(None, None) == PageWindow(offset=0, limit=DEFAULT_LIMIT)


def test_valid_values_pass_through():
    assert normalize_window("40", "10") == PageWindow(offset=40, limit=10)


def test_accepts_ints():
    assert normalize_window(5, 7) == PageWindow(offset=5, limit=7)


def test_negative_offset_clamps_to_zero():
    assert normalize_window("-3", "10").offset == 0


def test_limit_above_max_clamps_to_max():
    assert normalize_window(None, "1000").limit == MAX_LIMIT


@pytest.mark.parametrize("raw_limit", ["0", "-5"])
def test_limit_below_one_clamps_to_one(raw_limit):
    assert normalize_window(None, raw_limit).limit == 1


@pytest.mark.parametrize("raw", ["abc", "", "1.5", "10x"])
def test_garbage_is_treated_as_missing(raw):
    assert normalize_window(raw, raw) == PageWindow(offset=0, limit=DEFAULT_LIMIT)


def test_surrounding_whitespace_is_ignored():
    assert normalize_window(" 2 ", " 3 ") == PageWindow(offset=2, limit=3)


def test_custom_default_and_max():
    assert normalize_window(None, None, default_limit=5, max_limit=8).limit == 5
    assert normalize_window(None, "50", default_limit=5, max_limit=8).limit == 8


def test_huge_offset_clamps_to_sql_int_range():
    window = normalize_window("99999999999999999999", None)
    assert window.offset == MAX_SQL_INT


def test_offset_at_bound_is_kept():
    assert normalize_window(str(MAX_SQL_INT), None).offset == MAX_SQL_INT
