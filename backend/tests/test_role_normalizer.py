"""Tests for role normalization."""

import pytest

from draftboard.utils import normalize_role, round_half_up


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("TOP", "top"),
        ("jng", "jungle"),
        (" Mid ", "mid"),
        ("bot", "adc"),
        ("marksman", "adc"),
        ("utility", "support"),
        ("SUP", "support"),
    ],
)
def test_aliases(raw, expected):
    assert normalize_role(raw) == expected


def test_unknown_roles():
    assert normalize_role("roamer") is None
    assert normalize_role(None) is None
    assert normalize_role("") is None


def test_round_half_up():
    assert round_half_up(52.5) == 53
    assert round_half_up(61.5) == 62
    assert round_half_up(54.4) == 54
    assert round_half_up(-0.5) == 0
