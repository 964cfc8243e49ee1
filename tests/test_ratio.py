"""Tests for ratio / seat-total derivation."""

import pytest

from apportionment.models import IdealRatio, InvalidTarget, ProportionalityWarning, TotalSeats
from apportionment.ratio import ratio_from_seats, resolve_target, seats_from_ratio


class TestRatioFromSeats:
    def test_real_valued_ratio(self):
        assert ratio_from_seats(1000, 10, 3) == 100.0
        assert ratio_from_seats(1000, 3, 3) == pytest.approx(333.3333333)

    def test_zero_seats(self):
        with pytest.raises(InvalidTarget):
            ratio_from_seats(1000, 0, 3)

    def test_fewer_seats_than_entities(self):
        with pytest.raises(InvalidTarget, match="less than the number of entities"):
            ratio_from_seats(1000, 2, 3)

    def test_invalid_target_is_a_value_error(self):
        with pytest.raises(ValueError):
            ratio_from_seats(1000, 0, 3)

    def test_zero_population(self):
        with pytest.raises(InvalidTarget):
            ratio_from_seats(0, 10, 3)


class TestSeatsFromRatio:
    def test_floor_of_population_over_ratio(self):
        assert seats_from_ratio(1000, 120, 3) == 8
        assert seats_from_ratio(1000, 100, 3) == 10

    def test_zero_ratio(self):
        with pytest.raises(InvalidTarget):
            seats_from_ratio(1000, 0, 3)

    def test_negative_ratio(self):
        with pytest.raises(InvalidTarget):
            seats_from_ratio(1000, -5, 3)

    def test_ratio_at_or_above_population(self):
        with pytest.raises(InvalidTarget):
            seats_from_ratio(1000, 1000, 3)
        with pytest.raises(InvalidTarget):
            seats_from_ratio(1000, 5000, 3)

    def test_large_ratio_warns_but_succeeds(self):
        with pytest.warns(ProportionalityWarning):
            seats = seats_from_ratio(1000, 400, 3)
        assert seats == 2


class TestResolveTarget:
    def test_total_seats(self):
        resolved = resolve_target(1000, 3, TotalSeats(10))
        assert resolved.total_seats == 10
        assert resolved.ratio == 100.0
        assert resolved.warning is None

    def test_ideal_ratio(self):
        resolved = resolve_target(1000, 3, IdealRatio(120))
        assert resolved.total_seats == 8
        assert resolved.ratio == 120.0
        assert resolved.warning is None

    def test_ideal_ratio_carries_warning(self):
        with pytest.warns(ProportionalityWarning):
            resolved = resolve_target(1000, 3, IdealRatio(400))
        assert resolved.total_seats == 2
        assert "greater than the total population" in resolved.warning

    def test_unknown_target(self):
        with pytest.raises(TypeError):
            resolve_target(1000, 3, 10)
