"""Tests for seat-difference charts."""

import os

import pytest

from apportionment import allocate_all
from apportionment.models import Method, TotalSeats
from apportionment.plots import plot_seat_differences


class TestPlotSeatDifferences:
    def test_writes_pdf_and_png_per_method(self, abc_entities, tmp_path):
        results = allocate_all(abc_entities, TotalSeats(12))
        paths = plot_seat_differences([e.name for e in abc_entities], results, str(tmp_path))
        assert len(paths) == 6
        assert all(os.path.exists(p) for p in paths)
        assert os.path.join(str(tmp_path), "bar_webster_vs_hh.pdf") in paths

    def test_needs_baseline(self, abc_entities, tmp_path):
        results = allocate_all(abc_entities, TotalSeats(10))
        del results[Method.HUNTINGTON_HILL]
        with pytest.raises(ValueError):
            plot_seat_differences([e.name for e in abc_entities], results, str(tmp_path))
