"""Tests for input loading and population helpers."""

import numpy as np
import pandas as pd
import pytest

from apportionment.models import Entity
from apportionment.utils import (
    compute_representation_ratios,
    fairness_deviation,
    load_census_data,
    max_ratio,
    normalize_population,
    to_entities,
)


class TestLoadCensusData:
    def test_headerless_csv(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("Zeta,5000,-8\nAlpha,3000,5\nMid,2000,0\n")
        df = load_census_data(path)
        assert df["name"].tolist() == ["Zeta", "Alpha", "Mid"]
        assert df["population"].tolist() == [5000, 3000, 2000]
        assert df["bias"].tolist() == [-8, 5, 0]

    def test_header_csv_without_bias(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("State,Population\nB,200\nA,100\n")
        df = load_census_data(path)
        assert df["name"].tolist() == ["B", "A"]
        assert df["bias"].tolist() == [0, 0]

    def test_header_csv_with_bias(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("name,pop2020,bias\nB,200,4\nA,100,-4\n")
        df = load_census_data(path)
        assert df["bias"].tolist() == [4, -4]

    def test_xlsx(self, tmp_path):
        path = tmp_path / "states.xlsx"
        pd.DataFrame({"State": ["A", "B"], "Population": [100, 200]}).to_excel(path, index=False)
        df = load_census_data(path)
        assert df["population"].tolist() == [100, 200]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_census_data(tmp_path / "nope.csv")

    def test_negative_population(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("A,100,0\nB,-5,0\n")
        with pytest.raises(ValueError):
            load_census_data(path)

    def test_na_like_names_are_kept(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("ZA,500,0\nNA,300,0\nnull,250,0\nBW,200,0\n")
        df = load_census_data(path)
        assert df["name"].tolist() == ["ZA", "NA", "null", "BW"]
        assert df["population"].tolist() == [500, 300, 250, 200]

    def test_blank_population_raises(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("A,500,0\nB,,0\nC,200,0\n")
        with pytest.raises(ValueError, match="Population"):
            load_census_data(path)

    def test_missing_population_in_header_file_raises(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("State,Population\nA,500\nB,NA\n")
        with pytest.raises(ValueError):
            load_census_data(path)

    def test_fully_blank_rows_are_skipped(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("A,500,0\n,,\nB,300,0\n\n")
        df = load_census_data(path)
        assert df["name"].tolist() == ["A", "B"]

    def test_missing_name_raises(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("A,500,0\n,300,0\n")
        with pytest.raises(ValueError, match="Missing entity name"):
            load_census_data(path)

    def test_unrecognised_header(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("District,Population\nA,500\nB,300\n")
        with pytest.raises(ValueError, match="Could not find suitable name/population columns"):
            load_census_data(path)

    def test_to_entities(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("A,100,5\nB,200,-1\n")
        assert to_entities(load_census_data(path)) == [Entity("A", 100, 5), Entity("B", 200, -1)]


class TestNormalizePopulation:
    def test_whole_floats_accepted(self):
        assert normalize_population([1.0, 2.0]).tolist() == [1, 2]

    def test_fractional_rejected(self):
        with pytest.raises(ValueError):
            normalize_population([1.5, 2])

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            normalize_population([])

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError):
            normalize_population(["abc"])


class TestRepresentationRatios:
    def test_ratios_and_deviation(self):
        pop = pd.Series([600.0, 400.0], index=["A", "B"])
        seats = pd.Series([2.0, 2.0], index=["A", "B"])
        rho = compute_representation_ratios(pop, seats)
        assert rho.tolist() == pytest.approx([1.2, 0.8])
        assert fairness_deviation(rho) == pytest.approx(0.4)

    def test_max_ratio_ignores_zero_population(self):
        rho = pd.Series([1.0, 0.0, 2.0], index=["A", "B", "C"])
        assert max_ratio(rho) == 2.0

    def test_max_ratio_all_zero(self):
        assert np.isnan(max_ratio(pd.Series([0.0, 0.0])))
