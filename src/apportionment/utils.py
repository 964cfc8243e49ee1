# src/apportionment/utils.py

import logging
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from .models import AllocationResult, Entity, Method

logger = logging.getLogger(__name__)

_EXCEL_SUFFIXES = (".xlsx", ".xlsm")


def _read_table(path: Path, header) -> pd.DataFrame:
    # keep_default_na=False: 'NA', 'null', 'n/a' are valid entity names
    if path.suffix.lower() in _EXCEL_SUFFIXES:
        return pd.read_excel(path, header=header, engine="openpyxl", keep_default_na=False)
    return pd.read_csv(path, header=header, skipinitialspace=True, keep_default_na=False)


def _is_blank(value) -> bool:
    return pd.isna(value) or str(value).strip() == ""


def load_census_data(path) -> pd.DataFrame:
    """
    Load census data from a CSV or XLSX file and return a DataFrame with
    columns name, population, bias (in file order).

    Files with a header row need a name-like column ('state', 'name',
    'state_name') and a column containing 'pop'; an optional 'bias' column
    is picked up too. Files without a header are read positionally as
    name, population[, bias].

    Fully blank rows are skipped; a row missing its name or population
    raises ValueError.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Could not open {path}")

    df = _read_table(path, header=0)

    name_cols = [c for c in df.columns if str(c).strip().lower() in ("state", "name", "state_name")]
    pop_cols = [c for c in df.columns if "pop" in str(c).lower()]

    if name_cols and pop_cols:
        bias_cols = [c for c in df.columns if str(c).strip().lower() in ("bias", "lean")]
        cols = [name_cols[0], pop_cols[0]] + bias_cols[:1]
        df = df[cols].copy()
    else:
        df = _read_table(path, header=None)
        if df.shape[1] < 2 or _looks_like_header(df.iloc[0, 1]):
            raise ValueError(
                f"Could not find suitable name/population columns in {path.name}"
            )
        df = df.iloc[:, : min(3, df.shape[1])].copy()

    df.columns = ["name", "population", "bias"][: df.shape[1]]
    if "bias" not in df.columns:
        df["bias"] = 0

    if df.empty:
        raise ValueError(f"No entities found in {path.name}")
    blank_rows = df.apply(lambda row: all(_is_blank(v) for v in row), axis=1)
    df = df[~blank_rows].reset_index(drop=True)
    missing_name = df["name"].map(_is_blank)
    if missing_name.any():
        raise ValueError(f"Missing entity name on row {int(missing_name.idxmax()) + 1} of {path.name}")

    df["name"] = df["name"].astype(str).str.strip()
    df["population"] = normalize_population(df["population"])
    df["bias"] = pd.to_numeric(df["bias"], errors="coerce").fillna(0).astype(int)

    # Row order is tie-break order; do not sort.
    logger.debug("Loaded %d entities from %s", len(df), path)
    return df.reset_index(drop=True)


def _looks_like_header(value) -> bool:
    # A non-blank, non-numeric population cell in the first row is an unrecognised header.
    if _is_blank(value):
        return False
    return pd.isna(pd.to_numeric(pd.Series([value]), errors="coerce").iloc[0])


def to_entities(df: pd.DataFrame) -> List[Entity]:
    return [
        Entity(name=str(row.name), population=int(row.population), bias=int(row.bias))
        for row in df[["name", "population", "bias"]].itertuples(index=False)
    ]


def normalize_population(pop) -> np.ndarray:
    """
    Ensure populations are non-negative integers; returns an int64 array.
    """
    arr = np.asarray(pd.to_numeric(pd.Series(pop), errors="coerce"), dtype=float)
    if arr.size == 0:
        raise ValueError("At least one population is required.")
    if np.isnan(arr).any():
        raise ValueError("Population values must be present and numeric.")
    if (arr < 0).any():
        raise ValueError("Population cannot be negative.")
    if not np.all(arr == np.floor(arr)):
        raise ValueError("Population counts must be whole numbers.")
    return arr.astype(np.int64)


def make_result(
    method: Method,
    seats: np.ndarray,
    requested_seats: int,
    divisor: Optional[float] = None,
    iterations: int = 0,
) -> AllocationResult:
    """Wrap a finished seat vector, reporting any mismatch with the request."""
    assigned = int(np.sum(seats))
    warning = None
    if assigned != requested_seats:
        warning = (
            f"Allocated {method.label} method with {assigned} seats "
            f"rather than {requested_seats}"
        )
        logger.debug(warning)
    return AllocationResult(
        method=method,
        seats=tuple(int(s) for s in seats),
        assigned_seats=assigned,
        requested_seats=int(requested_seats),
        warning=warning,
        divisor=divisor,
        iterations=iterations,
    )


def compute_representation_ratios(pop: pd.Series, seats: pd.Series) -> pd.Series:
    """
    ρ_i = (P_i / s_i) / (total_population / total_seats)
    """
    if not pop.index.equals(seats.index):
        seats = seats.reindex(pop.index)

    total_pop = pop.sum()
    total_seats = seats.sum()

    avg_constituents = total_pop / total_seats
    per_member = pop / seats
    return per_member / avg_constituents


def fairness_deviation(ratios: pd.Series) -> float:
    """
    FD = sum_i |ρ_i - 1|
    """
    return float((ratios - 1.0).abs().sum())


def max_ratio(ratios: pd.Series) -> float:
    """
    rho_max / rho_min over entities with a nonzero ratio; NaN if there are none.
    A zero-population entity has rho = 0 and would make the ratio infinite.
    """
    positive = ratios[ratios > 0]
    if positive.empty:
        return float("nan")
    return float(positive.max() / positive.min())


def ones(n: int) -> np.ndarray:
    # Every entity starts with one seat.
    return np.ones(n, dtype=np.int64)


def require_one_target(total_seats, ideal_ratio) -> None:
    if (total_seats is None) == (ideal_ratio is None):
        raise TypeError("Exactly one of total_seats and ideal_ratio must be provided.")
