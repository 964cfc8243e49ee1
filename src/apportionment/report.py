# src/apportionment/report.py

"""
Reporting layer: turns allocation results into seat / electoral-vote tables,
the all-methods comparison table, and fairness metrics.
Nothing here feeds back into the allocation core.
"""

from pathlib import Path
from typing import Mapping, Optional, Sequence

import pandas as pd

from .config import BONUS_SEATS, SWING_BIAS_LIMIT
from .models import AllocationResult, Entity, Method
from .utils import compute_representation_ratios, fairness_deviation, max_ratio

PARTIES = ("Red", "Blue", "Swing")


def classify_bias(bias: int) -> str:
    if abs(bias) < SWING_BIAS_LIMIT:
        return "Swing"
    if bias >= SWING_BIAS_LIMIT:
        return "Blue"
    return "Red"


def electoral_vote_table(entities: Sequence[Entity], result: AllocationResult) -> pd.DataFrame:
    df = pd.DataFrame({
        "Name": [e.name for e in entities],
        "Population": [e.population for e in entities],
        "Seats": list(result.seats),
    })
    df["Electoral Votes"] = df["Seats"] + BONUS_SEATS
    return df


def party_summary(entities: Sequence[Entity], result: AllocationResult) -> pd.DataFrame:
    """
    Electoral votes and share of the electoral total per lean.
    The total is assigned seats plus the bonus seats of every entity.
    """
    table = electoral_vote_table(entities, result)
    table["Party"] = [classify_bias(e.bias) for e in entities]
    votes = table.groupby("Party")["Electoral Votes"].sum().reindex(PARTIES, fill_value=0)

    total_ev = result.assigned_seats + BONUS_SEATS * len(entities)
    out = pd.DataFrame({"Electoral Votes": votes.astype(int)})
    out["Percent"] = out["Electoral Votes"] / total_ev * 100.0
    out.index.name = "Party"
    return out


def _with_total(table: pd.DataFrame, total: dict) -> pd.DataFrame:
    return pd.concat([table, pd.DataFrame([total])], ignore_index=True)


def render_seat_report(entities: Sequence[Entity], result: AllocationResult, fmt: str = "csv") -> str:
    table = electoral_vote_table(entities, result)
    summary = party_summary(entities, result)
    total = {
        "Name": "Total",
        "Population": sum(e.population for e in entities),
        "Seats": result.assigned_seats,
        "Electoral Votes": result.assigned_seats + BONUS_SEATS * len(entities),
    }
    table = _with_total(table, total)

    if fmt == "csv":
        lines = [table.to_csv(index=False, lineterminator="\n").rstrip("\n")]
        for party, row in summary.iterrows():
            lines.append(f"{party},{int(row['Electoral Votes'])},{row['Percent']:g}%")
        return "\n".join(lines) + "\n"

    if fmt == "text":
        summary = summary.reset_index()
        summary["Percent"] = summary["Percent"].map(lambda p: f"{p:.2f}%")
        return table.to_string(index=False) + "\n\n" + summary.to_string(index=False) + "\n"

    raise ValueError(f"Unknown report format: {fmt!r}")


def comparison_table(entities: Sequence[Entity], results: Mapping[Method, AllocationResult]) -> pd.DataFrame:
    """One row per entity, one seat column per method, plus a Total row."""
    df = pd.DataFrame({
        "State": [e.name for e in entities],
        "Population": [e.population for e in entities],
    })
    for method, result in results.items():
        df[method.label] = list(result.seats)

    total = {"State": "Total", "Population": int(df["Population"].sum())}
    total.update({method.label: result.assigned_seats for method, result in results.items()})
    return _with_total(df, total)


def render_comparison(entities: Sequence[Entity], results: Mapping[Method, AllocationResult], fmt: str = "latex") -> str:
    table = comparison_table(entities, results)
    if fmt == "latex":
        rows = [" & ".join(str(c) for c in table.columns)]
        for values in table.itertuples(index=False):
            rows.append(" & ".join(str(v) for v in values))
        return "\n".join(rows) + "\n"
    if fmt == "csv":
        return table.to_csv(index=False, lineterminator="\n")
    if fmt == "text":
        return table.to_string(index=False) + "\n"
    raise ValueError(f"Unknown report format: {fmt!r}")


def fairness_table(entities: Sequence[Entity], results: Mapping[Method, AllocationResult]) -> pd.DataFrame:
    """
    Fairness deviation and max/min representation ratio per method, fairest first.

    Zero-population entities (rho = 0) are left out of the max/min ratio.
    """
    names = [e.name for e in entities]
    pop = pd.Series([e.population for e in entities], index=names, dtype=float)

    rows = []
    for method, result in results.items():
        rho = compute_representation_ratios(pop, result.as_series(names).astype(float))
        rows.append({
            "method": method.label,
            "FD(sum|rho-1|)": fairness_deviation(rho),
            "max_ratio(rho_max/rho_min)": max_ratio(rho),
        })
    return pd.DataFrame(rows).sort_values("FD(sum|rho-1|)").reset_index(drop=True)


def _format_for(path: Path, default: str) -> str:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return "csv"
    if suffix == ".tex":
        return "latex"
    return default


def write_seat_report(entities: Sequence[Entity], result: AllocationResult, path) -> Path:
    path = Path(path)
    fmt = "csv" if path.suffix.lower() == ".csv" else "text"
    path.write_text(render_seat_report(entities, result, fmt=fmt))
    return path


def write_comparison_report(
    entities: Sequence[Entity],
    results: Mapping[Method, AllocationResult],
    path,
    fmt: Optional[str] = None,
) -> Path:
    path = Path(path)
    path.write_text(render_comparison(entities, results, fmt=fmt or _format_for(path, "latex")))
    return path
