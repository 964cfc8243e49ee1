# src/apportionment/plots.py

import os
from typing import List, Mapping, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .models import AllocationResult, Method


def _save_fig(fig, outdir: str, name: str) -> List[str]:
    os.makedirs(outdir, exist_ok=True)
    paths = []
    for ext in ("pdf", "png"):
        path = os.path.join(outdir, f"{name}.{ext}")
        fig.savefig(path, dpi=300, bbox_inches="tight")
        paths.append(path)
    plt.close(fig)
    return paths


def plot_diff_barh(names, diff, title, outdir, name, topk=20) -> List[str]:
    idx = np.argsort(-np.abs(diff), kind="stable")[:topk]
    st = np.array(names)[idx]
    d = np.array(diff)[idx]

    fig = plt.figure(figsize=(10, 5.625))  # 16:9
    ax = fig.add_subplot(111)
    y = np.arange(len(st))
    ax.barh(y, d)
    ax.set_yticks(y)
    ax.set_yticklabels(st)
    ax.invert_yaxis()
    ax.axvline(0, linewidth=1)
    ax.set_xlabel("Seat difference (method - HH)")
    ax.set_title(title)
    return _save_fig(fig, outdir, name)


def plot_seat_differences(
    names: Sequence[str],
    results: Mapping[Method, AllocationResult],
    outdir: str,
    topk: int = 20,
) -> List[str]:
    """
    One bar chart per method showing its largest seat differences against
    Huntington-Hill. Returns the written file paths.
    """
    if Method.HUNTINGTON_HILL not in results:
        raise ValueError("Huntington-Hill result is required as the baseline.")
    hh = np.array(results[Method.HUNTINGTON_HILL].seats)

    written = []
    for method, result in results.items():
        if method is Method.HUNTINGTON_HILL:
            continue
        diff = np.array(result.seats) - hh
        written += plot_diff_barh(
            names,
            diff,
            f"{method.label} vs HH (top differences)",
            outdir,
            f"bar_{method.value.replace('-', '_')}_vs_hh",
            topk=topk,
        )
    return written
