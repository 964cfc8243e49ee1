#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Apportion seats among entities from a population file.

Usage example:
  apportion data/states.csv --method webster --seats 435 --output seats.csv
  apportion data/states.csv --method all --ratio 750000 --output table.tex --metrics
"""

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from . import config
from .allocate import allocate, allocate_all
from .models import AllocationRequest, ApportionmentError, IdealRatio, Method, TotalSeats
from .report import fairness_table, render_comparison, render_seat_report, write_comparison_report, write_seat_report
from .threshold import JEFFERSON_SEARCH, WEBSTER_SEARCH
from .utils import load_census_data, to_entities

METHOD_CHOICES = [m.value for m in Method] + ["all"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apportion", description="Apportion seats by population.")
    parser.add_argument("data", type=str, help="CSV or XLSX file: name, population[, bias]")
    parser.add_argument("--method", "-m", choices=METHOD_CHOICES, default=Method.HUNTINGTON_HILL.value)

    target = parser.add_mutually_exclusive_group()
    target.add_argument("--seats", "-s", type=int, default=None,
                        help=f"total seats to apportion (default {config.DEFAULT_HOUSE_SIZE})")
    target.add_argument("--ratio", "-r", type=float, default=None, help="ideal number of people per seat")

    parser.add_argument("--output", "-o", type=str, default=None,
                        help=".csv, .txt or .tex; printed to stdout when omitted")
    parser.add_argument("--metrics", action="store_true", help="print fairness metrics per method")
    parser.add_argument("--figdir", type=str, default=None, help="save seat-difference charts here")

    parser.add_argument("--shrink-factor", type=float, default=config.SHRINK_FACTOR,
                        help="divisor multiplier per search pass (0.9975 = 0.25%% shrink)")
    parser.add_argument("--max-iterations", type=int, default=config.MAX_ITERATIONS)
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        df = load_census_data(args.data)
    except (FileNotFoundError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    entities = to_entities(df)
    print(f"=== Loaded entities: {len(entities)} | total pop: {int(df['population'].sum())} ===", file=sys.stderr)

    if args.ratio is not None:
        target = IdealRatio(args.ratio)
    else:
        target = TotalSeats(args.seats if args.seats is not None else config.DEFAULT_HOUSE_SIZE)

    try:
        searches = {
            Method.JEFFERSON: dataclasses.replace(
                JEFFERSON_SEARCH, shrink_factor=args.shrink_factor, max_iterations=args.max_iterations),
            Method.WEBSTER: dataclasses.replace(
                WEBSTER_SEARCH, shrink_factor=args.shrink_factor, max_iterations=args.max_iterations),
        }
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        if args.method == "all":
            results = allocate_all(entities, target, searches=searches)
        else:
            method = Method(args.method)
            request = AllocationRequest(entities=tuple(entities), method=method, target=target)
            results = {method: allocate(request, search=searches.get(method))}
    except ApportionmentError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    for result in results.values():
        if result.warning:
            print(f"WARNING: {result.warning}", file=sys.stderr)

    if args.method == "all":
        if args.output:
            path = write_comparison_report(entities, results, args.output)
            print("Saved comparison table to:", path, file=sys.stderr)
        else:
            print(render_comparison(entities, results, fmt="text"), end="")
    else:
        (result,) = results.values()
        if args.output:
            path = write_seat_report(entities, result, args.output)
            print("Saved seat report to:", path, file=sys.stderr)
        else:
            print(render_seat_report(entities, result, fmt="text"), end="")

    if args.metrics:
        print("\n=== Metrics (sorted by FD) ===")
        print(fairness_table(entities, results).to_string(index=False))

    if args.figdir:
        if Method.HUNTINGTON_HILL not in results or len(results) < 2:
            print("WARNING: charts need --method all; skipping", file=sys.stderr)
        else:
            from .plots import plot_seat_differences

            paths = plot_seat_differences([e.name for e in entities], results, args.figdir)
            print("Figures are in:", args.figdir, f"({len(paths)} files)", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
