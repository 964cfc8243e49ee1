# src/apportionment/jefferson.py

import math
from typing import Optional, Sequence

from .models import AllocationResult, Method
from .ratio import ratio_from_seats, seats_from_ratio
from .threshold import JEFFERSON_SEARCH, ThresholdSearch, divide_and_round, round_down
from .utils import make_result, normalize_population, ones, require_one_target


def apportion_jefferson(
    pop: Sequence[int],
    *,
    total_seats: Optional[int] = None,
    ideal_ratio: Optional[float] = None,
    search: Optional[ThresholdSearch] = None,
) -> AllocationResult:
    """
    Greatest divisor (D'Hondt) method.

    With `ideal_ratio`: one pass, floor(pop / ratio) seats for every entity
    above the ratio, one seat for the rest.

    With `total_seats`: the divisor starts at floor(population / total_seats)
    and is shrunk until the seats reach the target. Overshooting is accepted
    with a warning; falling short at a divisor of 1 raises NonConvergent.
    """
    require_one_target(total_seats, ideal_ratio)
    pop = normalize_population(pop)
    population = int(pop.sum())

    if ideal_ratio is not None:
        requested = seats_from_ratio(population, ideal_ratio, len(pop))
        seats = divide_and_round(pop, ideal_ratio, round_down, ones(len(pop)))
        return make_result(Method.JEFFERSON, seats, requested, divisor=float(ideal_ratio), iterations=1)

    ratio_from_seats(population, total_seats, len(pop))
    search = search or JEFFERSON_SEARCH
    start = max(search.min_divisor, float(math.floor(population / total_seats)))
    outcome = search.run(pop, total_seats, start, round_down, label=Method.JEFFERSON.label)
    return make_result(
        Method.JEFFERSON,
        outcome.seats,
        total_seats,
        divisor=outcome.divisor,
        iterations=outcome.iterations,
    )
