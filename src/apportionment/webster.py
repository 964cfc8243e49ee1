# src/apportionment/webster.py

from typing import Optional, Sequence

from .models import AllocationResult, Method
from .ratio import ratio_from_seats, seats_from_ratio
from .threshold import WEBSTER_SEARCH, ThresholdSearch, divide_and_round, round_half_up
from .utils import make_result, normalize_population, ones, require_one_target


def apportion_webster(
    pop: Sequence[int],
    *,
    total_seats: Optional[int] = None,
    ideal_ratio: Optional[float] = None,
    search: Optional[ThresholdSearch] = None,
) -> AllocationResult:
    """
    Major fractions (Sainte-Laguë) method; quotas are rounded half up.

    The seat-target mode starts from divisor = population / total_seats and
    redoes the whole pass from one seat each time the divisor shrinks.
    """
    require_one_target(total_seats, ideal_ratio)
    pop = normalize_population(pop)
    population = int(pop.sum())

    if ideal_ratio is not None:
        requested = seats_from_ratio(population, ideal_ratio, len(pop))
        seats = divide_and_round(pop, ideal_ratio, round_half_up, ones(len(pop)))
        return make_result(Method.WEBSTER, seats, requested, divisor=float(ideal_ratio), iterations=1)

    ratio = ratio_from_seats(population, total_seats, len(pop))
    search = search or WEBSTER_SEARCH
    outcome = search.run(pop, total_seats, ratio, round_half_up, label=Method.WEBSTER.label)
    return make_result(
        Method.WEBSTER,
        outcome.seats,
        total_seats,
        divisor=outcome.divisor,
        iterations=outcome.iterations,
    )
