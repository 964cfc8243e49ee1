# src/apportionment/hamilton.py

from typing import Optional, Sequence

import numpy as np

from .models import AllocationResult, Method
from .ratio import ratio_from_seats
from .utils import make_result, normalize_population, ones


def apportion_hamilton(
    pop: Sequence[int],
    total_seats: int,
    ratio: Optional[float] = None,
) -> AllocationResult:
    """
    Largest remainder method.

    Entities start at max(1, floor(pop / ratio)) seats; remaining seats go
    one at a time to the largest surplus pop / ratio - seats, first entity
    winning ties. If that starting vector already exceeds `total_seats`
    nothing is taken back and the result carries a warning.
    """
    pop = normalize_population(pop)
    if ratio is None:
        ratio = ratio_from_seats(int(pop.sum()), total_seats, len(pop))

    quotas = pop / ratio
    seats = np.maximum(ones(len(pop)), np.floor(quotas).astype(np.int64))
    assigned = int(seats.sum())

    iterations = 0
    while assigned < total_seats:
        surplus = quotas - seats
        # argmax returns the first maximum, so earlier entities win ties
        idx = int(np.argmax(surplus))
        seats[idx] += 1
        assigned += 1
        iterations += 1

    return make_result(Method.HAMILTON, seats, total_seats, divisor=float(ratio), iterations=iterations)
