# src/apportionment/huntington_hill.py

from typing import Sequence

import numpy as np

from .models import AllocationResult, Method
from .utils import make_result, normalize_population, ones


def priority_values(pop: np.ndarray, seats: np.ndarray) -> np.ndarray:
    """Equal-proportions priority: P / sqrt(s * (s + 1))."""
    return pop / np.sqrt(seats * (seats + 1.0))


def apportion_huntington_hill(pop: Sequence[int], total_seats: int) -> AllocationResult:
    pop = normalize_population(pop)
    seats = ones(len(pop))
    assigned = len(pop)

    iterations = 0
    while assigned < total_seats:
        idx = int(np.argmax(priority_values(pop, seats)))
        seats[idx] += 1
        assigned += 1
        iterations += 1

    return make_result(Method.HUNTINGTON_HILL, seats, total_seats, iterations=iterations)
