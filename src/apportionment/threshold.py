# src/apportionment/threshold.py

import logging
import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from . import config
from .models import NonConvergent
from .utils import ones

logger = logging.getLogger(__name__)

Rounding = Callable[[np.ndarray], np.ndarray]


def round_down(quotas: np.ndarray) -> np.ndarray:
    return np.floor(quotas)


def round_half_up(quotas: np.ndarray) -> np.ndarray:
    # np.round is banker's rounding; 2.5 must go to 3.
    return np.floor(quotas + 0.5)


def divide_and_round(pop: np.ndarray, divisor: float, rounding: Rounding, seats: np.ndarray) -> np.ndarray:
    """
    One divisor pass: entities whose population exceeds the divisor get
    rounding(pop / divisor) seats, the rest keep what they have.
    Seats never go down within a pass.
    """
    out = seats.copy()
    mask = pop > divisor
    if mask.any():
        quotas = rounding(pop[mask] / divisor).astype(np.int64)
        out[mask] = np.maximum(out[mask], quotas)
    return out


@dataclass(frozen=True)
class SearchOutcome:
    seats: np.ndarray
    divisor: float
    iterations: int


@dataclass(frozen=True)
class ThresholdSearch:
    """
    Divisor search shared by the Jefferson and Webster seat-target modes.

    Each pass assigns seats with the current divisor. The search stops as
    soon as the total reaches (or passes) the target. Otherwise the divisor
    shrinks by `shrink_factor` and the pass is repeated, either from a fresh
    all-ones vector (`restart=True`) or on top of the previous seats.
    A pass that falls short at `min_divisor`, or running out of
    `max_iterations`, raises NonConvergent.

    With `integral=True` the divisor is truncated to a whole number after
    every shrink, so it strictly decreases and always reaches the floor.
    """

    shrink_factor: float = config.SHRINK_FACTOR
    max_iterations: int = config.MAX_ITERATIONS
    min_divisor: float = config.MIN_DIVISOR
    restart: bool = True
    integral: bool = False

    def __post_init__(self):
        if not 0.0 < self.shrink_factor < 1.0:
            raise ValueError(f"shrink_factor must be in (0, 1); got {self.shrink_factor}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1; got {self.max_iterations}")
        if self.min_divisor <= 0:
            raise ValueError(f"min_divisor must be positive; got {self.min_divisor}")

    def shrink(self, divisor: float) -> float:
        smaller = divisor * self.shrink_factor
        if self.integral:
            smaller = float(math.floor(smaller))
        return max(smaller, self.min_divisor)

    def run(
        self,
        pop: np.ndarray,
        total_seats: int,
        divisor: float,
        rounding: Rounding,
        label: str = "divisor",
    ) -> SearchOutcome:
        pop = np.asarray(pop)
        seats = ones(len(pop))
        assigned = int(seats.sum())

        for iteration in range(1, self.max_iterations + 1):
            if self.restart:
                seats = ones(len(pop))
            seats = divide_and_round(pop, divisor, rounding, seats)
            assigned = int(seats.sum())

            if assigned >= total_seats:
                logger.debug("Required %d loops for %s method", iteration, label)
                return SearchOutcome(seats=seats, divisor=divisor, iterations=iteration)

            if divisor <= self.min_divisor:
                raise NonConvergent(
                    f"Cannot allocate {label} method with given inputs: "
                    f"{assigned} of {total_seats} seats at divisor {divisor:g}",
                    divisor=divisor,
                    assigned_seats=assigned,
                    iterations=iteration,
                )

            logger.debug(
                "Recalculating %s method (%d of %d seats at divisor %g)",
                label, assigned, total_seats, divisor,
            )
            divisor = self.shrink(divisor)

        raise NonConvergent(
            f"Cannot allocate {label} method within {self.max_iterations} passes: "
            f"{assigned} of {total_seats} seats at divisor {divisor:g}",
            divisor=divisor,
            assigned_seats=assigned,
            iterations=self.max_iterations,
        )


JEFFERSON_SEARCH = ThresholdSearch(restart=False, integral=True)
WEBSTER_SEARCH = ThresholdSearch(restart=True, integral=False)
