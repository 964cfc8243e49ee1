# src/apportionment/ratio.py

import math
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple

from .models import IdealRatio, InvalidTarget, ProportionalityWarning, Target, TotalSeats


@dataclass(frozen=True)
class ResolvedTarget:
    total_seats: int
    ratio: float
    warning: Optional[str] = None


def _check_population(population) -> None:
    if population <= 0:
        raise InvalidTarget(f"Total population must be positive; got {population}.")


def ratio_from_seats(population: int, total_seats: int, n_entities: int) -> float:
    """
    Ideal ratio (people per seat) for a given house size.
    Every entity is owed one seat, so the house must hold at least `n_entities`.
    """
    _check_population(population)
    if total_seats <= 0:
        raise InvalidTarget("There cannot be zero seats to apportion.")
    if total_seats < n_entities:
        raise InvalidTarget(
            f"There cannot be {total_seats} total seats since that is less than "
            f"the number of entities which is {n_entities}."
        )
    return population / total_seats


def _implied_seats(population: int, ideal_ratio: float, n_entities: int) -> Tuple[int, Optional[str]]:
    _check_population(population)
    if ideal_ratio <= 0:
        raise InvalidTarget(f"People per seat ratio must be positive; got {ideal_ratio}.")
    if ideal_ratio >= population:
        raise InvalidTarget(
            f"People per seat ratio of {ideal_ratio} specified when total population is {population}."
        )
    message = None
    if ideal_ratio >= population / n_entities:
        message = (
            f"People per seat ratio of {ideal_ratio} is greater than the total population "
            f"divided by the number of entities"
        )
    return math.floor(population / ideal_ratio), message


def seats_from_ratio(population: int, ideal_ratio: float, n_entities: int) -> int:
    """
    House size implied by an ideal ratio: floor(population / ideal_ratio).

    A ratio at or above population / n_entities is allowed but emits a
    ProportionalityWarning.
    """
    total_seats, message = _implied_seats(population, ideal_ratio, n_entities)
    if message:
        warnings.warn(message, ProportionalityWarning, stacklevel=2)
    return total_seats


def resolve_target(population: int, n_entities: int, target: Target) -> ResolvedTarget:
    """Turn either kind of target into both a seat total and a ratio."""
    if isinstance(target, TotalSeats):
        ratio = ratio_from_seats(population, target.seats, n_entities)
        return ResolvedTarget(total_seats=target.seats, ratio=ratio)

    if isinstance(target, IdealRatio):
        total_seats, message = _implied_seats(population, target.ratio, n_entities)
        if message:
            warnings.warn(message, ProportionalityWarning, stacklevel=2)
        return ResolvedTarget(total_seats=total_seats, ratio=float(target.ratio), warning=message)

    raise TypeError(f"Unsupported target type: {type(target).__name__}")
