# src/apportionment/models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import pandas as pd


class ApportionmentError(Exception):
    """Base class for errors raised by the allocation core."""


class InvalidTarget(ApportionmentError, ValueError):
    """
    The seat target or ideal ratio cannot produce a valid allocation
    (zero seats, fewer seats than entities, degenerate ratio).
    """


class NonConvergent(ApportionmentError, RuntimeError):
    """
    The divisor search hit its floor (or iteration cap) while still
    short of the requested seat count.
    """

    def __init__(self, message: str, divisor: float, assigned_seats: int, iterations: int):
        super().__init__(message)
        self.divisor = divisor
        self.assigned_seats = assigned_seats
        self.iterations = iterations


class ProportionalityWarning(UserWarning):
    """The ideal ratio implies fewer seats than there are entities."""


class Method(str, Enum):
    HAMILTON = "hamilton"
    HUNTINGTON_HILL = "huntington-hill"
    JEFFERSON = "jefferson"
    WEBSTER = "webster"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Method.HAMILTON: "Hamilton",
    Method.HUNTINGTON_HILL: "HuntingtonHill",
    Method.JEFFERSON: "Jefferson",
    Method.WEBSTER: "Webster",
}


@dataclass(frozen=True)
class Entity:
    name: str
    population: int
    # Positive leans blue, negative leans red; reporting only.
    bias: int = 0


@dataclass(frozen=True)
class TotalSeats:
    seats: int


@dataclass(frozen=True)
class IdealRatio:
    ratio: float


Target = Union[TotalSeats, IdealRatio]


@dataclass(frozen=True)
class AllocationRequest:
    entities: Tuple[Entity, ...]
    method: Method
    target: Target

    def __post_init__(self):
        object.__setattr__(self, "entities", tuple(self.entities))
        object.__setattr__(self, "method", Method(self.method))

    @property
    def populations(self) -> Tuple[int, ...]:
        return tuple(e.population for e in self.entities)


@dataclass(frozen=True)
class AllocationResult:
    """
    Outcome of one allocation run.

    `seats[i]` is the seat count of the i-th entity in input order.
    `converged` is False whenever `assigned_seats != requested_seats`,
    in which case `warning` says by how much.
    """

    method: Method
    seats: Tuple[int, ...]
    assigned_seats: int
    requested_seats: int
    warning: Optional[str] = None
    divisor: Optional[float] = None
    iterations: int = 0
    converged: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "seats", tuple(int(s) for s in self.seats))
        object.__setattr__(self, "converged", self.assigned_seats == self.requested_seats)

    def as_series(self, index: Optional[Sequence] = None) -> pd.Series:
        return pd.Series(self.seats, index=index, name=self.method.label, dtype=int)

    def with_warning(self, message: Optional[str]) -> "AllocationResult":
        """Return a copy with `message` prepended to any existing warning."""
        if not message:
            return self
        merged = message if self.warning is None else f"{message}; {self.warning}"
        return AllocationResult(
            method=self.method,
            seats=self.seats,
            assigned_seats=self.assigned_seats,
            requested_seats=self.requested_seats,
            warning=merged,
            divisor=self.divisor,
            iterations=self.iterations,
        )
