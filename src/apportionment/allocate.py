# src/apportionment/allocate.py

import logging
import warnings
from typing import Dict, Mapping, Optional, Sequence

from .hamilton import apportion_hamilton
from .huntington_hill import apportion_huntington_hill
from .jefferson import apportion_jefferson
from .models import (
    AllocationRequest,
    AllocationResult,
    Entity,
    IdealRatio,
    Method,
    ProportionalityWarning,
    Target,
)
from .ratio import resolve_target
from .threshold import ThresholdSearch
from .utils import normalize_population
from .webster import apportion_webster

logger = logging.getLogger(__name__)

# Column order of the all-methods report
ALL_METHODS = (Method.JEFFERSON, Method.HAMILTON, Method.HUNTINGTON_HILL, Method.WEBSTER)


def allocate(request: AllocationRequest, search: Optional[ThresholdSearch] = None) -> AllocationResult:
    """
    Run the requested method on the request's entities.

    An IdealRatio target drives Jefferson and Webster in their single-pass
    ratio mode; Hamilton and Huntington-Hill use the seat total implied by
    it. A TotalSeats target puts Jefferson and Webster into divisor search,
    tuned by `search` when given.
    """
    pop = normalize_population(request.populations)
    resolved = resolve_target(int(pop.sum()), len(pop), request.target)
    by_ratio = isinstance(request.target, IdealRatio)
    method = request.method

    logger.debug(
        "Running %s method for %d entities (%d seats, ratio %g)",
        method.label, len(pop), resolved.total_seats, resolved.ratio,
    )

    # The ratio was already checked above; don't warn about it twice.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ProportionalityWarning)
        if method is Method.HAMILTON:
            result = apportion_hamilton(pop, resolved.total_seats, ratio=resolved.ratio)
        elif method is Method.HUNTINGTON_HILL:
            result = apportion_huntington_hill(pop, resolved.total_seats)
        elif method is Method.JEFFERSON:
            if by_ratio:
                result = apportion_jefferson(pop, ideal_ratio=resolved.ratio)
            else:
                result = apportion_jefferson(pop, total_seats=resolved.total_seats, search=search)
        elif method is Method.WEBSTER:
            if by_ratio:
                result = apportion_webster(pop, ideal_ratio=resolved.ratio)
            else:
                result = apportion_webster(pop, total_seats=resolved.total_seats, search=search)
        else:
            raise ValueError(f"Unknown apportionment method: {method!r}")

    return result.with_warning(resolved.warning)


def allocate_all(
    entities: Sequence[Entity],
    target: Target,
    searches: Optional[Mapping[Method, ThresholdSearch]] = None,
) -> Dict[Method, AllocationResult]:
    """Run every method on the same input, in report column order."""
    searches = searches or {}
    results = {}
    for method in ALL_METHODS:
        logger.debug("Running %s method", method.label)
        results[method] = allocate(
            AllocationRequest(entities=tuple(entities), method=method, target=target),
            search=searches.get(method),
        )
    return results
