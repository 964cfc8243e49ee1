from .hamilton import apportion_hamilton
from .jefferson import apportion_jefferson
from .webster import apportion_webster
from .huntington_hill import apportion_huntington_hill
from .allocate import allocate, allocate_all
from .models import (
    AllocationRequest,
    AllocationResult,
    ApportionmentError,
    Entity,
    IdealRatio,
    InvalidTarget,
    Method,
    NonConvergent,
    ProportionalityWarning,
    TotalSeats,
)
from .ratio import ratio_from_seats, seats_from_ratio, resolve_target
from .threshold import ThresholdSearch, JEFFERSON_SEARCH, WEBSTER_SEARCH
from .utils import (
    load_census_data,
    to_entities,
    normalize_population,
    compute_representation_ratios,
    fairness_deviation,
)
