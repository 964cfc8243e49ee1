"""Default configuration constants for apportionment runs."""

# Divisor search policy (Jefferson / Webster by total seats)
SHRINK_FACTOR = 0.9975   # Divisor is reduced by 0.25% per pass
MAX_ITERATIONS = 10_000  # Hard cap on search passes
MIN_DIVISOR = 1.0        # Smallest divisor the search will try

# Reporting
BONUS_SEATS = 2          # Electoral votes = seats + 2
SWING_BIAS_LIMIT = 4     # |bias| below this counts as a swing entity

# CLI
DEFAULT_HOUSE_SIZE = 435
