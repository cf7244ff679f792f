import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Price bounds (minor currency units): £3.5M floor, £14.5M ceiling
MIN_PRICE = 3_500_000
MAX_PRICE = 14_500_000

# Convex power curve exponent. Values > 1 spread the stars apart.
POWER_EXPONENT = 1.3

# Exponent used by the first pricing script. It is concave and squeezes the
# top end together; only use it to reproduce historical prices.
LEGACY_POWER_EXPONENT = 0.7

# Round prices to the nearest £100K
ROUND_TO = 100_000

# League average points per event, the baseline small samples blend toward
MEAN_AVG_PTS = 3

# Events before a golfer's raw average is trusted outright
MIN_SAMPLE_SIZE = 5

# Events before a consistency rate is computed at all
CONSISTENCY_MIN_EVENTS = 3

# Composite score weights
COMPOSITE_WEIGHTS = {
    "total_points": 1.0,
    "average_points": 5.0,
    "wins": 8.0,
    "podiums": 3.0,
    "consistency": 20.0,
}

NORMALIZATION_MODES = ("composite", "rank")

# Team rules
BUDGET_CAP = 50_000_000
ROSTER_SIZE = 6

# Reporting tiers: (label, lower bound inclusive), highest first
PRICE_TIERS = (
    ("Elite", 12_000_000),
    ("Star", 9_000_000),
    ("Strong", 6_000_000),
    ("Average", 4_500_000),
    ("Developing", 0),
)


@dataclass(frozen=True)
class PricingConfig:
    """Settings for one pricing run. Defaults are the live game values."""

    floor_price: int = MIN_PRICE
    ceiling_price: int = MAX_PRICE
    exponent: float = POWER_EXPONENT
    round_to: int = ROUND_TO
    league_baseline: float = MEAN_AVG_PTS
    min_sample_size: int = MIN_SAMPLE_SIZE
    consistency_min_events: int = CONSISTENCY_MIN_EVENTS
    weights: Dict[str, float] = field(
        default_factory=lambda: dict(COMPOSITE_WEIGHTS)
    )
    normalization: str = "composite"
    budget_cap: int = BUDGET_CAP
    roster_size: int = ROSTER_SIZE
    tiers: Tuple[Tuple[str, int], ...] = PRICE_TIERS

    def __post_init__(self):
        if self.floor_price >= self.ceiling_price:
            raise ValueError(
                f"floor_price ({self.floor_price}) must be below "
                f"ceiling_price ({self.ceiling_price})"
            )
        if self.round_to <= 0:
            raise ValueError(f"round_to must be positive, got {self.round_to}")
        if self.min_sample_size < 1:
            raise ValueError(
                f"min_sample_size must be at least 1, got {self.min_sample_size}"
            )
        if self.normalization not in NORMALIZATION_MODES:
            raise ValueError(
                f"Invalid normalization: {self.normalization!r}. "
                f"Must be one of {NORMALIZATION_MODES}."
            )
        missing = set(COMPOSITE_WEIGHTS) - self.weights.keys()
        if missing:
            raise ValueError(f"Missing composite weights: {sorted(missing)}")
        if self.exponent <= 0:
            raise ValueError(f"exponent must be positive, got {self.exponent}")
        if self.exponent < 1:
            logger.warning(
                "Pricing exponent %.2f is below 1: the curve compresses top "
                "prices instead of separating them",
                self.exponent,
            )

    @property
    def price_range(self) -> int:
        return self.ceiling_price - self.floor_price


DEFAULT_PRICING_CONFIG = PricingConfig()
