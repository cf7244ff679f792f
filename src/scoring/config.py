from dataclasses import dataclass, field
from typing import Dict

# Scoring system version stamped on every config built from these defaults
SCORING_VERSION = "v2"

# Base points per finishing position (podium only)
POSITION_POINTS = {
    1: 10,
    2: 7,
    3: 5,
}

# Bonus tiers (points awarded for the raw round score)
TOP_BONUS = 3
LOWER_BONUS = 1

# Stableford: higher is better
STABLEFORD_TOP_THRESHOLD = 36
STABLEFORD_LOWER_THRESHOLD = 32

# Medal (gross strokes): lower is better
MEDAL_TOP_THRESHOLD = 72
MEDAL_LOWER_THRESHOLD = 76

# Multi-day events play twice the holes, so every threshold doubles
MULTI_DAY_FACTOR = 2

SCORING_FORMATS = ("stableford", "medal")

# Tournament type -> points multiplier
TOURNAMENT_TYPE_MULTIPLIERS = {
    "regular": 1,
    "elevated": 2,
    "signature": 3,
}


@dataclass(frozen=True)
class ScoringConfig:
    """One version of the scoring system.

    The defaults reproduce the current game rules. Changing any value is a
    scoring-system change: bump ``version`` and recalculate stored points.
    """

    version: str = SCORING_VERSION
    position_points: Dict[int, int] = field(
        default_factory=lambda: dict(POSITION_POINTS)
    )
    top_bonus: int = TOP_BONUS
    lower_bonus: int = LOWER_BONUS
    stableford_top: float = STABLEFORD_TOP_THRESHOLD
    stableford_lower: float = STABLEFORD_LOWER_THRESHOLD
    medal_top: float = MEDAL_TOP_THRESHOLD
    medal_lower: float = MEDAL_LOWER_THRESHOLD
    multi_day_factor: int = MULTI_DAY_FACTOR

    def __post_init__(self):
        if self.stableford_lower > self.stableford_top:
            raise ValueError(
                f"stableford_lower ({self.stableford_lower}) must not exceed "
                f"stableford_top ({self.stableford_top})"
            )
        if self.medal_lower < self.medal_top:
            raise ValueError(
                f"medal_lower ({self.medal_lower}) must not be below "
                f"medal_top ({self.medal_top})"
            )
        if self.multi_day_factor <= 0:
            raise ValueError("multi_day_factor must be positive")

    def thresholds(self, scoring_format: str, multi_day: bool = False) -> tuple:
        """Return ``(top, lower)`` thresholds for a format.

        For stableford a score must be >= the threshold, for medal <= it.
        """
        factor = self.multi_day_factor if multi_day else 1
        if scoring_format == "stableford":
            return self.stableford_top * factor, self.stableford_lower * factor
        if scoring_format == "medal":
            return self.medal_top * factor, self.medal_lower * factor
        raise ValueError(f"Unknown scoring format: {scoring_format!r}")

    def lowest_bonus_floor(self, scoring_format: str, multi_day: bool = False) -> float:
        """The weakest raw score that still earns a bonus."""
        return self.thresholds(scoring_format, multi_day)[1]


DEFAULT_SCORING_CONFIG = ScoringConfig()
