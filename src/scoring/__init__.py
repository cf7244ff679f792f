from src.scoring.calculator import (
    ScoringCalculator,
    ValidationError,
    base_points,
    bonus_points,
    calculate_points,
    multiplier_for_type,
    validate_result,
)
from src.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from src.scoring.models import PointBreakdown, ScoredResult, TournamentResult

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "PointBreakdown",
    "ScoredResult",
    "ScoringCalculator",
    "ScoringConfig",
    "TournamentResult",
    "ValidationError",
    "base_points",
    "bonus_points",
    "calculate_points",
    "multiplier_for_type",
    "validate_result",
]
