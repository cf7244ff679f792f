"""Scoring calculator: turns a raw tournament result into points.

Every function here is pure. Malformed input is a contract violation and
raises :class:`ValidationError` naming the offending field; nothing is
coerced.
"""

import logging
import math
from typing import Iterable, List, Optional

import pandas as pd

from src.scoring.config import (
    DEFAULT_SCORING_CONFIG,
    SCORING_FORMATS,
    TOURNAMENT_TYPE_MULTIPLIERS,
    ScoringConfig,
)
from src.scoring.models import PointBreakdown, ScoredResult, TournamentResult

logger = logging.getLogger(__name__)

_VALID_POSITIONS = {None, 1, 2, 3}


class ValidationError(Exception):
    """Raised when a tournament result violates the scoring contract."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_result(result: TournamentResult) -> None:
    """Fail fast on any malformed field of *result*."""
    if not isinstance(result.participated, bool):
        raise ValidationError(
            "participated", f"must be a bool, got {result.participated!r}"
        )

    position = result.position
    if position is not None and (
        not isinstance(position, int)
        or isinstance(position, bool)
        or position not in _VALID_POSITIONS
    ):
        raise ValidationError(
            "position", f"must be None, 1, 2 or 3, got {position!r}"
        )

    if result.raw_score is not None:
        if not _is_number(result.raw_score) or not math.isfinite(result.raw_score):
            raise ValidationError(
                "raw_score", f"must be a finite number or None, got {result.raw_score!r}"
            )

    if result.scoring_format not in SCORING_FORMATS:
        raise ValidationError(
            "scoring_format",
            f"must be one of {SCORING_FORMATS}, got {result.scoring_format!r}",
        )

    if not _is_number(result.multiplier) or not math.isfinite(result.multiplier):
        raise ValidationError(
            "multiplier", f"must be a number, got {result.multiplier!r}"
        )
    if result.multiplier <= 0:
        raise ValidationError(
            "multiplier", f"must be positive, got {result.multiplier!r}"
        )

    if not isinstance(result.multi_day, bool):
        raise ValidationError(
            "multi_day", f"must be a bool, got {result.multi_day!r}"
        )


def base_points(
    position: Optional[int], config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> int:
    """Points for a finishing position: 10 / 7 / 5 for the podium, else 0."""
    if position is None:
        return 0
    return config.position_points.get(position, 0)


def bonus_points(
    raw_score: Optional[float],
    scoring_format: str,
    multi_day: bool = False,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    """Bonus for the raw round score.

    An unknown score (None) never earns a bonus. Stableford rewards high
    scores, medal rewards low stroke counts.
    """
    if raw_score is None:
        return 0

    top, lower = config.thresholds(scoring_format, multi_day)

    if scoring_format == "stableford":
        if raw_score >= top:
            return config.top_bonus
        if raw_score >= lower:
            return config.lower_bonus
        return 0

    if raw_score <= top:
        return config.top_bonus
    if raw_score <= lower:
        return config.lower_bonus
    return 0


def calculate_points(
    result: TournamentResult, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> PointBreakdown:
    """Validate *result* and derive its PointBreakdown."""
    validate_result(result)

    if not result.participated:
        return PointBreakdown.zero()

    base = base_points(result.position, config)
    bonus = bonus_points(
        result.raw_score, result.scoring_format, result.multi_day, config
    )
    return PointBreakdown(
        base_points=base,
        bonus_points=bonus,
        multiplied_points=(base + bonus) * result.multiplier,
    )


def multiplier_for_type(tournament_type: str) -> int:
    """Points multiplier for a tournament type (regular / elevated / signature)."""
    try:
        return TOURNAMENT_TYPE_MULTIPLIERS[tournament_type]
    except KeyError:
        raise ValidationError(
            "tournament_type",
            f"must be one of {sorted(TOURNAMENT_TYPE_MULTIPLIERS)}, "
            f"got {tournament_type!r}",
        ) from None


class ScoringCalculator:
    """Applies one scoring-system version to results in bulk."""

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.config = config

    def score(self, result: TournamentResult) -> PointBreakdown:
        return calculate_points(result, self.config)

    def score_all(self, results: Iterable[TournamentResult]) -> List[ScoredResult]:
        """Score every result, pairing each with its breakdown."""
        scored = [ScoredResult(r, self.score(r)) for r in results]
        logger.debug(
            "Scored %d results under scoring %s", len(scored), self.config.version
        )
        return scored

    def score_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add ``base_points``, ``bonus_points`` and ``multiplied_points``.

        *df* needs one column per :class:`TournamentResult` field
        (``multiplier`` and ``multi_day`` may be omitted). NaN in
        ``position`` or ``raw_score`` is read as None.

        Returns:
            Copy of *df* with the three point columns added.
        """
        out = df.copy()
        breakdowns = [self.score(_row_to_result(row)) for _, row in out.iterrows()]

        out["base_points"] = [b.base_points for b in breakdowns]
        out["bonus_points"] = [b.bonus_points for b in breakdowns]
        out["multiplied_points"] = [b.multiplied_points for b in breakdowns]

        logger.info(
            "Scored %d results (%s), %s total points",
            len(out), self.config.version,
            out["multiplied_points"].sum() if len(out) else 0,
        )
        return out


def _optional(val):
    """Return None for NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return None
    if isinstance(val, float) and math.isnan(val):
        return None
    return val


def _native(value):
    """Unwrap numpy scalars so validation sees plain Python values."""
    return value.item() if hasattr(value, "item") else value


def _row_to_result(row: pd.Series) -> TournamentResult:
    # A column holding NaN is float, so whole-number positions come back as 1.0
    position = _native(_optional(row.get("position")))
    if isinstance(position, float) and position.is_integer():
        position = int(position)

    multiplier = _native(_optional(row.get("multiplier")))
    multi_day = _native(_optional(row.get("multi_day")))

    return TournamentResult(
        golfer_id=str(row["golfer_id"]),
        tournament_id=str(row["tournament_id"]),
        participated=_native(row["participated"]),
        position=position,
        raw_score=_native(_optional(row.get("raw_score"))),
        scoring_format=row["scoring_format"],
        multiplier=1 if multiplier is None else multiplier,
        multi_day=False if multi_day is None else multi_day,
    )
