"""Performance profiles and composite scores.

Aggregates each golfer's scored history into a
:class:`GolferPerformanceProfile`. Profiles are rebuilt from the full
history on every run and never updated incrementally.
"""

import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from src.pricing.models import GolferPerformanceProfile
from src.scoring.models import ScoredResult

logger = logging.getLogger(__name__)

_HISTORY_COLUMNS = [
    "golfer_id", "participated", "position", "bonus_points", "multiplied_points",
]


def history_to_frame(history: Iterable[ScoredResult]) -> pd.DataFrame:
    """Flatten scored results into one row per result."""
    rows = [
        {
            "golfer_id": s.result.golfer_id,
            "participated": s.result.participated,
            "position": s.result.position,
            "bonus_points": s.breakdown.bonus_points,
            "multiplied_points": s.breakdown.multiplied_points,
        }
        for s in history
    ]
    return pd.DataFrame(rows, columns=_HISTORY_COLUMNS)


def damped_average(
    total_points: float,
    times_played: int,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> float:
    """Per-event average blended toward the league baseline.

    Below ``min_sample_size`` events, each missing event counts as one
    baseline-average event::

        adjusted = (raw * played + baseline * (min_sample - played)) / min_sample
    """
    raw = total_points / times_played if times_played else 0.0
    min_sample = config.min_sample_size
    if times_played >= min_sample:
        return raw
    missing = min_sample - times_played
    return (raw * times_played + config.league_baseline * missing) / min_sample


def consistency_rate(
    bonus_round_count: int,
    times_played: int,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> float:
    """Share of events that earned a bonus; 0 until enough events are played."""
    if times_played < config.consistency_min_events:
        return 0.0
    return bonus_round_count / times_played


def composite_score(
    total_points: float,
    average_points: float,
    wins: int,
    podiums: int,
    consistency: float,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> float:
    w = config.weights
    return (
        total_points * w["total_points"]
        + average_points * w["average_points"]
        + wins * w["wins"]
        + podiums * w["podiums"]
        + consistency * w["consistency"]
    )


def build_profiles(
    history: Iterable[ScoredResult],
    golfer_ids: Optional[Iterable[str]] = None,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> Dict[str, GolferPerformanceProfile]:
    """Build a profile for every golfer.

    Args:
        history: All scored results for the population.
        golfer_ids: Golfers to profile even if they have no history
            (they get a baseline-only profile).
        config: Pricing settings (baseline, sample sizes, weights).

    Returns:
        Dict mapping ``golfer_id`` to its profile.
    """
    df = history_to_frame(history)
    played = df[df["participated"].astype(bool)].copy()
    played["is_win"] = played["position"] == 1
    played["is_podium"] = played["position"].isin([1, 2, 3])
    played["is_bonus"] = played["bonus_points"] > 0

    grouped = played.groupby("golfer_id").agg(
        total_points=("multiplied_points", "sum"),
        times_played=("multiplied_points", "size"),
        wins=("is_win", "sum"),
        podiums=("is_podium", "sum"),
        bonus_round_count=("is_bonus", "sum"),
    )

    all_ids: List[str] = sorted(
        set(df["golfer_id"]) | set(golfer_ids or [])
    )

    profiles: Dict[str, GolferPerformanceProfile] = {}
    for golfer_id in all_ids:
        if golfer_id in grouped.index:
            row = grouped.loc[golfer_id]
            total = float(row["total_points"])
            times_played = int(row["times_played"])
            wins = int(row["wins"])
            podiums = int(row["podiums"])
            bonus_rounds = int(row["bonus_round_count"])
        else:
            total, times_played, wins, podiums, bonus_rounds = 0.0, 0, 0, 0, 0

        average = damped_average(total, times_played, config)
        consistency = consistency_rate(bonus_rounds, times_played, config)

        profiles[golfer_id] = GolferPerformanceProfile(
            golfer_id=golfer_id,
            total_points=total,
            times_played=times_played,
            wins=wins,
            podiums=podiums,
            bonus_round_count=bonus_rounds,
            average_points_per_event=average,
            consistency_rate=consistency,
            composite_score=composite_score(
                total, average, wins, podiums, consistency, config
            ),
        )

    logger.info(
        "Built %d performance profiles from %d results (%d played)",
        len(profiles), len(df), len(played),
    )
    return profiles
