"""Data models for tournament results and the points they earn."""

from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class TournamentResult:
    """A single golfer's raw result in one tournament."""

    golfer_id: str
    tournament_id: str
    participated: bool
    position: Optional[int]  # 1, 2 or 3 for a podium finish, None otherwise
    raw_score: Optional[float]  # Stableford points or medal strokes
    scoring_format: str  # "stableford" or "medal"
    multiplier: Number = 1
    multi_day: bool = False


@dataclass(frozen=True)
class PointBreakdown:
    """Points derived from one TournamentResult."""

    base_points: int
    bonus_points: int
    multiplied_points: Number

    @classmethod
    def zero(cls) -> "PointBreakdown":
        return cls(base_points=0, bonus_points=0, multiplied_points=0)

    def to_dict(self) -> dict:
        return {
            "base_points": self.base_points,
            "bonus_points": self.bonus_points,
            "multiplied_points": self.multiplied_points,
        }


@dataclass(frozen=True)
class ScoredResult:
    """A result paired with its breakdown - the unit of pricing history."""

    result: TournamentResult
    breakdown: PointBreakdown

    @property
    def golfer_id(self) -> str:
        return self.result.golfer_id
