"""Data models for pricing runs."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class GolferPerformanceProfile:
    """Aggregated performance for one golfer, rebuilt on every run."""

    golfer_id: str
    total_points: float
    times_played: int
    wins: int
    podiums: int
    bonus_round_count: int
    average_points_per_event: float  # Damped toward the league baseline
    consistency_rate: float
    composite_score: float


@dataclass(frozen=True)
class PriceUpdate:
    """Old and new price for a golfer, with 1-based ranks (ties share a rank)."""

    golfer_id: str
    old_price: Optional[int]
    new_price: int
    old_rank: int
    new_rank: int

    @property
    def change(self) -> int:
        return self.new_price - (self.old_price or 0)


@dataclass(frozen=True)
class RankInversion:
    """Two golfers whose price order flipped during a run."""

    higher_golfer_id: str  # Priced above the other before the run
    lower_golfer_id: str
    higher_old_price: int
    lower_old_price: int
    higher_new_price: int
    lower_new_price: int


@dataclass(frozen=True)
class RosterBudget:
    """New-price cost of one team roster against the cap."""

    team_id: str
    golfer_ids: List[str]
    total_cost: int
    budget_cap: int
    unpriced_golfer_ids: List[str] = field(default_factory=list)

    @property
    def over_by(self) -> int:
        return max(self.total_cost - self.budget_cap, 0)

    @property
    def is_over_budget(self) -> bool:
        return self.total_cost > self.budget_cap


@dataclass
class PricingReport:
    """Integrity and budget findings for a pricing run."""

    rank_inversions: List[RankInversion] = field(default_factory=list)
    over_budget_rosters: List[RosterBudget] = field(default_factory=list)
    point_drift_total: float = 0.0
    tier_counts: Dict[str, int] = field(default_factory=dict)
    top_roster_cost: int = 0
    cap_forces_tradeoffs: bool = False

    @property
    def ranking_preserved(self) -> bool:
        return not self.rank_inversions


@dataclass
class PricingResult:
    """Everything a pricing run produces. Nothing here has been persisted."""

    prices: Dict[str, int] = field(default_factory=dict)
    profiles: Dict[str, GolferPerformanceProfile] = field(default_factory=dict)
    updates: List[PriceUpdate] = field(default_factory=list)
    report: PricingReport = field(default_factory=PricingReport)
