"""Data models for stored scores and recalculation runs."""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from src.scoring.models import Number, PointBreakdown, TournamentResult


@dataclass(frozen=True)
class TournamentInfo:
    """Tournament metadata needed to score its results."""

    tournament_id: str
    name: str
    date: Optional[str]  # YYYY-MM-DD
    scoring_format: str = "stableford"
    multiplier: Number = 1
    multi_day: bool = False


@dataclass(frozen=True)
class StoredScore:
    """A persisted score record, in either the legacy or the current shape.

    Legacy records carry ``scored_36_plus`` instead of a raw score. None
    means the flag was never recorded. ``raw_score_placeholder`` marks a raw
    score substituted from the flag rather than observed; such records keep
    the flag until a real score replaces the placeholder.
    """

    score_id: str
    golfer_id: str
    tournament_id: str
    participated: bool
    position: Optional[int]
    raw_score: Optional[float] = None
    scored_36_plus: Optional[bool] = None
    base_points: int = 0
    bonus_points: int = 0
    multiplied_points: Number = 0
    raw_score_placeholder: bool = False

    @property
    def has_real_score(self) -> bool:
        return self.raw_score is not None and not self.raw_score_placeholder

    @property
    def breakdown(self) -> PointBreakdown:
        return PointBreakdown(
            base_points=self.base_points,
            bonus_points=self.bonus_points,
            multiplied_points=self.multiplied_points,
        )

    def to_result(self, tournament: TournamentInfo, raw_score: Optional[float]) -> TournamentResult:
        return TournamentResult(
            golfer_id=self.golfer_id,
            tournament_id=self.tournament_id,
            participated=self.participated,
            position=self.position,
            raw_score=raw_score,
            scoring_format=tournament.scoring_format,
            multiplier=tournament.multiplier,
            multi_day=tournament.multi_day,
        )

    def with_points(
        self,
        raw_score: Optional[float],
        breakdown: PointBreakdown,
        placeholder: bool = False,
    ) -> "StoredScore":
        """The record rescored with *raw_score*.

        A real score retires the legacy flag. A placeholder keeps it, so a
        later run can still resolve the record from the same flag or
        replace it with a matched score.
        """
        return replace(
            self,
            raw_score=raw_score,
            scored_36_plus=self.scored_36_plus if placeholder else None,
            raw_score_placeholder=placeholder and raw_score is not None,
            base_points=breakdown.base_points,
            bonus_points=breakdown.bonus_points,
            multiplied_points=breakdown.multiplied_points,
        )


@dataclass(frozen=True)
class PlannedUpdate:
    """How one record will look after recalculation."""

    before: StoredScore
    after: StoredScore
    resolution: str  # native, matched, fallback_bonus, fallback_null

    @property
    def changed(self) -> bool:
        return self.before != self.after


@dataclass
class RecalculationSummary:
    """Per-run counts. The hosting tool decides how to display them."""

    total_records: int = 0
    native: int = 0
    matched: int = 0
    unmatched: int = 0
    fallback_bonus: int = 0
    fallback_null: int = 0
    excluded: int = 0
    orphaned: int = 0
    changed: int = 0
    points_before: float = 0
    points_after: float = 0

    @property
    def fallback_applied(self) -> int:
        return self.fallback_bonus + self.fallback_null

    @property
    def point_drift(self) -> float:
        return self.points_after - self.points_before

    def to_dict(self) -> dict:
        return {
            "total_records": self.total_records,
            "native": self.native,
            "matched": self.matched,
            "unmatched": self.unmatched,
            "fallback_applied": self.fallback_applied,
            "fallback_bonus": self.fallback_bonus,
            "fallback_null": self.fallback_null,
            "excluded": self.excluded,
            "orphaned": self.orphaned,
            "changed": self.changed,
            "points_before": self.points_before,
            "points_after": self.points_after,
            "point_drift": self.point_drift,
        }


@dataclass
class RecalculationPlan:
    """Output of the shared compute path used by both preview and apply."""

    updates: List[PlannedUpdate] = field(default_factory=list)
    summary: RecalculationSummary = field(default_factory=RecalculationSummary)

    @property
    def records(self) -> List[StoredScore]:
        return [u.after for u in self.updates]
