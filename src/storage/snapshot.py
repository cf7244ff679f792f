"""League snapshot - the in-memory state a batch run reads and writes."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.recalculation.models import StoredScore, TournamentInfo
from src.scoring.models import ScoredResult


@dataclass
class GolferRecord:
    """A golfer as stored: identity plus current market price."""

    golfer_id: str
    name: str
    price: Optional[int] = None


@dataclass
class LeagueSnapshot:
    """Everything a pricing or recalculation run needs, loaded at once."""

    golfers: Dict[str, GolferRecord] = field(default_factory=dict)
    tournaments: Dict[str, TournamentInfo] = field(default_factory=dict)
    scores: Dict[str, StoredScore] = field(default_factory=dict)
    rosters: Dict[str, List[str]] = field(default_factory=dict)

    def golfer_names(self) -> Dict[str, str]:
        return {gid: g.name for gid, g in self.golfers.items()}

    def current_prices(self) -> Dict[str, int]:
        """Prices of golfers that have one."""
        return {
            gid: g.price for gid, g in self.golfers.items() if g.price is not None
        }

    def scored_history(self) -> List[ScoredResult]:
        """Stored breakdowns paired with their results, for pricing.

        Scores whose tournament is missing are skipped.
        """
        history = []
        for score_id in sorted(self.scores):
            score = self.scores[score_id]
            tournament = self.tournaments.get(score.tournament_id)
            if tournament is None:
                continue
            history.append(
                ScoredResult(
                    result=score.to_result(tournament, score.raw_score),
                    breakdown=score.breakdown,
                )
            )
        return history

    def put_score(self, score: StoredScore) -> None:
        """Replace one score record (the writer used by recalculation)."""
        self.scores[score.score_id] = score

    def set_prices(self, prices: Dict[str, int]) -> int:
        """Write new prices onto golfer records; returns the number updated."""
        updated = 0
        for gid, price in prices.items():
            golfer = self.golfers.get(gid)
            if golfer is None:
                continue
            golfer.price = price
            updated += 1
        return updated
