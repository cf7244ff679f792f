"""Roster budget audit against newly computed prices."""

import logging
from typing import Dict, List, Mapping, Sequence

from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from src.pricing.models import RosterBudget

logger = logging.getLogger(__name__)


class BudgetAuditor:
    """Checks team rosters against the salary cap.

    Over-cap rosters are reported only; enforcement happens at the next
    transfer window.
    """

    def __init__(self, config: PricingConfig = DEFAULT_PRICING_CONFIG):
        self.config = config

    def roster_cost(
        self, team_id: str, golfer_ids: Sequence[str], prices: Mapping[str, int]
    ) -> RosterBudget:
        """Total the new prices of one roster."""
        unpriced = [gid for gid in golfer_ids if gid not in prices]
        if unpriced:
            logger.warning(
                "Roster %s references %d unpriced golfer(s): %s",
                team_id, len(unpriced), unpriced,
            )
        if len(golfer_ids) != self.config.roster_size:
            logger.warning(
                "Roster %s has %d golfers (expected %d)",
                team_id, len(golfer_ids), self.config.roster_size,
            )
        total = sum(prices.get(gid, 0) for gid in golfer_ids)
        return RosterBudget(
            team_id=team_id,
            golfer_ids=list(golfer_ids),
            total_cost=total,
            budget_cap=self.config.budget_cap,
            unpriced_golfer_ids=unpriced,
        )

    def audit(
        self,
        rosters: Mapping[str, Sequence[str]],
        prices: Mapping[str, int],
    ) -> List[RosterBudget]:
        """Return every roster whose total exceeds the cap (strictly)."""
        over: List[RosterBudget] = []
        for team_id in sorted(rosters):
            budget = self.roster_cost(team_id, rosters[team_id], prices)
            if budget.is_over_budget:
                logger.warning(
                    "Team %s over budget: %d (over by %d)",
                    team_id, budget.total_cost, budget.over_by,
                )
                over.append(budget)

        if rosters:
            logger.info(
                "Budget audit: %d of %d roster(s) exceed the %d cap",
                len(over), len(rosters), self.config.budget_cap,
            )
        return over

    def top_roster_cost(self, prices: Mapping[str, int]) -> int:
        """Cost of the ``roster_size`` most expensive golfers."""
        top = sorted(prices.values(), reverse=True)[: self.config.roster_size]
        return sum(top)

    def tier_counts(self, prices: Mapping[str, int]) -> Dict[str, int]:
        """Count golfers per price tier."""
        counts = {label: 0 for label, _ in self.config.tiers}
        for price in prices.values():
            for label, lower_bound in self.config.tiers:
                if price >= lower_bound:
                    counts[label] += 1
                    break
        return counts
