"""Pricing engine: scored history in, bounded golfer prices out.

A run is a pure computation over an in-memory snapshot:

1. Rebuild every golfer's performance profile and composite score.
2. Normalize to 0-1, either against the best composite score or by
   position within the current price range.
3. Map onto the convex price curve.
4. Compare the new price order with the old one and report inversions.
5. Audit existing rosters against the salary cap.

Nothing is written anywhere; the caller persists :class:`PricingResult`.
"""

import logging
from itertools import combinations
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from src.pricing.budget_audit import BudgetAuditor
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from src.pricing.models import (
    PriceUpdate,
    PricingReport,
    PricingResult,
    RankInversion,
)
from src.pricing.price_curve import (
    calculate_price,
    normalize_by_price,
    normalize_composite,
)
from src.pricing.profiles import build_profiles
from src.scoring.models import ScoredResult

logger = logging.getLogger(__name__)


def rank_descending(values: Mapping[str, float]) -> Dict[str, int]:
    """1-based rank by value, highest first; equal values share the best rank."""
    if not values:
        return {}
    series = pd.Series(values, dtype="float64")
    ranks = series.rank(method="min", ascending=False).astype(int)
    return ranks.to_dict()


def find_rank_inversions(
    old_prices: Mapping[str, int], new_prices: Mapping[str, int]
) -> List[RankInversion]:
    """Every pair priced A > B before the run but A < B after it.

    Ties on either side are not inversions. Golfers without an old price
    are skipped.
    """
    ordered = sorted(
        (gid for gid in old_prices if gid in new_prices),
        key=lambda gid: (-old_prices[gid], gid),
    )
    inversions: List[RankInversion] = []
    for higher, lower in combinations(ordered, 2):
        if old_prices[higher] > old_prices[lower] and new_prices[higher] < new_prices[lower]:
            inversions.append(
                RankInversion(
                    higher_golfer_id=higher,
                    lower_golfer_id=lower,
                    higher_old_price=old_prices[higher],
                    lower_old_price=old_prices[lower],
                    higher_new_price=new_prices[higher],
                    lower_new_price=new_prices[lower],
                )
            )
    return inversions


class PricingEngine:
    """Computes new golfer prices and the accompanying audit report."""

    def __init__(self, config: PricingConfig = DEFAULT_PRICING_CONFIG):
        self.config = config
        self.auditor = BudgetAuditor(config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        history: Iterable[ScoredResult],
        current_prices: Optional[Mapping[str, int]] = None,
        rosters: Optional[Mapping[str, Sequence[str]]] = None,
        golfer_ids: Optional[Iterable[str]] = None,
    ) -> PricingResult:
        """Price every golfer in the population.

        Args:
            history: Every scored result for the population.
            current_prices: Price per golfer before this run. Required
                for rank-based normalization; used for the inversion check
                in both modes.
            rosters: Team id -> golfer ids, for the budget audit.
            golfer_ids: Extra golfers to price even without history.

        Returns:
            :class:`PricingResult` with new prices, profiles, per-golfer
            updates and the report. An empty population yields an empty
            result.
        """
        current_prices = dict(current_prices or {})
        rosters = rosters or {}

        population = set(golfer_ids or []) | set(current_prices)
        profiles = build_profiles(history, population, self.config)

        if not profiles:
            logger.info("No golfers to price")
            return PricingResult()

        logger.info(
            "Pricing %d golfers (normalization=%s, exponent=%.2f)",
            len(profiles), self.config.normalization, self.config.exponent,
        )

        normalized = self._normalize(profiles, current_prices)
        new_prices = {
            gid: calculate_price(score, self.config)
            for gid, score in normalized.items()
        }

        for gid in sorted(new_prices):
            logger.debug(
                "%s: composite=%.2f normalized=%.4f price=%d",
                gid, profiles[gid].composite_score, normalized[gid], new_prices[gid],
            )

        updates = self._build_updates(current_prices, new_prices)
        report = self._build_report(current_prices, new_prices, rosters)

        return PricingResult(
            prices=new_prices,
            profiles=profiles,
            updates=updates,
            report=report,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _normalize(self, profiles, current_prices: Dict[str, int]) -> Dict[str, float]:
        if self.config.normalization == "rank":
            # Golfers new to the market sit at the floor
            effective = {
                gid: current_prices.get(gid, self.config.floor_price)
                for gid in profiles
            }
            return normalize_by_price(effective)

        return normalize_composite(
            {gid: p.composite_score for gid, p in profiles.items()}
        )

    def _build_updates(
        self, current_prices: Dict[str, int], new_prices: Dict[str, int]
    ) -> List[PriceUpdate]:
        effective_old = {
            gid: current_prices.get(gid, self.config.floor_price)
            for gid in new_prices
        }
        old_ranks = rank_descending(effective_old)
        new_ranks = rank_descending(new_prices)

        updates = [
            PriceUpdate(
                golfer_id=gid,
                old_price=current_prices.get(gid),
                new_price=new_prices[gid],
                old_rank=old_ranks[gid],
                new_rank=new_ranks[gid],
            )
            for gid in new_prices
        ]
        return sorted(updates, key=lambda u: (u.old_rank, u.golfer_id))

    def _build_report(
        self,
        current_prices: Dict[str, int],
        new_prices: Dict[str, int],
        rosters: Mapping[str, Sequence[str]],
    ) -> PricingReport:
        inversions = find_rank_inversions(current_prices, new_prices)
        if inversions:
            logger.warning(
                "Ranking not preserved: %d inverted pair(s)", len(inversions)
            )
            for inv in inversions:
                logger.warning(
                    "  %s (%d -> %d) now below %s (%d -> %d)",
                    inv.higher_golfer_id, inv.higher_old_price, inv.higher_new_price,
                    inv.lower_golfer_id, inv.lower_old_price, inv.lower_new_price,
                )
        elif current_prices:
            logger.info("Ranking preserved")

        top_cost = self.auditor.top_roster_cost(new_prices)
        forces_tradeoffs = top_cost > self.config.budget_cap
        if not forces_tradeoffs:
            logger.warning(
                "Top %d golfers cost %d, within the %d cap; consider tuning",
                self.config.roster_size, top_cost, self.config.budget_cap,
            )

        return PricingReport(
            rank_inversions=inversions,
            over_budget_rosters=self.auditor.audit(rosters, new_prices),
            tier_counts=self.auditor.tier_counts(new_prices),
            top_roster_cost=top_cost,
            cap_forces_tradeoffs=forces_tradeoffs,
        )
