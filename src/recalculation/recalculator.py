"""Batch recalculation of stored points after a scoring-formula change.

Preview and apply share :meth:`ScoreRecalculator.plan`; apply only hands
the planned records to a writer afterwards, so a preview predicts exactly
what apply will write.

Raw score resolution, per record:

* **native** - the record already has an observed (non-placeholder) raw score.
* **matched** - a raw score was found in the uploaded results sheet.
* **fallback_bonus** - unmatched, legacy 36+ flag true: the weakest score
  that still earns a bonus for the tournament's format.
* **fallback_null** - unmatched, flag false (or never recorded, under the
  ``"no_bonus"`` policy): unknown score, no bonus.

Records resolved from a real score drop the legacy flag. Fallback records
keep it, and a substituted raw score is marked ``raw_score_placeholder``, so
later runs still treat them as unmatched: the same inputs reproduce the same
fallback, and a corrected results sheet replaces it.
"""

import logging
from typing import Callable, Iterable, List, Mapping, Optional

import pandas as pd

from src.recalculation.config import RecalculationConfig
from src.recalculation.matching import match_raw_scores
from src.recalculation.models import (
    PlannedUpdate,
    RecalculationPlan,
    RecalculationSummary,
    StoredScore,
    TournamentInfo,
)
from src.scoring.calculator import ScoringCalculator

logger = logging.getLogger(__name__)

ScoreWriter = Callable[[StoredScore], None]


class ScoreRecalculator:
    """Re-derives PointBreakdowns for every stored score."""

    def __init__(
        self,
        calculator: Optional[ScoringCalculator] = None,
        config: Optional[RecalculationConfig] = None,
    ):
        self.calculator = calculator or ScoringCalculator()
        self.config = config or RecalculationConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def plan(
        self,
        records: Iterable[StoredScore],
        tournaments: Mapping[str, TournamentInfo],
        golfer_names: Optional[Mapping[str, str]] = None,
        source: Optional[pd.DataFrame] = None,
    ) -> RecalculationPlan:
        """Compute the new state of every record without writing anything.

        Args:
            records: All stored score records.
            tournaments: Tournament metadata by id.
            golfer_names: Display name by golfer id (for sheet matching).
            source: Optional results sheet with ``date``, ``player`` and
                ``raw_score`` columns.

        Returns:
            :class:`RecalculationPlan` with one update per recalculated
            record and the run summary.
        """
        records = list(records)
        summary = RecalculationSummary(total_records=len(records))
        updates: List[PlannedUpdate] = []

        needs_score = [
            r for r in records
            if not r.has_real_score and r.tournament_id in tournaments
        ]
        matches = {}
        if source is not None and needs_score:
            matches = match_raw_scores(
                needs_score,
                tournaments,
                golfer_names or {},
                source,
                strip_suffixes=self.config.match_suffix_stripped,
            )

        for record in records:
            summary.points_before += record.multiplied_points

            tournament = tournaments.get(record.tournament_id)
            if tournament is None:
                logger.warning(
                    "Score %s references unknown tournament %s; left unchanged",
                    record.score_id, record.tournament_id,
                )
                summary.orphaned += 1
                summary.points_after += record.multiplied_points
                continue

            resolution, raw_score = self._resolve(record, tournament, matches)
            if resolution is None:
                summary.excluded += 1
                summary.points_after += record.multiplied_points
                continue

            breakdown = self.calculator.score(record.to_result(tournament, raw_score))
            update = PlannedUpdate(
                before=record,
                after=record.with_points(
                    raw_score, breakdown, placeholder=resolution.startswith("fallback")
                ),
                resolution=resolution,
            )
            updates.append(update)

            summary.points_after += breakdown.multiplied_points
            if update.changed:
                summary.changed += 1
            self._count(summary, resolution)

        self._log_summary(summary)
        return RecalculationPlan(updates=updates, summary=summary)

    def preview(self, *args, **kwargs) -> RecalculationPlan:
        """Plan only. Identical to :meth:`plan`; named for call-site clarity."""
        plan = self.plan(*args, **kwargs)
        logger.info("Preview complete - no changes written")
        return plan

    def apply(
        self,
        writer: ScoreWriter,
        records: Iterable[StoredScore],
        tournaments: Mapping[str, TournamentInfo],
        golfer_names: Optional[Mapping[str, str]] = None,
        source: Optional[pd.DataFrame] = None,
    ) -> RecalculationPlan:
        """Plan, then pass every planned record to *writer*.

        Each write is a whole record, so a crash mid-run leaves every
        record internally consistent; re-running completes the job.
        """
        plan = self.plan(records, tournaments, golfer_names, source)
        for update in plan.updates:
            writer(update.after)
        logger.info("Applied %d record update(s)", len(plan.updates))
        return plan

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve(
        self,
        record: StoredScore,
        tournament: TournamentInfo,
        matches: Mapping[str, float],
    ):
        """Return ``(resolution, raw_score)``, or ``(None, None)`` to exclude."""
        if record.has_real_score:
            return "native", record.raw_score

        if record.score_id in matches:
            return "matched", matches[record.score_id]

        if record.scored_36_plus is True:
            floor = self.calculator.config.lowest_bonus_floor(
                tournament.scoring_format, tournament.multi_day
            )
            return "fallback_bonus", floor

        if record.scored_36_plus is None and self.config.absent_flag_policy == "exclude":
            return None, None

        return "fallback_null", None

    @staticmethod
    def _count(summary: RecalculationSummary, resolution: str) -> None:
        if resolution == "native":
            summary.native += 1
        elif resolution == "matched":
            summary.matched += 1
        else:
            summary.unmatched += 1
            if resolution == "fallback_bonus":
                summary.fallback_bonus += 1
            else:
                summary.fallback_null += 1

    @staticmethod
    def _log_summary(summary: RecalculationSummary) -> None:
        logger.info(
            "Recalculated %d of %d record(s): %d native, %d matched, "
            "%d unmatched, %d excluded, %d orphaned, %d changed",
            summary.total_records - summary.excluded - summary.orphaned,
            summary.total_records, summary.native, summary.matched,
            summary.unmatched, summary.excluded, summary.orphaned, summary.changed,
        )
        if summary.fallback_applied:
            logger.warning(
                "Fallback applied to %d unmatched record(s): %d flag -> bonus "
                "floor, %d -> unknown score",
                summary.fallback_applied, summary.fallback_bonus, summary.fallback_null,
            )
        logger.info(
            "Points before: %s, after: %s, drift: %+g",
            summary.points_before, summary.points_after, summary.point_drift,
        )
