"""Reprice every golfer from their scored history.

Usage:
    python -m src.pricing.run_pricing <snapshot.json> [--apply] [--backup] [--rank] [--recalculate]

Flags:
    --apply        write the new prices (and recalculated scores) to the snapshot
    --backup       export current prices to data/backups before applying
    --rank         normalize by current price rank instead of composite score
    --recalculate  recalculate stored points first; the report carries the drift

Examples:
    python -m src.pricing.run_pricing data/snapshots/league.json
    python -m src.pricing.run_pricing data/snapshots/league.json --rank --apply --backup
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from src.logging_config import setup_logging
from src.pricing.config import PricingConfig
from src.pricing.pricing_engine import PricingEngine
from src.pricing.models import PricingResult
from src.recalculation.run_recalculation import recalculate_snapshot
from src.storage.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def run_pricing(
    snapshot_path: Path,
    apply: bool = False,
    backup: bool = False,
    config: Optional[PricingConfig] = None,
    recalculate: bool = False,
    store: Optional[SnapshotStore] = None,
) -> PricingResult:
    """Load a snapshot, price it, and save prices when *apply* is set.

    Args:
        snapshot_path: League snapshot JSON.
        apply: Persist new prices (and recalculated scores).
        backup: Export current prices first (only when applying).
        config: Pricing settings; defaults to the live game values.
        recalculate: Recalculate stored points before pricing.
        store: Snapshot store to use.

    Returns:
        The :class:`PricingResult` of the run.

    Raises:
        FileNotFoundError: If the snapshot doesn't exist.
    """
    store = store or SnapshotStore()
    engine = PricingEngine(config or PricingConfig())
    mode = "APPLY" if apply else "PREVIEW"

    logger.info("Starting pricing run (%s) for %s", mode, snapshot_path)
    snapshot = store.load(snapshot_path)

    point_drift = 0.0
    if recalculate:
        logger.info("Recalculating stored points in memory before pricing...")
        point_drift = recalculate_snapshot(snapshot).summary.point_drift

    result = engine.run(
        snapshot.scored_history(),
        current_prices=snapshot.current_prices(),
        rosters=snapshot.rosters,
        golfer_ids=snapshot.golfers.keys(),
    )
    result.report.point_drift_total = point_drift

    _log_result(result, snapshot)

    if apply:
        if backup:
            store.backup_prices(snapshot)
        updated = snapshot.set_prices(result.prices)
        store.save(snapshot, snapshot_path)
        logger.info("Updated %d golfer prices", updated)
    else:
        logger.info("Preview complete - run with --apply to write prices")

    return result


def _log_result(result: PricingResult, snapshot) -> None:
    names = snapshot.golfer_names()
    for u in result.updates[:15]:
        logger.info(
            "  #%-3d %12s -> %12d  %s",
            u.old_rank, u.old_price if u.old_price is not None else "-",
            u.new_price, names.get(u.golfer_id, u.golfer_id),
        )
    if len(result.updates) > 15:
        logger.info("  ... %d more", len(result.updates) - 15)

    report = result.report
    logger.info(
        "Tiers: %s",
        ", ".join(f"{label}={count}" for label, count in report.tier_counts.items()),
    )
    logger.info(
        "Top roster cost: %d (forces trade-offs: %s)",
        report.top_roster_cost, report.cap_forces_tradeoffs,
    )
    logger.info(
        "Ranking preserved: %s | Over-budget rosters: %d | Point drift: %+g",
        report.ranking_preserved, len(report.over_budget_rosters),
        report.point_drift_total,
    )


if __name__ == "__main__":
    setup_logging()

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    flags = {a for a in sys.argv[1:] if a.startswith("--")}

    if not args:
        print(__doc__)
        sys.exit(2)

    config = PricingConfig(normalization="rank" if "--rank" in flags else "composite")

    try:
        result = run_pricing(
            Path(args[0]),
            apply="--apply" in flags,
            backup="--backup" in flags,
            config=config,
            recalculate="--recalculate" in flags,
        )
        print(f"Priced {len(result.prices)} golfers")
    except Exception:
        logger.exception("Pricing run failed")
        sys.exit(1)
