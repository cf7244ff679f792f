"""Recalculate every stored score under the current scoring system.

Usage:
    python -m src.recalculation.run_recalculation <snapshot.json> [results.csv] [--apply] [--exclude-absent]

Without ``--apply`` this is a preview: the summary is computed and logged
but the snapshot file is left untouched.

Examples:
    python -m src.recalculation.run_recalculation data/snapshots/league.json
    python -m src.recalculation.run_recalculation data/snapshots/league.json data/raw/2025.csv --apply
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from src.logging_config import setup_logging
from src.recalculation.config import RecalculationConfig
from src.recalculation.ingestion import ResultsIngester
from src.recalculation.models import RecalculationPlan
from src.recalculation.recalculator import ScoreRecalculator
from src.storage.snapshot import LeagueSnapshot
from src.storage.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def recalculate_snapshot(
    snapshot: LeagueSnapshot,
    source_path: Optional[Path] = None,
    config: Optional[RecalculationConfig] = None,
    write: bool = True,
) -> RecalculationPlan:
    """Recalculate *snapshot* and return the plan.

    With *write* the planned records replace the snapshot's scores in
    memory; otherwise this is a preview and the snapshot is left as loaded.
    """
    source = None
    if source_path is not None:
        source = ResultsIngester(source_path).read_results()

    recalculator = ScoreRecalculator(config=config)
    args = (
        list(snapshot.scores.values()),
        snapshot.tournaments,
        snapshot.golfer_names(),
        source,
    )
    if not write:
        return recalculator.preview(*args)
    return recalculator.apply(snapshot.put_score, *args)


def run_recalculation(
    snapshot_path: Path,
    source_path: Optional[Path] = None,
    apply: bool = False,
    config: Optional[RecalculationConfig] = None,
    store: Optional[SnapshotStore] = None,
) -> RecalculationPlan:
    """Load a snapshot, recalculate it, and save it when *apply* is set.

    Raises:
        FileNotFoundError: If the snapshot or results file doesn't exist.
    """
    store = store or SnapshotStore()
    mode = "APPLY" if apply else "PREVIEW"
    logger.info("Starting score recalculation (%s) for %s", mode, snapshot_path)

    snapshot = store.load(snapshot_path)
    plan = recalculate_snapshot(snapshot, source_path, config, write=apply)

    if apply:
        store.save(snapshot, snapshot_path)
        logger.info("Recalculation applied to %s", snapshot_path)
    else:
        logger.info("Preview complete - run with --apply to write changes")

    return plan


if __name__ == "__main__":
    setup_logging()

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    flags = {a for a in sys.argv[1:] if a.startswith("--")}

    if not args:
        print(__doc__)
        sys.exit(2)

    snapshot_path = Path(args[0])
    source_path = Path(args[1]) if len(args) > 1 else None
    config = RecalculationConfig(
        absent_flag_policy="exclude" if "--exclude-absent" in flags else "no_bonus"
    )

    try:
        plan = run_recalculation(
            snapshot_path, source_path, apply="--apply" in flags, config=config
        )
        for key, value in plan.summary.to_dict().items():
            print(f"{key:>18}: {value}")
    except Exception:
        logger.exception("Recalculation failed")
        sys.exit(1)
