"""Snapshot persistence - load and save league snapshots as JSON files."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from src.recalculation.models import StoredScore, TournamentInfo
from src.scoring.calculator import ValidationError, multiplier_for_type
from src.storage.config import (
    BACKUPS_DIR,
    DEFAULT_SCORING_FORMAT,
    DEFAULT_TOURNAMENT_TYPE,
)
from src.storage.snapshot import GolferRecord, LeagueSnapshot

logger = logging.getLogger(__name__)

_PODIUM = {1, 2, 3}


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read or is malformed."""


class SnapshotStore:
    """Reads and writes league snapshots and price backups."""

    def __init__(self, backup_dir: Optional[Path] = None):
        self.backup_dir = backup_dir or BACKUPS_DIR

    def load(self, path: Path) -> LeagueSnapshot:
        """Load a snapshot from *path*.

        Raises:
            FileNotFoundError: if the file does not exist.
            SnapshotError: if the file is not valid snapshot JSON.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Snapshot not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            snapshot = self._dict_to_snapshot(data)
        except (
            json.JSONDecodeError, KeyError, TypeError, ValueError, ValidationError,
        ) as e:
            raise SnapshotError(f"Corrupt snapshot {path}: {e}") from e

        logger.info(
            "Loaded snapshot %s: %d golfers, %d tournaments, %d scores, %d rosters",
            path.name, len(snapshot.golfers), len(snapshot.tournaments),
            len(snapshot.scores), len(snapshot.rosters),
        )
        return snapshot

    def save(self, snapshot: LeagueSnapshot, path: Path) -> Path:
        """Write *snapshot* to *path* as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self._snapshot_to_dict(snapshot), f, indent=2)

        logger.info("Saved snapshot to %s", path)
        return path

    def backup_prices(self, snapshot: LeagueSnapshot) -> Path:
        """Export every golfer's current price before it is overwritten."""
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.backup_dir / f"pricing-backup-{stamp}.json"

        backup = [
            {"golfer_id": g.golfer_id, "name": g.name, "price": g.price}
            for g in sorted(snapshot.golfers.values(), key=lambda g: g.golfer_id)
        ]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(backup, f, indent=2)

        logger.info("Backed up %d prices to %s", len(backup), path)
        return path

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _snapshot_to_dict(self, snapshot: LeagueSnapshot) -> Dict:
        return {
            "golfers": [
                {"golfer_id": g.golfer_id, "name": g.name, "price": g.price}
                for g in snapshot.golfers.values()
            ],
            "tournaments": [
                {
                    "tournament_id": t.tournament_id,
                    "name": t.name,
                    "date": t.date,
                    "scoring_format": t.scoring_format,
                    "multiplier": t.multiplier,
                    "multi_day": t.multi_day,
                }
                for t in snapshot.tournaments.values()
            ],
            "scores": [
                self._score_to_dict(s)
                for s in sorted(snapshot.scores.values(), key=lambda s: s.score_id)
            ],
            "rosters": snapshot.rosters,
        }

    @staticmethod
    def _score_to_dict(score: StoredScore) -> Dict:
        data = {
            "score_id": score.score_id,
            "golfer_id": score.golfer_id,
            "tournament_id": score.tournament_id,
            "participated": score.participated,
            "position": score.position,
            "raw_score": score.raw_score,
            "base_points": score.base_points,
            "bonus_points": score.bonus_points,
            "multiplied_points": score.multiplied_points,
        }
        # Only legacy and fallback records still carry the flag
        if score.scored_36_plus is not None:
            data["scored_36_plus"] = score.scored_36_plus
        if score.raw_score_placeholder:
            data["raw_score_placeholder"] = True
        return data

    def _dict_to_snapshot(self, data: Dict) -> LeagueSnapshot:
        golfers = {
            gd["golfer_id"]: GolferRecord(
                golfer_id=gd["golfer_id"],
                name=gd.get("name", gd["golfer_id"]),
                price=gd.get("price"),
            )
            for gd in data.get("golfers", [])
        }

        tournaments = {}
        for td in data.get("tournaments", []):
            multiplier = td.get("multiplier")
            if multiplier is None:
                multiplier = multiplier_for_type(
                    td.get("tournament_type", DEFAULT_TOURNAMENT_TYPE)
                )
            tournaments[td["tournament_id"]] = TournamentInfo(
                tournament_id=td["tournament_id"],
                name=td.get("name", td["tournament_id"]),
                date=td.get("date"),
                scoring_format=td.get("scoring_format") or DEFAULT_SCORING_FORMAT,
                multiplier=multiplier,
                multi_day=td.get("multi_day", False),
            )

        scores = {}
        for sd in data.get("scores", []):
            position = sd.get("position")
            # Stored finishing positions outside the podium score nothing
            if position not in _PODIUM:
                position = None
            scores[sd["score_id"]] = StoredScore(
                score_id=sd["score_id"],
                golfer_id=sd["golfer_id"],
                tournament_id=sd["tournament_id"],
                participated=sd["participated"],
                position=position,
                raw_score=sd.get("raw_score"),
                scored_36_plus=sd.get("scored_36_plus"),
                base_points=sd.get("base_points", 0),
                bonus_points=sd.get("bonus_points", 0),
                multiplied_points=sd.get("multiplied_points", 0),
                raw_score_placeholder=sd.get("raw_score_placeholder", False),
            )

        rosters = {
            str(team_id): list(golfer_ids)
            for team_id, golfer_ids in data.get("rosters", {}).items()
        }

        return LeagueSnapshot(
            golfers=golfers,
            tournaments=tournaments,
            scores=scores,
            rosters=rosters,
        )
