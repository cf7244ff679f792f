"""Shared fixtures for the scoring, pricing and recalculation test suites."""

import json

import pytest

from src.pricing.budget_audit import BudgetAuditor
from src.pricing.pricing_engine import PricingEngine
from src.recalculation.cleaning import NameCleaner
from src.recalculation.recalculator import ScoreRecalculator
from src.scoring.calculator import ScoringCalculator
from src.storage.snapshot_store import SnapshotStore


# ------------------------------------------------------------------
# Lightweight factories - cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def calculator():
    return ScoringCalculator()


@pytest.fixture(scope="module")
def pricing_engine():
    return PricingEngine()


@pytest.fixture(scope="module")
def auditor():
    return BudgetAuditor()


@pytest.fixture(scope="module")
def recalculator():
    return ScoreRecalculator()


@pytest.fixture(scope="module")
def cleaner():
    return NameCleaner()


# ------------------------------------------------------------------
# File-backed fixtures - isolated per test
# ------------------------------------------------------------------

@pytest.fixture
def store(tmp_path):
    """Snapshot store writing backups under a temp directory."""
    return SnapshotStore(backup_dir=tmp_path / "backups")


@pytest.fixture
def league_data():
    """A small league: legacy and current-format scores, two rosters."""
    return {
        "golfers": [
            {"golfer_id": "g1", "name": "Rory Byrne", "price": 9_000_000},
            {"golfer_id": "g2", "name": "Sean O'Neill", "price": 6_000_000},
            {"golfer_id": "g3", "name": "Tom Watson Jr.", "price": 4_000_000},
        ],
        "tournaments": [
            {
                "tournament_id": "t1", "name": "Spring Medal",
                "date": "2025-04-05", "scoring_format": "stableford",
                "multiplier": 1,
            },
            {
                # Stored before scoring formats and multipliers existed
                "tournament_id": "t2", "name": "Captain's Day",
                "date": "2025-05-11", "tournament_type": "elevated",
            },
        ],
        "scores": [
            {
                "score_id": "s1", "golfer_id": "g1", "tournament_id": "t1",
                "participated": True, "position": 1, "scored_36_plus": True,
                "base_points": 10, "bonus_points": 3, "multiplied_points": 13,
            },
            {
                "score_id": "s2", "golfer_id": "g2", "tournament_id": "t1",
                "participated": True, "position": 2, "scored_36_plus": False,
                "base_points": 7, "bonus_points": 0, "multiplied_points": 7,
            },
            {
                "score_id": "s3", "golfer_id": "g3", "tournament_id": "t2",
                "participated": True, "position": 7,
                "base_points": 0, "bonus_points": 0, "multiplied_points": 0,
            },
            {
                "score_id": "s4", "golfer_id": "g1", "tournament_id": "t2",
                "participated": True, "position": 3, "raw_score": 33,
                "base_points": 5, "bonus_points": 1, "multiplied_points": 12,
            },
        ],
        "rosters": {
            "team-a": ["g1", "g2", "g3"],
            "team-b": ["g2", "g3"],
        },
    }


@pytest.fixture
def snapshot_file(tmp_path, league_data):
    """The small league written to a snapshot JSON file."""
    path = tmp_path / "league.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(league_data, f)
    return path
