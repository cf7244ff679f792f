"""Tests for snapshot persistence - load/save league snapshots to/from JSON."""

import json

import pytest

from src.recalculation.models import StoredScore
from src.storage.snapshot import GolferRecord, LeagueSnapshot
from src.storage.snapshot_store import SnapshotError, SnapshotStore


# ── Helpers ──────────────────────────────────────────────────────────

def _write_json(path, data):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


# ── Loading ──────────────────────────────────────────────────────────

class TestLoad:
    def test_counts(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        assert len(snapshot.golfers) == 3
        assert len(snapshot.tournaments) == 2
        assert len(snapshot.scores) == 4
        assert snapshot.rosters["team-a"] == ["g1", "g2", "g3"]

    def test_tournament_type_sets_multiplier(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        assert snapshot.tournaments["t2"].multiplier == 2
        assert snapshot.tournaments["t1"].multiplier == 1

    def test_missing_format_defaults_to_stableford(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        assert snapshot.tournaments["t2"].scoring_format == "stableford"
        assert snapshot.tournaments["t2"].multi_day is False

    def test_non_podium_position_becomes_none(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        assert snapshot.scores["s3"].position is None
        assert snapshot.scores["s1"].position == 1

    def test_legacy_flag_loaded(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        assert snapshot.scores["s1"].scored_36_plus is True
        assert snapshot.scores["s2"].scored_36_plus is False
        assert snapshot.scores["s3"].scored_36_plus is None

    def test_missing_file(self, store, tmp_path):
        with pytest.raises(FileNotFoundError):
            store.load(tmp_path / "missing.json")

    def test_corrupt_json(self, store, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotError):
            store.load(path)

    def test_score_missing_required_field(self, store, tmp_path, league_data):
        del league_data["scores"][0]["golfer_id"]
        path = _write_json(tmp_path / "bad.json", league_data)
        with pytest.raises(SnapshotError):
            store.load(path)

    def test_unknown_tournament_type(self, store, tmp_path, league_data):
        league_data["tournaments"][1]["tournament_type"] = "major"
        path = _write_json(tmp_path / "bad.json", league_data)
        with pytest.raises(SnapshotError, match="tournament_type"):
            store.load(path)


# ── Saving ───────────────────────────────────────────────────────────

class TestSave:
    def test_round_trip(self, store, snapshot_file, tmp_path):
        snapshot = store.load(snapshot_file)
        out = store.save(snapshot, tmp_path / "out" / "league.json")
        assert store.load(out) == snapshot

    def test_legacy_flag_only_written_when_set(self, store, tmp_path):
        snapshot = LeagueSnapshot(
            tournaments={},
            scores={
                "a": StoredScore("a", "g1", "t1", True, 1, scored_36_plus=True),
                "b": StoredScore("b", "g1", "t1", True, 1, raw_score=33),
            },
        )
        path = store.save(snapshot, tmp_path / "league.json")
        with open(path, encoding="utf-8") as f:
            scores = {s["score_id"]: s for s in json.load(f)["scores"]}

        assert scores["a"]["scored_36_plus"] is True
        assert "scored_36_plus" not in scores["b"]

    def test_placeholder_score_round_trip(self, store, tmp_path):
        fallback = StoredScore("a", "g1", "t1", True, 1, raw_score=32,
                               scored_36_plus=True, raw_score_placeholder=True)
        observed = StoredScore("b", "g1", "t1", True, 1, raw_score=33)
        snapshot = LeagueSnapshot(tournaments={}, scores={"a": fallback, "b": observed})

        path = store.save(snapshot, tmp_path / "league.json")
        with open(path, encoding="utf-8") as f:
            scores = {s["score_id"]: s for s in json.load(f)["scores"]}
        loaded = store.load(path).scores

        assert scores["a"]["raw_score_placeholder"] is True
        assert "raw_score_placeholder" not in scores["b"]
        assert loaded["a"].raw_score_placeholder is True
        assert not loaded["a"].has_real_score
        assert loaded["b"].has_real_score


# ── Price backups ────────────────────────────────────────────────────

class TestBackupPrices:
    def test_writes_every_golfer(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        path = store.backup_prices(snapshot)

        assert path.parent == store.backup_dir
        assert path.name.startswith("pricing-backup-")
        with open(path, encoding="utf-8") as f:
            backup = json.load(f)
        assert [b["golfer_id"] for b in backup] == ["g1", "g2", "g3"]
        assert backup[0]["price"] == 9_000_000

    def test_default_backup_dir(self):
        assert SnapshotStore().backup_dir.name == "backups"


# ── Snapshot helpers ─────────────────────────────────────────────────

class TestLeagueSnapshot:
    def test_current_prices_skip_unpriced(self):
        snapshot = LeagueSnapshot(golfers={
            "g1": GolferRecord("g1", "Rory Byrne", 9_000_000),
            "g2": GolferRecord("g2", "Tom Kite"),
        })
        assert snapshot.current_prices() == {"g1": 9_000_000}

    def test_scored_history_skips_orphans(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        snapshot.put_score(StoredScore("s9", "g1", "gone", True, None))
        history = snapshot.scored_history()

        assert len(history) == 4
        assert history[0].breakdown.multiplied_points == 13
        assert history[3].result.multiplier == 2

    def test_set_prices_ignores_unknown_golfers(self, store, snapshot_file):
        snapshot = store.load(snapshot_file)
        updated = snapshot.set_prices({"g1": 14_500_000, "ghost": 3_500_000})
        assert updated == 1
        assert snapshot.golfers["g1"].price == 14_500_000
