"""Tests for the pricing batch runner."""

import pytest

from src.pricing.config import MAX_PRICE, PricingConfig
from src.pricing.run_pricing import run_pricing


class TestPreview:
    def test_prices_every_golfer(self, store, snapshot_file):
        result = run_pricing(snapshot_file, store=store)
        assert set(result.prices) == {"g1", "g2", "g3"}
        assert result.prices["g1"] == MAX_PRICE

    def test_ranking_preserved(self, store, snapshot_file):
        result = run_pricing(snapshot_file, store=store)
        assert result.report.ranking_preserved
        assert result.prices["g1"] > result.prices["g2"] > result.prices["g3"]

    def test_file_untouched(self, store, snapshot_file):
        before = snapshot_file.read_bytes()
        run_pricing(snapshot_file, backup=True, store=store)
        assert snapshot_file.read_bytes() == before
        assert not store.backup_dir.exists()

    def test_small_rosters_within_cap(self, store, snapshot_file):
        result = run_pricing(snapshot_file, store=store)
        assert result.report.over_budget_rosters == []

    def test_recalculate_reports_drift(self, store, snapshot_file):
        result = run_pricing(snapshot_file, recalculate=True, store=store)
        assert result.report.point_drift_total == pytest.approx(-2)

    def test_rank_mode(self, store, snapshot_file):
        config = PricingConfig(normalization="rank")
        result = run_pricing(snapshot_file, config=config, store=store)
        assert result.prices["g1"] == MAX_PRICE
        assert result.prices["g3"] == config.floor_price


class TestApply:
    def test_prices_written(self, store, snapshot_file):
        result = run_pricing(snapshot_file, apply=True, store=store)
        snapshot = store.load(snapshot_file)
        assert snapshot.current_prices() == result.prices

    def test_backup_taken_before_write(self, store, snapshot_file):
        run_pricing(snapshot_file, apply=True, backup=True, store=store)
        backups = list(store.backup_dir.glob("pricing-backup-*.json"))
        assert len(backups) == 1
        assert '"price": 9000000' in backups[0].read_text(encoding="utf-8")

    def test_recalculated_scores_written(self, store, snapshot_file):
        run_pricing(snapshot_file, apply=True, recalculate=True, store=store)
        snapshot = store.load(snapshot_file)
        assert snapshot.scores["s1"].multiplied_points == 11

    def test_missing_snapshot(self, store, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_pricing(tmp_path / "missing.json", store=store)
