"""Tests for matching legacy score records to sheet raw scores."""

import logging

import pandas as pd

from src.recalculation.matching import match_raw_scores
from src.recalculation.models import StoredScore, TournamentInfo


# ── Helpers ──────────────────────────────────────────────────────────

TOURNAMENTS = {
    "t1": TournamentInfo("t1", "Spring Medal", "2025-04-05"),
    "t2": TournamentInfo("t2", "Captain's Day", "2025-05-11"),
}


def _make_record(score_id, golfer_id, tournament_id="t1"):
    return StoredScore(
        score_id=score_id,
        golfer_id=golfer_id,
        tournament_id=tournament_id,
        participated=True,
        position=None,
    )


def _make_sheet(*rows):
    return pd.DataFrame(rows, columns=["date", "player", "raw_score"])


# ── Exact pass ───────────────────────────────────────────────────────

class TestExactMatch:
    def test_matches_on_date_and_name(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")],
            TOURNAMENTS,
            {"g1": "Rory Byrne"},
            _make_sheet(("2025-04-05", "RORY BYRNE", 38.0)),
        )
        assert matches == {"s1": 38.0}

    def test_date_formats_reconciled(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")],
            TOURNAMENTS,
            {"g1": "Sean O'Neill"},
            _make_sheet(("05/04/2025", "Sean O\u2019Neill", 34.0)),
        )
        assert matches == {"s1": 34.0}

    def test_different_date_does_not_match(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1", "t2")],
            TOURNAMENTS,
            {"g1": "Rory Byrne"},
            _make_sheet(("2025-04-05", "Rory Byrne", 38.0)),
        )
        assert matches == {}

    def test_each_record_gets_its_own_score(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1"), _make_record("s2", "g2")],
            TOURNAMENTS,
            {"g1": "Rory Byrne", "g2": "Tom Kite"},
            _make_sheet(
                ("2025-04-05", "Tom Kite", 31.0),
                ("2025-04-05", "Rory Byrne", 38.0),
            ),
        )
        assert matches == {"s1": 38.0, "s2": 31.0}


# ── Suffix-stripped pass ─────────────────────────────────────────────

class TestSuffixFallback:
    def test_record_has_suffix(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")],
            TOURNAMENTS,
            {"g1": "Tom Watson Jr."},
            _make_sheet(("2025-04-05", "Tom Watson", 30.0)),
        )
        assert matches == {"s1": 30.0}

    def test_sheet_has_suffix(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")],
            TOURNAMENTS,
            {"g1": "Davis Love"},
            _make_sheet(("2025-04-05", "Davis Love III", 35.0)),
        )
        assert matches == {"s1": 35.0}

    def test_disabled(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")],
            TOURNAMENTS,
            {"g1": "Tom Watson Jr."},
            _make_sheet(("2025-04-05", "Tom Watson", 30.0)),
            strip_suffixes=False,
        )
        assert matches == {}

    def test_row_consumed_by_exact_pass_not_reused(self):
        matches = match_raw_scores(
            [_make_record("s1", "father"), _make_record("s2", "son")],
            TOURNAMENTS,
            {"father": "Tom Watson", "son": "Tom Watson Jr."},
            _make_sheet(("2025-04-05", "Tom Watson", 30.0)),
        )
        assert matches == {"s1": 30.0}

    def test_ambiguous_base_name_left_unmatched(self):
        matches = match_raw_scores(
            [_make_record("s1", "jr"), _make_record("s2", "sr")],
            TOURNAMENTS,
            {"jr": "Tom Watson Jr.", "sr": "Tom Watson Sr."},
            _make_sheet(("2025-04-05", "Tom Watson", 30.0)),
        )
        assert matches == {}


# ── Edge cases ───────────────────────────────────────────────────────

class TestMatchingEdgeCases:
    def test_empty_sheet(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")], TOURNAMENTS, {"g1": "Rory Byrne"}, _make_sheet(),
        )
        assert matches == {}

    def test_no_records(self):
        assert match_raw_scores(
            [], TOURNAMENTS, {}, _make_sheet(("2025-04-05", "Rory Byrne", 38.0)),
        ) == {}

    def test_unknown_golfer_name(self):
        matches = match_raw_scores(
            [_make_record("s1", "ghost")],
            TOURNAMENTS,
            {},
            _make_sheet(("2025-04-05", "Rory Byrne", 38.0)),
        )
        assert matches == {}

    def test_duplicate_sheet_rows_keep_first(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1")],
            TOURNAMENTS,
            {"g1": "Rory Byrne"},
            _make_sheet(
                ("2025-04-05", "Rory Byrne", 38.0),
                ("2025-04-05", "rory byrne", 20.0),
            ),
        )
        assert matches == {"s1": 38.0}


# ── Scoring format guard ─────────────────────────────────────────────

class TestScoringFormat:
    TOURNAMENTS = {
        "t1": TournamentInfo("t1", "Spring Stableford", "2025-04-05"),
        "t2": TournamentInfo("t2", "Club Medal", "2025-04-05", scoring_format="medal"),
    }

    def _sheet(self, *rows):
        return pd.DataFrame(rows, columns=["date", "player", "raw_score", "scoring_format"])

    def test_matching_format_accepted(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1", "t2")],
            self.TOURNAMENTS,
            {"g1": "Rory Byrne"},
            self._sheet(("2025-04-05", "Rory Byrne", 74.0, "medal")),
        )
        assert matches == {"s1": 74.0}

    def test_other_format_rejected(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1", "t1")],
            self.TOURNAMENTS,
            {"g1": "Rory Byrne"},
            self._sheet(("2025-04-05", "Rory Byrne", 74.0, "medal")),
        )
        assert matches == {}

    def test_other_format_rejected_in_suffix_pass(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1", "t1")],
            self.TOURNAMENTS,
            {"g1": "Tom Watson Jr."},
            self._sheet(("2025-04-05", "Tom Watson", 74.0, "medal")),
        )
        assert matches == {}

    def test_blank_format_matches_any(self):
        matches = match_raw_scores(
            [_make_record("s1", "g1", "t2")],
            self.TOURNAMENTS,
            {"g1": "Rory Byrne"},
            self._sheet(("2025-04-05", "Rory Byrne", 74.0, None)),
        )
        assert matches == {"s1": 74.0}

    def test_rejection_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="src.recalculation.matching"):
            match_raw_scores(
                [_make_record("s1", "g1", "t1")],
                self.TOURNAMENTS,
                {"g1": "Rory Byrne"},
                self._sheet(("2025-04-05", "Rory Byrne", 74.0, "medal")),
            )
        assert "Rejected 1 sheet score(s)" in caplog.text
