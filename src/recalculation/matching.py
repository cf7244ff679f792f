"""Match legacy score records to raw scores from an uploaded results sheet.

Records are joined on (event date, golfer name) using two passes:

Pass 1: Exact match on normalized date + normalized name.
Pass 2: For still-unmatched records, match on the suffix-stripped name,
        using only sheet rows not already consumed by pass 1.

A sheet row that states a scoring format other than the tournament's is
never matched; rows without a format match either.
"""

import logging
from typing import Dict, Iterable, Mapping

import pandas as pd

from src.recalculation.cleaning import NameCleaner
from src.recalculation.models import StoredScore, TournamentInfo

logger = logging.getLogger(__name__)


def _legacy_frame(
    records: Iterable[StoredScore],
    tournaments: Mapping[str, TournamentInfo],
    golfer_names: Mapping[str, str],
) -> pd.DataFrame:
    rows = []
    for record in records:
        tournament = tournaments.get(record.tournament_id)
        rows.append({
            "score_id": record.score_id,
            "_date": NameCleaner.normalize_date(tournament.date) if tournament else None,
            "_name": NameCleaner.normalize_player_name(golfer_names.get(record.golfer_id)),
            "_format": tournament.scoring_format if tournament else None,
        })
    return pd.DataFrame(rows, columns=["score_id", "_date", "_name", "_format"])


def _source_frame(source: pd.DataFrame) -> pd.DataFrame:
    out = pd.DataFrame({
        "_date": source["date"].apply(NameCleaner.normalize_date),
        "_name": source["player"].apply(NameCleaner.normalize_player_name),
        "matched_raw_score": source["raw_score"].astype(float),
        "_sheet_format": (
            source["scoring_format"] if "scoring_format" in source.columns else None
        ),
    })
    out = out.dropna(subset=["_date", "_name", "matched_raw_score"])
    # One score per golfer per day keeps the left join 1:1
    return out.drop_duplicates(subset=["_date", "_name"], keep="first")


def _format_conflict(frame: pd.DataFrame) -> pd.Series:
    """Rows whose sheet score was recorded under another scoring format."""
    sheet_format = frame["_sheet_format"]
    return sheet_format.notna() & (sheet_format != frame["_format"])


def match_raw_scores(
    records: Iterable[StoredScore],
    tournaments: Mapping[str, TournamentInfo],
    golfer_names: Mapping[str, str],
    source: pd.DataFrame,
    strip_suffixes: bool = True,
) -> Dict[str, float]:
    """Find a sheet raw score for each record that has one.

    Args:
        records: Records needing a raw score.
        tournaments: Tournament metadata by id (provides the event date).
        golfer_names: Display name by golfer id.
        source: Sheet rows with ``date``, ``player`` and ``raw_score``, and
            optionally ``scoring_format``.
        strip_suffixes: Run the suffix-stripped second pass.

    Returns:
        Dict mapping ``score_id`` to the matched raw score. Records with no
        match are absent.
    """
    legacy = _legacy_frame(records, tournaments, golfer_names)
    if legacy.empty or source is None or source.empty:
        return {}

    sheet = _source_frame(source)
    if sheet.empty:
        return {}

    # --- Pass 1: exact match ---
    merged = legacy.merge(sheet, on=["_date", "_name"], how="left", validate="m:1")
    conflict = _format_conflict(merged)
    if conflict.any():
        logger.warning(
            "Rejected %d sheet score(s) recorded under a different scoring format",
            int(conflict.sum()),
        )
    unmatched = merged["matched_raw_score"].isna() | conflict
    n_pass1 = int((~unmatched).sum())

    matches: Dict[str, float] = dict(
        zip(merged.loc[~unmatched, "score_id"], merged.loc[~unmatched, "matched_raw_score"])
    )

    # --- Pass 2: suffix-stripped fallback ---
    if strip_suffixes and unmatched.any():
        consumed = set(zip(merged.loc[~unmatched, "_date"], merged.loc[~unmatched, "_name"]))
        unused = pd.Series(
            [(d, n) not in consumed for d, n in zip(sheet["_date"], sheet["_name"])],
            index=sheet.index,
            dtype=bool,
        )
        if unused.any():
            stripped = _match_stripped(
                merged.loc[unmatched, ["score_id", "_date", "_name", "_format"]],
                sheet.loc[unused],
            )
            if stripped:
                logger.info(
                    "Suffix-stripped fallback matched %d additional record(s)",
                    len(stripped),
                )
            matches.update(stripped)

    logger.info(
        "Matched %d of %d record(s) to sheet scores (%d exact)",
        len(matches), len(legacy), n_pass1,
    )
    return {sid: float(score) for sid, score in matches.items()}


def _match_stripped(pending: pd.DataFrame, remaining: pd.DataFrame) -> Dict[str, float]:
    """Join still-unmatched records to unused sheet rows on the base name."""
    pending = pending.copy()
    pending["_base"] = pending["_name"].apply(NameCleaner.strip_name_suffix)

    remaining = remaining.copy()
    remaining["_base"] = remaining["_name"].apply(NameCleaner.strip_name_suffix)
    remaining = remaining.drop_duplicates(subset=["_date", "_base"], keep="first")

    fallback = pending.merge(
        remaining[["_date", "_base", "matched_raw_score", "_sheet_format"]],
        on=["_date", "_base"],
        how="left",
    )
    hit = fallback["matched_raw_score"].notna() & ~_format_conflict(fallback)
    # Two records sharing a base name on one day would both claim the
    # same sheet row; leave those for the fallback policy.
    ambiguous = fallback.loc[hit].duplicated(subset=["_date", "_base"], keep=False)
    hit.loc[ambiguous[ambiguous].index] = False

    return dict(zip(fallback.loc[hit, "score_id"], fallback.loc[hit, "matched_raw_score"]))
