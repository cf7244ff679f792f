"""CSV ingestion for uploaded tournament result sheets.

Handles the quirks of sheets exported from club scoring software:
- Comma or tab delimited (detected from the header line)
- Quoted fields and stray whitespace
- DD/MM/YYYY or YYYY-MM-DD dates
- Optional trailing tournament-type and scoring-format columns (the type
  is not used; the format guards matching)
- Blank or non-numeric rows, which are skipped
"""

import logging
from pathlib import Path

import pandas as pd

from src.recalculation.cleaning import NameCleaner
from src.recalculation.config import RESULTS_COLUMNS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a results sheet cannot be read."""


def _parse_numeric(value):
    """Parse a numeric cell, returning NaN for blanks and text."""
    if pd.isna(value):
        return float("nan")
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").strip().strip('"')
    if s == "":
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


class ResultsIngester:
    """Reads one results sheet into a tidy DataFrame.

    The returned frame has columns:
        date (YYYY-MM-DD), player, raw_score (float), scoring_format

    ``scoring_format`` is lower-cased, or NaN where the sheet leaves it
    blank. A row still needs a finishing position to count as a result.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _detect_delimiter(self) -> str:
        with open(self.path, "r", encoding="utf-8") as f:
            header = f.readline()
        return "\t" if "\t" in header else ","

    def read_results(self) -> pd.DataFrame:
        """Read and clean the sheet.

        Raises:
            FileNotFoundError: if the file does not exist.
            IngestionError: if the file cannot be parsed.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Results file not found: {self.path}")

        logger.info("Reading results sheet: %s", self.path.name)
        try:
            df = pd.read_csv(
                self.path,
                sep=self._detect_delimiter(),
                header=None,
                skiprows=1,
                names=RESULTS_COLUMNS,
                quotechar='"',
                dtype=str,
                skip_blank_lines=True,
            )
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise IngestionError(f"Failed to read {self.path}: {e}") from e

        return self._clean(df)

    def _clean(self, df: pd.DataFrame) -> pd.DataFrame:
        total = len(df)
        for col in df.columns:
            df[col] = df[col].str.strip().str.strip('"').str.strip()

        scoring_format = df["ScoringFormat"].str.lower()
        out = pd.DataFrame({
            "date": df["Date"].apply(NameCleaner.normalize_date),
            "player": df["Player"],
            "raw_score": df["RawScore"].apply(_parse_numeric),
            "scoring_format": scoring_format.where(scoring_format != ""),
        })
        has_position = df["Position"].apply(_parse_numeric).notna()

        valid = (
            out["date"].notna()
            & has_position
            & out["raw_score"].notna()
            & out["player"].notna()
            & (out["player"] != "")
        )
        skipped = int((~valid).sum())
        if skipped:
            logger.warning(
                "Skipped %d of %d row(s) with a missing date, position, "
                "player or score", skipped, total,
            )

        out = out[valid].reset_index(drop=True)

        logger.info("Loaded %d result row(s)", len(out))
        return out
