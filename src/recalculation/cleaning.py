"""Normalization of names and dates for matching results across sources.

Legacy score records and newly uploaded result sheets spell the same
golfer and the same day differently:
- Curly vs straight apostrophes, en/em dashes, stray quotes and spaces
- Name suffixes present in one source only (e.g. "Tom Watson Jr.")
- DD/MM/YYYY vs YYYY-MM-DD dates, with or without a time component
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

# Trailing generational suffixes removed by strip_name_suffix
_SUFFIX_PATTERN = re.compile(r"\s+(jr\.?|sr\.?|ii|iii|iv|v)$", re.IGNORECASE)

_DMY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")


class NameCleaner:
    """Builds comparable keys from golfer names and event dates."""

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_player_name(name: str) -> Optional[str]:
        """Normalize a golfer name for cross-source matching.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        - Lower-cases (matching is case-insensitive)
        - Preserves suffixes (Jr., III, etc.)
        """
        if name is None or pd.isna(name):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        name = name.replace("\u2019", "'")   # right single curly '
        name = name.replace("\u2018", "'")   # left single curly '
        name = name.replace("\u02BC", "'")   # modifier letter apostrophe
        name = name.replace("\u2013", "-")   # en dash
        name = name.replace("\u2014", "-")   # em dash

        return " ".join(name.split()).lower()

    @staticmethod
    def strip_name_suffix(name: str) -> Optional[str]:
        """Remove a trailing generational suffix.

        Examples:
            "Tom Watson Jr." -> "Tom Watson"
            "Davis Love III" -> "Davis Love"
        """
        if name is None or pd.isna(name):
            return None
        return _SUFFIX_PATTERN.sub("", str(name).strip())

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_date(value) -> Optional[str]:
        """Normalize an event date to ``YYYY-MM-DD``.

        Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` (optionally
        followed by a time) and ``DD/MM/YYYY`` strings. Anything else is
        None.
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if pd.isna(value):
            return None

        text = str(value).strip().strip('"')
        m = _ISO_PATTERN.match(text)
        if m:
            year, month, day = (int(g) for g in m.groups())
        else:
            m = _DMY_PATTERN.match(text)
            if not m:
                return None
            day, month, year = (int(g) for g in m.groups())

        try:
            return date(year, month, day).isoformat()
        except ValueError:
            logger.debug("Unparseable date %r", value)
            return None
