from dataclasses import dataclass
from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"

# Column order of an uploaded results sheet. Only the first four are
# required.
RESULTS_COLUMNS = [
    "Date", "Position", "Player", "RawScore", "TournamentType", "ScoringFormat",
]

# What to do with a legacy record whose 36+ flag was never recorded:
#   "no_bonus" - treat like an explicit false (unknown score, no bonus)
#   "exclude"  - leave the record exactly as stored
ABSENT_FLAG_POLICIES = ("no_bonus", "exclude")
DEFAULT_ABSENT_FLAG_POLICY = "no_bonus"


@dataclass(frozen=True)
class RecalculationConfig:
    """Settings for a batch recalculation run."""

    absent_flag_policy: str = DEFAULT_ABSENT_FLAG_POLICY
    match_suffix_stripped: bool = True

    def __post_init__(self):
        if self.absent_flag_policy not in ABSENT_FLAG_POLICIES:
            raise ValueError(
                f"Invalid absent_flag_policy: {self.absent_flag_policy!r}. "
                f"Must be one of {ABSENT_FLAG_POLICIES}."
            )
