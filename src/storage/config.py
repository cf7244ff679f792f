from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
SNAPSHOTS_DIR = PROJECT_ROOT / "data" / "snapshots"
BACKUPS_DIR = PROJECT_ROOT / "data" / "backups"

# Defaults applied to tournaments stored before these fields existed
DEFAULT_SCORING_FORMAT = "stableford"
DEFAULT_TOURNAMENT_TYPE = "regular"
