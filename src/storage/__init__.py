from src.storage.snapshot import GolferRecord, LeagueSnapshot
from src.storage.snapshot_store import SnapshotError, SnapshotStore

__all__ = [
    "GolferRecord",
    "LeagueSnapshot",
    "SnapshotError",
    "SnapshotStore",
]
