from src.recalculation.cleaning import NameCleaner
from src.recalculation.config import RecalculationConfig
from src.recalculation.ingestion import IngestionError, ResultsIngester
from src.recalculation.matching import match_raw_scores
from src.recalculation.models import (
    PlannedUpdate,
    RecalculationPlan,
    RecalculationSummary,
    StoredScore,
    TournamentInfo,
)
from src.recalculation.recalculator import ScoreRecalculator

__all__ = [
    "IngestionError",
    "NameCleaner",
    "PlannedUpdate",
    "RecalculationConfig",
    "RecalculationPlan",
    "RecalculationSummary",
    "ResultsIngester",
    "ScoreRecalculator",
    "StoredScore",
    "TournamentInfo",
    "match_raw_scores",
]
