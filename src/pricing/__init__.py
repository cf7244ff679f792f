from src.pricing.budget_audit import BudgetAuditor
from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from src.pricing.models import (
    GolferPerformanceProfile,
    PriceUpdate,
    PricingReport,
    PricingResult,
    RankInversion,
    RosterBudget,
)
from src.pricing.price_curve import calculate_price
from src.pricing.pricing_engine import PricingEngine
from src.pricing.profiles import build_profiles

__all__ = [
    "BudgetAuditor",
    "DEFAULT_PRICING_CONFIG",
    "GolferPerformanceProfile",
    "PriceUpdate",
    "PricingConfig",
    "PricingEngine",
    "PricingReport",
    "PricingResult",
    "RankInversion",
    "RosterBudget",
    "build_profiles",
    "calculate_price",
]
