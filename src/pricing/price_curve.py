"""Normalization and the convex price curve."""

import math
from typing import Dict, Mapping

from src.pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig


def round_half_up(value: float, increment: int) -> int:
    """Round *value* to the nearest *increment*, halves rounding up."""
    return int(math.floor(value / increment + 0.5)) * increment


def calculate_price(
    normalized_score: float, config: PricingConfig = DEFAULT_PRICING_CONFIG
) -> int:
    """Map a 0-1 score onto the price curve.

    ``price = floor + normalized ** exponent * (ceiling - floor)``, rounded
    to ``round_to`` and clamped to ``[floor, ceiling]``.
    """
    clamped = max(0.0, min(1.0, normalized_score))
    factor = clamped ** config.exponent
    raw_price = config.floor_price + factor * config.price_range
    rounded = round_half_up(raw_price, config.round_to)
    return min(max(rounded, config.floor_price), config.ceiling_price)


def normalize_composite(composite_scores: Mapping[str, float]) -> Dict[str, float]:
    """Scale composite scores by the population maximum.

    Negative scores clamp to 0. A non-positive maximum falls back to a
    denominator of 1 so the result is always defined.
    """
    if not composite_scores:
        return {}
    max_composite = max(composite_scores.values())
    denominator = max_composite if max_composite > 0 else 1
    return {
        golfer_id: min(max(score, 0.0) / denominator, 1.0)
        for golfer_id, score in composite_scores.items()
    }


def normalize_by_price(current_prices: Mapping[str, float]) -> Dict[str, float]:
    """Position each golfer linearly within the current price range.

    Keeps the shape of the existing market. When every price is identical
    (e.g. the first-ever run) the range is 0 and a denominator of 1 is used,
    which puts every golfer at 0.
    """
    if not current_prices:
        return {}
    max_price = max(current_prices.values())
    min_price = min(current_prices.values())
    price_range = (max_price - min_price) or 1
    return {
        golfer_id: (price - min_price) / price_range
        for golfer_id, price in current_prices.items()
    }
