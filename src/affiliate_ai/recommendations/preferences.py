"""User preference weights learned from campaign history.

Weight per (category, platform) aggregate:
    weight = ln(total_revenue + 1) + sale_count

A missing or zero revenue/count counts as 1. A revenue total at or below
-1 (refunds outweighing sales) contributes no log term. Weights accumulate
across every aggregate sharing a category (and, independently, a platform).

Relevance = category weight × 0.6 + platform weight × 0.4
"""

import math
from collections import defaultdict
from collections.abc import Iterable

from affiliate_ai.recommendations.models import CampaignAggregate
from affiliate_ai.scoring.models import Product

CATEGORY_RELEVANCE_WEIGHT = 0.6
PLATFORM_RELEVANCE_WEIGHT = 0.4


def aggregate_weight(aggregate: CampaignAggregate) -> float:
    """Calculate the preference weight contributed by one aggregate."""
    revenue = aggregate.total_revenue or 1
    sale_count = aggregate.sale_count or 1
    revenue_term = math.log(revenue + 1) if revenue > -1 else 0.0
    return revenue_term + sale_count


def build_preference_weights(
    aggregates: Iterable[CampaignAggregate],
) -> tuple[dict[str, float], dict[str, float]]:
    """Build category and platform weight maps from campaign aggregates.

    Args:
        aggregates: One row per (category, platform) the user campaigned in

    Returns:
        Tuple of (category_weights, platform_weights)
    """
    category_weights: dict[str, float] = defaultdict(float)
    platform_weights: dict[str, float] = defaultdict(float)

    for aggregate in aggregates:
        weight = aggregate_weight(aggregate)
        category_weights[aggregate.category] += weight
        platform_weights[aggregate.platform] += weight

    return dict(category_weights), dict(platform_weights)


def calculate_relevance(
    product: Product,
    category_weights: dict[str, float],
    platform_weights: dict[str, float],
) -> float:
    """Calculate how well a product matches the user's history (uncapped)."""
    category_score = category_weights.get(product.category, 0.0)
    platform_score = platform_weights.get(product.platform, 0.0)
    return (
        category_score * CATEGORY_RELEVANCE_WEIGHT
        + platform_score * PLATFORM_RELEVANCE_WEIGHT
    )
