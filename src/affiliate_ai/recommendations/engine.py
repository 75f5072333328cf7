"""Product ranking for users, trends, similarity and campaign goals.

Final score formula:
    Final = Potential × 0.7 + Relevance × 0.3

Relevance and final scores are capped at 100 but never floored.

Every ranking uses Python's stable sort, so products with equal keys keep
the order in which the caller supplied them.
"""

import logging
import math
import sys
from collections.abc import Iterable, Sequence

from affiliate_ai.recommendations.models import (
    MAX_SCORE,
    CampaignAggregate,
    CampaignGoal,
    ScoredProduct,
    SimilarProduct,
    TrendingCandidate,
)
from affiliate_ai.recommendations.preferences import (
    build_preference_weights,
    calculate_relevance,
)
from affiliate_ai.scoring.models import CompetitionLevel, Product

logger = logging.getLogger(__name__)

POTENTIAL_WEIGHT = 0.7
RELEVANCE_WEIGHT = 0.3

# Price differences count for a tenth in similarity distance
SIMILARITY_PRICE_WEIGHT = 0.1


def normalize_limit(limit: int | float | None) -> int:
    """Coerce a requested limit to a non-negative integer."""
    if limit is None or math.isnan(limit):
        return 0
    if math.isinf(limit):
        return sys.maxsize if limit > 0 else 0
    return max(0, int(limit))


def score_candidate(
    product: Product,
    category_weights: dict[str, float],
    platform_weights: dict[str, float],
) -> ScoredProduct:
    """Blend a product's potential with the user's preference weights."""
    relevance_score = calculate_relevance(product, category_weights, platform_weights)
    final_score = (
        product.potential_score * POTENTIAL_WEIGHT
        + relevance_score * RELEVANCE_WEIGHT
    )

    return ScoredProduct(
        id=product.id,
        name=product.name,
        category=product.category,
        platform=product.platform,
        commission=product.commission,
        potential_score=product.potential_score,
        relevance_score=min(relevance_score, MAX_SCORE),
        final_score=min(final_score, MAX_SCORE),
    )


def get_product_recommendations(
    aggregates: Iterable[CampaignAggregate],
    candidates: Iterable[Product],
    limit: int = 10,
) -> list[ScoredProduct]:
    """Rank candidate products for a user.

    Args:
        aggregates: User's campaign results per (category, platform)
        candidates: Products the user hasn't promoted yet, best potential first
        limit: Maximum number of recommendations

    Returns:
        ScoredProducts sorted by final score descending
    """
    limit = normalize_limit(limit)
    if limit == 0:
        return []

    category_weights, platform_weights = build_preference_weights(aggregates)

    scored = [
        score_candidate(product, category_weights, platform_weights)
        for product in candidates
    ]
    logger.debug(
        f"Scored {len(scored)} candidates against "
        f"{len(category_weights)} categories and {len(platform_weights)} platforms"
    )

    scored = sorted(scored, key=lambda item: item.final_score, reverse=True)
    return scored[:limit]


def _trending_key(candidate: TrendingCandidate) -> tuple[bool, float, int]:
    # Products without sales in the window rank after any with revenue
    has_revenue = candidate.total_revenue is not None
    return has_revenue, candidate.total_revenue or 0.0, candidate.campaign_count


def get_trending_products(
    candidates: Iterable[TrendingCandidate],
    limit: int = 10,
) -> list[TrendingCandidate]:
    """Rank products by recent campaign revenue.

    Only products with at least one campaign are kept. Sorted by revenue
    in the window, then by campaign count.

    Args:
        candidates: Products with window statistics
        limit: Maximum number of products

    Returns:
        Trending products, hottest first
    """
    limit = normalize_limit(limit)
    if limit == 0:
        return []

    active = [candidate for candidate in candidates if candidate.campaign_count > 0]
    ranked = sorted(active, key=_trending_key, reverse=True)
    return ranked[:limit]


def get_similar_products(
    base: Product,
    candidates: Iterable[Product],
    limit: int = 5,
) -> list[SimilarProduct]:
    """Find products closest to a base product.

    Candidates must share the base's category and platform; the base
    itself is skipped.

    Distance = |Δcommission| + |Δprice| × 0.1 + |Δpotential score|

    Args:
        base: Product to compare against
        candidates: Products to search
        limit: Maximum number of products

    Returns:
        SimilarProducts, closest first
    """
    limit = normalize_limit(limit)
    if limit == 0:
        return []

    similar: list[SimilarProduct] = []
    for product in candidates:
        if product is base or (base.id and product.id == base.id):
            continue
        if product.category != base.category or product.platform != base.platform:
            continue

        commission_diff = abs(product.commission - base.commission)
        price_diff = abs(product.price - base.price)
        score_diff = abs(product.potential_score - base.potential_score)

        similar.append(
            SimilarProduct(
                **product.model_dump(),
                commission_diff=commission_diff,
                price_diff=price_diff,
                score_diff=score_diff,
                distance=commission_diff + price_diff * SIMILARITY_PRICE_WEIGHT + score_diff,
            )
        )

    return sorted(similar, key=lambda item: item.distance)[:limit]


def get_campaign_product_recommendations(
    goal: str,
    candidates: Sequence[Product],
    limit: int = 10,
) -> list[Product]:
    """Pick products matching a free-text campaign goal.

    Goal tags are checked in priority order:
    - "high-commission": commission desc, then potential score desc
    - "trending": trend score desc
    - "low-competition": Low competition only, potential score desc
    - anything else: potential score desc

    Args:
        goal: Campaign goal text (e.g. "trending, beginner-friendly")
        candidates: Products to choose from
        limit: Maximum number of products

    Returns:
        Products in goal order
    """
    limit = normalize_limit(limit)
    if limit == 0:
        return []

    goal = goal or ""

    if CampaignGoal.HIGH_COMMISSION.value in goal:
        ranked = sorted(
            candidates,
            key=lambda product: (product.commission, product.potential_score),
            reverse=True,
        )
    elif CampaignGoal.TRENDING.value in goal:
        ranked = sorted(candidates, key=lambda product: product.trend_score, reverse=True)
    else:
        pool = candidates
        if CampaignGoal.LOW_COMPETITION.value in goal:
            pool = [
                product
                for product in candidates
                if product.competition_level == CompetitionLevel.LOW.value
            ]
        ranked = sorted(pool, key=lambda product: product.potential_score, reverse=True)

    return ranked[:limit]
