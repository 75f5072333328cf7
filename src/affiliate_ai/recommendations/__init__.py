"""Product recommendation module."""

from affiliate_ai.recommendations.engine import (
    get_campaign_product_recommendations,
    get_product_recommendations,
    get_similar_products,
    get_trending_products,
    normalize_limit,
)
from affiliate_ai.recommendations.models import (
    CampaignAggregate,
    CampaignGoal,
    ScoredProduct,
    SimilarProduct,
    TrendingCandidate,
)
from affiliate_ai.recommendations.preferences import (
    aggregate_weight,
    build_preference_weights,
    calculate_relevance,
)

__all__ = [
    # Models
    "CampaignAggregate",
    "CampaignGoal",
    "ScoredProduct",
    "SimilarProduct",
    "TrendingCandidate",
    # Preferences
    "aggregate_weight",
    "build_preference_weights",
    "calculate_relevance",
    # Engine
    "get_product_recommendations",
    "get_trending_products",
    "get_similar_products",
    "get_campaign_product_recommendations",
    "normalize_limit",
]
