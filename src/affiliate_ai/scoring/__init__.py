"""Product scoring module."""

from affiliate_ai.scoring.calculator import (
    calculate_estimated_income,
    calculate_potential_score,
    get_risk_level,
)
from affiliate_ai.scoring.models import (
    CompetitionLevel,
    Product,
    ProductAnalysis,
    RiskLevel,
    ScoringWeights,
)
from affiliate_ai.scoring.scorer import analyze_product

__all__ = [
    # Models
    "CompetitionLevel",
    "Product",
    "ProductAnalysis",
    "RiskLevel",
    "ScoringWeights",
    # Calculator
    "calculate_potential_score",
    "calculate_estimated_income",
    "get_risk_level",
    # Scorer
    "analyze_product",
]
