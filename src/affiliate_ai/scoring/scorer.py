"""Product analysis: the calculator outputs bundled for display."""

from affiliate_ai.scoring.calculator import (
    calculate_estimated_income,
    calculate_potential_score,
    get_risk_level,
)
from affiliate_ai.scoring.models import Product, ProductAnalysis, ScoringWeights


def analyze_product(
    product: Product,
    weights: ScoringWeights | None = None,
) -> ProductAnalysis:
    """Calculate potential score, estimated income and risk for a product.

    This is the main entry point for scoring a single product.

    Args:
        product: Product to analyze
        weights: Scoring weights (uses defaults if None)

    Returns:
        ProductAnalysis with all three values
    """
    return ProductAnalysis(
        potential_score=calculate_potential_score(product, weights),
        estimated_income=calculate_estimated_income(product),
        risk_level=get_risk_level(product),
    )
