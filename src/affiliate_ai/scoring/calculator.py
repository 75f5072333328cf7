"""Core calculations for product scoring.

Formulas:
    Income Score = Commission × Sales × Conversion × Price / 100
    Potential = Income Score - (Competition Factor × 100) + Trend - (Refund Rate × 500)
    Estimated Income = Commission / 100 × Sales × Conversion / 100 × Price

The two income formulas normalize differently and are kept independent.
`get_risk_level` compares refund rate against percentage-point thresholds
while the potential score treats it as a 0-1 fraction; both readings are
kept as they are.
"""

from affiliate_ai.scoring.models import (
    FALLBACK_COMPETITION_FACTOR,
    CompetitionLevel,
    Product,
    RiskLevel,
    ScoringWeights,
)

# Refund rate thresholds for risk level (percentage points)
HIGH_RISK_REFUND_RATE = 10
MEDIUM_RISK_REFUND_RATE = 5


def calculate_potential_score(
    product: Product,
    weights: ScoringWeights | None = None,
) -> float:
    """Calculate the potential score for a product.

    Potential = Income Score - Competition Penalty + Trend - Refund Penalty

    A missing competition level counts as Medium; a level the weights
    don't know uses factor 2.

    Args:
        product: Product to score
        weights: Scoring weights (uses defaults if None)

    Returns:
        Potential score, unclamped (may be negative)
    """
    if weights is None:
        weights = ScoringWeights()

    level = product.competition_level or CompetitionLevel.MEDIUM.value
    competition_factor = weights.competition_factor.get(level, FALLBACK_COMPETITION_FACTOR)

    income_score = (
        product.commission
        * product.avg_monthly_sales
        * product.conversion_rate
        * product.price
        / 100
    )

    competition_penalty = competition_factor * weights.competition_penalty
    refund_penalty = product.refund_rate * weights.refund_penalty_multiplier

    return income_score - competition_penalty + product.trend_score - refund_penalty


def calculate_estimated_income(product: Product) -> float:
    """Calculate estimated monthly income.

    Estimated Income = Commission / 100 × Sales × Conversion / 100 × Price

    Args:
        product: Product with commission and sales data

    Returns:
        Estimated monthly income
    """
    return (
        product.commission
        / 100
        * product.avg_monthly_sales
        * product.conversion_rate
        / 100
        * product.price
    )


def get_risk_level(product: Product) -> RiskLevel:
    """Classify promotion risk from competition and refund rate.

    First match wins:
    - High competition or refund rate > 10 -> High
    - Medium competition or refund rate > 5 -> Medium
    - otherwise -> Low

    Args:
        product: Product to classify

    Returns:
        Risk level
    """
    competition = product.competition_level

    if (
        competition == CompetitionLevel.HIGH.value
        or product.refund_rate > HIGH_RISK_REFUND_RATE
    ):
        return RiskLevel.HIGH
    if (
        competition == CompetitionLevel.MEDIUM.value
        or product.refund_rate > MEDIUM_RISK_REFUND_RATE
    ):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW
