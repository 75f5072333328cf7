"""Data models for product recommendations."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from affiliate_ai.scoring.models import Product

# Upper bound for relevance and final scores
MAX_SCORE: float = 100.0


class CampaignGoal(str, Enum):
    """Goal tags recognized inside a free-text campaign goal.

    Declared in match priority order.
    """

    HIGH_COMMISSION = "high-commission"
    TRENDING = "trending"
    LOW_COMPETITION = "low-competition"


class CampaignAggregate(BaseModel):
    """A user's campaign results rolled up by (category, platform)."""

    model_config = ConfigDict(from_attributes=True)

    category: str = Field(..., description="Product category")
    platform: str = Field(..., description="Product platform")
    total_revenue: Optional[float] = Field(None, description="Sum of linked sales revenue")
    sale_count: Optional[int] = Field(None, description="Number of linked sales")


class ScoredProduct(BaseModel):
    """Personalized recommendation for one product."""

    id: str
    name: str
    category: str
    platform: str
    commission: float
    potential_score: float
    relevance_score: float = Field(..., description="User preference match, capped at 100")
    final_score: float = Field(..., description="0.7 × potential + 0.3 × relevance, capped at 100")


class TrendingCandidate(Product):
    """Product with campaign activity over the trending window."""

    campaign_count: int = Field(0, ge=0, description="Distinct campaigns promoting the product")
    total_revenue: Optional[float] = Field(None, description="Revenue inside the window, None if no sales")
    total_conversions: Optional[float] = Field(None, description="Conversions inside the window")

    @field_validator("campaign_count", mode="before")
    @classmethod
    def _missing_count_as_zero(cls, value: Any) -> Any:
        if value is None:
            return 0
        return value


class SimilarProduct(Product):
    """Product with its distance from a base product."""

    commission_diff: float = Field(..., description="|commission - base commission|")
    price_diff: float = Field(..., description="|price - base price|")
    score_diff: float = Field(..., description="|potential score - base potential score|")
    distance: float = Field(..., description="commission_diff + price_diff × 0.1 + score_diff")
