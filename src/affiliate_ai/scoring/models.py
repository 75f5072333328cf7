"""Data models for product scoring."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompetitionLevel(str, Enum):
    """Market saturation for a product."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskLevel(str, Enum):
    """Coarse promotion risk rating."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Multiplier applied to the competition penalty, by competition level
DEFAULT_COMPETITION_FACTOR: dict[str, float] = {
    CompetitionLevel.LOW.value: 1,
    CompetitionLevel.MEDIUM.value: 2,
    CompetitionLevel.HIGH.value: 3,
}

# Factor used when a product carries a level the weights don't know about
FALLBACK_COMPETITION_FACTOR: float = 2

# Numeric attributes that default to 0 when missing from a product record
NUMERIC_PRODUCT_FIELDS: tuple[str, ...] = (
    "commission",
    "price",
    "avg_monthly_sales",
    "conversion_rate",
    "trend_score",
    "refund_rate",
    "potential_score",
)


class ScoringWeights(BaseModel):
    """Weights for the potential score formula.

    Immutable so a single instance can be shared across requests.
    """

    model_config = ConfigDict(frozen=True)

    competition_factor: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_COMPETITION_FACTOR),
        description="Multiplier per competition level (Low/Medium/High)",
    )
    competition_penalty: float = Field(
        100.0, description="Points deducted per unit of competition factor"
    )
    refund_penalty_multiplier: float = Field(
        500.0, description="Points deducted per unit of refund rate"
    )


class Product(BaseModel):
    """Product snapshot as supplied by the storage layer.

    Missing numeric attributes are coerced to 0 here, at the boundary,
    so the formulas never see None.
    """

    model_config = ConfigDict(from_attributes=True)

    # Identification
    id: str = Field("", description="Unique product identifier")
    name: str = Field("", description="Product name")
    category: str = Field("", description="Vendor category (e.g. Electronics)")
    platform: str = Field("", description="Selling platform (e.g. TikTok Shop)")

    # Economics
    commission: float = Field(0.0, description="Commission per sale (currency units)")
    price: float = Field(0.0, description="Product price")
    avg_monthly_sales: float = Field(0.0, description="Average sales per month")
    conversion_rate: float = Field(0.0, description="Conversion rate (fraction 0-1)")

    # Market signals
    competition_level: Optional[str] = Field(
        None, description="Low, Medium or High; None when unknown"
    )
    trend_score: float = Field(0.0, description="Trend momentum, practically 0-100")
    refund_rate: float = Field(0.0, description="Refund rate")

    # Stored potential score (computed when the product was saved)
    potential_score: float = Field(0.0, description="Stored potential score")

    # Optional metadata
    rating: Optional[float] = Field(None, description="Average buyer rating")
    estimated_cpc: Optional[float] = Field(None, description="Estimated cost per click")
    estimated_traffic: Optional[float] = Field(None, description="Estimated monthly traffic")
    image_url: Optional[str] = Field(None, description="Product image URL")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value)

    @field_validator(*NUMERIC_PRODUCT_FIELDS, mode="before")
    @classmethod
    def _missing_as_zero(cls, value: Any) -> Any:
        if value is None:
            return 0.0
        return value

    @field_validator("competition_level", mode="before")
    @classmethod
    def _level_as_string(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class ProductAnalysis(BaseModel):
    """Scores computed for a single product."""

    potential_score: float = Field(..., description="Weighted potential score (unbounded)")
    estimated_income: float = Field(..., description="Estimated monthly income")
    risk_level: RiskLevel = Field(..., description="Low, Medium or High")
