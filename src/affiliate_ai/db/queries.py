"""Queries that assemble scoring inputs from the database.

Every row leaves this module as a scoring model (see `to_scoring_product`),
so the engines never touch ORM objects.
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import and_, desc, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from affiliate_ai.db.models import Campaign, Product, Sale
from affiliate_ai.recommendations.models import CampaignAggregate, TrendingCandidate
from affiliate_ai.scoring.calculator import calculate_potential_score
from affiliate_ai.scoring.models import Product as ScoringProduct
from affiliate_ai.scoring.models import ScoringWeights

logger = logging.getLogger(__name__)

# Columns products may be listed by (always descending)
ALLOWED_SORT_FIELDS: tuple[str, ...] = (
    "potential_score",
    "trend_score",
    "commission",
    "price",
    "avg_monthly_sales",
    "rating",
)
DEFAULT_SORT_FIELD = "potential_score"


def to_scoring_product(product: Product) -> ScoringProduct:
    """Convert a database product to the scoring model."""
    return ScoringProduct.model_validate(product)


async def list_products(
    db: AsyncSession,
    category: str | None = None,
    platform: str | None = None,
    sort_by: str | None = None,
    limit: int = 50,
) -> list[ScoringProduct]:
    """List products, optionally filtered by category and platform.

    Unknown sort fields fall back to potential score.
    """
    sort_field = sort_by if sort_by in ALLOWED_SORT_FIELDS else DEFAULT_SORT_FIELD

    query = select(Product)
    if category:
        query = query.where(Product.category == category)
    if platform:
        query = query.where(Product.platform == platform)

    query = query.order_by(desc(getattr(Product, sort_field))).limit(limit)

    result = await db.execute(query)
    return [to_scoring_product(p) for p in result.scalars().all()]


async def get_product(db: AsyncSession, product_id: UUID) -> ScoringProduct | None:
    """Get a single product, or None if it doesn't exist."""
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalar_one_or_none()
    if product is None:
        return None
    return to_scoring_product(product)


async def create_product(
    db: AsyncSession,
    data: dict[str, Any],
    weights: ScoringWeights | None = None,
) -> ScoringProduct:
    """Store a product with its potential score calculated."""
    potential_score = calculate_potential_score(ScoringProduct(**data), weights)

    product = Product(**data, potential_score=potential_score)
    db.add(product)
    await db.flush()
    await db.refresh(product)

    logger.info(f"Created product {product.id} with potential score {potential_score:.2f}")
    return to_scoring_product(product)


async def fetch_user_aggregates(db: AsyncSession, user_id: str) -> list[CampaignAggregate]:
    """Roll up a user's campaign sales by (category, platform).

    Campaigns without sales still produce a row (zero revenue and count).
    """
    query = (
        select(
            Product.category,
            Product.platform,
            func.sum(func.coalesce(Sale.revenue, 0)).label("total_revenue"),
            func.count(Sale.id).label("sale_count"),
        )
        .select_from(Campaign)
        .join(Product, Campaign.product_id == Product.id)
        .outerjoin(Sale, Campaign.id == Sale.campaign_id)
        .where(Campaign.user_id == user_id)
        .group_by(Product.category, Product.platform)
    )

    result = await db.execute(query)
    aggregates = [CampaignAggregate(**row._asdict()) for row in result.all()]
    logger.debug(f"Loaded {len(aggregates)} campaign aggregates for user {user_id}")
    return aggregates


async def fetch_recommendation_candidates(
    db: AsyncSession,
    user_id: str,
    pool_size: int,
) -> list[ScoringProduct]:
    """Get products the user hasn't promoted, best potential first."""
    promoted = select(Campaign.product_id).where(Campaign.user_id == user_id)

    query = (
        select(Product)
        .where(Product.id.not_in(promoted))
        .order_by(desc(Product.potential_score))
        .limit(pool_size)
    )

    result = await db.execute(query)
    return [to_scoring_product(p) for p in result.scalars().all()]


async def fetch_trending_candidates(
    db: AsyncSession,
    since: datetime,
) -> list[TrendingCandidate]:
    """Get every product with its campaign count and sales since a cutoff.

    Campaign count covers all campaigns for the product; revenue and
    conversions only count sales dated on or after `since` (None when
    there are none).
    """
    query = (
        select(
            Product,
            func.count(distinct(Campaign.id)).label("campaign_count"),
            func.sum(Sale.revenue).label("total_revenue"),
            func.sum(Sale.conversions).label("total_conversions"),
        )
        .outerjoin(Campaign, Campaign.product_id == Product.id)
        .outerjoin(
            Sale,
            and_(Sale.campaign_id == Campaign.id, Sale.date >= since),
        )
        .group_by(Product.id)
    )

    result = await db.execute(query)
    return [
        TrendingCandidate(
            **to_scoring_product(product).model_dump(),
            campaign_count=campaign_count,
            total_revenue=total_revenue,
            total_conversions=total_conversions,
        )
        for product, campaign_count, total_revenue, total_conversions in result.all()
    ]


async def fetch_products_in_segment(
    db: AsyncSession,
    category: str,
    platform: str,
) -> list[ScoringProduct]:
    """Get all products sharing a category and platform."""
    result = await db.execute(
        select(Product).where(
            Product.category == category,
            Product.platform == platform,
        )
    )
    return [to_scoring_product(p) for p in result.scalars().all()]


async def fetch_all_products(db: AsyncSession) -> list[ScoringProduct]:
    """Get every product."""
    result = await db.execute(select(Product))
    return [to_scoring_product(p) for p in result.scalars().all()]
