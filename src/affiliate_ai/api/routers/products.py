"""Product API endpoints.

Endpoints:
- GET /products - list products (filter by category/platform, sort)
- GET /products/recommendations - personalized recommendations for a user
- GET /products/trending - products with the most recent campaign revenue
- GET /products/campaign-recommendations - products matching a campaign goal
- GET /products/{id} - product with its analysis
- GET /products/{id}/similar - closest products in the same segment
- POST /products - create a product (potential score calculated)
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from affiliate_ai.config import Settings, get_scoring_weights, get_settings
from affiliate_ai.db import get_db, queries
from affiliate_ai.recommendations import (
    ScoredProduct,
    SimilarProduct,
    TrendingCandidate,
    get_campaign_product_recommendations,
    get_product_recommendations,
    get_similar_products,
    get_trending_products,
)
from affiliate_ai.scoring import CompetitionLevel, Product, ProductAnalysis, analyze_product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


class ProductListResponse(BaseModel):
    """Response for a list of products."""

    products: list[Product]


class ProductDetailResponse(BaseModel):
    """Single product with its computed analysis."""

    product: Product
    analysis: ProductAnalysis


class RecommendationListResponse(BaseModel):
    """Response for personalized recommendations."""

    products: list[ScoredProduct]


class TrendingListResponse(BaseModel):
    """Response for trending products."""

    products: list[TrendingCandidate]


class SimilarListResponse(BaseModel):
    """Response for similar products."""

    products: list[SimilarProduct]


class ProductCreate(BaseModel):
    """Product creation schema (admin use)."""

    name: str
    category: str
    platform: str
    commission: float = Field(0.0, ge=0)
    price: float = Field(0.0, ge=0)
    avg_monthly_sales: float = Field(0.0, ge=0)
    conversion_rate: float = Field(0.0, ge=0)
    competition_level: CompetitionLevel = CompetitionLevel.MEDIUM
    refund_rate: float = Field(0.0, ge=0)
    rating: float | None = None
    trend_score: float = 0.0
    estimated_cpc: float | None = None
    estimated_traffic: float | None = None
    image_url: str | None = None


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = Query(None, description="Filter by category"),
    platform: str | None = Query(None, description="Filter by platform"),
    sort_by: str | None = Query(
        None,
        description="potential_score, trend_score, commission, price, avg_monthly_sales or rating",
    ),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
) -> ProductListResponse:
    """List products, highest sort field first."""
    products = await queries.list_products(
        db,
        category=category,
        platform=platform,
        sort_by=sort_by,
        limit=limit,
    )
    return ProductListResponse(products=products)


@router.get("/recommendations", response_model=RecommendationListResponse)
async def product_recommendations(
    user_id: str = Query(..., min_length=1, description="User to recommend for"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RecommendationListResponse:
    """Recommend products the user hasn't promoted yet."""
    aggregates = await queries.fetch_user_aggregates(db, user_id)
    candidates = await queries.fetch_recommendation_candidates(
        db, user_id, settings.candidate_pool_size
    )

    recommendations = get_product_recommendations(aggregates, candidates, limit)
    logger.info(
        f"Recommended {len(recommendations)} of {len(candidates)} candidates for user {user_id}"
    )
    return RecommendationListResponse(products=recommendations)


@router.get("/trending", response_model=TrendingListResponse)
async def trending_products(
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TrendingListResponse:
    """List products with the most campaign revenue in the trending window."""
    since = datetime.now(timezone.utc) - timedelta(days=settings.trending_window_days)
    candidates = await queries.fetch_trending_candidates(db, since)
    return TrendingListResponse(products=get_trending_products(candidates, limit))


@router.get("/campaign-recommendations", response_model=ProductListResponse)
async def campaign_product_recommendations(
    goal: str = Query("", description="Campaign goal, e.g. 'high-commission' or 'trending'"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
) -> ProductListResponse:
    """Pick products that fit a campaign goal."""
    candidates = await queries.fetch_all_products(db)
    products = get_campaign_product_recommendations(goal, candidates, limit)
    return ProductListResponse(products=products)


@router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProductDetailResponse:
    """Get a product with its potential score, estimated income and risk."""
    product = await queries.get_product(db, product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductDetailResponse(
        product=product,
        analysis=analyze_product(product, get_scoring_weights(settings)),
    )


@router.get("/{product_id}/similar", response_model=SimilarListResponse)
async def similar_products(
    product_id: UUID,
    limit: int = Query(5, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
) -> SimilarListResponse:
    """List the closest products in the same category and platform."""
    base = await queries.get_product(db, product_id)

    if not base:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    candidates = await queries.fetch_products_in_segment(db, base.category, base.platform)
    return SimilarListResponse(products=get_similar_products(base, candidates, limit))


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Product:
    """Create a new product (admin endpoint)."""
    return await queries.create_product(
        db,
        product_data.model_dump(mode="json"),
        get_scoring_weights(settings),
    )
