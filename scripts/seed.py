#!/usr/bin/env python3
"""Seed the database with sample products and a demo user's campaigns."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import select

from affiliate_ai.config import get_scoring_weights
from affiliate_ai.db.base import async_session_maker
from affiliate_ai.db.models import Campaign, Product, Sale
from affiliate_ai.db.queries import create_product

DEMO_USER_ID = "demo-user"

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Earbuds Pro",
        "category": "Electronics",
        "platform": "TikTok Shop",
        "commission": 20.0,
        "price": 50.0,
        "avg_monthly_sales": 1000,
        "conversion_rate": 0.035,
        "competition_level": "Low",
        "refund_rate": 0.08,
        "rating": 4.6,
        "trend_score": 80.0,
    },
    {
        "name": "Magnetic Phone Mount",
        "category": "Electronics",
        "platform": "TikTok Shop",
        "commission": 6.0,
        "price": 25.0,
        "avg_monthly_sales": 2400,
        "conversion_rate": 0.05,
        "competition_level": "High",
        "refund_rate": 0.04,
        "rating": 4.3,
        "trend_score": 65.0,
    },
    {
        "name": "Vitamin C Brightening Serum",
        "category": "Beauty",
        "platform": "Amazon",
        "commission": 9.5,
        "price": 32.0,
        "avg_monthly_sales": 1800,
        "conversion_rate": 0.042,
        "competition_level": "Medium",
        "refund_rate": 0.03,
        "rating": 4.5,
        "trend_score": 72.0,
    },
    {
        "name": "Adjustable Dumbbell Set",
        "category": "Fitness",
        "platform": "Shopify",
        "commission": 45.0,
        "price": 299.0,
        "avg_monthly_sales": 150,
        "conversion_rate": 0.018,
        "competition_level": "Medium",
        "refund_rate": 0.06,
        "rating": 4.7,
        "trend_score": 55.0,
    },
    {
        "name": "Smart Pet Feeder",
        "category": "Pets",
        "platform": "Amazon",
        "commission": 12.0,
        "price": 79.99,
        "avg_monthly_sales": 600,
        "conversion_rate": 0.03,
        "competition_level": "Low",
        "refund_rate": 0.05,
        "rating": 4.4,
        "trend_score": 60.0,
    },
]

# (product name, campaign name, daily revenue, days of sales)
DEMO_CAMPAIGNS = [
    ("Magnetic Phone Mount", "Car gadgets reel", 42.0, 10),
    ("Vitamin C Brightening Serum", "Glow routine", 18.5, 5),
]


async def seed() -> None:
    """Seed products, then campaigns and sales for the demo user."""
    weights = get_scoring_weights()

    async with async_session_maker() as session:
        products: dict[str, Product] = {}
        for product_data in SAMPLE_PRODUCTS:
            # Check if product already exists
            result = await session.execute(
                select(Product).where(Product.name == product_data["name"])
            )
            existing = result.scalar_one_or_none()

            if existing:
                print(f"Product '{product_data['name']}' already exists, skipping...")
                products[existing.name] = existing
                continue

            created = await create_product(session, product_data, weights)
            products[created.name] = await session.get(Product, UUID(created.id))
            print(f"Created product: {created.name} (score {created.potential_score:.1f})")

        result = await session.execute(
            select(Campaign).where(Campaign.user_id == DEMO_USER_ID)
        )
        if result.scalars().first():
            print("Demo campaigns already exist, skipping...")
        else:
            today = datetime.now(timezone.utc)
            for product_name, campaign_name, daily_revenue, days in DEMO_CAMPAIGNS:
                campaign = Campaign(
                    user_id=DEMO_USER_ID,
                    product=products[product_name],
                    name=campaign_name,
                    promotion_platform="TikTok",
                )
                session.add(campaign)
                for offset in range(days):
                    session.add(
                        Sale(
                            campaign=campaign,
                            date=today - timedelta(days=offset),
                            clicks=120,
                            conversions=3,
                            revenue=daily_revenue,
                            commission_earned=daily_revenue * 0.2,
                        )
                    )
                print(f"Created campaign: {campaign_name} ({days} days of sales)")

        await session.commit()
        print("\nSeeding complete!")


if __name__ == "__main__":
    asyncio.run(seed())
