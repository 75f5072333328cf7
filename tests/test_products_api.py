"""Tests for Product API endpoints.

Endpoints:
- GET /products - list products
- GET /products/recommendations - personalized recommendations
- GET /products/trending - trending products
- GET /products/campaign-recommendations - goal-based picks
- GET /products/{id} - product with analysis
- GET /products/{id}/similar - similar products
- POST /products - create product
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from affiliate_ai.api.app import app
from affiliate_ai.db.models import Campaign, Product, Sale


@pytest.fixture
def earbuds_data() -> dict:
    """Product data with a hand-checked potential score of 290."""
    return {
        "name": "Wireless Earbuds Pro",
        "category": "Electronics",
        "platform": "TikTok Shop",
        "commission": 20.0,
        "price": 50.0,
        "avg_monthly_sales": 1000,
        "conversion_rate": 0.035,
        "competition_level": "Low",
        "trend_score": 80.0,
        "refund_rate": 0.08,
    }


async def add_product(db: AsyncSession, name: str, **fields) -> Product:
    """Insert a product row."""
    data = {
        "category": "Electronics",
        "platform": "TikTok Shop",
        "commission": 10.0,
        "price": 100.0,
        "competition_level": "Medium",
        "trend_score": 50.0,
        "potential_score": 50.0,
    }
    data.update(fields)
    product = Product(name=name, **data)
    db.add(product)
    await db.flush()
    return product


async def add_campaign(
    db: AsyncSession,
    user_id: str,
    product: Product,
    sales: list[tuple[datetime, float]] = (),
) -> Campaign:
    """Insert a campaign with (date, revenue) sales."""
    campaign = Campaign(user_id=user_id, product_id=product.id, name=f"Promo {product.name}")
    db.add(campaign)
    await db.flush()
    for date, revenue in sales:
        db.add(Sale(campaign_id=campaign.id, date=date, conversions=1, revenue=revenue))
    await db.flush()
    return campaign


def client() -> AsyncClient:
    """HTTP client bound to the app."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestHealth:
    """Tests for the health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self):
        """Reports healthy."""
        async with client() as c:
            response = await c.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestListProducts:
    """Tests for GET /products endpoint."""

    @pytest.mark.asyncio
    async def test_list_products_empty(self, test_db):
        """Returns empty list when no products exist."""
        async with client() as c:
            response = await c.get("/api/products")

        assert response.status_code == 200
        assert response.json() == {"products": []}

    @pytest.mark.asyncio
    async def test_filter_and_sort(self, test_db):
        """Filters by category and sorts by the requested field."""
        await add_product(test_db, "Cheap", commission=5.0, potential_score=90.0)
        await add_product(test_db, "Rich", commission=40.0, potential_score=10.0)
        await add_product(test_db, "Serum", category="Beauty", commission=99.0)

        async with client() as c:
            response = await c.get(
                "/api/products",
                params={"category": "Electronics", "sort_by": "commission"},
            )

        assert response.status_code == 200
        names = [p["name"] for p in response.json()["products"]]
        assert names == ["Rich", "Cheap"]

    @pytest.mark.asyncio
    async def test_unknown_sort_falls_back_to_potential_score(self, test_db):
        """Sort fields outside the allow-list are ignored."""
        await add_product(test_db, "Low", potential_score=1.0)
        await add_product(test_db, "High", potential_score=99.0)

        async with client() as c:
            response = await c.get("/api/products", params={"sort_by": "name; DROP TABLE"})

        assert response.status_code == 200
        names = [p["name"] for p in response.json()["products"]]
        assert names == ["High", "Low"]

    @pytest.mark.asyncio
    async def test_limit_validation(self, test_db):
        """Limits above 100 are rejected."""
        async with client() as c:
            response = await c.get("/api/products", params={"limit": 500})

        assert response.status_code == 422


class TestProductDetail:
    """Tests for GET /products/{id} and POST /products."""

    @pytest.mark.asyncio
    async def test_create_calculates_potential_score(self, test_db, earbuds_data):
        """Potential score is computed server-side."""
        async with client() as c:
            response = await c.post("/api/products", json=earbuds_data)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Wireless Earbuds Pro"
        assert data["potential_score"] == pytest.approx(290)

    @pytest.mark.asyncio
    async def test_get_product_with_analysis(self, test_db, earbuds_data):
        """Detail includes potential score, estimated income and risk."""
        product = await add_product(test_db, **earbuds_data)

        async with client() as c:
            response = await c.get(f"/api/products/{product.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["product"]["id"] == str(product.id)
        assert data["analysis"]["potential_score"] == pytest.approx(290)
        assert data["analysis"]["estimated_income"] == pytest.approx(3.5)
        assert data["analysis"]["risk_level"] == "Low"

    @pytest.mark.asyncio
    async def test_get_product_not_found(self, test_db):
        """Returns 404 for unknown product."""
        async with client() as c:
            response = await c.get(f"/api/products/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"


class TestRecommendations:
    """Tests for GET /products/recommendations endpoint."""

    @pytest.mark.asyncio
    async def test_recommends_unpromoted_products_by_preference(self, test_db):
        """Promoted products are excluded; matching segment ranks first.

        History: Electronics/TikTok Shop, 2 sales of $50
        weight = ln(101) + 2 ≈ 6.615
        Match: 10 × 0.7 + 6.615 × 0.3 ≈ 8.98
        Other: 5 × 0.7 + 0 = 3.5
        """
        promoted = await add_product(test_db, "Promoted", potential_score=95.0)
        now = datetime.now(timezone.utc)
        await add_campaign(test_db, "user-1", promoted, [(now, 50.0), (now, 50.0)])
        await add_product(test_db, "Other", category="Beauty", platform="Amazon", potential_score=5.0)
        await add_product(test_db, "Match", potential_score=10.0)

        async with client() as c:
            response = await c.get(
                "/api/products/recommendations",
                params={"user_id": "user-1"},
            )

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Match", "Other"]
        assert products[0]["relevance_score"] == pytest.approx(6.615, abs=1e-3)
        assert products[0]["final_score"] == pytest.approx(8.985, abs=1e-3)
        assert products[1]["relevance_score"] == 0

    @pytest.mark.asyncio
    async def test_new_user_gets_potential_order(self, test_db):
        """Without history, ranking follows potential score."""
        await add_product(test_db, "B", potential_score=20.0)
        await add_product(test_db, "A", potential_score=80.0)

        async with client() as c:
            response = await c.get(
                "/api/products/recommendations",
                params={"user_id": "new-user", "limit": 1},
            )

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["products"]] == ["A"]

    @pytest.mark.asyncio
    async def test_user_id_required(self, test_db):
        """Missing user_id is a validation error."""
        async with client() as c:
            response = await c.get("/api/products/recommendations")

        assert response.status_code == 422


class TestTrending:
    """Tests for GET /products/trending endpoint."""

    @pytest.mark.asyncio
    async def test_trending(self, test_db):
        """Recent revenue first; products without campaigns excluded."""
        now = datetime.now(timezone.utc)
        hot = await add_product(test_db, "Hot")
        stale = await add_product(test_db, "Stale")
        await add_product(test_db, "Unpromoted")

        await add_campaign(test_db, "user-1", hot, [(now - timedelta(days=2), 120.0)])
        await add_campaign(test_db, "user-2", stale, [(now - timedelta(days=60), 900.0)])

        async with client() as c:
            response = await c.get("/api/products/trending")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Hot", "Stale"]
        assert products[0]["total_revenue"] == pytest.approx(120.0)
        assert products[0]["campaign_count"] == 1
        assert products[1]["total_revenue"] is None


class TestSimilar:
    """Tests for GET /products/{id}/similar endpoint."""

    @pytest.mark.asyncio
    async def test_similar_products(self, test_db):
        """Same segment only, closest first, base excluded."""
        base = await add_product(test_db, "Base", commission=10.0, price=100.0, potential_score=50.0)
        await add_product(test_db, "Far", commission=30.0)
        await add_product(test_db, "Near", commission=11.0)
        await add_product(test_db, "Elsewhere", platform="Amazon", commission=10.0)

        async with client() as c:
            response = await c.get(f"/api/products/{base.id}/similar")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Near", "Far"]
        assert products[0]["distance"] == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_similar_base_not_found(self, test_db):
        """Returns 404 when the base product is unknown."""
        async with client() as c:
            response = await c.get(f"/api/products/{uuid4()}/similar")

        assert response.status_code == 404


class TestCampaignRecommendations:
    """Tests for GET /products/campaign-recommendations endpoint."""

    @pytest.mark.asyncio
    async def test_low_competition_goal(self, test_db):
        """Only Low competition products, best potential first."""
        await add_product(test_db, "Crowded", competition_level="High", potential_score=99.0)
        await add_product(test_db, "Niche", competition_level="Low", potential_score=30.0)
        await add_product(test_db, "Quiet", competition_level="Low", potential_score=60.0)

        async with client() as c:
            response = await c.get(
                "/api/products/campaign-recommendations",
                params={"goal": "low-competition"},
            )

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["products"]] == ["Quiet", "Niche"]
