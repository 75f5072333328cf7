"""Database models for products, campaigns and sales."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, Float, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from affiliate_ai.db.base import Base


class CampaignStatus(str, enum.Enum):
    """Campaign status enumeration."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class Product(Base):
    """Vendor product available for promotion."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(500))
    category: Mapped[str] = mapped_column(String(100), index=True)
    platform: Mapped[str] = mapped_column(String(100), index=True)

    # Economics
    commission: Mapped[float] = mapped_column(Float, default=0.0)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    avg_monthly_sales: Mapped[float] = mapped_column(Float, default=0.0)
    conversion_rate: Mapped[float] = mapped_column(Float, default=0.0)

    # Market signals
    competition_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    refund_rate: Mapped[float] = mapped_column(Float, default=0.0)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    trend_score: Mapped[float] = mapped_column(Float, default=0.0)
    estimated_cpc: Mapped[float | None] = mapped_column(Float, nullable=True)
    estimated_traffic: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Calculated on save
    potential_score: Mapped[float] = mapped_column(Float, default=0.0, index=True)

    # Media
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    campaigns: Mapped[list["Campaign"]] = relationship(back_populates="product")

    def __repr__(self) -> str:
        return f"<Product {self.name}: {self.category}/{self.platform}>"


class Campaign(Base):
    """A user's promotion of a product."""

    __tablename__ = "campaigns"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("products.id"),
    )
    name: Mapped[str] = mapped_column(String(255))
    promotion_platform: Mapped[str] = mapped_column(String(100), default="")
    budget: Mapped[float] = mapped_column(Float, default=0.0)

    status: Mapped[CampaignStatus] = mapped_column(
        Enum(CampaignStatus),
        default=CampaignStatus.ACTIVE,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="campaigns")
    sales: Mapped[list["Sale"]] = relationship(back_populates="campaign")

    def __repr__(self) -> str:
        return f"<Campaign {self.name}: {self.status.value}>"


class Sale(Base):
    """Daily sales record for a campaign."""

    __tablename__ = "sales"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    campaign_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("campaigns.id"),
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    clicks: Mapped[int] = mapped_column(default=0)
    conversions: Mapped[int] = mapped_column(default=0)
    revenue: Mapped[float] = mapped_column(Float, default=0.0)
    commission_earned: Mapped[float] = mapped_column(Float, default=0.0)

    # Relationships
    campaign: Mapped["Campaign"] = relationship(back_populates="sales")

    def __repr__(self) -> str:
        return f"<Sale {self.campaign_id}: {self.revenue}>"
