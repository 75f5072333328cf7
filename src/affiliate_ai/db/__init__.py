"""Database module."""

from affiliate_ai.db.base import get_db
from affiliate_ai.db.models import Campaign, CampaignStatus, Product, Sale

__all__ = ["get_db", "Campaign", "CampaignStatus", "Product", "Sale"]
