"""Database package: models and session management."""
from prediction_market.db.models import (BetRecord, MarketCategory,
                                         MarketRecord, MarketStatus)

__all__ = ["BetRecord", "MarketCategory", "MarketRecord", "MarketStatus"]
