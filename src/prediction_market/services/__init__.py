"""Service layer: business rules over storage and the chain helper, with exception-to-HTTP mapping."""
from prediction_market.services.bets_service import BetsService
from prediction_market.services.chain_service import ChainService
from prediction_market.services.markets_service import MarketsService

__all__ = [
    "BetsService",
    "ChainService",
    "MarketsService",
]
