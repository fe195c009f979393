"""API routers, mounted under /api.

Includes routes for:
- /markets - Market listing, creation, resolution and per-market bets
- /bets - Bets by owner, placing and settling
- /portfolio - Derived portfolio statistics
- /verify-transaction, /network-status - Simulated chain endpoints
- /chain - Explorer reads and wallet transaction requests
"""
from prediction_market.routers.bets import router as bets_router
from prediction_market.routers.chain import router as chain_router
from prediction_market.routers.markets import router as markets_router
from prediction_market.routers.network import router as network_router
from prediction_market.routers.portfolio import router as portfolio_router

__all__ = [
    "bets_router",
    "chain_router",
    "markets_router",
    "network_router",
    "portfolio_router",
]
