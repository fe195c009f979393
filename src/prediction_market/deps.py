"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

Lifespan (main.py) builds the container once and attaches the services to
app.state; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from prediction_market.services import BetsService, ChainService, MarketsService


def get_markets_service(request: Request) -> MarketsService:
    """Resolve MarketsService from app.state (created at startup)."""
    return request.app.state.markets_service


def get_bets_service(request: Request) -> BetsService:
    """Resolve BetsService from app.state."""
    return request.app.state.bets_service


def get_chain_service(request: Request) -> ChainService:
    """Resolve ChainService from app.state."""
    return request.app.state.chain_service


# Type aliases for route injection
MarketsServiceDep = Annotated[MarketsService, Depends(get_markets_service)]
BetsServiceDep = Annotated[BetsService, Depends(get_bets_service)]
ChainServiceDep = Annotated[ChainService, Depends(get_chain_service)]
