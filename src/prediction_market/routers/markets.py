"""Market routes: list, create, fetch, update and per-market bets."""
from fastapi import APIRouter, Query, status

from prediction_market.deps import MarketsServiceDep
from prediction_market.schemas import (Bet, Market, MarketCategory,
                                       MarketCreate, MarketSort, MarketStatus,
                                       MarketUpdate)

router = APIRouter(prefix="/markets", tags=["markets"])


@router.get("", response_model=list[Market])
async def list_markets(
    service: MarketsServiceDep,
    category: MarketCategory | None = Query(default=None, description="Filter by category"),
    status_filter: MarketStatus | None = Query(
        default=None, alias="status", description="Filter by status"
    ),
    search: str | None = Query(default=None, description="Substring of title or description"),
    sort_by: MarketSort | None = Query(default=None, description="volume, newest or ending_soon"),
) -> list[Market]:
    """List markets, optionally filtered and sorted. Unfiltered by default."""
    return await service.list_markets(
        category=category, status=status_filter, search=search, sort_by=sort_by
    )


@router.post("", response_model=Market, status_code=status.HTTP_201_CREATED)
async def create_market(payload: MarketCreate, service: MarketsServiceDep) -> Market:
    """Create a market. It starts active with zero volume and participants."""
    return await service.create_market(payload)


@router.get("/{market_id}", response_model=Market)
async def get_market(market_id: str, service: MarketsServiceDep) -> Market:
    return await service.get_market(market_id)


@router.patch("/{market_id}", response_model=Market)
async def update_market(
    market_id: str, update: MarketUpdate, service: MarketsServiceDep
) -> Market:
    """Update a market's status, winning outcome or aggregates (e.g. on resolution)."""
    return await service.update_market(market_id, update)


@router.get("/{market_id}/bets", response_model=list[Bet])
async def get_market_bets(market_id: str, service: MarketsServiceDep) -> list[Bet]:
    return await service.get_market_bets(market_id)
