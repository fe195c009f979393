"""Bet routes: list by owner, place and settle."""
from fastapi import APIRouter, Query, status

from prediction_market.deps import BetsServiceDep
from prediction_market.schemas import Bet, BetCreate, BetSettle, BetWithMarket

router = APIRouter(prefix="/bets", tags=["bets"])


@router.get("", response_model=list[BetWithMarket])
async def list_bets(
    service: BetsServiceDep,
    owner: str | None = Query(default=None, description="Owner address"),
) -> list[BetWithMarket]:
    """Bets placed by an address, each with its parent market.

    An address without bets gets an empty list; a missing owner is a 400.
    """
    return await service.list_bets(owner)


@router.post("", response_model=Bet, status_code=status.HTTP_201_CREATED)
async def place_bet(payload: BetCreate, service: BetsServiceDep) -> Bet:
    """Place a bet on one outcome of an active market."""
    return await service.place_bet(payload)


@router.patch("/{bet_id}/settle", response_model=Bet)
async def settle_bet(bet_id: str, payload: BetSettle, service: BetsServiceDep) -> Bet:
    """Settle a bet with its winnings after the market resolves."""
    return await service.settle_bet(bet_id, payload.winnings)
