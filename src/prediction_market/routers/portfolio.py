"""Portfolio routes."""
from fastapi import APIRouter, Query

from prediction_market.deps import BetsServiceDep
from prediction_market.schemas import PortfolioStats

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/stats", response_model=PortfolioStats)
async def get_portfolio_stats(
    service: BetsServiceDep,
    owner: str | None = Query(default=None, description="Owner address"),
) -> PortfolioStats:
    """Totals and win rate over an address's bets, recomputed on every request."""
    return await service.get_portfolio_stats(owner)
