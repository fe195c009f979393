"""In-memory storage: plain dicts keyed by generated ids."""
from prediction_market.schemas import (Bet, BetCreate, Market, MarketCreate,
                                       MarketStatus, MarketUpdate,
                                       PortfolioStats)
from prediction_market.storage.base import StorageABC
from prediction_market.storage.seed import demo_markets
from prediction_market.storage.stats import (compute_portfolio_stats,
                                             count_participants)
from prediction_market.utils import new_id, utcnow_iso


class MemoryStorage(StorageABC):
    """Storage backed by two dicts; lost on restart.

    Not safe under concurrent writers beyond what the single-threaded event
    loop gives: none of its methods suspend.
    """

    def __init__(self, seed: bool = True) -> None:
        """Initialize empty maps.

        Args:
            seed: Load the demo markets so the API has data to browse.
        """
        self._markets: dict[str, Market] = {}
        self._bets: dict[str, Bet] = {}
        if seed:
            for market in demo_markets():
                self._markets[market.id] = market

    # ---- Markets ----
    async def get_markets(self) -> list[Market]:
        return list(self._markets.values())

    async def get_market(self, market_id: str) -> Market | None:
        return self._markets.get(market_id)

    async def create_market(self, payload: MarketCreate) -> Market:
        market = Market(
            **payload.model_dump(),
            id=new_id(),
            created_at=utcnow_iso(),
            status=MarketStatus.ACTIVE,
            total_volume=0,
            participant_count=0,
        )
        self._markets[market.id] = market
        return market

    async def update_market(self, market_id: str, update: MarketUpdate) -> Market | None:
        market = self._markets.get(market_id)
        if market is None:
            return None
        updated = market.model_copy(update=update.model_dump(exclude_unset=True))
        self._markets[market_id] = updated
        return updated

    # ---- Bets ----
    async def get_bet(self, bet_id: str) -> Bet | None:
        return self._bets.get(bet_id)

    async def get_bets_by_owner(self, owner_address: str) -> list[Bet]:
        return [bet for bet in self._bets.values() if bet.owner_address == owner_address]

    async def get_bets_by_market(self, market_id: str) -> list[Bet]:
        return [bet for bet in self._bets.values() if bet.market_id == market_id]

    async def create_bet(self, payload: BetCreate) -> Bet:
        bet = Bet(
            **payload.model_dump(),
            id=new_id(),
            created_at=utcnow_iso(),
            is_settled=False,
        )
        self._bets[bet.id] = bet

        market = self._markets.get(payload.market_id)
        if market is not None:
            market_bets = await self.get_bets_by_market(payload.market_id)
            self._markets[market.id] = market.model_copy(
                update={
                    "total_volume": market.total_volume + payload.amount,
                    "participant_count": count_participants(market_bets),
                }
            )
        return bet

    async def settle_bet(self, bet_id: str, winnings: float) -> Bet | None:
        bet = self._bets.get(bet_id)
        if bet is None:
            return None
        settled = bet.model_copy(update={"is_settled": True, "winnings": winnings})
        self._bets[bet_id] = settled
        return settled

    # ---- Portfolio ----
    async def get_portfolio_stats(self, owner_address: str) -> PortfolioStats:
        return compute_portfolio_stats(await self.get_bets_by_owner(owner_address))
