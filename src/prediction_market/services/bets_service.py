"""Bets service: placing, listing and settling bets, plus portfolio stats."""
import logging

from prediction_market.core import (BetAlreadySettledError,
                                    BetNotFoundError, ErrorMapper,
                                    InvalidOutcomeError, MarketNotActiveError,
                                    MarketNotFoundError, OwnerRequiredError,
                                    PredictionMarketError)
from prediction_market.schemas import (Bet, BetCreate, BetWithMarket, Market,
                                       MarketStatus, PortfolioStats)
from prediction_market.storage import StorageABC

logger = logging.getLogger(__name__)


def ensure_bet_allowed(market: Market | None, payload: BetCreate) -> Market:
    """Check a bet against its market; raise the matching domain error if it is not allowed.

    Args:
        market: The referenced market, or None if it does not exist.
        payload: The bet being placed.

    Returns:
        The market, once it is known to exist, be active and carry the outcome.
    """
    if market is None:
        raise MarketNotFoundError(payload.market_id)
    if market.status != MarketStatus.ACTIVE:
        raise MarketNotActiveError(market.id)
    if not market.has_outcome(payload.outcome_id):
        raise InvalidOutcomeError(payload.outcome_id)
    return market


def _require_owner(owner_address: str | None) -> str:
    if not owner_address or not owner_address.strip():
        raise OwnerRequiredError()
    return owner_address


class BetsService:
    """Thin service over storage for bets; maps domain errors to HTTP."""

    def __init__(self, storage: StorageABC, error_mapper: ErrorMapper) -> None:
        self._storage = storage
        self._error_mapper = error_mapper

    async def list_bets(self, owner_address: str | None) -> list[BetWithMarket]:
        """Bets of one owner, each enriched with its parent market.

        Raises HTTPException 400 when no owner is given. An owner without bets
        gets an empty list.
        """
        try:
            owner = _require_owner(owner_address)
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e)
        bets = await self._storage.get_bets_by_owner(owner)

        markets: dict[str, Market | None] = {}
        for bet in bets:
            if bet.market_id not in markets:
                markets[bet.market_id] = await self._storage.get_market(bet.market_id)
        return [
            BetWithMarket(**bet.model_dump(), market=markets[bet.market_id]) for bet in bets
        ]

    async def place_bet(self, payload: BetCreate) -> Bet:
        """Place a bet on an active market's outcome.

        Raises HTTPException 404 when the market is missing, 400 when it is not
        active or the outcome is unknown.
        """
        try:
            ensure_bet_allowed(await self._storage.get_market(payload.market_id), payload)
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e, identifier=payload.market_id)
        bet = await self._storage.create_bet(payload)
        logger.info(
            "Bet %s placed on market %s outcome %s for %s",
            bet.id,
            bet.market_id,
            bet.outcome_id,
            bet.amount,
        )
        return bet

    async def settle_bet(self, bet_id: str, winnings: float) -> Bet:
        """Record a bet's winnings, once.

        Raises HTTPException 404 if the bet is missing and 400 if it is already settled.
        """
        try:
            existing = await self._storage.get_bet(bet_id)
            if existing is None:
                raise BetNotFoundError(bet_id)
            if existing.is_settled:
                raise BetAlreadySettledError(bet_id)
            bet = await self._storage.settle_bet(bet_id, winnings)
            if bet is None:
                raise BetNotFoundError(bet_id)
            return bet
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e, identifier=bet_id)

    async def get_portfolio_stats(self, owner_address: str | None) -> PortfolioStats:
        """Derived stats over one owner's bets. Raises HTTPException 400 without an owner."""
        try:
            owner = _require_owner(owner_address)
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e)
        return await self._storage.get_portfolio_stats(owner)
