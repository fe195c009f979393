"""Abstract base class for market and bet storage."""
from abc import ABC, abstractmethod

from prediction_market.schemas import (Bet, BetCreate, Market, MarketCreate,
                                       MarketUpdate, PortfolioStats)


class StorageABC(ABC):
    """Base interface for all storage backends.

    Each backend keeps markets and bets keyed by generated identifiers and
    derives aggregates (market volume, participant count, portfolio stats)
    from the bets it holds. Lookups return None for missing entities; the
    service layer decides what a miss means.
    """

    # ---- Markets ----
    @abstractmethod
    async def get_markets(self) -> list[Market]:
        """Return every market."""

    @abstractmethod
    async def get_market(self, market_id: str) -> Market | None:
        """Return a market by id, or None."""

    @abstractmethod
    async def create_market(self, payload: MarketCreate) -> Market:
        """Store a new market.

        The market gets a fresh id, a creation timestamp, status "active" and
        zeroed aggregates regardless of what the payload carries.

        Args:
            payload: Validated market fields from the client.

        Returns:
            The stored Market.
        """

    @abstractmethod
    async def update_market(self, market_id: str, update: MarketUpdate) -> Market | None:
        """Apply the explicitly set fields of update; None if the market is missing."""

    # ---- Bets ----
    @abstractmethod
    async def get_bet(self, bet_id: str) -> Bet | None:
        """Return a bet by id, or None."""

    @abstractmethod
    async def get_bets_by_owner(self, owner_address: str) -> list[Bet]:
        """Return all bets placed by owner_address (empty list if none)."""

    @abstractmethod
    async def get_bets_by_market(self, market_id: str) -> list[Bet]:
        """Return all bets placed on market_id."""

    @abstractmethod
    async def create_bet(self, payload: BetCreate) -> Bet:
        """Store a new unsettled bet and refresh the parent market's aggregates.

        Total volume grows by the bet amount. Participant count is recomputed
        as the number of distinct owners over the market's bets, so it is not
        atomic with the insert under concurrent writers.

        Args:
            payload: Validated bet fields. Callers check the market and outcome first.

        Returns:
            The stored Bet.
        """

    @abstractmethod
    async def settle_bet(self, bet_id: str, winnings: float) -> Bet | None:
        """Mark a bet settled with its winnings; None if the bet is missing."""

    # ---- Portfolio ----
    @abstractmethod
    async def get_portfolio_stats(self, owner_address: str) -> PortfolioStats:
        """Derive portfolio statistics from owner_address's bets."""

    async def close(self) -> None:
        """Release resources (connections, engines).

        Override in subclasses if cleanup is needed.
        """
