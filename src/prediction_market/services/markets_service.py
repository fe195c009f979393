"""Markets service: listing, filtering, creation and resolution of markets."""
from datetime import datetime, timezone

from prediction_market.core import (ErrorMapper, InvalidOutcomeError,
                                    MarketNotFoundError,
                                    PredictionMarketError)
from prediction_market.schemas import (Bet, Market, MarketCategory,
                                       MarketCreate, MarketSort, MarketStatus,
                                       MarketUpdate)
from prediction_market.storage import StorageABC
from prediction_market.utils import parse_iso

# Dates that fail to parse sort after every real date.
_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)
_FAR_PAST = datetime.min.replace(tzinfo=timezone.utc)


def _matches_search(market: Market, query: str) -> bool:
    query = query.lower()
    return query in market.title.lower() or query in (market.description or "").lower()


def filter_markets(
    markets: list[Market],
    category: MarketCategory | None = None,
    status: MarketStatus | None = None,
    search: str | None = None,
) -> list[Market]:
    """Keep markets matching every given filter; None means "all"."""
    result = markets
    if category is not None:
        result = [m for m in result if m.category == category]
    if status is not None:
        result = [m for m in result if m.status == status]
    if search:
        result = [m for m in result if _matches_search(m, search)]
    return result


def sort_markets(markets: list[Market], sort_by: MarketSort | None) -> list[Market]:
    """Order markets by volume (desc), creation (newest first) or resolution (soonest first)."""
    if sort_by == MarketSort.VOLUME:
        return sorted(markets, key=lambda m: m.total_volume, reverse=True)
    if sort_by == MarketSort.NEWEST:
        return sorted(markets, key=lambda m: parse_iso(m.created_at) or _FAR_PAST, reverse=True)
    if sort_by == MarketSort.ENDING_SOON:
        return sorted(markets, key=lambda m: parse_iso(m.resolution_date) or _FAR_FUTURE)
    return list(markets)


class MarketsService:
    """Thin service over storage for markets; maps domain errors to HTTP."""

    def __init__(self, storage: StorageABC, error_mapper: ErrorMapper) -> None:
        self._storage = storage
        self._error_mapper = error_mapper

    async def _require_market(self, market_id: str) -> Market:
        market = await self._storage.get_market(market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    async def list_markets(
        self,
        category: MarketCategory | None = None,
        status: MarketStatus | None = None,
        search: str | None = None,
        sort_by: MarketSort | None = None,
    ) -> list[Market]:
        """List markets, optionally filtered and sorted."""
        markets = await self._storage.get_markets()
        return sort_markets(filter_markets(markets, category, status, search), sort_by)

    async def get_market(self, market_id: str) -> Market:
        """Get one market. Raises HTTPException 404 if missing."""
        try:
            return await self._require_market(market_id)
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e, identifier=market_id)

    async def create_market(self, payload: MarketCreate) -> Market:
        """Create a market: status active, zero volume, zero participants."""
        return await self._storage.create_market(payload)

    async def update_market(self, market_id: str, update: MarketUpdate) -> Market:
        """Apply a status transition and/or winning outcome.

        Raises HTTPException 404 if the market is missing and 400 if the winning
        outcome is not one of the market's outcomes.
        """
        try:
            market = await self._require_market(market_id)
            if update.winning_outcome_id is not None and not market.has_outcome(
                update.winning_outcome_id
            ):
                raise InvalidOutcomeError(update.winning_outcome_id)
            updated = await self._storage.update_market(market_id, update)
            if updated is None:
                raise MarketNotFoundError(market_id)
            return updated
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e, identifier=market_id)

    async def get_market_bets(self, market_id: str) -> list[Bet]:
        """Bets placed on a market. Raises HTTPException 404 if the market is missing."""
        try:
            await self._require_market(market_id)
            return await self._storage.get_bets_by_market(market_id)
        except PredictionMarketError as e:
            self._error_mapper.raise_http(e, identifier=market_id)
