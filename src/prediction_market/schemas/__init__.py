"""Pydantic schemas for API payloads and runtime use.

All models serialize to camelCase on the wire (``totalVolume``, ``ownerAddress``)
and accept either camelCase or snake_case on input.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from prediction_market.db import MarketCategory, MarketStatus

MIN_OUTCOMES = 2
MAX_OUTCOMES = 10


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarketSort(str, Enum):
    """Orderings offered by the market list endpoint."""

    VOLUME = "volume"
    NEWEST = "newest"
    ENDING_SOON = "ending_soon"


class Outcome(CamelModel):
    """One possible resolution of a market. Probability is informational only."""

    id: str = Field(min_length=1)
    label: str = Field(min_length=1)
    probability: float | None = Field(default=None, ge=0, le=100)


class MarketCreate(CamelModel):
    """Inbound payload for POST /api/markets."""

    title: str = Field(min_length=5, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    category: MarketCategory
    outcomes: list[Outcome] = Field(min_length=MIN_OUTCOMES, max_length=MAX_OUTCOMES)
    resolution_date: str = Field(min_length=1)
    creator_address: str = Field(min_length=1)
    image_url: str | None = None
    chain_market_id: str | None = None
    transaction_id: str | None = None


class MarketUpdate(CamelModel):
    """Inbound payload for PATCH /api/markets/{id}. Only set fields are applied."""

    status: MarketStatus | None = None
    winning_outcome_id: str | None = None
    total_volume: float | None = Field(default=None, ge=0)
    participant_count: int | None = Field(default=None, ge=0)

    @field_validator("status", "total_volume", "participant_count", mode="before")
    @classmethod
    def _reject_null(cls, value):
        # May be omitted, but never cleared.
        if value is None:
            raise ValueError("must not be null")
        return value


class Market(CamelModel):
    """A prediction market as stored and returned by the API."""

    id: str
    title: str
    description: str | None = None
    category: MarketCategory
    outcomes: list[Outcome]
    status: MarketStatus = MarketStatus.ACTIVE
    resolution_date: str
    created_at: str
    creator_address: str
    total_volume: float = 0.0
    participant_count: int = 0
    winning_outcome_id: str | None = None
    image_url: str | None = None
    chain_market_id: str | None = None
    transaction_id: str | None = None

    def has_outcome(self, outcome_id: str) -> bool:
        """Whether outcome_id is one of this market's outcomes."""
        return any(outcome.id == outcome_id for outcome in self.outcomes)


class BetCreate(CamelModel):
    """Inbound payload for POST /api/bets."""

    market_id: str = Field(min_length=1)
    outcome_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    owner_address: str = Field(min_length=1)
    transaction_id: str | None = None


class BetSettle(CamelModel):
    """Inbound payload for PATCH /api/bets/{id}/settle."""

    winnings: float = Field(ge=0)


class Bet(CamelModel):
    """A wager as stored and returned by the API."""

    id: str
    market_id: str
    outcome_id: str
    amount: float
    owner_address: str
    created_at: str
    is_settled: bool = False
    winnings: float | None = None
    record_nonce: str | None = None
    transaction_id: str | None = None


class BetWithMarket(Bet):
    """Bet enriched with its parent market (None if the market is gone)."""

    market: Market | None = None


class PortfolioStats(CamelModel):
    """Aggregate over one owner's bets. Derived on every request, never stored."""

    total_bets: int = 0
    active_bets: int = 0
    total_wagered: float = 0.0
    total_winnings: float = 0.0
    win_rate: int = 0


class TransactionVerification(CamelModel):
    """Inbound payload for POST /api/verify-transaction."""

    transaction_id: str | None = None
    program_id: str | None = None


class TransactionVerificationResult(CamelModel):
    """Result of the (simulated) transaction verification."""

    verified: bool
    transaction_id: str | None = None
    program_id: str | None = None
    timestamp: str


class NetworkStatus(CamelModel):
    """Static chain network status."""

    network: str
    status: str
    latest_block: int
    program_id: str


__all__ = [
    "Bet",
    "BetCreate",
    "BetSettle",
    "BetWithMarket",
    "CamelModel",
    "MAX_OUTCOMES",
    "MIN_OUTCOMES",
    "Market",
    "MarketCategory",
    "MarketCreate",
    "MarketSort",
    "MarketStatus",
    "MarketUpdate",
    "NetworkStatus",
    "Outcome",
    "PortfolioStats",
    "TransactionVerification",
    "TransactionVerificationResult",
]
