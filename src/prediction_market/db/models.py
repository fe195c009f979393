"""Database models for the prediction market service.

Markets and bets are persisted; portfolio statistics are derived on read and
never stored.
"""
from enum import Enum

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class MarketStatus(str, Enum):
    """Lifecycle state of a market."""

    PENDING = "pending"
    ACTIVE = "active"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


class MarketCategory(str, Enum):
    """Topic a market belongs to."""

    CRYPTO = "crypto"
    POLITICS = "politics"
    SPORTS = "sports"
    TECHNOLOGY = "technology"
    FINANCE = "finance"
    OTHER = "other"


class MarketRecord(SQLModel, table=True):
    """A prediction question with a fixed, ordered list of outcomes."""

    __tablename__ = "markets"

    id: str = Field(primary_key=True)
    title: str
    description: str | None = None
    category: str = Field(index=True)
    # [{"id": ..., "label": ..., "probability": ...}, ...]
    outcomes: list[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: str = Field(default=MarketStatus.ACTIVE.value, index=True)
    resolution_date: str
    created_at: str = Field(index=True)
    creator_address: str
    total_volume: float = Field(default=0.0)
    participant_count: int = Field(default=0)
    winning_outcome_id: str | None = None
    image_url: str | None = None
    chain_market_id: str | None = None
    transaction_id: str | None = None


class BetRecord(SQLModel, table=True):
    """A wager by an address on one outcome of one market."""

    __tablename__ = "bets"

    id: str = Field(primary_key=True)
    market_id: str = Field(index=True)  # no FK: existence is checked at insert only
    outcome_id: str
    amount: float
    owner_address: str = Field(index=True)
    created_at: str = Field(index=True)
    is_settled: bool = Field(default=False)
    winnings: float | None = None
    record_nonce: str | None = None
    transaction_id: str | None = None
