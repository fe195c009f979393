"""Storage backends for markets and bets.

- MemoryStorage: dicts in process memory, optionally seeded with demo markets
- SqlStorage: SQLModel tables on a SQLAlchemy engine (Postgres in production)

Both implement StorageABC and derive aggregates (market volume, participant
count, portfolio statistics) from the stored bets.
"""
from prediction_market.storage.base import StorageABC
from prediction_market.storage.memory import MemoryStorage
from prediction_market.storage.sql import SqlStorage
from prediction_market.storage.stats import (compute_portfolio_stats,
                                             count_participants)

__all__ = [
    "MemoryStorage",
    "SqlStorage",
    "StorageABC",
    "compute_portfolio_stats",
    "count_participants",
]
