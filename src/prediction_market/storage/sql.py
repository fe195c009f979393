"""SQL storage via SQLModel (Postgres in production, SQLite in tests)."""
import asyncio

from sqlalchemy import distinct, func
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from prediction_market.db.models import BetRecord, MarketRecord
from prediction_market.db.sessions import get_session, init_db
from prediction_market.schemas import (Bet, BetCreate, Market, MarketCreate,
                                       MarketStatus, MarketUpdate,
                                       PortfolioStats)
from prediction_market.storage.base import StorageABC
from prediction_market.storage.stats import compute_portfolio_stats
from prediction_market.utils import new_id, utcnow_iso


def _to_market(record: MarketRecord) -> Market:
    return Market.model_validate(record.model_dump())


def _to_bet(record: BetRecord) -> Bet:
    return Bet.model_validate(record.model_dump())


class SqlStorage(StorageABC):
    """Storage over a SQLAlchemy engine.

    Sessions are synchronous, so each operation runs in a worker thread with
    its own session. Bet insertion and the market aggregate update share one
    transaction; isolation between concurrent requests is the database's.
    """

    def __init__(self, engine: Engine, create_tables: bool = True) -> None:
        """Initialize with an engine.

        Args:
            engine: Engine from prediction_market.db.sessions.make_engine.
            create_tables: Create missing tables on startup.
        """
        self._engine = engine
        if create_tables:
            init_db(engine)

    # ---- Markets ----
    def _get_markets_sync(self) -> list[Market]:
        with get_session(self._engine) as session:
            statement = select(MarketRecord).order_by(MarketRecord.created_at.desc())
            return [_to_market(r) for r in session.exec(statement).all()]

    async def get_markets(self) -> list[Market]:
        return await asyncio.to_thread(self._get_markets_sync)

    def _get_market_sync(self, market_id: str) -> Market | None:
        with get_session(self._engine) as session:
            record = session.get(MarketRecord, market_id)
            return _to_market(record) if record else None

    async def get_market(self, market_id: str) -> Market | None:
        return await asyncio.to_thread(self._get_market_sync, market_id)

    def _create_market_sync(self, payload: MarketCreate) -> Market:
        record = MarketRecord(
            **payload.model_dump(mode="json"),
            id=new_id(),
            created_at=utcnow_iso(),
            status=MarketStatus.ACTIVE.value,
            total_volume=0.0,
            participant_count=0,
        )
        with get_session(self._engine) as session:
            session.add(record)
            session.flush()
            return _to_market(record)

    async def create_market(self, payload: MarketCreate) -> Market:
        return await asyncio.to_thread(self._create_market_sync, payload)

    def _update_market_sync(self, market_id: str, update: MarketUpdate) -> Market | None:
        with get_session(self._engine) as session:
            record = session.get(MarketRecord, market_id)
            if record is None:
                return None
            for field, value in update.model_dump(exclude_unset=True, mode="json").items():
                setattr(record, field, value)
            session.add(record)
            session.flush()
            return _to_market(record)

    async def update_market(self, market_id: str, update: MarketUpdate) -> Market | None:
        return await asyncio.to_thread(self._update_market_sync, market_id, update)

    # ---- Bets ----
    def _get_bet_sync(self, bet_id: str) -> Bet | None:
        with get_session(self._engine) as session:
            record = session.get(BetRecord, bet_id)
            return _to_bet(record) if record else None

    async def get_bet(self, bet_id: str) -> Bet | None:
        return await asyncio.to_thread(self._get_bet_sync, bet_id)

    def _select_bets(self, session: Session, **filters: str) -> list[Bet]:
        statement = select(BetRecord).filter_by(**filters).order_by(BetRecord.created_at.desc())
        return [_to_bet(r) for r in session.exec(statement).all()]

    def _get_bets_by_owner_sync(self, owner_address: str) -> list[Bet]:
        with get_session(self._engine) as session:
            return self._select_bets(session, owner_address=owner_address)

    async def get_bets_by_owner(self, owner_address: str) -> list[Bet]:
        return await asyncio.to_thread(self._get_bets_by_owner_sync, owner_address)

    def _get_bets_by_market_sync(self, market_id: str) -> list[Bet]:
        with get_session(self._engine) as session:
            return self._select_bets(session, market_id=market_id)

    async def get_bets_by_market(self, market_id: str) -> list[Bet]:
        return await asyncio.to_thread(self._get_bets_by_market_sync, market_id)

    def _create_bet_sync(self, payload: BetCreate) -> Bet:
        record = BetRecord(
            **payload.model_dump(mode="json"),
            id=new_id(),
            created_at=utcnow_iso(),
            is_settled=False,
        )
        with get_session(self._engine) as session:
            session.add(record)
            session.flush()

            market = session.get(MarketRecord, payload.market_id)
            if market is not None:
                participants = session.exec(
                    select(func.count(distinct(BetRecord.owner_address))).where(
                        BetRecord.market_id == payload.market_id
                    )
                ).one()
                market.total_volume = (market.total_volume or 0) + payload.amount
                market.participant_count = participants
                session.add(market)
            return _to_bet(record)

    async def create_bet(self, payload: BetCreate) -> Bet:
        return await asyncio.to_thread(self._create_bet_sync, payload)

    def _settle_bet_sync(self, bet_id: str, winnings: float) -> Bet | None:
        with get_session(self._engine) as session:
            record = session.get(BetRecord, bet_id)
            if record is None:
                return None
            record.is_settled = True
            record.winnings = winnings
            session.add(record)
            session.flush()
            return _to_bet(record)

    async def settle_bet(self, bet_id: str, winnings: float) -> Bet | None:
        return await asyncio.to_thread(self._settle_bet_sync, bet_id, winnings)

    # ---- Portfolio ----
    async def get_portfolio_stats(self, owner_address: str) -> PortfolioStats:
        return compute_portfolio_stats(await self.get_bets_by_owner(owner_address))

    async def close(self) -> None:
        self._engine.dispose()
