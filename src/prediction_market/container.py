"""DI container: builds storage, services and the explorer client from configuration.

The lifespan in main.py calls init_container() and exposes the services on
app.state; routes resolve them through deps.py.
"""
import os

from dependency_injector import containers, providers

from prediction_market.chain import DEFAULT_PROGRAM_ID, ExplorerClient
from prediction_market.core import ErrorMapper
from prediction_market.db.sessions import DEFAULT_DATABASE_URL, make_engine
from prediction_market.services import (BetsService, ChainService,
                                        MarketsService)
from prediction_market.storage import MemoryStorage, SqlStorage

STORAGE_BACKENDS = ("memory", "sql")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def settings_from_env() -> dict:
    """Read configuration from environment variables."""
    return {
        "storage_backend": os.getenv("STORAGE_BACKEND", "memory").strip().lower(),
        "database_url": os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        "sql_echo": _flag("SQL_ECHO", "0"),
        "seed_demo_markets": _flag("SEED_DEMO_MARKETS", "1"),
        "chain": {
            "explorer_url": os.getenv("CHAIN_EXPLORER_URL", ExplorerClient.DEFAULT_BASE_URL),
            "program_id": os.getenv("CHAIN_PROGRAM_ID", DEFAULT_PROGRAM_ID),
            "network": os.getenv("CHAIN_NETWORK", "testnet"),
        },
    }


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    engine = providers.Singleton(make_engine, config.database_url, echo=config.sql_echo)

    # Only the selected backend is constructed.
    storage = providers.Selector(
        config.storage_backend,
        memory=providers.Singleton(MemoryStorage, seed=config.seed_demo_markets),
        sql=providers.Singleton(SqlStorage, engine),
    )

    explorer = providers.Singleton(
        ExplorerClient,
        base_url=config.chain.explorer_url,
        program_id=config.chain.program_id,
    )

    markets_service = providers.Singleton(
        MarketsService,
        storage,
        providers.Factory(ErrorMapper, resource_name="Market", api_name="Storage"),
    )
    bets_service = providers.Singleton(
        BetsService,
        storage,
        providers.Factory(ErrorMapper, resource_name="Bet", api_name="Storage"),
    )
    chain_service = providers.Singleton(
        ChainService,
        explorer,
        providers.Factory(ErrorMapper, resource_name="Chain market", api_name="Explorer API"),
        network=config.chain.network,
    )


def init_container(settings: dict | None = None) -> Container:
    """Create a container configured from settings (default: environment variables)."""
    settings = settings if settings is not None else settings_from_env()
    backend = settings.get("storage_backend")
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown STORAGE_BACKEND {backend!r}. Available: {', '.join(STORAGE_BACKENDS)}"
        )
    container = Container()
    container.config.from_dict(settings)
    return container
