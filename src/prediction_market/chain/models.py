"""Models for on-chain program state and wallet transaction requests."""
from enum import Enum

from pydantic import Field

from prediction_market.schemas import CamelModel

DEFAULT_PROGRAM_ID = "prediction_marketv01.aleo"
DEFAULT_FEE = 500_000
WALLET_NETWORK = "testnetbeta"

# Field literals are decimal digits; the program derives ids from integers.
_FIELD_PATTERN = r"^\d+$"


class TransactionStatus(str, Enum):
    """Explorer view of a submitted transaction."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    FAILED = "failed"
    UNKNOWN = "unknown"


class TransactionStatusResult(CamelModel):
    transaction_id: str
    status: TransactionStatus


class ChainMarketState(CamelModel):
    """Public mapping values the program keeps for one market."""

    market_id: str
    volume: int = 0
    participants: int = 0
    resolved: bool = False
    winning_outcome: str | None = None


class TransactionRequest(CamelModel):
    """Execution request handed to the wallet extension for signing.

    Mirrors the wallet adapter's transaction shape: the signer's address, the
    wallet network, the program and function to call, the typed inputs and the
    fee in microcredits.
    """

    address: str
    chain_id: str = WALLET_NETWORK
    program: str = DEFAULT_PROGRAM_ID
    function_name: str
    inputs: list[str]
    fee: int = DEFAULT_FEE
    fee_private: bool = False


class PlaceBetTransaction(CamelModel):
    """Inbound payload for building a place_bet transaction."""

    public_key: str = Field(min_length=1)
    market_id: str = Field(pattern=_FIELD_PATTERN)
    outcome_id: str = Field(pattern=_FIELD_PATTERN)
    amount: int = Field(gt=0)
    fee: int = Field(default=DEFAULT_FEE, ge=0)


class CreateMarketTransaction(CamelModel):
    """Inbound payload for building a create_market transaction.

    Without a market id, a random one is generated for the new market.
    """

    public_key: str = Field(min_length=1)
    market_id: str | None = Field(default=None, pattern=_FIELD_PATTERN)
    resolution_timestamp: int = Field(ge=0)
    num_outcomes: int = Field(ge=2, le=10)
    fee: int = Field(default=DEFAULT_FEE, ge=0)


class ResolveMarketTransaction(CamelModel):
    """Inbound payload for building a resolve_market transaction."""

    public_key: str = Field(min_length=1)
    market_id: str = Field(pattern=_FIELD_PATTERN)
    winning_outcome_id: str = Field(pattern=_FIELD_PATTERN)
    fee: int = Field(default=DEFAULT_FEE, ge=0)
