"""Builders for program transactions the wallet signs.

Nothing here signs, proves or broadcasts: the functions only format typed
inputs (``123field``, ``500u64``, ``2u8``) into a TransactionRequest.
"""
import random

from prediction_market.chain.models import (DEFAULT_FEE, DEFAULT_PROGRAM_ID,
                                            TransactionRequest)

U8_MAX = 2**8 - 1
U64_MAX = 2**64 - 1
MARKET_ID_LIMIT = 1_000_000_000


def _as_unsigned(value: int | str, limit: int | None = None) -> int:
    """Parse a non-negative integer from int or decimal string; raise ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Expected a decimal integer, got {value!r}")
        value = int(value)
    if value < 0:
        raise ValueError(f"Expected a non-negative integer, got {value}")
    if limit is not None and value > limit:
        raise ValueError(f"Value {value} exceeds {limit}")
    return value


def format_field(value: int | str) -> str:
    """Format a field literal, e.g. 42 -> "42field"."""
    return f"{_as_unsigned(value)}field"


def format_u64(value: int | str) -> str:
    """Format a u64 literal, e.g. 500 -> "500u64"."""
    return f"{_as_unsigned(value, U64_MAX)}u64"


def format_u8(value: int | str) -> str:
    """Format a u8 literal, e.g. 2 -> "2u8"."""
    return f"{_as_unsigned(value, U8_MAX)}u8"


def place_bet_transaction(
    public_key: str,
    market_id: int | str,
    outcome_id: int | str,
    amount: int,
    fee: int = DEFAULT_FEE,
    program_id: str = DEFAULT_PROGRAM_ID,
) -> TransactionRequest:
    """Build a place_bet call: [market field, outcome field, amount u64]."""
    return TransactionRequest(
        address=public_key,
        program=program_id,
        function_name="place_bet",
        inputs=[format_field(market_id), format_field(outcome_id), format_u64(amount)],
        fee=fee,
    )


def create_market_transaction(
    public_key: str,
    market_id: int | str,
    resolution_timestamp: int,
    num_outcomes: int,
    fee: int = DEFAULT_FEE,
    program_id: str = DEFAULT_PROGRAM_ID,
) -> TransactionRequest:
    """Build a create_market call: [market field, resolution timestamp u64, outcome count u8]."""
    return TransactionRequest(
        address=public_key,
        program=program_id,
        function_name="create_market",
        inputs=[
            format_field(market_id),
            format_u64(resolution_timestamp),
            format_u8(num_outcomes),
        ],
        fee=fee,
    )


def resolve_market_transaction(
    public_key: str,
    market_id: int | str,
    winning_outcome_id: int | str,
    fee: int = DEFAULT_FEE,
    program_id: str = DEFAULT_PROGRAM_ID,
) -> TransactionRequest:
    """Build a resolve_market call: [market field, winning outcome field]."""
    return TransactionRequest(
        address=public_key,
        program=program_id,
        function_name="resolve_market",
        inputs=[format_field(market_id), format_field(winning_outcome_id)],
        fee=fee,
    )


def generate_market_id() -> str:
    """Random on-chain market id below one billion."""
    return str(random.randrange(MARKET_ID_LIMIT))
