"""Chain-interaction helpers.

Formats transaction inputs for an external wallet to sign and polls a public
block-explorer API for program mappings and transaction state. No keys, no
cryptography, no verification.
"""
from prediction_market.chain.explorer import ExplorerClient
from prediction_market.chain.models import (DEFAULT_FEE, DEFAULT_PROGRAM_ID,
                                            ChainMarketState,
                                            CreateMarketTransaction,
                                            PlaceBetTransaction,
                                            ResolveMarketTransaction,
                                            TransactionRequest,
                                            TransactionStatus,
                                            TransactionStatusResult)
from prediction_market.chain.transactions import (create_market_transaction,
                                                  generate_market_id,
                                                  place_bet_transaction,
                                                  resolve_market_transaction)

__all__ = [
    "ChainMarketState",
    "CreateMarketTransaction",
    "DEFAULT_FEE",
    "DEFAULT_PROGRAM_ID",
    "ExplorerClient",
    "PlaceBetTransaction",
    "ResolveMarketTransaction",
    "TransactionRequest",
    "TransactionStatus",
    "TransactionStatusResult",
    "create_market_transaction",
    "generate_market_id",
    "place_bet_transaction",
    "resolve_market_transaction",
]
