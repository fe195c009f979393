"""Chain service: explorer reads, wallet transaction requests and network stubs."""
import asyncio

import httpx

from prediction_market.chain import (ChainMarketState,
                                     CreateMarketTransaction, ExplorerClient,
                                     PlaceBetTransaction,
                                     ResolveMarketTransaction,
                                     TransactionRequest,
                                     TransactionStatusResult,
                                     create_market_transaction,
                                     generate_market_id,
                                     place_bet_transaction,
                                     resolve_market_transaction)
from prediction_market.core import ErrorMapper
from prediction_market.schemas import (NetworkStatus, TransactionVerification,
                                       TransactionVerificationResult)
from prediction_market.utils import utcnow_iso

# Exceptions from the explorer we map to HTTP; all others propagate.
_EXPLORER_EXCEPTIONS: tuple[type[Exception], ...] = (
    TimeoutError,
    asyncio.TimeoutError,
    httpx.HTTPStatusError,
    httpx.RequestError,
)

SIMULATED_LATEST_BLOCK = 1_234_567


class ChainService:
    """Service over the explorer client and transaction builders.

    Verification and network status are simulated: nothing is checked against
    the chain.
    """

    def __init__(
        self,
        explorer: ExplorerClient,
        error_mapper: ErrorMapper,
        *,
        network: str = "testnet",
    ) -> None:
        self._explorer = explorer
        self._error_mapper = error_mapper
        self._network = network

    @property
    def program_id(self) -> str:
        return self._explorer.program_id

    async def get_market_state(self, chain_market_id: str) -> ChainMarketState:
        """Public mapping values for a market. Raises HTTPException on explorer errors."""
        try:
            return await self._explorer.get_market_state(chain_market_id)
        except _EXPLORER_EXCEPTIONS as e:
            self._error_mapper.raise_http(e, identifier=chain_market_id)

    async def get_transaction_status(self, transaction_id: str) -> TransactionStatusResult:
        status = await self._explorer.get_transaction_status(transaction_id)
        return TransactionStatusResult(transaction_id=transaction_id, status=status)

    def build_place_bet(self, request: PlaceBetTransaction) -> TransactionRequest:
        return place_bet_transaction(
            request.public_key,
            request.market_id,
            request.outcome_id,
            request.amount,
            fee=request.fee,
            program_id=self.program_id,
        )

    def build_create_market(self, request: CreateMarketTransaction) -> TransactionRequest:
        return create_market_transaction(
            request.public_key,
            request.market_id or generate_market_id(),
            request.resolution_timestamp,
            request.num_outcomes,
            fee=request.fee,
            program_id=self.program_id,
        )

    def build_resolve_market(self, request: ResolveMarketTransaction) -> TransactionRequest:
        return resolve_market_transaction(
            request.public_key,
            request.market_id,
            request.winning_outcome_id,
            fee=request.fee,
            program_id=self.program_id,
        )

    def verify_transaction(
        self, request: TransactionVerification
    ) -> TransactionVerificationResult:
        """Echo the transaction back as verified. No proof is checked."""
        return TransactionVerificationResult(
            verified=True,
            transaction_id=request.transaction_id,
            program_id=request.program_id,
            timestamp=utcnow_iso(),
        )

    def network_status(self) -> NetworkStatus:
        """Static network status for the configured network and program."""
        return NetworkStatus(
            network=self._network,
            status="healthy",
            latest_block=SIMULATED_LATEST_BLOCK,
            program_id=self.program_id,
        )

    async def close(self) -> None:
        await self._explorer.close()
