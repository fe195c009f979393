"""Chain routes: explorer reads and wallet transaction requests."""
from fastapi import APIRouter, Path

from prediction_market.chain import (ChainMarketState,
                                     CreateMarketTransaction,
                                     PlaceBetTransaction,
                                     ResolveMarketTransaction,
                                     TransactionRequest,
                                     TransactionStatusResult)
from prediction_market.deps import ChainServiceDep

router = APIRouter(prefix="/chain", tags=["chain"])


@router.get("/markets/{chain_market_id}", response_model=ChainMarketState)
async def get_chain_market(
    service: ChainServiceDep,
    chain_market_id: str = Path(pattern=r"^\d+$", description="On-chain market id"),
) -> ChainMarketState:
    """Volume, participants and resolution as recorded in the program's public mappings."""
    return await service.get_market_state(chain_market_id)


@router.get("/transactions/{transaction_id}", response_model=TransactionStatusResult)
async def get_transaction_status(
    transaction_id: str, service: ChainServiceDep
) -> TransactionStatusResult:
    """Explorer status of a transaction: confirmed, pending, failed or unknown."""
    return await service.get_transaction_status(transaction_id)


@router.post("/transactions/place-bet", response_model=TransactionRequest)
async def build_place_bet(
    payload: PlaceBetTransaction, service: ChainServiceDep
) -> TransactionRequest:
    """Build the place_bet request for the wallet to sign."""
    return service.build_place_bet(payload)


@router.post("/transactions/create-market", response_model=TransactionRequest)
async def build_create_market(
    payload: CreateMarketTransaction, service: ChainServiceDep
) -> TransactionRequest:
    """Build the create_market request for the wallet to sign."""
    return service.build_create_market(payload)


@router.post("/transactions/resolve-market", response_model=TransactionRequest)
async def build_resolve_market(
    payload: ResolveMarketTransaction, service: ChainServiceDep
) -> TransactionRequest:
    """Build the resolve_market request for the wallet to sign."""
    return service.build_resolve_market(payload)
