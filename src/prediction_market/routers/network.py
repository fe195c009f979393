"""Network routes: simulated transaction verification and network status.

Neither endpoint talks to the chain; see /chain for explorer reads.
"""
from fastapi import APIRouter

from prediction_market.deps import ChainServiceDep
from prediction_market.schemas import (NetworkStatus, TransactionVerification,
                                       TransactionVerificationResult)

router = APIRouter(tags=["network"])


@router.post("/verify-transaction", response_model=TransactionVerificationResult)
async def verify_transaction(
    payload: TransactionVerification, service: ChainServiceDep
) -> TransactionVerificationResult:
    """Report a transaction as verified. Simulated: no proof is checked."""
    return service.verify_transaction(payload)


@router.get("/network-status", response_model=NetworkStatus)
async def get_network_status(service: ChainServiceDep) -> NetworkStatus:
    return service.network_status()
