"""Core abstractions shared by services and routers."""
from prediction_market.core.error_mapper import ErrorMapper
from prediction_market.core.exceptions import (BetAlreadySettledError,
                                               BetNotFoundError,
                                               InvalidOutcomeError,
                                               MarketNotActiveError,
                                               MarketNotFoundError,
                                               NotFoundError,
                                               OwnerRequiredError,
                                               PredictionMarketError,
                                               RuleViolationError)

__all__ = [
    "BetAlreadySettledError",
    "BetNotFoundError",
    "ErrorMapper",
    "InvalidOutcomeError",
    "MarketNotActiveError",
    "MarketNotFoundError",
    "NotFoundError",
    "OwnerRequiredError",
    "PredictionMarketError",
    "RuleViolationError",
]
