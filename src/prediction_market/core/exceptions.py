"""Domain exceptions raised by the service layer and mapped to HTTP by ErrorMapper."""


class PredictionMarketError(Exception):
    """Base class for expected, client-facing failures."""


class NotFoundError(PredictionMarketError, LookupError):
    """A referenced entity does not exist."""

    resource_name = "Resource"

    def __init__(self, identifier: str | None = None) -> None:
        super().__init__(f"{self.resource_name} not found")
        self.identifier = identifier


class MarketNotFoundError(NotFoundError):
    resource_name = "Market"


class BetNotFoundError(NotFoundError):
    resource_name = "Bet"


class RuleViolationError(PredictionMarketError, ValueError):
    """The request is well-formed but breaks a business rule."""


class MarketNotActiveError(RuleViolationError):
    def __init__(self, market_id: str | None = None) -> None:
        super().__init__("Market is not active")
        self.market_id = market_id


class InvalidOutcomeError(RuleViolationError):
    def __init__(self, outcome_id: str | None = None) -> None:
        super().__init__("Invalid outcome")
        self.outcome_id = outcome_id


class OwnerRequiredError(RuleViolationError):
    def __init__(self) -> None:
        super().__init__("Owner address required")


class BetAlreadySettledError(RuleViolationError):
    def __init__(self, bet_id: str | None = None) -> None:
        super().__init__("Bet is already settled")
        self.bet_id = bet_id
