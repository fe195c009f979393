"""Domain concept for mapping service and upstream exceptions to HTTP responses."""
import asyncio
from dataclasses import dataclass

import httpx
from fastapi import HTTPException

from prediction_market.core.exceptions import NotFoundError, RuleViolationError


@dataclass(frozen=True)
class ErrorMapper:
    """Maps domain/upstream exceptions to HTTP (status_code, detail).

    Inject this into services to centralize error-to-HTTP mapping per domain
    (markets, bets, chain) with appropriate resource and API names.
    """

    resource_name: str = "Resource"
    api_name: str = "API"

    def to_http(
        self,
        exc: Exception,
        identifier: str | None = None,
    ) -> tuple[int, str]:
        """Map an exception to (status_code, detail) for HTTP responses.

        Args:
            exc: The exception raised by the service, storage or an upstream client.
            identifier: Optional id to include in upstream-404 details (e.g. a transaction id).

        Returns:
            (status_code, detail) suitable for HTTPException(status_code=..., detail=...).
        """
        if isinstance(exc, NotFoundError):
            return (404, str(exc))
        if isinstance(exc, RuleViolationError):
            return (400, str(exc))
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status == 404:
                detail = (
                    f"{self.resource_name} not found"
                    if identifier is None
                    else f"{self.resource_name} '{identifier}' not found"
                )
                return (404, detail)
            if status >= 500:
                return (502, f"{self.api_name} error")
            return (status, f"{self.api_name} error")
        if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
            detail = f"Request to {self.api_name} timed out"
            if identifier is not None:
                detail = f"{detail} for '{identifier}'"
            return (504, detail)
        if isinstance(exc, httpx.RequestError):
            return (502, f"{self.api_name} unavailable")
        return (500, "Internal server error")

    def raise_http(
        self,
        exc: Exception,
        identifier: str | None = None,
    ) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc, identifier=identifier)
        raise HTTPException(status_code=status_code, detail=detail) from exc
