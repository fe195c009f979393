from __future__ import annotations

import asyncio

import httpx
import pytest
from fastapi import HTTPException

from prediction_market.core import (BetAlreadySettledError, ErrorMapper,
                                    InvalidOutcomeError, MarketNotActiveError,
                                    MarketNotFoundError, OwnerRequiredError)

mapper = ErrorMapper(resource_name="Chain market", api_name="Explorer API")


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://explorer.test/x")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (MarketNotFoundError("1"), (404, "Market not found")),
        (MarketNotActiveError("1"), (400, "Market is not active")),
        (InvalidOutcomeError("z"), (400, "Invalid outcome")),
        (OwnerRequiredError(), (400, "Owner address required")),
        (BetAlreadySettledError("b"), (400, "Bet is already settled")),
        (_status_error(503), (502, "Explorer API error")),
        (_status_error(429), (429, "Explorer API error")),
        (asyncio.TimeoutError(), (504, "Request to Explorer API timed out")),
        (httpx.ConnectError("refused"), (502, "Explorer API unavailable")),
        (RuntimeError("bug"), (500, "Internal server error")),
    ],
)
def test_to_http(exc: Exception, expected: tuple[int, str]) -> None:
    assert mapper.to_http(exc) == expected


def test_upstream_not_found_names_identifier() -> None:
    assert mapper.to_http(_status_error(404), identifier="42") == (
        404,
        "Chain market '42' not found",
    )
    assert mapper.to_http(_status_error(404)) == (404, "Chain market not found")


def test_timeout_names_identifier() -> None:
    status, detail = mapper.to_http(httpx.ReadTimeout("slow"), identifier="42")

    assert status == 504
    assert detail == "Request to Explorer API timed out for '42'"


def test_raise_http_chains_original_exception() -> None:
    original = MarketNotFoundError("1")

    with pytest.raises(HTTPException) as excinfo:
        mapper.raise_http(original)

    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == "Market not found"
    assert excinfo.value.__cause__ is original
