from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from factories import market_payload
from prediction_market.deps import get_markets_service
from prediction_market.main import app


def test_health(client: TestClient) -> None:
    assert client.get("/").json() == {"status": "ok"}


def test_list_markets_returns_demo_markets(client: TestClient) -> None:
    response = client.get("/api/markets")

    assert response.status_code == 200
    data = response.json()
    assert [m["id"] for m in data] == ["1", "2", "3", "4", "5", "6"]
    assert data[0]["totalVolume"] == 125000
    assert data[0]["participantCount"] == 847
    assert data[0]["resolutionDate"] == "2026-12-31"


def test_list_markets_filters_by_category_and_search(client: TestClient) -> None:
    crypto = client.get("/api/markets", params={"category": "crypto"}).json()
    bitcoin = client.get("/api/markets", params={"search": "BITCOIN"}).json()

    assert {m["id"] for m in crypto} == {"1", "2"}
    assert [m["id"] for m in bitcoin] == ["1"]


def test_list_markets_filters_by_status(client: TestClient) -> None:
    client.patch("/api/markets/5", json={"status": "resolved", "winningOutcomeId": "5a"})

    resolved = client.get("/api/markets", params={"status": "resolved"}).json()
    active = client.get("/api/markets", params={"status": "active"}).json()

    assert [m["id"] for m in resolved] == ["5"]
    assert len(active) == 5


@pytest.mark.parametrize(
    ("sort_by", "expected_first"),
    [("volume", "3"), ("ending_soon", "1"), ("newest", "5")],
)
def test_list_markets_sorting(client: TestClient, sort_by: str, expected_first: str) -> None:
    data = client.get("/api/markets", params={"sort_by": sort_by}).json()

    assert data[0]["id"] == expected_first


def test_newest_sort_puts_created_market_first(client: TestClient) -> None:
    created = client.post("/api/markets", json=market_payload()).json()

    data = client.get("/api/markets", params={"sort_by": "newest"}).json()

    assert data[0]["id"] == created["id"]


def test_list_markets_rejects_unknown_category(client: TestClient) -> None:
    response = client.get("/api/markets", params={"category": "weather"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid data"


def test_create_market(client: TestClient) -> None:
    response = client.post("/api/markets", json=market_payload(transactionId="at1xyz"))

    assert response.status_code == 201
    market = response.json()
    assert market["status"] == "active"
    assert market["totalVolume"] == 0
    assert market["participantCount"] == 0
    assert market["creatorAddress"] == "aleo1alice"
    assert market["transactionId"] == "at1xyz"
    assert market["createdAt"].endswith("Z")
    assert client.get(f"/api/markets/{market['id']}").json() == market


def test_create_market_ignores_client_aggregates(client: TestClient) -> None:
    market = client.post(
        "/api/markets", json=market_payload(status="resolved", totalVolume=999)
    ).json()

    assert market["status"] == "active"
    assert market["totalVolume"] == 0


@pytest.mark.parametrize("count", [0, 1, 11])
def test_create_market_rejects_outcome_count_out_of_range(client: TestClient, count: int) -> None:
    outcomes = [{"id": f"o{i}", "label": f"Outcome {i}"} for i in range(count)]

    response = client.post("/api/markets", json=market_payload(outcomes=outcomes))

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid market data"
    assert body["details"]


@pytest.mark.parametrize("count", [2, 10])
def test_create_market_accepts_outcome_count_bounds(client: TestClient, count: int) -> None:
    outcomes = [{"id": f"o{i}", "label": f"Outcome {i}"} for i in range(count)]

    response = client.post("/api/markets", json=market_payload(outcomes=outcomes))

    assert response.status_code == 201
    assert len(response.json()["outcomes"]) == count


def test_create_market_probabilities_need_not_sum_to_100(client: TestClient) -> None:
    outcomes = [
        {"id": "a", "label": "A", "probability": 90},
        {"id": "b", "label": "B", "probability": 90},
    ]

    assert client.post("/api/markets", json=market_payload(outcomes=outcomes)).status_code == 201


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": "Hm?"},
        {"title": "x" * 201},
        {"description": "x" * 1001},
        {"category": "weather"},
        {"outcomes": [{"id": "a", "label": "A", "probability": 120}, {"id": "b", "label": "B"}]},
    ],
)
def test_create_market_rejects_invalid_fields(client: TestClient, overrides: dict) -> None:
    response = client.post("/api/markets", json=market_payload(**overrides))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid market data"


def test_create_market_requires_creator(client: TestClient) -> None:
    payload = market_payload()
    del payload["creatorAddress"]

    assert client.post("/api/markets", json=payload).status_code == 400


def test_get_market_not_found(client: TestClient) -> None:
    response = client.get("/api/markets/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Market not found"}


def test_resolve_market(client: TestClient) -> None:
    response = client.patch("/api/markets/1", json={"status": "resolved", "winningOutcomeId": "1a"})

    assert response.status_code == 200
    market = response.json()
    assert market["status"] == "resolved"
    assert market["winningOutcomeId"] == "1a"
    assert market["title"] == "Will Bitcoin exceed $150,000 by December 2026?"


def test_update_market_rejects_unknown_winning_outcome(client: TestClient) -> None:
    response = client.patch("/api/markets/1", json={"winningOutcomeId": "2a"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid outcome"}


def test_update_market_rejects_unknown_status(client: TestClient) -> None:
    response = client.patch("/api/markets/1", json={"status": "frozen"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid update data"


def test_update_missing_market(client: TestClient) -> None:
    response = client.patch("/api/markets/nope", json={"status": "cancelled"})

    assert response.status_code == 404
    assert response.json() == {"error": "Market not found"}


def test_market_bets(client: TestClient) -> None:
    client.post(
        "/api/bets",
        json={"marketId": "2", "outcomeId": "2a", "amount": 5, "ownerAddress": "aleo1alice"},
    )

    bets = client.get("/api/markets/2/bets").json()

    assert [b["outcomeId"] for b in bets] == ["2a"]
    assert client.get("/api/markets/nope/bets").status_code == 404


def test_method_not_allowed(client: TestClient) -> None:
    response = client.delete("/api/markets/1")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_unknown_route(client: TestClient) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "error" in response.json()


class _BrokenMarketsService:
    async def list_markets(self, **_kwargs):
        raise RuntimeError("storage exploded")


def test_unhandled_error_is_generic_500(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    app.dependency_overrides[get_markets_service] = _BrokenMarketsService
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/markets")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


@pytest.mark.parametrize(
    "payload", [{"status": None}, {"totalVolume": None}, {"participantCount": None}]
)
def test_update_market_rejects_null_fields(client: TestClient, payload: dict) -> None:
    response = client.patch("/api/markets/1", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid update data"
    market = client.get("/api/markets/1").json()
    assert market["status"] == "active"
    assert market["totalVolume"] == 125000
    assert market["participantCount"] == 847


def test_bets_still_accepted_after_rejected_null_status(client: TestClient) -> None:
    client.patch("/api/markets/1", json={"status": None})

    response = client.post(
        "/api/bets",
        json={"marketId": "1", "outcomeId": "1a", "amount": 5, "ownerAddress": "aleo1alice"},
    )

    assert response.status_code == 201


@pytest.mark.parametrize(
    "payload", [{"status": None}, {"totalVolume": None}, {"participantCount": None}]
)
def test_sql_update_market_rejects_null_fields(sql_client: TestClient, payload: dict) -> None:
    market = sql_client.post("/api/markets", json=market_payload()).json()

    response = sql_client.patch(f"/api/markets/{market['id']}", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid update data"
    assert sql_client.get(f"/api/markets/{market['id']}").json() == market


def test_cors_preflight(client: TestClient) -> None:
    response = client.options(
        "/api/markets",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "PATCH" in response.headers["access-control-allow-methods"]


def test_cors_header_on_simple_request(client: TestClient) -> None:
    response = client.get("/api/markets", headers={"Origin": "http://localhost:5173"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
