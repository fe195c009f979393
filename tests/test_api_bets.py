from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from factories import ALICE, BOB, market_payload


def _place(client: TestClient, market_id: str, outcome_id: str, amount: float, owner: str = ALICE):
    return client.post(
        "/api/bets",
        json={
            "marketId": market_id,
            "outcomeId": outcome_id,
            "amount": amount,
            "ownerAddress": owner,
        },
    )


@pytest.fixture
def market_id(client: TestClient) -> str:
    return client.post("/api/markets", json=market_payload()).json()["id"]


def test_place_bet(client: TestClient, market_id: str) -> None:
    response = _place(client, market_id, "yes", 25)

    assert response.status_code == 201
    bet = response.json()
    assert bet["marketId"] == market_id
    assert bet["outcomeId"] == "yes"
    assert bet["amount"] == 25
    assert bet["ownerAddress"] == ALICE
    assert bet["isSettled"] is False
    assert bet["winnings"] is None


def test_bets_update_market_volume_and_participants(client: TestClient, market_id: str) -> None:
    _place(client, market_id, "yes", 10)
    _place(client, market_id, "no", 15, owner=BOB)
    _place(client, market_id, "no", 5)

    market = client.get(f"/api/markets/{market_id}").json()

    assert market["totalVolume"] == 30
    assert market["participantCount"] == 2


def test_bet_on_missing_market(client: TestClient) -> None:
    response = _place(client, "nope", "yes", 10)

    assert response.status_code == 404
    assert response.json() == {"error": "Market not found"}


def test_bet_on_resolved_market(client: TestClient, market_id: str) -> None:
    client.patch(f"/api/markets/{market_id}", json={"status": "resolved", "winningOutcomeId": "yes"})

    response = _place(client, market_id, "yes", 10)

    assert response.status_code == 400
    assert response.json() == {"error": "Market is not active"}


def test_bet_on_unknown_outcome(client: TestClient, market_id: str) -> None:
    response = _place(client, market_id, "maybe", 10)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid outcome"}
    assert client.get(f"/api/markets/{market_id}").json()["totalVolume"] == 0


@pytest.mark.parametrize("amount", [0, -5])
def test_bet_amount_must_be_positive(client: TestClient, market_id: str, amount: float) -> None:
    response = _place(client, market_id, "yes", amount)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid bet data"
    assert body["details"]


def test_list_bets_requires_owner(client: TestClient) -> None:
    for params in ({}, {"owner": ""}):
        response = client.get("/api/bets", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Owner address required"}


def test_list_bets_for_unknown_owner_is_empty(client: TestClient) -> None:
    response = client.get("/api/bets", params={"owner": "aleo1nobody"})

    assert response.status_code == 200
    assert response.json() == []


def test_list_bets_includes_market(client: TestClient, market_id: str) -> None:
    _place(client, market_id, "yes", 10)
    _place(client, "1", "1a", 20)
    _place(client, "1", "1b", 20, owner=BOB)

    bets = client.get("/api/bets", params={"owner": ALICE}).json()

    assert len(bets) == 2
    by_market = {b["marketId"]: b for b in bets}
    assert by_market[market_id]["market"]["id"] == market_id
    assert by_market["1"]["market"]["title"].startswith("Will Bitcoin")


def test_settle_bet(client: TestClient, market_id: str) -> None:
    bet = _place(client, market_id, "yes", 10).json()

    response = client.patch(f"/api/bets/{bet['id']}/settle", json={"winnings": 18.5})

    assert response.status_code == 200
    settled = response.json()
    assert settled["isSettled"] is True
    assert settled["winnings"] == 18.5


def test_settle_bet_twice_is_rejected(client: TestClient, market_id: str) -> None:
    bet = _place(client, market_id, "yes", 10).json()
    client.patch(f"/api/bets/{bet['id']}/settle", json={"winnings": 0})

    response = client.patch(f"/api/bets/{bet['id']}/settle", json={"winnings": 50})

    assert response.status_code == 400
    assert response.json() == {"error": "Bet is already settled"}


def test_settle_missing_bet(client: TestClient) -> None:
    response = client.patch("/api/bets/nope/settle", json={"winnings": 1})

    assert response.status_code == 404
    assert response.json() == {"error": "Bet not found"}


def test_settle_rejects_negative_winnings(client: TestClient, market_id: str) -> None:
    bet = _place(client, market_id, "yes", 10).json()

    response = client.patch(f"/api/bets/{bet['id']}/settle", json={"winnings": -1})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid settlement data"


def test_portfolio_stats(client: TestClient, market_id: str) -> None:
    bets = [_place(client, market_id, "yes", amount).json() for amount in (10, 20, 30, 40)]
    client.patch(f"/api/bets/{bets[0]['id']}/settle", json={"winnings": 18})
    client.patch(f"/api/bets/{bets[1]['id']}/settle", json={"winnings": 0})
    client.patch(f"/api/bets/{bets[2]['id']}/settle", json={"winnings": 50})

    response = client.get("/api/portfolio/stats", params={"owner": ALICE})

    assert response.status_code == 200
    assert response.json() == {
        "totalBets": 4,
        "activeBets": 1,
        "totalWagered": 100,
        "totalWinnings": 68,
        "winRate": 67,
    }


def test_portfolio_stats_for_new_owner(client: TestClient) -> None:
    stats = client.get("/api/portfolio/stats", params={"owner": "aleo1nobody"}).json()

    assert stats == {
        "totalBets": 0,
        "activeBets": 0,
        "totalWagered": 0,
        "totalWinnings": 0,
        "winRate": 0,
    }


def test_portfolio_stats_requires_owner(client: TestClient) -> None:
    response = client.get("/api/portfolio/stats")

    assert response.status_code == 400
    assert response.json() == {"error": "Owner address required"}


def test_sql_backend_end_to_end(sql_client: TestClient) -> None:
    market = sql_client.post("/api/markets", json=market_payload()).json()
    assert sql_client.get("/api/markets").json() == [market]

    _place(sql_client, market["id"], "yes", 10)
    bet = _place(sql_client, market["id"], "no", 15, owner=BOB).json()
    sql_client.patch(
        f"/api/markets/{market['id']}", json={"status": "resolved", "winningOutcomeId": "no"}
    )
    sql_client.patch(f"/api/bets/{bet['id']}/settle", json={"winnings": 25})

    refreshed = sql_client.get(f"/api/markets/{market['id']}").json()
    assert refreshed["totalVolume"] == 25
    assert refreshed["participantCount"] == 2
    assert refreshed["status"] == "resolved"
    assert _place(sql_client, market["id"], "yes", 1).status_code == 400

    stats = sql_client.get("/api/portfolio/stats", params={"owner": BOB}).json()
    assert stats["winRate"] == 100
    assert stats["totalWinnings"] == 25
    alice_bets = sql_client.get("/api/bets", params={"owner": ALICE}).json()
    assert alice_bets[0]["market"]["id"] == market["id"]


def test_list_bets_rejects_blank_owner(client: TestClient) -> None:
    response = client.get("/api/bets", params={"owner": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Owner address required"}


def test_owner_address_is_matched_as_given(client: TestClient, market_id: str) -> None:
    _place(client, market_id, "yes", 10)

    padded = client.get("/api/bets", params={"owner": f" {ALICE} "})
    stats = client.get("/api/portfolio/stats", params={"owner": f" {ALICE} "}).json()

    assert padded.status_code == 200
    assert padded.json() == []
    assert stats["totalBets"] == 0
    assert len(client.get("/api/bets", params={"owner": ALICE}).json()) == 1
