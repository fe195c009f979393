"""CLI to exercise the prediction market API against a running server.

Usage:
  poetry run api-cli health
  poetry run api-cli markets list --category crypto --sort-by volume
  poetry run api-cli bets place 1 1a 25 aleo1abc...
  poetry run api-cli portfolio aleo1abc...
"""
import argparse
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_markets_list(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {
        key: value
        for key, value in (
            ("category", args.category),
            ("status", args.status),
            ("search", args.search),
            ("sort_by", args.sort_by),
        )
        if value
    }
    r = client.get("/api/markets", params=params)
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} markets")
    print_json(data[: args.head] if args.head else data)
    return 0


def cmd_markets_get(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/api/markets/{args.market_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_markets_resolve(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.patch(
        f"/api/markets/{args.market_id}",
        json={"status": "resolved", "winningOutcomeId": args.outcome_id},
    )
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_bets_list(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/bets", params={"owner": args.owner})
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} bets for {args.owner}")
    print_json(data)
    return 0


def cmd_bets_place(client: httpx.Client, args: argparse.Namespace) -> int:
    payload = {
        "marketId": args.market_id,
        "outcomeId": args.outcome_id,
        "amount": args.amount,
        "ownerAddress": args.owner,
    }
    if args.transaction_id:
        payload["transactionId"] = args.transaction_id
    r = client.post("/api/bets", json=payload)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_bets_settle(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.patch(f"/api/bets/{args.bet_id}/settle", json={"winnings": args.winnings})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_portfolio(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/portfolio/stats", params={"owner": args.owner})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_network(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/network-status")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_chain_market(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/api/chain/markets/{args.chain_market_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_chain_tx(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/api/chain/transactions/{args.transaction_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Exercise the prediction market API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8001",
        help="API base URL (default: http://localhost:8001)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")
    subparsers.add_parser("network", help="GET /api/network-status")

    # markets
    markets = subparsers.add_parser("markets", help="Market routes (/api/markets)")
    markets_sub = markets.add_subparsers(dest="markets_cmd", required=True)
    p = markets_sub.add_parser("list", help="GET /api/markets")
    p.add_argument("--category", default=None, help="crypto, politics, sports, ...")
    p.add_argument("--status", default=None, help="pending, active, resolved, cancelled")
    p.add_argument("--search", default=None, help="Substring of title or description")
    p.add_argument("--sort-by", default=None, choices=["volume", "newest", "ending_soon"])
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")
    p = markets_sub.add_parser("get", help="GET /api/markets/{market_id}")
    p.add_argument("market_id")
    p = markets_sub.add_parser("resolve", help="PATCH /api/markets/{market_id}")
    p.add_argument("market_id")
    p.add_argument("outcome_id", help="Winning outcome id")

    # bets
    bets = subparsers.add_parser("bets", help="Bet routes (/api/bets)")
    bets_sub = bets.add_subparsers(dest="bets_cmd", required=True)
    p = bets_sub.add_parser("list", help="GET /api/bets?owner=")
    p.add_argument("owner", help="Owner address")
    p = bets_sub.add_parser("place", help="POST /api/bets")
    p.add_argument("market_id")
    p.add_argument("outcome_id")
    p.add_argument("amount", type=float)
    p.add_argument("owner", help="Owner address")
    p.add_argument("--transaction-id", default=None, help="Wallet transaction id")
    p = bets_sub.add_parser("settle", help="PATCH /api/bets/{bet_id}/settle")
    p.add_argument("bet_id")
    p.add_argument("winnings", type=float)

    p = subparsers.add_parser("portfolio", help="GET /api/portfolio/stats?owner=")
    p.add_argument("owner", help="Owner address")

    # chain
    chain = subparsers.add_parser("chain", help="Explorer reads (/api/chain)")
    chain_sub = chain.add_subparsers(dest="chain_cmd", required=True)
    p = chain_sub.add_parser("market", help="GET /api/chain/markets/{chain_market_id}")
    p.add_argument("chain_market_id")
    p = chain_sub.add_parser("tx", help="GET /api/chain/transactions/{transaction_id}")
    p.add_argument("transaction_id")

    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    handlers = {
        "health": cmd_health,
        "network": cmd_network,
        "portfolio": cmd_portfolio,
        "markets": {
            "list": cmd_markets_list,
            "get": cmd_markets_get,
            "resolve": cmd_markets_resolve,
        },
        "bets": {
            "list": cmd_bets_list,
            "place": cmd_bets_place,
            "settle": cmd_bets_settle,
        },
        "chain": {
            "market": cmd_chain_market,
            "tx": cmd_chain_tx,
        },
    }

    cmd = args.command
    handler = handlers[cmd]
    if isinstance(handler, dict):
        sub = getattr(args, f"{cmd}_cmd", None)
        if sub is None:
            parser.error(f"Missing subcommand for {cmd}")
        handler = handler[sub]

    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
