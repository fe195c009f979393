"""Aggregates derived from a set of bets."""
from collections.abc import Iterable

from prediction_market.schemas import Bet, PortfolioStats


def count_participants(bets: Iterable[Bet]) -> int:
    """Number of distinct owner addresses among bets."""
    return len({bet.owner_address for bet in bets})


def compute_portfolio_stats(bets: Iterable[Bet]) -> PortfolioStats:
    """Summarize one owner's bets.

    A win is a settled bet with positive winnings; win rate is the rounded
    percentage of wins among settled bets, 0 when none are settled.
    """
    bets = list(bets)
    settled = [bet for bet in bets if bet.is_settled]
    wins = [bet for bet in settled if (bet.winnings or 0) > 0]
    win_rate = len(wins) / len(settled) * 100 if settled else 0
    return PortfolioStats(
        total_bets=len(bets),
        active_bets=len(bets) - len(settled),
        total_wagered=sum(bet.amount for bet in bets),
        total_winnings=sum(bet.winnings or 0 for bet in settled),
        win_rate=_round_half_up(win_rate),
    )


def _round_half_up(value: float) -> int:
    # 62.5 -> 63
    return int(value + 0.5)
