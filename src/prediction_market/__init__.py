"""Prediction market REST service: markets, bets and portfolio statistics."""

__version__ = "0.1.0"
