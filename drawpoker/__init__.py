"""
DrawPoker - Heads-up 5-Card Draw Poker Engine

A fixed-limit 5-card draw game against a computer opponent with:
- Pure Python rules engine built on immutable state snapshots
- Heuristic AI opponent
- FastAPI server for a presentation client

Usage:
    from drawpoker.core import DrawPokerGame, evaluate_hand
    from drawpoker.agents import HeuristicAgent
"""

__version__ = "0.1.0"

from drawpoker.core.card import Card, Deck
from drawpoker.core.player import Seat
from drawpoker.core.game import DrawPokerGame
from drawpoker.core.hand import HandRank, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Seat",
    "DrawPokerGame",
    "HandRank",
    "evaluate_hand",
    "__version__",
]
