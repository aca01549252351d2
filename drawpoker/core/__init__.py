"""
Draw Poker Core - Pure Python 5-Card Draw Game Logic

This module contains all game logic without any network dependencies.
"""

from drawpoker.core.card import Card, Deck
from drawpoker.core.player import Seat
from drawpoker.core.hand import HandRank, evaluate_hand, compare_hands
from drawpoker.core.rules import GameConfig, GamePhase, ActionType
from drawpoker.core.state import GameState
from drawpoker.core.engine import Action, apply_action
from drawpoker.core.game import DrawPokerGame, ActionResult

__all__ = [
    "Card",
    "Deck",
    "Seat",
    "HandRank",
    "evaluate_hand",
    "compare_hands",
    "GameConfig",
    "GamePhase",
    "ActionType",
    "GameState",
    "Action",
    "apply_action",
    "DrawPokerGame",
    "ActionResult",
]
