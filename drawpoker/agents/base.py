"""
Base Agent Interface for the draw poker opponent.

An agent makes the two decisions the computer seat needs each hand:
a betting action and the set of cards to discard at the draw.

Usage:
    class MyAgent(BaseAgent):
        def act(self, state, legal_actions):
            return {"action": "CALL", "amount": 0}

        def choose_discards(self, state):
            return [0, 1]
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from drawpoker.core.rules import OPPONENT
from drawpoker.core.state import GameState


class BaseAgent(ABC):
    """
    Abstract base class for draw poker agents.

    Attributes:
        player_id: Seat the agent plays ("opponent" by default)
        name: Human-readable name
    """

    def __init__(self, player_id: str = OPPONENT, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def act(
        self,
        state: GameState,
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Choose a betting action.

        Args:
            state: Current snapshot; the agent's own cards are in
                ``state.seat(self.player_id).hand``
            legal_actions: List of legal action dicts, each containing:
                - type: Action type (FOLD, CHECK, CALL, BET, RAISE)
                - amount: Required amount (for CALL)
                - min/max: Valid range (for BET/RAISE; RAISE is an increment)

        Returns:
            Action dictionary with:
                - action: Action type string
                - amount: Amount for BET/RAISE (optional, default 0)
        """
        pass

    @abstractmethod
    def choose_discards(self, state: GameState) -> List[int]:
        """
        Pick the hand positions to replace at the draw.

        Returns:
            Card indices (0-4); an empty list stands pat
        """
        pass

    def on_hand_end(self, state: GameState) -> None:
        """
        Called when a hand ends.

        Override this method if your agent learns from results.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"
