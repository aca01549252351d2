"""
Baseline agents.

Simple opponents that make predictable or random legal moves.
Useful for testing the engine and for simulations against the
heuristic opponent.
"""

import random
from typing import Any, Dict, List, Optional

from drawpoker.agents.base import BaseAgent
from drawpoker.core.rules import OPPONENT, MAX_DRAW
from drawpoker.core.state import GameState


class CallAgent(BaseAgent):
    """
    An agent that always checks or calls and always stands pat.
    """

    def __init__(self, player_id: str = OPPONENT, name: Optional[str] = None):
        super().__init__(player_id, name or f"Caller-{player_id}")

    def act(
        self,
        state: GameState,
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Always check or call."""
        action_types = [a["type"] for a in legal_actions]

        if "CHECK" in action_types:
            return {"action": "CHECK", "amount": 0}

        if not legal_actions:
            return {"action": "FOLD", "amount": 0}

        # Without a CALL entry the stack is short; the engine settles it all-in
        call_action = next((a for a in legal_actions if a["type"] == "CALL"), {})
        return {"action": "CALL", "amount": call_action.get("amount", 0)}

    def choose_discards(self, state: GameState) -> List[int]:
        return []


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to bet or raise instead of checking/calling
    """

    def __init__(
        self,
        player_id: str = OPPONENT,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the random agent.

        Args:
            player_id: Seat to play
            name: Optional name
            fold_probability: Probability of folding (0-1)
            raise_probability: Probability of betting/raising (0-1)
            rng: Random source
        """
        super().__init__(player_id, name or f"Random-{player_id}")
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.rng = rng or random.Random()

    def act(
        self,
        state: GameState,
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Select a random legal action.

        Uses configured probabilities to bias towards certain actions.
        """
        if not legal_actions:
            return {"action": "FOLD", "amount": 0}

        action_types = [a["type"] for a in legal_actions]
        roll = self.rng.random()

        # Folding is only sensible when there is something to call
        if "CHECK" not in action_types and roll < self.fold_probability:
            return {"action": "FOLD", "amount": 0}

        raise_actions = [a for a in legal_actions if a["type"] in ("RAISE", "BET")]
        if raise_actions and roll < self.fold_probability + self.raise_probability:
            action = self.rng.choice(raise_actions)
            amount = self.rng.randint(action["min"], action["max"])
            return {"action": action["type"], "amount": amount}

        if "CHECK" in action_types:
            return {"action": "CHECK", "amount": 0}

        call_action = next((a for a in legal_actions if a["type"] == "CALL"), None)
        if call_action:
            return {"action": "CALL", "amount": call_action["amount"]}

        return {"action": "FOLD", "amount": 0}

    def choose_discards(self, state: GameState) -> List[int]:
        """Throw away a random subset of the hand."""
        count = self.rng.randint(0, MAX_DRAW)
        return sorted(self.rng.sample(range(len(state.seat(self.player_id).hand)), count))
