"""
Heuristic opponent.

Betting follows hand strength bands with pot odds for marginal hands:

- strength >= 0.8: bet the round cap, or raise to it when facing a bet
- strength >= 0.6: bet three quarters of the cap, call only when pot odds exceed 3
- strength >= 0.4: check, call only when pot odds exceed 4
- weaker: check (with an occasional bluff bet), call only when pot odds exceed 8

At the draw it keeps paired cards and face cards and throws away at
most three of the rest, lowest first. A made straight or better stands pat.
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence
import logging
import random

from drawpoker.agents.base import BaseAgent
from drawpoker.core.card import Card, FACE_RANKS
from drawpoker.core.hand import HandEvaluation, HandRank, evaluate_hand
from drawpoker.core.rules import OPPONENT, MAX_AI_DISCARDS
from drawpoker.core.state import GameState


logger = logging.getLogger(__name__)


# Base strength per hand category
RANK_STRENGTH = {
    HandRank.HIGH_CARD: 0.1,
    HandRank.PAIR: 0.3,
    HandRank.TWO_PAIR: 0.5,
    HandRank.THREE_OF_A_KIND: 0.6,
    HandRank.STRAIGHT: 0.7,
    HandRank.FLUSH: 0.75,
    HandRank.FULL_HOUSE: 0.85,
    HandRank.FOUR_OF_A_KIND: 0.95,
    HandRank.STRAIGHT_FLUSH: 0.98,
    HandRank.ROYAL_FLUSH: 1.0,
}

VALUE_SCALE = 10000
VALUE_BONUS = 0.1

STRONG = 0.8
GOOD = 0.6
MEDIUM = 0.4

GOOD_POT_ODDS = 3
MEDIUM_POT_ODDS = 4
WEAK_POT_ODDS = 8

DEFAULT_BLUFF_PROBABILITY = 0.1


def hand_strength(evaluation: HandEvaluation) -> float:
    """Normalize an evaluation to [0, 1]."""
    bonus = min(evaluation.value / VALUE_SCALE, 1.0) * VALUE_BONUS
    return min(RANK_STRENGTH[evaluation.rank] + bonus, 1.0)


def pot_odds(pot: int, to_call: int) -> float:
    """Ratio of the pot after calling to the call amount (0 with nothing to call)."""
    if to_call <= 0:
        return 0.0
    return (pot + to_call) / to_call


def choose_discards(hand: Sequence[Card]) -> List[int]:
    """
    Indices to throw away: cards that are neither paired nor face cards.

    At most MAX_AI_DISCARDS are returned, lowest rank first, and the
    result is sorted by position.
    """
    if evaluate_hand(hand).rank >= HandRank.STRAIGHT:
        return []

    counts = Counter(card.rank for card in hand)
    candidates = [
        i for i, card in enumerate(hand)
        if counts[card.rank] < 2 and card.rank not in FACE_RANKS
    ]
    candidates.sort(key=lambda i: (hand[i].rank, i))
    return sorted(candidates[:MAX_AI_DISCARDS])


class HeuristicAgent(BaseAgent):
    """
    Rule-based opponent driven by hand strength and pot odds.

    Amounts it returns are never larger than its stack; the engine
    applies its actions leniently, clamping to the round cap.
    """

    def __init__(
        self,
        player_id: str = OPPONENT,
        name: Optional[str] = None,
        bluff_probability: float = DEFAULT_BLUFF_PROBABILITY,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(player_id, name or "Opponent")
        self.bluff_probability = bluff_probability
        self.rng = rng or random.Random()

    def act(
        self,
        state: GameState,
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        seat = state.seat(self.player_id)
        strength = hand_strength(evaluate_hand(seat.hand))
        decision = self.decide(
            strength=strength,
            current_bet=state.betting_round.current_bet,
            to_call=state.amount_to_call(self.player_id),
            pot=state.pot,
            cap=state.round_cap,
            chips=seat.chips,
        )
        logger.debug(f"{self.name} strength={strength:.3f} -> {decision}")
        return decision

    def decide(
        self,
        strength: float,
        current_bet: int,
        to_call: int,
        pot: int,
        cap: int,
        chips: int,
    ) -> Dict[str, Any]:
        """
        Betting decision from plain numbers.

        Args:
            strength: Normalized hand strength in [0, 1]
            current_bet: Outstanding bet in the round
            to_call: Chips needed to match it
            pot: Chips in the pot
            cap: Round bet cap
            chips: Agent's remaining stack
        """
        if current_bet == 0:
            bet_size = 0
            if strength >= STRONG:
                bet_size = cap
            elif strength >= GOOD:
                bet_size = max(1, cap * 3 // 4)
            elif strength < MEDIUM and self.rng.random() < self.bluff_probability:
                bet_size = max(1, cap * 3 // 4)
            bet_size = min(bet_size, chips)
            if bet_size > 0:
                return {"action": "BET", "amount": bet_size}
            return {"action": "CHECK", "amount": 0}

        call = {"action": "CALL", "amount": min(to_call, chips)}
        odds = pot_odds(pot, to_call)

        if strength >= STRONG:
            increment = min(cap - current_bet, chips - to_call)
            if increment > 0:
                return {"action": "RAISE", "amount": increment}
            return call
        fold = {"action": "FOLD", "amount": 0}
        if strength >= GOOD:
            return call if odds > GOOD_POT_ODDS else fold
        if strength >= MEDIUM:
            return call if odds > MEDIUM_POT_ODDS else fold
        return call if odds > WEAK_POT_ODDS else fold

    def choose_discards(self, state: GameState) -> List[int]:
        return choose_discards(state.seat(self.player_id).hand)
