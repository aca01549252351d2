"""
Seat record for heads-up draw poker.

A Seat is immutable: every change produces a new Seat through
``dataclasses.replace`` so game-state snapshots never alias each other.

Tracks:
- Chip stack for the current hand
- The 5-card hand and which cards are face up
- Turn, fold and per-round bet status
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from drawpoker.core.card import Card


@dataclass(frozen=True)
class Seat:
    """
    One of the two participants.

    Attributes:
        player_id: "player" or "opponent"
        name: Display name
        chips: Current chip count
        hand: The seat's cards (5 once dealt)
        cards_face_up: Visibility of each card
        is_active: Whether it is this seat's turn
        has_folded: Whether the seat folded this hand
        current_bet: Amount put in during the current betting round
        last_action: Last action for display
    """
    player_id: str
    name: str
    chips: int
    hand: Tuple[Card, ...] = ()
    cards_face_up: Tuple[bool, ...] = ()
    is_active: bool = False
    has_folded: bool = False
    current_bet: int = 0
    last_action: Optional[str] = None

    def new_hand(self, chips: int, cards: Sequence[Card], face_up: bool) -> Seat:
        """Fresh per-hand state with a dealt hand."""
        return replace(
            self,
            chips=chips,
            hand=tuple(cards),
            cards_face_up=(face_up,) * len(cards),
            is_active=False,
            has_folded=False,
            current_bet=0,
            last_action=None,
        )

    def pay(self, amount: int, last_action: Optional[str] = None) -> Seat:
        """Move ``amount`` chips from the stack into the current bet."""
        if amount < 0 or amount > self.chips:
            raise ValueError(f"{self.player_id} cannot pay {amount} from {self.chips}")
        return replace(
            self,
            chips=self.chips - amount,
            current_bet=self.current_bet + amount,
            last_action=last_action or self.last_action,
        )

    def collect(self, amount: int) -> Seat:
        return replace(self, chips=self.chips + amount)

    def replace_cards(self, replacements: Dict[int, Card]) -> Seat:
        hand = list(self.hand)
        for index, card in replacements.items():
            hand[index] = card
        return replace(self, hand=tuple(hand))

    def reveal(self) -> Seat:
        return replace(self, cards_face_up=(True,) * len(self.hand))

    def to_dict(self, hide_cards: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, face-down cards are reported as None
        """
        if hide_cards:
            cards = [
                card.to_dict() if up else None
                for card, up in zip(self.hand, self.cards_face_up)
            ]
        else:
            cards = [card.to_dict() for card in self.hand]
        return {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "hand": cards,
            "cards_face_up": list(self.cards_face_up),
            "is_active": self.is_active,
            "has_folded": self.has_folded,
            "current_bet": self.current_bet,
            "last_action": self.last_action,
        }

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hand) if self.hand else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
