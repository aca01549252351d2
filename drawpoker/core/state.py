"""
Immutable game-state snapshot.

The engine never mutates a GameState; every transition returns a new one.
Presentation layers read these snapshots (or their ``to_dict`` form) and
send commands back through ``drawpoker.core.engine`` or the
``DrawPokerGame`` driver.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from drawpoker.core.card import Card
from drawpoker.core.player import Seat
from drawpoker.core.rules import (
    GameConfig, GamePhase, ActionType, FixedLimit,
    PLAYER, OPPONENT, DEFAULT_TARGET_SCORE,
)


@dataclass(frozen=True)
class BettingRound:
    """State of the running betting round."""
    round: int
    current_bet: int
    pot: int
    active_player: str
    last_action: Optional[ActionType] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "current_bet": self.current_bet,
            "pot": self.pot,
            "active_player": self.active_player,
            "last_action": self.last_action.value if self.last_action else None,
        }


@dataclass(frozen=True)
class MatchState:
    """Cumulative scores for a first-to-target match."""
    player_score: int = 0
    opponent_score: int = 0
    target_score: int = DEFAULT_TARGET_SCORE
    winner: Optional[str] = None

    def score(self, seat: str) -> int:
        return self.player_score if seat == PLAYER else self.opponent_score

    def credit(self, player_amount: int, opponent_amount: int) -> MatchState:
        """Add hand winnings and settle the match winner if a target is reached."""
        player_score = self.player_score + player_amount
        opponent_score = self.opponent_score + opponent_amount
        winner = self.winner
        if winner is None:
            player_done = player_score >= self.target_score
            opponent_done = opponent_score >= self.target_score
            if player_done and (not opponent_done or player_score >= opponent_score):
                winner = PLAYER
            elif opponent_done:
                winner = OPPONENT
        return replace(
            self,
            player_score=player_score,
            opponent_score=opponent_score,
            winner=winner,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_score": self.player_score,
            "opponent_score": self.opponent_score,
            "target_score": self.target_score,
            "winner": self.winner,
        }


@dataclass(frozen=True)
class HandResult:
    """Outcome of a finished hand."""
    winner: str  # "player", "opponent" or "tie"
    pot: int
    player_won: int
    opponent_won: int
    by_fold: bool
    player_hand: Optional[str] = None
    opponent_hand: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner,
            "pot": self.pot,
            "player_won": self.player_won,
            "opponent_won": self.opponent_won,
            "by_fold": self.by_fold,
            "player_hand": self.player_hand,
            "opponent_hand": self.opponent_hand,
        }


@dataclass(frozen=True)
class MatchRecord:
    """One finished match, as handed to the persistence collaborator."""
    date: str
    result: str  # "win" or "loss" from the human seat's view
    player_score: int
    opponent_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "result": self.result,
            "player_score": self.player_score,
            "opponent_score": self.opponent_score,
        }


@dataclass(frozen=True)
class GameState:
    """
    Complete snapshot of one table.

    Attributes:
        config: Table and match settings
        phase: Current phase
        hand_number: Hands started since the game was created
        deck: Undealt cards, top first
        player: The human seat
        opponent: The computer seat
        pot: Chips in the pot
        betting_round: Current betting round (None outside a hand)
        winner: Winner of the last hand ("player", "opponent", "tie")
        drawing_seat: Seat whose draw is pending during DRAWING
        selected_cards: Indices the human has marked for discard
        match: Match scores
        last_result: Details of the last finished hand
        finished_match: Record of the match closed by the last "continue"
        message: Status line for the table
    """
    config: GameConfig
    player: Seat
    opponent: Seat
    phase: GamePhase = GamePhase.IDLE
    hand_number: int = 0
    deck: Tuple[Card, ...] = ()
    pot: int = 0
    betting_round: Optional[BettingRound] = None
    winner: Optional[str] = None
    drawing_seat: Optional[str] = None
    selected_cards: Tuple[int, ...] = ()
    match: MatchState = field(default_factory=MatchState)
    last_result: Optional[HandResult] = None
    finished_match: Optional[MatchRecord] = None
    message: str = ""

    @property
    def fixed_limit(self) -> FixedLimit:
        return self.config.fixed_limit

    @property
    def round_cap(self) -> int:
        """Bet cap of the running round (small bet outside betting)."""
        round_number = self.betting_round.round if self.betting_round else 1
        return self.fixed_limit.cap_for_round(round_number)

    @property
    def active_seat(self) -> Optional[str]:
        """Seat to act during BETTING, or the drawing seat during DRAWING."""
        if self.phase == GamePhase.BETTING and self.betting_round:
            return self.betting_round.active_player
        if self.phase == GamePhase.DRAWING:
            return self.drawing_seat
        return None

    @property
    def total_chips(self) -> int:
        """Chips on the table: both stacks plus the pot."""
        return self.player.chips + self.opponent.chips + self.pot

    def seat(self, seat_id: str) -> Seat:
        if seat_id == PLAYER:
            return self.player
        if seat_id == OPPONENT:
            return self.opponent
        raise ValueError(f"Unknown seat: {seat_id}")

    def with_seat(self, seat: Seat) -> GameState:
        if seat.player_id == PLAYER:
            return replace(self, player=seat)
        return replace(self, opponent=seat)

    def amount_to_call(self, seat_id: str) -> int:
        if self.betting_round is None:
            return 0
        return max(0, self.betting_round.current_bet - self.seat(seat_id).current_bet)

    def is_hand_running(self) -> bool:
        return self.phase in (GamePhase.DEALING, GamePhase.BETTING,
                              GamePhase.DRAWING, GamePhase.SHOWDOWN)

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Serialize the snapshot.

        Args:
            hide_cards: If True, the opponent's face-down cards are hidden
        """
        return {
            "phase": self.phase.name,
            "hand_number": self.hand_number,
            "player": self.player.to_dict(),
            "opponent": self.opponent.to_dict(hide_cards=hide_cards),
            "pot": self.pot,
            "betting_round": self.betting_round.to_dict() if self.betting_round else None,
            "deck_remaining": len(self.deck),
            "fixed_limit": self.fixed_limit.to_dict(),
            "winner": self.winner,
            "drawing_seat": self.drawing_seat,
            "selected_cards": list(self.selected_cards),
            "match": self.match.to_dict(),
            "last_result": self.last_result.to_dict() if self.last_result else None,
            "finished_match": self.finished_match.to_dict() if self.finished_match else None,
            "message": self.message,
        }
