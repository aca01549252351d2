"""
5-Card Draw Rules and Constants.

Heads-up fixed-limit draw as played against the computer opponent:

1. Both seats ante the small-bet amount; 5 cards are dealt to each.
2. First betting round, capped at the small bet. The human seat acts first.
3. One draw: each seat may replace up to 5 cards (human first).
4. Second betting round, capped at the big bet. The human seat acts first.
5. Showdown. Ties split the pot, the odd chip going to the opponent.

A match is a series of hands; pot winnings are added to the winner's
match score and the first seat to reach the target score wins.
"""

from dataclasses import dataclass
from enum import Enum, auto


class GamePhase(Enum):
    """Phases of a draw poker hand."""
    IDLE = auto()       # Intro / between matches
    DEALING = auto()    # Shuffling, dealing and collecting antes
    BETTING = auto()    # A betting round is running (round 1 or 2)
    DRAWING = auto()    # Seats replace cards
    SHOWDOWN = auto()   # Hands are compared
    GAME_OVER = auto()  # Hand is complete, waiting for "continue"


class ActionType(Enum):
    """Possible seat actions."""
    BET = "BET"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    FOLD = "FOLD"
    DRAW = "DRAW"


BETTING_ACTIONS = (
    ActionType.BET, ActionType.CHECK, ActionType.CALL,
    ActionType.RAISE, ActionType.FOLD,
)

# Seat identifiers
PLAYER = "player"
OPPONENT = "opponent"
TIE = "tie"

# Default game settings
DEFAULT_SMALL_BET = 2
DEFAULT_BIG_BET = 4
DEFAULT_ANTE = DEFAULT_SMALL_BET
DEFAULT_STARTING_CHIPS = 100
DEFAULT_TARGET_SCORE = 100
HISTORY_LIMIT = 50

# Cards
HAND_SIZE = 5
MAX_DRAW = 5
MAX_AI_DISCARDS = 3

FIRST_ROUND = 1
FINAL_ROUND = 2


def other_seat(seat: str) -> str:
    """The seat that is not ``seat``."""
    if seat == PLAYER:
        return OPPONENT
    if seat == OPPONENT:
        return PLAYER
    raise ValueError(f"Unknown seat: {seat}")


@dataclass(frozen=True)
class FixedLimit:
    """Bet size caps: small bet in round 1, big bet in round 2."""
    small_bet: int = DEFAULT_SMALL_BET
    big_bet: int = DEFAULT_BIG_BET

    def cap_for_round(self, round_number: int) -> int:
        """Maximum outstanding bet for the given betting round."""
        return self.big_bet if round_number >= FINAL_ROUND else self.small_bet

    def to_dict(self) -> dict:
        return {"small_bet": self.small_bet, "big_bet": self.big_bet}


@dataclass(frozen=True)
class GameConfig:
    """Table and match settings for one game."""
    small_bet: int = DEFAULT_SMALL_BET
    big_bet: int = DEFAULT_BIG_BET
    ante: int = DEFAULT_ANTE
    starting_chips: int = DEFAULT_STARTING_CHIPS
    target_score: int = DEFAULT_TARGET_SCORE
    player_name: str = "You"
    opponent_name: str = "Opponent"

    def __post_init__(self):
        if self.small_bet <= 0 or self.big_bet <= 0:
            raise ValueError("Bet sizes must be positive")
        if self.small_bet > self.big_bet:
            raise ValueError("Small bet cannot exceed big bet")
        if self.ante < 0:
            raise ValueError("Ante cannot be negative")
        if self.starting_chips <= self.ante:
            raise ValueError("Starting chips must cover the ante")
        if self.target_score <= 0:
            raise ValueError("Target score must be positive")

    @property
    def fixed_limit(self) -> FixedLimit:
        return FixedLimit(self.small_bet, self.big_bet)
