"""
Hand Evaluation for 5-card draw.

Evaluates exactly 5 cards. Hands are ordered by an exact key of
(category, tie-break ranks), so no two different hands can collide.
Each evaluation also carries a display ``value``:

    category * 1000 + intra-category score in [0, 1000)

The intra-category score is strictly increasing in the tie-break ranks.

- Royal Flush: 9000
- Straight Flush: 8000+
- Four of a Kind: 7000+
- Full House: 6000+
- Flush: 5000+
- Straight: 4000+
- Three of a Kind: 3000+
- Two Pair: 2000+
- Pair: 1000+
- High Card: < 1000

Note: Ace plays low only in the A-2-3-4-5 straight (wheel), which ranks
as a 5-high straight.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Dict, List, Sequence, Tuple

from drawpoker.core.card import Card, Rank
from drawpoker.core.errors import InvalidHandSizeError
from drawpoker.core.rules import HAND_SIZE


class HandRank(IntEnum):
    """Hand categories from worst (0) to best (9)."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.PAIR: "Pair",
    HandRank.HIGH_CARD: "High Card",
}

CATEGORY_BASE = 1000
# Tie-break ranks are read as base-15 digits, padded to five places
_DIGIT_BASE = 15
_KEY_SPAN = _DIGIT_BASE ** HAND_SIZE

WHEEL_RANKS = [Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.ACE]


@total_ordering
@dataclass(frozen=True, eq=False)
class HandEvaluation:
    """
    Result of evaluating one 5-card hand.

    Attributes:
        rank: Hand category
        value: Display score (category * 1000 + intra score)
        cards: The hand sorted ascending by rank
        kickers: Tie-break cards in descending importance (for display)
        tiebreak: Significant ranks, most significant first
    """
    rank: HandRank
    value: float
    cards: Tuple[Card, ...]
    kickers: Tuple[Card, ...]
    tiebreak: Tuple[int, ...]

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        """Exact ordering key; equal keys are true ties."""
        return int(self.rank), self.tiebreak

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HandEvaluation):
            return self.key == other.key
        return NotImplemented

    def __lt__(self, other: HandEvaluation) -> bool:
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rank": self.rank.name,
            "name": self.name,
            "value": self.value,
            "cards": [c.to_dict() for c in self.cards],
            "kickers": [c.to_dict() for c in self.kickers],
            "description": describe_evaluation(self),
        }


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate a 5-card poker hand.

    Raises:
        InvalidHandSizeError: If the hand does not hold exactly 5 cards.
    """
    if len(cards) != HAND_SIZE:
        raise InvalidHandSizeError(len(cards))

    ascending = tuple(sorted(cards, key=lambda c: c.rank))
    descending = ascending[::-1]
    ranks = [c.rank for c in ascending]

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    is_straight, straight_high = _check_straight(ranks)

    if is_flush and is_straight:
        if ranks[0] == Rank.TEN and ranks[-1] == Rank.ACE:
            return _result(HandRank.ROYAL_FLUSH, (), ascending, ())
        return _result(HandRank.STRAIGHT_FLUSH, (straight_high,), ascending, ())

    if counts == [4, 1]:
        quad = _ranks_with_count(rank_counts, 4)[0]
        kickers = _cards_outside(descending, quad)
        return _result(
            HandRank.FOUR_OF_A_KIND, (quad, kickers[0].rank), ascending, kickers
        )

    if counts == [3, 2]:
        trips = _ranks_with_count(rank_counts, 3)[0]
        pair = _ranks_with_count(rank_counts, 2)[0]
        return _result(HandRank.FULL_HOUSE, (trips, pair), ascending, ())

    if is_flush:
        return _result(
            HandRank.FLUSH,
            tuple(c.rank for c in descending),
            ascending,
            descending[1:],
        )

    if is_straight:
        return _result(HandRank.STRAIGHT, (straight_high,), ascending, ())

    if counts == [3, 1, 1]:
        trips = _ranks_with_count(rank_counts, 3)[0]
        kickers = _cards_outside(descending, trips)
        return _result(
            HandRank.THREE_OF_A_KIND,
            (trips,) + tuple(c.rank for c in kickers),
            ascending,
            kickers,
        )

    if counts == [2, 2, 1]:
        high_pair, low_pair = _ranks_with_count(rank_counts, 2)
        kickers = _cards_outside(descending, high_pair, low_pair)
        return _result(
            HandRank.TWO_PAIR,
            (high_pair, low_pair, kickers[0].rank),
            ascending,
            kickers,
        )

    if counts == [2, 1, 1, 1]:
        pair = _ranks_with_count(rank_counts, 2)[0]
        kickers = _cards_outside(descending, pair)
        return _result(
            HandRank.PAIR,
            (pair,) + tuple(c.rank for c in kickers),
            ascending,
            kickers,
        )

    return _result(
        HandRank.HIGH_CARD,
        tuple(c.rank for c in descending),
        ascending,
        descending,
    )


def _result(
    hand_rank: HandRank,
    tiebreak: Tuple[int, ...],
    cards: Tuple[Card, ...],
    kickers: Tuple[Card, ...],
) -> HandEvaluation:
    tiebreak = tuple(int(r) for r in tiebreak)
    return HandEvaluation(
        rank=hand_rank,
        value=_calculate_value(hand_rank, tiebreak),
        cards=cards,
        kickers=tuple(kickers),
        tiebreak=tiebreak,
    )


def _check_straight(ranks: List[Rank]) -> Tuple[bool, int]:
    """
    Check if ascending ranks form a straight.

    Returns:
        Tuple of (is_straight, high_card_value); the wheel is 5-high.
    """
    if len(set(ranks)) != HAND_SIZE:
        return False, 0

    if ranks[-1] - ranks[0] == 4:
        return True, int(ranks[-1])

    if ranks == WHEEL_RANKS:
        return True, int(Rank.FIVE)

    return False, 0


def _ranks_with_count(rank_counts: Counter, count: int) -> List[Rank]:
    """Ranks appearing exactly ``count`` times, highest first."""
    return sorted((r for r, c in rank_counts.items() if c == count), reverse=True)


def _cards_outside(cards: Sequence[Card], *ranks: Rank) -> Tuple[Card, ...]:
    return tuple(c for c in cards if c.rank not in ranks)


def _calculate_value(hand_rank: HandRank, tiebreak: Tuple[int, ...]) -> float:
    """
    Category base plus an intra-category score below 1000.

    The score is strictly increasing in the tie-break ranks, so a stronger
    kicker always raises the value; exact ordering still uses the key.
    """
    digits = list(tiebreak) + [0] * (HAND_SIZE - len(tiebreak))
    position = 0
    for digit in digits:
        position = position * _DIGIT_BASE + digit
    return int(hand_rank) * CATEGORY_BASE + position * CATEGORY_BASE / _KEY_SPAN


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare two hands.

    Returns:
        1 if cards1 wins, -1 if cards2 wins, 0 if tie
    """
    eval1 = evaluate_hand(cards1)
    eval2 = evaluate_hand(cards2)

    if eval1 > eval2:
        return 1
    if eval1 < eval2:
        return -1
    return 0


def get_hand_description(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the hand."""
    if len(cards) < HAND_SIZE:
        return "Incomplete hand"
    return describe_evaluation(evaluate_hand(cards))


def describe_evaluation(evaluation: HandEvaluation) -> str:
    """Describe an existing evaluation, e.g. 'Two Pair, Kings and Queens'."""
    hand_type = evaluation.rank
    top = evaluation.tiebreak

    if hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    elif hand_type == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(top[0])} high"
    elif hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(top[0])}"
    elif hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(top[0])} full of {_plural(top[1])}"
    elif hand_type == HandRank.FLUSH:
        return f"Flush, {_rank_name(top[0])} high"
    elif hand_type == HandRank.STRAIGHT:
        if top[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(top[0])} high"
    elif hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(top[0])}"
    elif hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(top[0])} and {_plural(top[1])}"
    elif hand_type == HandRank.PAIR:
        return f"Pair of {_plural(top[0])}"
    return f"High Card, {_rank_name(top[0])}"


def _rank_name(rank: int) -> str:
    """Get the name of a rank."""
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[Rank(rank)]


def _plural(rank: int) -> str:
    name = _rank_name(rank)
    return name + ("es" if name == "Six" else "s")
