"""
Tests for hand evaluation.
"""

import itertools
import random

import pytest
from drawpoker.core.card import Card, Rank, Suit, create_deck, parse_cards
from drawpoker.core.errors import InvalidHandSizeError
from drawpoker.core.hand import (
    evaluate_hand, compare_hands, HandRank,
    get_hand_description,
)


def hand(cards: str):
    return parse_cards(cards)


class TestHandRanking:
    """Tests for hand category recognition."""

    def test_royal_flush(self, royal_flush):
        """Royal flush has the fixed value 9000."""
        evaluation = evaluate_hand(royal_flush)
        assert evaluation.rank == HandRank.ROYAL_FLUSH
        assert evaluation.value == 9000

    def test_straight_flush(self, straight_flush):
        evaluation = evaluate_hand(straight_flush)
        assert evaluation.rank == HandRank.STRAIGHT_FLUSH
        assert evaluation.tiebreak == (9,)

    @pytest.mark.parametrize("cards, expected", [
        ("As Ah Ad Ac Ks", HandRank.FOUR_OF_A_KIND),
        ("As Ah Ad Kc Ks", HandRank.FULL_HOUSE),
        ("As Js 8s 4s 2s", HandRank.FLUSH),
        ("9c Td Jh Qs Kc", HandRank.STRAIGHT),
        ("Ac 2d 3h 4s 5c", HandRank.STRAIGHT),
        ("7s 7h 7d 2c 3s", HandRank.THREE_OF_A_KIND),
        ("Ks Kh Qd Qc 2s", HandRank.TWO_PAIR),
        ("As Ah Kd Qc Js", HandRank.PAIR),
        ("As Kh 9d 5c 3s", HandRank.HIGH_CARD),
    ])
    def test_categories(self, cards, expected):
        assert evaluate_hand(hand(cards)).rank == expected

    def test_straight_flush_is_not_flush(self):
        """A suited straight is only ever a straight flush."""
        evaluation = evaluate_hand(hand("5d 6d 7d 8d 9d"))
        assert evaluation.rank == HandRank.STRAIGHT_FLUSH

    def test_ace_high_is_not_a_wraparound_straight(self):
        assert evaluate_hand(hand("Qs Kh Ad 2c 3s")).rank == HandRank.HIGH_CARD

    def test_cards_sorted_ascending(self):
        evaluation = evaluate_hand(hand("Ks 3h Ad 7c 9s"))
        ranks = [c.rank for c in evaluation.cards]
        assert ranks == sorted(ranks)

    @pytest.mark.parametrize("size", [0, 4, 6])
    def test_invalid_hand_size(self, size):
        cards = create_deck()[:size]
        with pytest.raises(InvalidHandSizeError):
            evaluate_hand(cards)

    def test_invalid_hand_size_is_value_error(self):
        with pytest.raises(ValueError):
            evaluate_hand(hand("As Kh"))


class TestValues:
    """Tests for the display value."""

    def test_category_bases(self):
        assert 8000 <= evaluate_hand(hand("9h 8h 7h 6h 5h")).value < 9000
        assert 7000 <= evaluate_hand(hand("As Ah Ad Ac Ks")).value < 8000
        assert 1000 <= evaluate_hand(hand("As Ah Kd Qc Js")).value < 2000
        assert evaluate_hand(hand("As Kh 9d 5c 3s")).value < 1000

    def test_wheel_straight_flush_below_six_high(self):
        wheel = evaluate_hand(hand("Ah 2h 3h 4h 5h"))
        six_high = evaluate_hand(hand("2h 3h 4h 5h 6h"))
        assert wheel.rank == HandRank.STRAIGHT_FLUSH
        assert wheel.value < six_high.value
        assert wheel < six_high

    def test_straight_flush_beats_best_quads(self):
        wheel = evaluate_hand(hand("Ah 2h 3h 4h 5h"))
        quads = evaluate_hand(hand("As Ah Ad Ac Ks"))
        assert wheel > quads
        assert wheel.value > quads.value

    def test_kickers_raise_value(self):
        low = evaluate_hand(hand("As Ah 9d 5c 3s"))
        high = evaluate_hand(hand("Ad Ac 9h 5s 4d"))
        assert high > low
        assert high.value > low.value

    def test_third_kicker_raises_value(self):
        low = evaluate_hand(hand("As Ah Kd Qc 2s"))
        high = evaluate_hand(hand("Ad Ac Kh Qs 3d"))
        assert high.value > low.value
        assert low.value == evaluate_hand(hand("Ac Ad Ks Qh 2d")).value

    def test_wheel_straight_flush_value(self):
        assert evaluate_hand(hand("Ah 2h 3h 4h 5h")).value == pytest.approx(8333.33, abs=0.01)
        assert evaluate_hand(hand("2h 3h 4h 5h 6h")).value == 8400


class TestKickers:
    """Tests for kicker extraction."""

    def test_pair_kickers(self):
        evaluation = evaluate_hand(hand("As Ah Kd Qc Js"))
        assert [c.rank for c in evaluation.kickers] == [Rank.KING, Rank.QUEEN, Rank.JACK]

    def test_two_pair_kicker(self):
        evaluation = evaluate_hand(hand("Ks Kh Qd Qc 2s"))
        assert evaluation.kickers == (Card(Rank.TWO, Suit.SPADES),)

    def test_quads_kicker(self):
        evaluation = evaluate_hand(hand("9s 9h 9d 9c 3s"))
        assert evaluation.kickers == (Card(Rank.THREE, Suit.SPADES),)

    def test_straight_has_no_kickers(self):
        assert evaluate_hand(hand("9c Td Jh Qs Kc")).kickers == ()


class TestHandComparison:
    """Tests for comparing hands."""

    def test_trips_beat_two_pair(self):
        trips = hand("7s 7h 7d 2c 3s")
        two_pair = hand("Ks Kh Qd Qc 2h")
        assert compare_hands(trips, two_pair) == 1
        assert compare_hands(two_pair, trips) == -1

    def test_higher_pair_wins(self):
        assert compare_hands(hand("As Ah 4d 3c 2s"), hand("Ks Kh Qd Jc 9s")) == 1

    def test_kicker_decides_pair(self):
        assert compare_hands(hand("As Ah Kd 3c 2s"), hand("Ad Ac Qh Jc 9s")) == 1

    def test_third_kicker_decides(self):
        assert compare_hands(hand("8s 8h Kd Qc 4s"), hand("8d 8c Kh Qs 3d")) == 1

    def test_fifth_card_decides_high_card(self):
        assert compare_hands(hand("As Jh 9d 6c 3s"), hand("Ad Jc 9h 6s 2d")) == 1

    def test_full_house_trips_first(self):
        assert compare_hands(hand("3s 3h 3d 2c 2s"), hand("2d 2h 2c As Ah")) == 1

    def test_wheel_loses_to_six_high_straight(self):
        assert compare_hands(hand("Ac 2d 3h 4s 5c"), hand("2c 3d 4h 5s 6c")) == -1

    def test_exact_tie(self):
        """Same ranks in different suits split."""
        a = hand("As Kh 9d 5c 3s")
        b = hand("Ah Kd 9c 5s 3h")
        assert compare_hands(a, b) == 0
        assert evaluate_hand(a) == evaluate_hand(b)

    def test_comparison_is_antisymmetric_and_transitive(self):
        rng = random.Random(77)
        deck = create_deck()
        hands = [rng.sample(deck, 5) for _ in range(40)]
        evaluations = [evaluate_hand(h) for h in hands]

        for a, b in itertools.permutations(range(len(hands)), 2):
            assert compare_hands(hands[a], hands[b]) == -compare_hands(hands[b], hands[a])

        for a, b, c in itertools.permutations(evaluations[:15], 3):
            if a >= b and b >= c:
                assert a >= c

    def test_value_agrees_with_order(self):
        """The display value follows the exact ordering strictly."""
        rng = random.Random(3)
        deck = create_deck()
        evaluations = [evaluate_hand(rng.sample(deck, 5)) for _ in range(200)]
        for a, b in itertools.combinations(evaluations, 2):
            if a > b:
                assert a.value > b.value
            elif a == b:
                assert a.value == b.value


class TestHandDescription:
    """Tests for hand descriptions."""

    @pytest.mark.parametrize("cards, expected", [
        ("As Ks Qs Js Ts", "Royal Flush"),
        ("9h 8h 7h 6h 5h", "Straight Flush, Nine high"),
        ("9s 9h 9d 9c 3s", "Four of a Kind, Nines"),
        ("3s 3h 3d 2c 2s", "Full House, Threes full of Twos"),
        ("As Js 8s 4s 2s", "Flush, Ace high"),
        ("Ac 2d 3h 4s 5c", "Straight, Five high (Wheel)"),
        ("7s 7h 7d 2c 3s", "Three of a Kind, Sevens"),
        ("Ks Kh Qd Qc 2s", "Two Pair, Kings and Queens"),
        ("6s 6h Kd Qc 2s", "Pair of Sixes"),
        ("As Kh 9d 5c 3s", "High Card, Ace"),
    ])
    def test_descriptions(self, cards, expected):
        assert get_hand_description(hand(cards)) == expected

    def test_incomplete_hand(self):
        assert get_hand_description(hand("As Kh")) == "Incomplete hand"

    def test_to_dict(self):
        data = evaluate_hand(hand("Ks Kh Qd Qc 2s")).to_dict()
        assert data["rank"] == "TWO_PAIR"
        assert data["name"] == "Two Pair"
        assert data["description"] == "Two Pair, Kings and Queens"
        assert len(data["cards"]) == 5
