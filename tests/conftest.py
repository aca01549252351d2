"""
Pytest configuration and shared fixtures for DrawPoker tests.
"""

import random
from dataclasses import replace

import pytest
from drawpoker.agents.simple import CallAgent
from drawpoker.core import engine
from drawpoker.core.card import Card, Deck, Rank, Suit, create_deck, parse_cards
from drawpoker.core.game import DrawPokerGame
from drawpoker.core.rules import GameConfig


@pytest.fixture
def rng():
    """Seeded random source for reproducible deals."""
    return random.Random(1234)


@pytest.fixture
def deck(rng):
    """Create a fresh shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def started(config, rng):
    """A state at the start of betting round 1."""
    return engine.start_hand(engine.new_game(config), rng)


@pytest.fixture
def rig():
    """
    Replace both hands of a running state with known cards.

    The deck is rebuilt from the remaining cards with ``deck_top``
    (if given) on top, so draws are predictable.
    """
    def _rig(state, player_cards, opponent_cards, deck_top=""):
        player_hand = parse_cards(player_cards)
        opponent_hand = parse_cards(opponent_cards)
        top = parse_cards(deck_top) if deck_top else []
        used = set(player_hand) | set(opponent_hand) | set(top)
        rest = [c for c in create_deck() if c not in used]
        return replace(
            state,
            player=replace(state.player, hand=tuple(player_hand)),
            opponent=replace(state.opponent, hand=tuple(opponent_hand)),
            deck=tuple(top + rest),
        )
    return _rig


@pytest.fixture
def calling_game(rng):
    """A table whose opponent always checks or calls and stands pat."""
    return DrawPokerGame(opponent_agent=CallAgent(), rng=rng)


@pytest.fixture
def manual_game(rng):
    """A table where the tests drive both seats."""
    return DrawPokerGame(rng=rng, auto_opponent=False)


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]
