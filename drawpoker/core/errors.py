"""
Exception hierarchy for the draw poker engine.

Deck and hand-size errors also subclass ValueError so callers that
guard with ``except ValueError`` keep working.
"""


class PokerError(Exception):
    """Base class for all engine errors."""


class DeckError(PokerError, ValueError):
    """The deck cannot satisfy a deal request."""


class InsufficientCardsError(DeckError):
    """More cards were requested than remain in the deck."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Cannot deal {requested} cards, only {available} remain"
        )
        self.requested = requested
        self.available = available


class EmptyDeckError(DeckError):
    """A single card was requested from an empty deck."""

    def __init__(self):
        super().__init__("Deck is empty")


class InvalidHandSizeError(PokerError, ValueError):
    """The evaluator was given something other than exactly 5 cards."""

    def __init__(self, size: int):
        super().__init__(f"Hand must contain exactly 5 cards, got {size}")
        self.size = size


class IllegalActionError(PokerError):
    """An action was attempted outside its legal phase, turn or limits."""


class InvariantViolationError(PokerError):
    """Card or chip bookkeeping no longer adds up; the hand is aborted."""
