"""
Anomalies the ladder core recognises.

The first three never reach a caller of the betting engine: illegal actions
are reported through a rejected ActionResult, an exhausted deck is
reshuffled, and a corrupted progression snapshot is replaced by the default
state. InsufficientTokens goes back to whoever tried to start a match.
"""


class LadderError(Exception):
    """Base class for ladder core errors."""


class InvalidAction(LadderError):
    """An action that is illegal for the current phase or turn."""


class DeckExhausted(LadderError, ValueError):
    """More cards were requested than remain in the deck."""


class CorruptedProgressState(LadderError):
    """A persisted progression snapshot failed validation."""


class InsufficientTokens(LadderError, ValueError):
    """The token balance does not cover a match entry fee."""
