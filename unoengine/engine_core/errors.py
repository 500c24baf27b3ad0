"""
Engine Errors - Structural failures raised at the setup boundary.

Illegal actions are NOT errors: the reducer reports them as failed
ActionResults and the caller keeps its previous state. The exceptions here
signal a defect in the caller (bad roster, bad config, malformed cards).
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine failures."""


class SetupError(EngineError):
    """Raised when a game cannot be built from the given roster or config."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = errors
        super().__init__("; ".join(errors))


class InvalidCardError(EngineError, ValueError):
    """Raised when a card's fields contradict its type."""
