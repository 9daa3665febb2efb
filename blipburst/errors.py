"""
Simulated-failure signal raised by the injector.
Kept apart from transport errors so callers can tell the two classes apart.
"""
from __future__ import annotations

from enum import Enum


class FailureMode(str, Enum):
    BURST = "burst"
    RATE = "rate"


class SimulatedFailure(Exception):
    """Raised instead of a network call when the injector decides to fail."""

    def __init__(self, message: str, mode: FailureMode):
        super().__init__(message)
        self.message = message
        self.mode = mode

    def __repr__(self) -> str:
        return f"SimulatedFailure(mode={self.mode.value!r}, message={self.message!r})"
