"""
Shared fixtures: a controllable clock and a recording network caller.
No test touches the real network.
"""
from __future__ import annotations

from typing import Any

import pytest

T0_MS = 1_700_000_000_000.0  # 2023-11-14T22:13:20Z


class FakeClock:
    """Epoch-millisecond clock that only moves when told to (or by step_ms per read)."""

    def __init__(self, now_ms: float = T0_MS, step_ms: float = 0.0) -> None:
        self.now_ms = now_ms
        self.step_ms = step_ms

    def advance(self, delta_ms: float) -> None:
        self.now_ms += delta_ms

    def __call__(self) -> float:
        current = self.now_ms
        self.now_ms += self.step_ms
        return current


class FakeCaller:
    """Async network caller stub. Records URLs; raises `error` if set."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = {"id": 1} if payload is None else payload
        self.error = error
        self.urls: list[str] = []

    async def __call__(self, url: str) -> Any:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload

    @property
    def call_count(self) -> int:
        return len(self.urls)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def caller() -> FakeCaller:
    return FakeCaller()
