"""
Time-windowed fault injector.

Wraps a network caller and, while the wall clock sits inside
[window_start, window_end], raises SimulatedFailure on a schedule:

* burst mode (frequency == 0): the first in-window attempt fails, once.
* rate mode (frequency != 0): at most `total` failures, spaced at least
  60000 / frequency ms apart.

Every other attempt delegates to the caller and returns its decoded payload.
"""
from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone
from enum import Enum, auto
from typing import Any, Callable

import structlog

from .config import BlipBurstConfig, parse_when
from .errors import FailureMode, SimulatedFailure
from .transport import HttpxCaller, NetworkCaller

log = structlog.get_logger(__name__)

DEFAULT_URL = "https://jsonplaceholder.typicode.com/posts/1"
DEFAULT_FREQUENCY = 1 / (24 * 60)  # one error per day, in errors per minute
DEFAULT_TOTAL = 4
DEFAULT_WINDOW = timedelta(days=4)

BURST_MESSAGE = "Error from moon - all at once"
RATE_MESSAGE = "Error from mars - frequency mode"


class InjectorState(Enum):
    ARMED = auto()             # burst mode, not yet fired
    FIRED = auto()             # burst mode, the one failure is spent
    BUDGET_AVAILABLE = auto()  # rate mode, failures left
    EXHAUSTED = auto()         # rate mode, budget spent


def _wall_clock_ms() -> float:
    return time.time() * 1000.0


def _to_ms(when: datetime) -> float:
    return when.timestamp() * 1000.0


class BlipBurst:
    """
    Fault injector around an async network caller.
    attempt() is the only operation that mutates the counters.
    """

    def __init__(
        self,
        start_date: datetime | str | None = None,
        end_date: datetime | str | None = None,
        frequency: float | None = None,
        total: int | None = None,
        url: str | None = None,
        caller: NetworkCaller | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._clock = clock or _wall_clock_ms
        now_ms = self._clock()
        now = datetime.fromtimestamp(now_ms / 1000.0, tz=timezone.utc)

        self.window_start = parse_when(start_date) if start_date is not None else now
        self.window_end = (
            parse_when(end_date) if end_date is not None else now + DEFAULT_WINDOW
        )
        # defaulted bounds use the raw clock reading, not the datetime round-trip
        self._start_ms = _to_ms(self.window_start) if start_date is not None else now_ms
        self._end_ms = (
            _to_ms(self.window_end)
            if end_date is not None
            else now_ms + DEFAULT_WINDOW.total_seconds() * 1000.0
        )
        self.frequency = DEFAULT_FREQUENCY if frequency is None else frequency
        self.total = DEFAULT_TOTAL if total is None else total
        self.url = DEFAULT_URL if url is None else url
        self._caller: NetworkCaller = caller or HttpxCaller()

        self._errors_emitted = 0
        self._last_error_ms = 0.0
        self._lock = threading.Lock()

        log.debug(
            "blipburst.created",
            window_start=self.window_start.isoformat(),
            window_end=self.window_end.isoformat(),
            mode=self.mode.value,
            total=self.total,
            url=self.url,
        )

    @classmethod
    def from_config(
        cls,
        config: BlipBurstConfig,
        caller: NetworkCaller | None = None,
        clock: Callable[[], float] | None = None,
    ) -> "BlipBurst":
        return cls(
            start_date=config.start_date,
            end_date=config.end_date,
            frequency=config.frequency,
            total=config.total,
            url=config.url,
            caller=caller,
            clock=clock,
        )

    # ── Read-only view ──────────────────────────────────────────────────
    @property
    def mode(self) -> FailureMode:
        return FailureMode.BURST if self.frequency == 0 else FailureMode.RATE

    @property
    def interval_ms(self) -> float | None:
        """Minimum spacing between rate-mode failures. None in burst mode."""
        if self.mode is FailureMode.BURST:
            return None
        return 60000.0 / self.frequency

    @property
    def errors_emitted(self) -> int:
        return self._errors_emitted

    @property
    def last_error_ms(self) -> float:
        return self._last_error_ms

    @property
    def state(self) -> InjectorState:
        if self.mode is FailureMode.BURST:
            return InjectorState.ARMED if self._errors_emitted == 0 else InjectorState.FIRED
        if self._errors_emitted < self.total:
            return InjectorState.BUDGET_AVAILABLE
        return InjectorState.EXHAUSTED

    def in_window(self, now_ms: float | None = None) -> bool:
        now_ms = self._clock() if now_ms is None else now_ms
        return self._start_ms <= now_ms <= self._end_ms

    # ── Decision ────────────────────────────────────────────────────────
    def _decide(self, now_ms: float) -> tuple[FailureMode | None, int]:
        """
        Decide and record a failure for this attempt. Returns the failure mode
        (None to pass through) and errors_emitted as read under the lock.
        Must not await.
        """
        with self._lock:
            if not self.in_window(now_ms):
                return None, self._errors_emitted

            if self.mode is FailureMode.BURST:
                if self._errors_emitted == 0:
                    self._errors_emitted += 1
                    return FailureMode.BURST, self._errors_emitted
                return None, self._errors_emitted

            if (
                self._errors_emitted < self.total
                and now_ms - self._last_error_ms >= self.interval_ms
            ):
                self._last_error_ms = now_ms
                self._errors_emitted += 1
                return FailureMode.RATE, self._errors_emitted
            return None, self._errors_emitted

    async def attempt(self) -> Any:
        """
        Raise SimulatedFailure or return the caller's decoded payload.
        Errors raised by the caller propagate unchanged.
        """
        now_ms = self._clock()
        failure, emitted = self._decide(now_ms)

        if failure is FailureMode.BURST:
            log.warning("blipburst.fault.injected", mode="burst", errors_emitted=emitted)
            raise SimulatedFailure(BURST_MESSAGE, FailureMode.BURST)
        if failure is FailureMode.RATE:
            log.warning(
                "blipburst.fault.injected",
                mode="rate",
                errors_emitted=emitted,
                total=self.total,
            )
            raise SimulatedFailure(RATE_MESSAGE, FailureMode.RATE)

        log.debug("blipburst.pass_through", url=self.url, errors_emitted=emitted)
        return await self._caller(self.url)

    def stats(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "state": self.state.name,
            "in_window": self.in_window(),
            "errors_emitted": self._errors_emitted,
            "total": self.total,
            "last_error_ms": self._last_error_ms,
            "interval_ms": self.interval_ms,
        }
