"""
BlipBurst — Verification Script
Checks the injector's acceptance scenarios against a simulated clock.
"""

from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from blipburst import (
    BlipBurst, BlipBurstConfig, FailureMode, InjectorState, SimulatedFailure,
)
from blipburst.logger import configure_logging

PASS = "✓"
FAIL = "✗"


def check(label: str, condition: bool) -> bool:
    symbol = PASS if condition else FAIL
    color = "\033[92m" if condition else "\033[91m"
    reset = "\033[0m"
    print(f"  {color}{symbol}{reset} {label}")
    return condition


class ManualClock:
    def __init__(self) -> None:
        # whole seconds, so datetime bounds convert back to the same ms value
        self.now_ms = float(int(datetime.now(timezone.utc).timestamp()) * 1000)

    def __call__(self) -> float:
        return self.now_ms

    @property
    def now(self) -> datetime:
        return datetime.fromtimestamp(self.now_ms / 1000.0, tz=timezone.utc)


async def stub_fetch(url: str) -> dict:
    return {"id": 1}


async def outcome(injector: BlipBurst) -> str:
    try:
        await injector.attempt()
        return "pass"
    except SimulatedFailure as exc:
        return exc.mode.value


async def run_verification() -> None:
    print("\n=== BlipBurst Verification ===\n")
    results = []

    # Scenario A: burst fires once, then passes through
    clock = ManualClock()
    a = BlipBurst(
        start_date=clock.now, end_date=clock.now + timedelta(hours=1),
        frequency=0, total=1, caller=stub_fetch, clock=clock,
    )
    first = await outcome(a)
    second = await a.attempt()
    results.append(check("Burst: first attempt fails (burst)", first == "burst"))
    results.append(check("Burst: second attempt returns payload", second == {"id": 1}))
    results.append(check("Burst: state is FIRED", a.state is InjectorState.FIRED))

    # Scenario B: 60/min, budget 2, attempts at 0/500/1000/2000ms
    clock = ManualClock()
    b = BlipBurst(frequency=60, total=2, caller=stub_fetch, clock=clock)
    seen = []
    for step in (0, 500, 500, 1000):
        clock.now_ms += step
        seen.append(await outcome(b))
    results.append(check(
        f"Rate: fail/pass/fail/pass (got {'/'.join(seen)})",
        seen == ["rate", "pass", "rate", "pass"],
    ))
    results.append(check("Rate: budget exhausted", b.state is InjectorState.EXHAUSTED))

    # Scenario C: window already over
    clock = ManualClock()
    c = BlipBurst(
        start_date=clock.now - timedelta(days=5),
        end_date=clock.now - timedelta(days=1),
        frequency=0, caller=stub_fetch, clock=clock,
    )
    seen = [await outcome(c) for _ in range(5)]
    results.append(check("Expired window: every attempt passes", set(seen) == {"pass"}))

    # Scenario D: zero budget in rate mode
    clock = ManualClock()
    d = BlipBurst(frequency=60, total=0, caller=stub_fetch, clock=clock)
    seen = []
    for _ in range(5):
        clock.now_ms += 2000
        seen.append(await outcome(d))
    results.append(check("Zero budget: no simulated failure", set(seen) == {"pass"}))

    # Transport errors are not simulated failures
    async def broken_fetch(url: str) -> dict:
        raise ConnectionError("unreachable")

    clock = ManualClock()
    e = BlipBurst(frequency=0, caller=broken_fetch, clock=clock)
    await outcome(e)
    try:
        await e.attempt()
        surfaced = False
    except ConnectionError:
        surfaced = True
    results.append(check("Transport error surfaces unchanged", surfaced))
    results.append(check(
        "Simulated failure carries mode tag",
        FailureMode("burst") is FailureMode.BURST,
    ))

    passed = sum(results)
    total = len(results)
    print(f"\n{'='*42}")
    color = "\033[92m" if passed == total else "\033[91m"
    reset = "\033[0m"
    print(f"{color}{passed}/{total} checks passed{reset}")
    if passed < total:
        sys.exit(1)


if __name__ == "__main__":
    configure_logging(BlipBurstConfig.from_env().log_level, json_output=False)
    asyncio.run(run_verification())
