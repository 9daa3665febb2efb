"""
BlipBurst — Live CLI Dashboard Demo
Drives an injector against a mock caller and streams each attempt to the
terminal via Rich. Window, frequency, total and url come from BLIPBURST_*
variables (or .env); LOG_LEVEL sets the structlog level.
Usage: python scripts/demo.py [--burst]
"""

from __future__ import annotations

import asyncio
import os
import random
import sys
import time
from dataclasses import replace

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from blipburst import BlipBurst, BlipBurstConfig, SimulatedFailure
from blipburst.logger import configure_logging

# 120 errors/min -> one fault allowed every 500ms, three in total
DEMO_FREQUENCY = 120.0
DEMO_TOTAL = 3

console = Console()

ATTEMPTS: list[dict] = []


def load_config(burst: bool = False) -> BlipBurstConfig:
    """Read the environment and configure logging from it."""
    cfg = BlipBurstConfig.from_env()
    configure_logging(cfg.log_level, json_output=False)
    cfg = replace(
        cfg,
        frequency=DEMO_FREQUENCY if cfg.frequency is None else cfg.frequency,
        total=DEMO_TOTAL if cfg.total is None else cfg.total,
    )
    if burst:
        cfg = replace(cfg, frequency=0.0)
    return cfg


async def mock_fetch(url: str) -> dict:
    """Stand-in for the network: a short delay, then a post-shaped payload."""
    await asyncio.sleep(random.uniform(0.02, 0.08))
    return {"id": random.randint(1, 100), "title": "sunt aut facere", "url": url}


def build_table(attempts: list[dict], injector: BlipBurst) -> Table:
    stats = injector.stats()
    state_color = {
        "ARMED": "yellow",
        "FIRED": "dim",
        "BUDGET_AVAILABLE": "yellow",
        "EXHAUSTED": "green",
    }.get(stats["state"], "white")

    table = Table(
        title="[bold]BlipBurst — Fault Injection Demo[/bold]",
        show_header=True,
        header_style="bold cyan",
        expand=True,
    )
    table.add_column("Attempt #", style="dim", width=10)
    table.add_column("t+ms", justify="right")
    table.add_column("Outcome")
    table.add_column("Detail")

    for i, a in enumerate(attempts, 1):
        outcome = (
            f"[red]FAULT ({a['mode']})[/red]" if a["fault"]
            else "[green]pass-through[/green]"
        )
        table.add_row(str(i), f"{a['elapsed_ms']:.0f}", outcome, a["detail"])

    interval = stats["interval_ms"]
    table.caption = (
        f"  Mode: {stats['mode']}  "
        f"Interval: {'—' if interval is None else f'{interval:.0f}ms'}  "
        f"Faults: {stats['errors_emitted']}/{stats['total']}  "
        f"State: [{state_color}]{stats['state']}[/{state_color}]"
    )
    return table


async def run_demo(cfg: BlipBurstConfig) -> None:
    injector = BlipBurst.from_config(cfg, caller=mock_fetch)
    t0 = time.monotonic()

    with Live(console=console, refresh_per_second=4) as live:
        for _ in range(12):
            elapsed_ms = (time.monotonic() - t0) * 1000
            try:
                payload = await injector.attempt()
                ATTEMPTS.append({
                    "fault": False,
                    "elapsed_ms": elapsed_ms,
                    "detail": f"id={payload['id']}",
                })
            except SimulatedFailure as exc:
                ATTEMPTS.append({
                    "fault": True,
                    "mode": exc.mode.value,
                    "elapsed_ms": elapsed_ms,
                    "detail": exc.message,
                })
            live.update(build_table(ATTEMPTS, injector))
            await asyncio.sleep(0.2)

    console.print()
    console.print(Panel.fit(
        f"[bold green]Demo complete.[/bold green]\n"
        f"Final stats: {injector.stats()}",
        title="Summary",
    ))


if __name__ == "__main__":
    asyncio.run(run_demo(load_config(burst="--burst" in sys.argv[1:])))
