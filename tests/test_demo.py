"""
Tests for scripts/demo.py — the injector and log level come from the
environment, not from constants in the script.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timezone

import pytest
import structlog

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))

from demo import DEMO_FREQUENCY, DEMO_TOTAL, load_config, mock_fetch

from blipburst import BlipBurst, FailureMode, SimulatedFailure

_VARS = (
    "BLIPBURST_START",
    "BLIPBURST_END",
    "BLIPBURST_FREQUENCY",
    "BLIPBURST_TOTAL",
    "BLIPBURST_URL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in _VARS:
        monkeypatch.delenv(key, raising=False)
    yield
    structlog.reset_defaults()


def test_defaults_when_env_is_empty():
    cfg = load_config()
    assert cfg.frequency == DEMO_FREQUENCY
    assert cfg.total == DEMO_TOTAL
    assert cfg.url is None
    assert cfg.log_level == "INFO"


def test_env_overrides_demo_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BLIPBURST_FREQUENCY", "6")
    monkeypatch.setenv("BLIPBURST_TOTAL", "9")
    monkeypatch.setenv("BLIPBURST_URL", "https://example.test/demo")
    monkeypatch.setenv("BLIPBURST_END", "2030-01-01T00:00:00Z")

    injector = BlipBurst.from_config(load_config(), caller=mock_fetch)

    assert injector.frequency == 6.0
    assert injector.total == 9
    assert injector.url == "https://example.test/demo"
    assert injector.window_end == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_burst_flag_forces_zero_frequency(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BLIPBURST_FREQUENCY", "6")
    injector = BlipBurst.from_config(load_config(burst=True), caller=mock_fetch)
    assert injector.mode is FailureMode.BURST


@pytest.mark.asyncio
async def test_log_level_comes_from_env(monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    injector = BlipBurst.from_config(load_config(), caller=mock_fetch)
    with pytest.raises(SimulatedFailure):
        await injector.attempt()
    await injector.attempt()
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_debug_level_from_env_shows_pass_through(
    monkeypatch: pytest.MonkeyPatch, capsys
):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("BLIPBURST_TOTAL", "0")
    injector = BlipBurst.from_config(load_config(), caller=mock_fetch)
    await injector.attempt()
    assert "blipburst.pass_through" in capsys.readouterr().out
