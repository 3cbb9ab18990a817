"""Tests for clock advancement and TickContext generation."""

import random

import pytest
from zuma_loop.clock import Clock
from zuma_loop.types import TickContext

_test_rng = random.Random(0)


def test_clock_initialization():
    clock = Clock(tps=20)
    assert clock.tps == 20
    assert clock.tick_number == 0
    assert clock.elapsed == 0.0
    assert abs(clock.dt - 0.05) < 1e-9


def test_invalid_tps_rejected():
    with pytest.raises(ValueError):
        Clock(tps=0)
    with pytest.raises(ValueError):
        Clock(tps=-5)


def test_fixed_advance_uses_nominal_dt():
    clock = Clock(tps=10)
    assert clock.advance() == 1
    assert clock.advance() == 2
    ctx = clock.context(lambda: None, _test_rng)
    assert ctx.tick_number == 2
    assert abs(ctx.dt - 0.1) < 1e-9
    assert abs(ctx.elapsed - 0.2) < 1e-9


def test_variable_advance_reports_measured_dt():
    clock = Clock(tps=60)
    clock.advance(0.5)
    ctx = clock.context(lambda: None, _test_rng)
    assert ctx.dt == 0.5
    assert ctx.elapsed == 0.5

    clock.advance(0.25)
    clock.advance()
    ctx = clock.context(lambda: None, _test_rng)
    assert abs(ctx.dt - 1 / 60) < 1e-9
    assert abs(ctx.elapsed - (0.75 + 1 / 60)) < 1e-9


def test_negative_dt_rejected():
    clock = Clock(tps=60)
    with pytest.raises(ValueError):
        clock.advance(-0.1)
    assert clock.tick_number == 0


def test_zero_dt_is_allowed():
    """A paused host may step with dt=0; the tick still counts."""
    clock = Clock(tps=60)
    clock.advance(0.0)
    assert clock.tick_number == 1
    assert clock.elapsed == 0.0


def test_context_is_frozen():
    clock = Clock(tps=20)
    ctx = clock.context(lambda: None, _test_rng)
    assert isinstance(ctx, TickContext)
    with pytest.raises(AttributeError):
        ctx.tick_number = 5  # type: ignore[misc]


def test_context_carries_callbacks():
    """The context hands through the loop's stop callback and RNG unchanged."""
    clock = Clock(tps=20)
    called = []
    ctx = clock.context(lambda: called.append(True), _test_rng)
    ctx.request_stop()
    assert called == [True]
    assert ctx.random is _test_rng


def test_reset():
    clock = Clock(tps=20)
    clock.advance(1.0)
    clock.advance()
    clock.reset()
    assert clock.tick_number == 0
    assert clock.elapsed == 0.0
    ctx = clock.context(lambda: None, _test_rng)
    assert abs(ctx.dt - 0.05) < 1e-9
