"""Tests for GameLoop lifecycle and system ordering."""

from dataclasses import dataclass, field

import pytest
from zuma_loop import GameLoop, TickContext


@dataclass
class Counter:
    value: int = 0
    log: list[str] = field(default_factory=list)


# --- Initialization ---

def test_loop_init_defaults():
    state = Counter()
    loop = GameLoop(state)
    assert loop.state is state
    assert loop.clock.tps == 60
    assert loop.clock.tick_number == 0


def test_loop_rejects_bad_tps():
    with pytest.raises(ValueError):
        GameLoop(Counter(), tps=0)


def test_explicit_seed_is_kept():
    loop = GameLoop(Counter(), seed=1234)
    assert loop.seed == 1234


def test_random_seed_generated():
    """Without a seed the loop draws one from os.urandom."""
    loop = GameLoop(Counter())
    assert isinstance(loop.seed, int)


def test_same_seed_same_random_stream():
    a = GameLoop(Counter(), seed=9)
    b = GameLoop(Counter(), seed=9)
    assert [a.random.random() for _ in range(5)] == [b.random.random() for _ in range(5)]


# --- Systems ---

def test_systems_receive_state_and_context():
    state = Counter()
    loop = GameLoop(state, tps=10)
    seen = []

    def system(s, ctx):
        seen.append((s, ctx.tick_number))

    loop.add_system(system)
    loop.step()
    assert seen == [(state, 1)]


def test_systems_run_in_order():
    state = Counter()
    loop = GameLoop(state)
    loop.add_system(lambda s, c: s.log.append("advance"))
    loop.add_system(lambda s, c: s.log.append("move"))
    loop.add_system(lambda s, c: s.log.append("prune"))
    loop.step()
    assert state.log == ["advance", "move", "prune"]


def test_context_random_is_loop_rng():
    """Systems share the loop's seeded RNG, not a fresh one per tick."""
    loop = GameLoop(Counter(), seed=3)
    seen = []
    loop.add_system(lambda s, c: seen.append(c.random))
    loop.step()
    assert seen[0] is loop.random


# --- step() ---

def test_step_with_explicit_dt():
    loop = GameLoop(Counter(), tps=60)
    dts = []
    loop.add_system(lambda s, c: dts.append(c.dt))
    loop.step(0.2)
    loop.step()
    assert dts[0] == 0.2
    assert abs(dts[1] - 1 / 60) < 1e-9
    assert abs(loop.clock.elapsed - (0.2 + 1 / 60)) < 1e-9


def test_step_does_not_call_hooks():
    """Hooks bracket run() only; a host driving step() owns its own lifecycle."""
    loop = GameLoop(Counter())
    hooks = []
    loop.on_start(lambda s, c: hooks.append("start"))
    loop.on_stop(lambda s, c: hooks.append("stop"))
    loop.step()
    assert hooks == []


# --- run() ---

def test_run_executes_n_ticks():
    state = Counter()
    loop = GameLoop(state)

    def inc(s, ctx):
        s.value += 1

    loop.add_system(inc)
    assert loop.run(5) == 5
    assert state.value == 5
    assert loop.clock.tick_number == 5


def test_run_calls_hooks_once():
    """Start sees tick 0, stop sees the last executed tick."""
    loop = GameLoop(Counter())
    hooks = []
    loop.on_start(lambda s, c: hooks.append(("start", c.tick_number)))
    loop.on_stop(lambda s, c: hooks.append(("stop", c.tick_number)))
    loop.run(3)
    assert hooks == [("start", 0), ("stop", 3)]


def test_request_stop_ends_run_and_skips_later_systems():
    """The stopping system finishes; later systems in that tick are skipped."""
    state = Counter()
    loop = GameLoop(state)

    def stopper(s, ctx: TickContext):
        s.value += 1
        if ctx.tick_number == 2:
            ctx.request_stop()

    loop.add_system(stopper)
    loop.add_system(lambda s, c: s.log.append(f"after-{c.tick_number}"))
    assert loop.run(10) == 2
    assert state.value == 2
    assert state.log == ["after-1"]


def test_reset_rewinds_clock():
    """Systems survive reset; only the tick counter starts over."""
    loop = GameLoop(Counter())
    loop.add_system(lambda s, c: None)
    loop.run(4)
    loop.reset()
    assert loop.clock.tick_number == 0
    loop.step()
    assert loop.clock.tick_number == 1
