"""GameLoop - ordered systems and lifecycle hooks."""

from __future__ import annotations

import os
import random
from typing import Generic

from zuma_loop.clock import Clock
from zuma_loop.types import S, System


class GameLoop(Generic[S]):
    """Runs registered systems against a single state object once per tick.

    The loop never owns the notion of a frame: callers either let
    :meth:`run` execute a batch of fixed ticks or drive :meth:`step`
    themselves with a measured ``dt`` from their own frame clock.
    """

    def __init__(self, state: S, tps: int = 60, seed: int | None = None) -> None:
        self._state = state
        self._clock = Clock(tps)
        self._systems: list[System[S]] = []
        self._start_hooks: list[System[S]] = []
        self._stop_hooks: list[System[S]] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def state(self) -> S:
        return self._state

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def add_system(self, system: System[S]) -> None:
        self._systems.append(system)

    def on_start(self, hook: System[S]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: System[S]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self, dt: float | None = None) -> None:
        self._clock.advance(dt)
        ctx = self._clock.context(self._request_stop, self._rng)
        for system in self._systems:
            system(self._state, ctx)
            if self._stop_requested:
                break

    def _fire(self, hooks: list[System[S]]) -> None:
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in hooks:
            hook(self._state, ctx)

    def step(self, dt: float | None = None) -> None:
        self._stop_requested = False
        self._tick(dt)

    def run(self, n: int) -> int:
        """Run up to ``n`` ticks. Returns the number of ticks executed."""
        self._stop_requested = False
        self._fire(self._start_hooks)

        done = 0
        for _ in range(n):
            self._tick()
            done += 1
            if self._stop_requested:
                break

        self._fire(self._stop_hooks)
        return done

    def reset(self) -> None:
        """Rewind the clock to tick 0. Systems, hooks and RNG state are kept."""
        self._clock.reset()
        self._stop_requested = False
