"""Shared type aliases for the host loop."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import Callable, TypeVar

S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


System = Callable[[S, TickContext], None]
"""A system receives the loop's state object and the current tick context."""
