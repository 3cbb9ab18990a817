"""zuma-loop - Fixed or variable timestep host loop with a signal bus."""

from zuma_loop.clock import Clock
from zuma_loop.loop import GameLoop
from zuma_loop.signals import SignalBus, make_signal_system
from zuma_loop.types import System, TickContext

__all__ = [
    "Clock",
    "GameLoop",
    "SignalBus",
    "System",
    "TickContext",
    "make_signal_system",
]
