"""Game-side state: projectiles, shooter and the level record."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from zuma_chain import BallChain, Path
from zuma_chain.types import Color
from zuma_chain.vec import Vec2


class Status(Enum):
    PLAYING = "playing"
    LOST = "lost"
    WON = "won"


@dataclass
class Projectile:
    """A straight-moving shot. Velocity is in units per second."""

    position: Vec2
    velocity: Vec2
    color: Color
    radius: float
    active: bool = True


@dataclass
class Shooter:
    position: Vec2
    current_color: Color
    next_color: Color
    angle: float = 0.0

    def swap(self) -> None:
        self.current_color, self.next_color = self.next_color, self.current_color


@dataclass
class Level:
    """Everything the per-tick systems read and write."""

    path: Path
    chain: BallChain
    shooter: Shooter
    projectiles: list[Projectile] = field(default_factory=list)
    score: int = 0
    status: Status = Status.PLAYING
