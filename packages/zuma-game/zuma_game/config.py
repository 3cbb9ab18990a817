"""Game configuration. Defaults describe the classic 800x600 spiral level."""
from __future__ import annotations

from dataclasses import dataclass, field

from zuma_chain import ChainConfig, SpiralConfig
from zuma_chain.types import Color

DEFAULT_PALETTE: tuple[Color, ...] = ("red", "green", "blue", "yellow")


@dataclass(frozen=True)
class GameConfig:
    """Tuning for one level.

    Speeds are in path/world units per second; the loop converts them to
    per-tick distances with the tick's ``dt``. At 60 tps the defaults equal
    0.5 units per frame for the chain and 12 for projectiles.
    """

    width: float = 800.0
    height: float = 600.0
    tps: int = 60
    chain: ChainConfig = field(default_factory=ChainConfig)
    spiral: SpiralConfig = field(default_factory=SpiralConfig)
    palette: tuple[Color, ...] = DEFAULT_PALETTE
    initial_balls: int = 20
    start_distance: float = 100.0
    chain_speed: float = 30.0
    projectile_speed: float = 720.0
    bounds_margin: float = 50.0
    shooter_position: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("playfield size must be positive")
        if self.tps <= 0:
            raise ValueError("tps must be positive")
        if not self.palette:
            raise ValueError("palette must not be empty")
        if self.initial_balls < 0:
            raise ValueError("initial_balls must not be negative")
        if self.start_distance < 0:
            raise ValueError("start_distance must not be negative")
        if self.chain_speed < 0:
            raise ValueError("chain_speed must not be negative")
        if self.projectile_speed <= 0:
            raise ValueError("projectile_speed must be positive")

    @property
    def shooter_origin(self) -> tuple[float, float]:
        if self.shooter_position is not None:
            return self.shooter_position
        return (self.width / 2, self.height / 2)
