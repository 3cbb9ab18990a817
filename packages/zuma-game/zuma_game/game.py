"""ZumaGame - one level of the ball-matching game driven by a GameLoop."""
from __future__ import annotations

import logging
from typing import Any, Callable

from zuma_chain import BallChain, Path, build_spiral, vec
from zuma_chain.types import Color
from zuma_loop import GameLoop, SignalBus, make_signal_system

from zuma_game.components import Level, Projectile, Shooter, Status
from zuma_game.config import GameConfig
from zuma_game.systems import (
    make_chain_system,
    make_hit_system,
    make_outcome_system,
    make_projectile_system,
    make_prune_system,
)

logger = logging.getLogger(__name__)


class ZumaGame:
    """Owns the level state, the shooter and the score.

    Input is pushed in through :meth:`aim_at`, :meth:`shoot` and
    :meth:`swap`; time is pushed in through :meth:`step` or :meth:`run`.
    Score and outcome changes are announced on the signal bus at the end of
    the tick that caused them.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None) -> None:
        self._config = config or GameConfig()
        self._path = build_spiral(self._config.spiral)
        self._bus = SignalBus()

        first = self._config.palette[0]
        self._level = Level(
            path=self._path,
            chain=BallChain(self._path, self._config.chain),
            shooter=Shooter(self._config.shooter_origin, first, first),
        )
        self._loop: GameLoop[Level] = GameLoop(self._level, tps=self._config.tps, seed=seed)

        self._loop.add_system(make_chain_system(self._config.chain_speed, self._bus))
        self._loop.add_system(
            make_projectile_system(
                self._config.width, self._config.height, self._config.bounds_margin
            )
        )
        self._loop.add_system(make_hit_system(self._bus))
        self._loop.add_system(make_prune_system())
        self._loop.add_system(make_outcome_system(self._bus))
        self._loop.add_system(make_signal_system(self._bus))

        self._populate()

    # -- read side --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def path(self) -> Path:
        return self._path

    @property
    def chain(self) -> BallChain:
        return self._level.chain

    @property
    def level(self) -> Level:
        return self._level

    @property
    def shooter(self) -> Shooter:
        return self._level.shooter

    @property
    def projectiles(self) -> list[Projectile]:
        return list(self._level.projectiles)

    @property
    def score(self) -> int:
        return self._level.score

    @property
    def status(self) -> Status:
        return self._level.status

    @property
    def loop(self) -> GameLoop[Level]:
        return self._loop

    @property
    def seed(self) -> int:
        return self._loop.seed

    # -- setup --

    def _populate(self) -> None:
        rng = self._loop.random
        palette = self._config.palette
        colors = [rng.choice(palette) for _ in range(self._config.initial_balls)]
        self._level.chain.spawn(colors, self._config.start_distance)
        self._level.shooter.current_color = self._pick_color()
        self._level.shooter.next_color = self._pick_color()
        logger.info(
            "level started: %d balls, path length %.1f, seed %d",
            len(colors),
            self._path.total_length,
            self._loop.seed,
        )

    def _pick_color(self) -> Color:
        """Random colour still present on the chain, or any palette colour."""
        present = self._level.chain.colors()
        choices = [c for c in self._config.palette if c in present] or list(self._config.palette)
        return self._loop.random.choice(choices)

    def restart(self) -> None:
        """Discard the chain and start the level over with score 0."""
        self._level.chain = BallChain(self._path, self._config.chain)
        self._level.projectiles.clear()
        self._level.score = 0
        self._level.status = Status.PLAYING
        self._bus.clear()
        self._loop.reset()
        self._populate()

    # -- input --

    def aim_at(self, x: float, y: float) -> float:
        shooter = self._level.shooter
        shooter.angle = vec.angle_to(shooter.position, (x, y))
        return shooter.angle

    def swap(self) -> None:
        self._level.shooter.swap()

    def shoot(self) -> Projectile | None:
        """Fire the current colour along the shooter's angle.

        Ignored once the level is over.
        """
        if self._level.status is not Status.PLAYING:
            return None
        shooter = self._level.shooter
        shot = Projectile(
            position=shooter.position,
            velocity=vec.from_angle(shooter.angle, self._config.projectile_speed),
            color=shooter.current_color,
            radius=self._config.chain.ball_radius,
        )
        self._level.projectiles.append(shot)
        shooter.current_color = shooter.next_color
        shooter.next_color = self._pick_color()
        return shot

    # -- time --

    def step(self, dt: float | None = None) -> None:
        self._loop.step(dt)

    def run(self, n: int) -> int:
        return self._loop.run(n)

    def subscribe(self, signal_name: str, handler: Callable[[str, dict[str, Any]], None]) -> None:
        self._bus.subscribe(signal_name, handler)

    def unsubscribe(self, signal_name: str, handler: Callable[[str, dict[str, Any]], None]) -> None:
        self._bus.unsubscribe(signal_name, handler)
