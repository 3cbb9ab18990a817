"""System factories for one level tick.

Registered in this order by :class:`zuma_game.game.ZumaGame`:
chain advance, projectile motion, hit resolution, pruning, outcome,
signal flush.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from zuma_chain import vec

from zuma_game.collision import find_hit, out_of_bounds
from zuma_game.components import Level, Status

if TYPE_CHECKING:
    from zuma_loop import SignalBus, TickContext

logger = logging.getLogger(__name__)

SCORE = "score"
MATCH = "match"
GAME_OVER = "game_over"
VICTORY = "victory"

LevelSystem = Callable[[Level, "TickContext"], None]


def make_chain_system(speed: float, bus: SignalBus) -> LevelSystem:
    """Advance the chain by ``speed`` units per second of tick time."""

    def chain_system(level: Level, ctx: TickContext) -> None:
        if level.status is not Status.PLAYING:
            return
        result = level.chain.advance(speed * ctx.dt)
        if result.exited:
            level.status = Status.LOST
            logger.info("chain reached the end of the path at tick %d", ctx.tick_number)
            bus.publish(GAME_OVER, score=level.score)

    return chain_system


def make_projectile_system(width: float, height: float, margin: float) -> LevelSystem:
    """Move projectiles in a straight line and drop those that leave the field."""

    def projectile_system(level: Level, ctx: TickContext) -> None:
        if level.status is not Status.PLAYING:
            return
        for shot in level.projectiles:
            shot.position = vec.add(shot.position, vec.scale(shot.velocity, ctx.dt))
            if out_of_bounds(shot.position, width, height, margin):
                shot.active = False
        level.projectiles = [shot for shot in level.projectiles if shot.active]

    return projectile_system


def make_hit_system(bus: SignalBus) -> LevelSystem:
    """Resolve projectile impacts against the chain.

    The chain snapshot is taken per projectile, so a shot never lands on a
    ball removed earlier in the same tick.
    """

    def hit_system(level: Level, ctx: TickContext) -> None:
        if level.status is not Status.PLAYING:
            return
        chain = level.chain
        reach = chain.config.ball_diameter
        survivors = []
        for shot in level.projectiles:
            target = find_hit(shot.position, chain.nodes(), reach)
            if target is None:
                survivors.append(shot)
                continue
            shot.active = False
            result = chain.handle_hit(shot.position, shot.color, target.id)
            if result.removed_count:
                level.score += result.score_delta
                bus.publish(MATCH, removed=result.removed_count, runs=result.runs)
                bus.publish(SCORE, delta=result.score_delta, total=level.score)
        level.projectiles = survivors

    return hit_system


def make_prune_system() -> LevelSystem:
    def prune_system(level: Level, ctx: TickContext) -> None:
        level.chain.prune()

    return prune_system


def make_outcome_system(bus: SignalBus) -> LevelSystem:
    """Declare the level won once the chain is empty."""

    def outcome_system(level: Level, ctx: TickContext) -> None:
        if level.status is Status.PLAYING and level.chain.is_empty():
            level.status = Status.WON
            logger.info("chain cleared at tick %d, score %d", ctx.tick_number, level.score)
            bus.publish(VICTORY, score=level.score)

    return outcome_system
