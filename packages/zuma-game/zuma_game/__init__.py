"""zuma-game - Shooter, projectiles, score and outcome around the ball chain."""
from __future__ import annotations

from zuma_game.collision import find_hit, out_of_bounds
from zuma_game.components import Level, Projectile, Shooter, Status
from zuma_game.config import DEFAULT_PALETTE, GameConfig
from zuma_game.game import ZumaGame
from zuma_game.systems import (
    GAME_OVER,
    MATCH,
    SCORE,
    VICTORY,
    make_chain_system,
    make_hit_system,
    make_outcome_system,
    make_projectile_system,
    make_prune_system,
)

__all__ = [
    "DEFAULT_PALETTE",
    "GAME_OVER",
    "GameConfig",
    "Level",
    "MATCH",
    "Projectile",
    "SCORE",
    "Shooter",
    "Status",
    "VICTORY",
    "ZumaGame",
    "find_hit",
    "make_chain_system",
    "make_hit_system",
    "make_outcome_system",
    "make_projectile_system",
    "make_prune_system",
    "out_of_bounds",
]
