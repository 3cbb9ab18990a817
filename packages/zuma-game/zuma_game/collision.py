"""Projectile versus chain hit queries."""
from __future__ import annotations

from typing import Iterable

from zuma_chain import NodeView, vec
from zuma_chain.vec import Vec2


def find_hit(position: Vec2, nodes: Iterable[NodeView], reach: float) -> NodeView | None:
    """Nearest ball whose centre is strictly closer than ``reach`` to ``position``.

    ``reach`` is normally one ball diameter: projectile and chain balls share
    a radius, so touching circles are exactly one diameter apart.
    """
    best: NodeView | None = None
    best_sq = reach * reach
    for node in nodes:
        d_sq = vec.distance_sq(position, (node.x, node.y))
        if d_sq < best_sq:
            best_sq = d_sq
            best = node
    return best


def out_of_bounds(position: Vec2, width: float, height: float, margin: float) -> bool:
    x, y = position
    return x < -margin or x > width + margin or y < -margin or y > height + margin
