"""Arc-length parameterised polyline paths."""
from __future__ import annotations

import math
from bisect import bisect_right
from typing import Iterable

from zuma_chain import vec
from zuma_chain.types import PathSample, SpiralConfig
from zuma_chain.vec import Vec2


class Path:
    """Immutable polyline with precomputed cumulative segment lengths."""

    def __init__(self, points: Iterable[Vec2]) -> None:
        pts = tuple((float(x), float(y)) for x, y in points)
        if len(pts) < 2:
            raise ValueError("a path needs at least two points")

        cumulative = [0.0]
        total = 0.0
        for a, b in zip(pts, pts[1:]):
            total += vec.distance(a, b)
            cumulative.append(total)

        self._points = pts
        self._distances = tuple(cumulative)
        self._total_length = total

    @property
    def points(self) -> tuple[Vec2, ...]:
        return self._points

    @property
    def distances(self) -> tuple[float, ...]:
        return self._distances

    @property
    def total_length(self) -> float:
        return self._total_length

    @property
    def start(self) -> Vec2:
        return self._points[0]

    @property
    def end(self) -> Vec2:
        return self._points[-1]

    @property
    def end_sample(self) -> PathSample:
        """The path's end point with the tangent of its last non-empty segment."""
        for p1, p2 in zip(reversed(self._points[:-1]), reversed(self._points[1:])):
            if p1 != p2:
                break
        x, y = self._points[-1]
        return PathSample(x, y, math.atan2(p2[1] - p1[1], p2[0] - p1[0]))

    def sample_at(self, distance: float) -> PathSample | None:
        """Position and tangent angle ``distance`` along the path.

        Returns None once ``distance`` reaches the end of the path. Negative
        distances are clamped to the start.
        """
        if distance < 0:
            distance = 0.0
        if distance >= self._total_length:
            return None

        # Rightmost segment whose start is <= distance; zero-length segments
        # sharing a cumulative value are skipped this way.
        index = bisect_right(self._distances, distance) - 1
        index = min(index, len(self._points) - 2)

        p1 = self._points[index]
        p2 = self._points[index + 1]
        segment = self._distances[index + 1] - self._distances[index]
        progress = (distance - self._distances[index]) / segment if segment > 0 else 0.0

        x = p1[0] + (p2[0] - p1[0]) * progress
        y = p1[1] + (p2[1] - p1[1]) * progress
        angle = math.atan2(p2[1] - p1[1], p2[0] - p1[0])
        return PathSample(x, y, angle)

    def __len__(self) -> int:
        return len(self._points)


def spiral_points(config: SpiralConfig) -> list[Vec2]:
    cx, cy = config.center
    total_angle = config.loops * math.pi * 2
    points: list[Vec2] = []
    for i in range(config.steps + 1):
        t = i / config.steps
        radius = config.start_radius - (config.start_radius - config.end_radius) * t
        # Offset by a quarter turn so the spiral starts at the top.
        angle = t * total_angle - math.pi / 2
        points.append((cx + math.cos(angle) * radius, cy + math.sin(angle) * radius))
    return points


def build_spiral(config: SpiralConfig | None = None) -> Path:
    """Inward spiral from ``start_radius`` to ``end_radius`` around ``center``."""
    return Path(spiral_points(config or SpiralConfig()))
