"""2-D vector helpers operating on (x, y) tuples."""
from __future__ import annotations

import math

Vec2 = tuple[float, float]


def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Vec2, s: float) -> Vec2:
    return (v[0] * s, v[1] * s)


def dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def magnitude(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def distance_sq(a: Vec2, b: Vec2) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def distance(a: Vec2, b: Vec2) -> float:
    return math.sqrt(distance_sq(a, b))


def from_angle(angle: float, length: float = 1.0) -> Vec2:
    """Vector of the given length pointing along ``angle`` (radians)."""
    return (math.cos(angle) * length, math.sin(angle) * length)


def angle_to(origin: Vec2, target: Vec2) -> float:
    return math.atan2(target[1] - origin[1], target[0] - origin[0])
