"""Configuration, result types and errors for the ball chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, NamedTuple

NodeId = int
Color = Hashable

MATCH_THRESHOLD = 3
"""Minimum run length that counts as a match. Fixed game policy."""


class UnknownNodeError(KeyError):
    """Raised when operating on a node that is not live in the chain."""

    def __init__(self, node_id: int, message: str) -> None:
        self.node_id = node_id
        super().__init__(message)


@dataclass(frozen=True)
class SpiralConfig:
    center: tuple[float, float] = (400.0, 300.0)
    start_radius: float = 270.0
    end_radius: float = 50.0
    loops: float = 3.0
    steps: int = 300

    def __post_init__(self) -> None:
        if self.steps < 1:
            raise ValueError("steps must be at least 1")
        if self.loops <= 0:
            raise ValueError("loops must be positive")
        if self.start_radius < 0 or self.end_radius < 0:
            raise ValueError("radii must not be negative")
        if self.start_radius == 0 and self.end_radius == 0:
            raise ValueError("spiral needs a non-zero radius")


@dataclass(frozen=True)
class ChainConfig:
    ball_radius: float = 16.0
    points_per_ball: int = 10

    def __post_init__(self) -> None:
        if self.ball_radius <= 0:
            raise ValueError("ball_radius must be positive")
        if self.points_per_ball < 0:
            raise ValueError("points_per_ball must not be negative")

    @property
    def ball_diameter(self) -> float:
        return self.ball_radius * 2


class PathSample(NamedTuple):
    x: float
    y: float
    angle: float


class NodeView(NamedTuple):
    """Read-only snapshot of one ball, handed to renderers and hit queries."""

    id: NodeId
    color: Color
    x: float
    y: float
    angle: float
    distance: float


@dataclass(frozen=True)
class AdvanceResult:
    exited: bool


@dataclass(frozen=True)
class MatchResult:
    removed_count: int = 0
    score_delta: int = 0
    runs: tuple[int, ...] = ()

    def merge(self, other: MatchResult) -> MatchResult:
        return MatchResult(
            removed_count=self.removed_count + other.removed_count,
            score_delta=self.score_delta + other.score_delta,
            runs=self.runs + other.runs,
        )


@dataclass(frozen=True)
class HitResult:
    node_id: NodeId
    removed_count: int
    score_delta: int
    runs: tuple[int, ...]
