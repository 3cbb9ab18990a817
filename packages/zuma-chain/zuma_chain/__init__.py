"""zuma-chain - Ball chain on an arc-length parameterised path."""
from __future__ import annotations

from zuma_chain import vec
from zuma_chain.chain import BallChain, ChainNode
from zuma_chain.path import Path, build_spiral
from zuma_chain.types import (
    MATCH_THRESHOLD,
    AdvanceResult,
    ChainConfig,
    HitResult,
    MatchResult,
    NodeId,
    NodeView,
    PathSample,
    SpiralConfig,
    UnknownNodeError,
)

__all__ = [
    "AdvanceResult",
    "BallChain",
    "ChainConfig",
    "ChainNode",
    "HitResult",
    "MATCH_THRESHOLD",
    "MatchResult",
    "NodeId",
    "NodeView",
    "Path",
    "PathSample",
    "SpiralConfig",
    "UnknownNodeError",
    "build_spiral",
    "vec",
]
