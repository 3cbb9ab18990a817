"""BallChain - ordered chain of balls sliding along a path.

Nodes live in an arena keyed by integer id. Links between neighbours are
stored as ids: ``prev`` points toward the head (higher distance), ``next``
toward the tail (lower distance). Every method that changes adjacency also
updates ``head``/``tail`` before returning.

Removed nodes are only flagged; they stay in the arena until :meth:`prune`
so that callers iterating a snapshot mid-tick never see ids vanish.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from zuma_chain import vec
from zuma_chain.path import Path
from zuma_chain.types import (
    MATCH_THRESHOLD,
    AdvanceResult,
    ChainConfig,
    Color,
    HitResult,
    MatchResult,
    NodeId,
    NodeView,
    UnknownNodeError,
)
from zuma_chain.vec import Vec2

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ChainNode:
    id: NodeId
    color: Color
    distance: float
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0
    prev: NodeId | None = None
    next: NodeId | None = None
    marked_for_removal: bool = False

    @property
    def position(self) -> Vec2:
        return (self.x, self.y)

    def view(self) -> NodeView:
        return NodeView(self.id, self.color, self.x, self.y, self.angle, self.distance)


class BallChain:
    def __init__(self, path: Path, config: ChainConfig | None = None) -> None:
        self._path = path
        self._config = config or ChainConfig()
        self._diameter = self._config.ball_diameter
        self._nodes: dict[NodeId, ChainNode] = {}
        self._next_id: NodeId = 0
        self._head: NodeId | None = None
        self._tail: NodeId | None = None

    # -- read side --

    @property
    def path(self) -> Path:
        return self._path

    @property
    def config(self) -> ChainConfig:
        return self._config

    @property
    def head(self) -> NodeId | None:
        return self._head

    @property
    def tail(self) -> NodeId | None:
        return self._tail

    def is_empty(self) -> bool:
        return self._head is None

    def __len__(self) -> int:
        return sum(1 for _ in self._walk())

    def _walk(self) -> Iterator[ChainNode]:
        current = self._head
        while current is not None:
            node = self._nodes[current]
            yield node
            current = node.next

    def _get(self, node_id: NodeId) -> ChainNode:
        node = self._nodes.get(node_id)
        if node is None or node.marked_for_removal:
            raise UnknownNodeError(node_id, f"Node {node_id} is not in the chain")
        return node

    def node(self, node_id: NodeId) -> NodeView:
        return self._get(node_id).view()

    def links(self, node_id: NodeId) -> tuple[NodeId | None, NodeId | None]:
        """(prev, next) ids of a live node."""
        node = self._get(node_id)
        return node.prev, node.next

    def nodes(self) -> list[NodeView]:
        """Live nodes ordered head to tail."""
        return [node.view() for node in self._walk()]

    def colors(self) -> set[Color]:
        return {node.color for node in self._walk()}

    def pending_removal(self) -> int:
        return sum(1 for node in self._nodes.values() if node.marked_for_removal)

    # -- construction --

    def _new_node(self, color: Color, distance: float) -> ChainNode:
        node = ChainNode(id=self._next_id, color=color, distance=max(0.0, distance))
        self._next_id += 1
        self._nodes[node.id] = node
        # A ball born at or past the end has no sample; park it on the hole.
        node.x, node.y, node.angle = self._path.end_sample
        self._place(node)
        return node

    def _place(self, node: ChainNode) -> None:
        sample = self._path.sample_at(node.distance)
        if sample is not None:
            node.x, node.y, node.angle = sample

    def append(self, color: Color, distance: float | None = None) -> NodeId:
        """Add a ball behind the current tail. Never triggers matching.

        The ball must land strictly behind the tail once clamped to the path
        start; raises ``ValueError`` otherwise.
        """
        tail = self._nodes[self._tail] if self._tail is not None else None
        if distance is None:
            distance = tail.distance - self._diameter if tail is not None else 0.0
        if tail is not None and max(0.0, distance) >= tail.distance:
            raise ValueError(
                f"distance {distance} is not behind the tail at {tail.distance}"
            )
        node = self._new_node(color, distance)
        if tail is None:
            self._head = node.id
        else:
            tail.next = node.id
            node.prev = tail.id
        self._tail = node.id
        return node.id

    def spawn(self, colors: Iterable[Color], start_distance: float = 0.0) -> list[NodeId]:
        """Build a chain head first so the tail ends up at ``start_distance``."""
        ordered = list(colors)
        n = len(ordered)
        return [
            self.append(color, start_distance + (n - 1 - i) * self._diameter)
            for i, color in enumerate(ordered)
        ]

    # -- per tick --

    def advance(self, speed: float) -> AdvanceResult:
        """Push the chain forward from the tail by ``speed`` path units."""
        if speed < 0:
            raise ValueError("speed must not be negative")
        if self._tail is None:
            return AdvanceResult(exited=False)

        current = self._nodes[self._tail]
        current.distance += speed
        while current.prev is not None:
            ahead = self._nodes[current.prev]
            min_dist = current.distance + self._diameter
            if ahead.distance < min_dist:
                ahead.distance = min_dist
            current = ahead

        for node in self._walk():
            self._place(node)

        head = self._nodes[self._head]  # type: ignore[index]
        return AdvanceResult(exited=head.distance >= self._path.total_length)

    def prune(self) -> int:
        """Drop flagged nodes from the arena. Returns how many were dropped."""
        dead = [nid for nid, node in self._nodes.items() if node.marked_for_removal]
        for nid in dead:
            del self._nodes[nid]
        return len(dead)

    # -- collision insertion --

    def handle_hit(self, hit_position: Vec2, color: Color, target_id: NodeId) -> HitResult:
        """Insert a ball of ``color`` next to ``target_id`` and resolve matches.

        The side is picked by projecting the impact onto the target's
        tangent: a positive projection lands ahead of the target (toward
        head), anything else behind it.
        """
        target = self._get(target_id)
        tangent = vec.from_angle(target.angle)
        to_hit = vec.sub(hit_position, target.position)

        if vec.dot(tangent, to_hit) > 0:
            node = self._insert_ahead(target, color)
        else:
            node = self._insert_behind(target, color)

        result = self.check_matches(node.id)
        return HitResult(
            node_id=node.id,
            removed_count=result.removed_count,
            score_delta=result.score_delta,
            runs=result.runs,
        )

    def _insert_ahead(self, target: ChainNode, color: Color) -> ChainNode:
        node = self._new_node(color, target.distance + self._diameter)
        node.next = target.id
        node.prev = target.prev
        if target.prev is not None:
            self._nodes[target.prev].next = node.id
        else:
            self._head = node.id
        target.prev = node.id
        return node

    def _insert_behind(self, target: ChainNode, color: Color) -> ChainNode:
        node = self._new_node(color, target.distance - self._diameter)
        node.prev = target.id
        node.next = target.next
        if target.next is not None:
            self._nodes[target.next].prev = node.id
        else:
            self._tail = node.id
        target.next = node.id
        return node

    # -- matching --

    def find_run(self, seed_id: NodeId) -> tuple[NodeId, NodeId, int]:
        """Maximal same-colour run through ``seed_id`` as (start, end, count).

        ``start`` is the run's head-most node, ``end`` its tail-most.
        """
        seed = self._get(seed_id)
        count = 1

        start = seed
        while start.prev is not None:
            ahead = self._nodes[start.prev]
            if ahead.color != seed.color:
                break
            start = ahead
            count += 1

        end = seed
        while end.next is not None:
            behind = self._nodes[end.next]
            if behind.color != seed.color:
                break
            end = behind
            count += 1

        return start.id, end.id, count

    def check_matches(self, seed_id: NodeId) -> MatchResult:
        """Remove the run through ``seed_id`` if it matches, then cascade.

        Each removal tries a magnetic snap across the gap it leaves; a
        successful snap re-seeds the check at the front boundary. The loop
        stops at the first run shorter than the match threshold or the
        first gap that stays open.
        """
        result = MatchResult()
        seed: NodeId | None = seed_id
        while seed is not None:
            start_id, end_id, count = self.find_run(seed)
            if count < MATCH_THRESHOLD:
                break

            front = self._nodes[start_id].prev
            back = self._nodes[end_id].next
            self.remove_range(start_id, end_id)
            result = result.merge(
                MatchResult(
                    removed_count=count,
                    score_delta=count * self._config.points_per_ball,
                    runs=(count,),
                )
            )
            logger.debug("matched %d balls (run %d)", count, len(result.runs))

            seed = front if self._snap(front, back) else None

        if len(result.runs) > 1:
            logger.debug("cascade of %d runs removed %d balls", len(result.runs), result.removed_count)
        return result

    def remove_range(self, start_id: NodeId, end_id: NodeId) -> int:
        """Splice ``start_id``..``end_id`` (head side to tail side) out of the chain."""
        start = self._get(start_id)
        end = self._get(end_id)
        before = start.prev
        after = end.next

        if before is not None:
            self._nodes[before].next = after
        else:
            self._head = after
        if after is not None:
            self._nodes[after].prev = before
        else:
            self._tail = before

        removed = 0
        current: ChainNode | None = start
        while current is not None:
            current.marked_for_removal = True
            removed += 1
            if current.id == end_id:
                break
            current = self._nodes[current.next] if current.next is not None else None
        return removed

    def _snap(self, front: NodeId | None, back: NodeId | None) -> bool:
        if front is None or back is None:
            return False
        front_node = self._nodes[front]
        back_node = self._nodes[back]
        if front_node.color != back_node.color:
            return False

        shift = (back_node.distance + self._diameter) - front_node.distance
        current: ChainNode | None = front_node
        while current is not None:
            current.distance += shift
            self._place(current)
            current = self._nodes[current.prev] if current.prev is not None else None
        return True

    def close_gap(self, front_id: NodeId | None, back_id: NodeId | None) -> MatchResult:
        """Pull the front segment back onto the back segment when colours agree.

        ``front_id`` is the node ahead of the gap, ``back_id`` the node behind
        it. A gap with a missing side or differing colours stays open.
        """
        front = self._get(front_id).id if front_id is not None else None
        back = self._get(back_id).id if back_id is not None else None
        if not self._snap(front, back):
            return MatchResult()
        return self.check_matches(front)  # type: ignore[arg-type]
