"""Tests for collision insertion into the chain."""
from __future__ import annotations

import pytest

from zuma_chain import BallChain, Path, UnknownNodeError

D = 32.0


def _chain(colors: list[str], start: float = 200.0) -> tuple[BallChain, list[int]]:
    """Chain on a straight line along +x; ``colors`` run head to tail."""
    chain = BallChain(Path([(0.0, 0.0), (2000.0, 0.0)]))
    ids = chain.spawn(colors, start_distance=start)
    return chain, ids


def _assert_linked(chain: BallChain) -> None:
    """Forward and backward walks visit the same nodes in mirrored order."""
    forward = [v.id for v in chain.nodes()]
    backward = []
    current = chain.tail
    while current is not None:
        backward.append(current)
        current = chain.links(current)[0]
    assert forward == list(reversed(backward))
    if forward:
        assert chain.head == forward[0]
        assert chain.tail == forward[-1]
        assert chain.links(chain.head)[0] is None
        assert chain.links(chain.tail)[1] is None


class TestInsertAhead:
    def test_positive_dot_inserts_ahead(self) -> None:
        chain, ids = _chain(["a", "b", "c"])
        target = chain.node(ids[1])
        result = chain.handle_hit((target.x + 10.0, target.y + 4.0), "x", ids[1])
        new = chain.node(result.node_id)
        assert new.distance == target.distance + D
        assert chain.links(result.node_id) == (ids[0], ids[1])
        assert chain.links(ids[0])[1] == result.node_id
        assert chain.links(ids[1])[0] == result.node_id
        _assert_linked(chain)

    def test_insert_ahead_of_head_becomes_head(self) -> None:
        chain, ids = _chain(["a", "b"])
        target = chain.node(ids[0])
        result = chain.handle_hit((target.x + 5.0, target.y), "x", ids[0])
        assert chain.head == result.node_id
        assert chain.links(result.node_id) == (None, ids[0])
        assert chain.node(result.node_id).distance == target.distance + D
        _assert_linked(chain)

    def test_new_node_position_sampled(self) -> None:
        chain, ids = _chain(["a"])
        result = chain.handle_hit((250.0, 0.0), "x", ids[0])
        view = chain.node(result.node_id)
        assert view.x == 232.0
        assert view.y == 0.0

    def test_insert_ahead_of_head_past_end_parks_on_end(self) -> None:
        """A ball inserted beyond the path end takes the end point, not (0, 0)."""
        chain = BallChain(Path([(0.0, 0.0), (1000.0, 0.0)]))
        ids = chain.spawn(["a", "b"], start_distance=940.0)
        head = chain.node(ids[0])
        result = chain.handle_hit((head.x + 5.0, head.y), "x", ids[0])
        view = chain.node(result.node_id)
        assert view.distance == 1004.0
        assert (view.x, view.y) == (1000.0, 0.0)
        assert view.angle == 0.0
        assert chain.advance(0.0).exited is True


class TestInsertBehind:
    def test_negative_dot_inserts_behind(self) -> None:
        chain, ids = _chain(["a", "b", "c"])
        target = chain.node(ids[1])
        result = chain.handle_hit((target.x - 10.0, target.y - 7.0), "x", ids[1])
        new = chain.node(result.node_id)
        assert new.distance == target.distance - D
        assert chain.links(result.node_id) == (ids[1], ids[2])
        assert chain.links(ids[1])[1] == result.node_id
        assert chain.links(ids[2])[0] == result.node_id
        _assert_linked(chain)

    def test_perpendicular_hit_inserts_behind(self) -> None:
        """A zero tangent projection counts as behind."""
        chain, ids = _chain(["a", "b"])
        target = chain.node(ids[0])
        result = chain.handle_hit((target.x, target.y + 20.0), "x", ids[0])
        assert chain.links(result.node_id) == (ids[0], ids[1])

    def test_insert_behind_tail_becomes_tail(self) -> None:
        chain, ids = _chain(["a", "b"])
        target = chain.node(ids[1])
        result = chain.handle_hit((target.x - 5.0, target.y), "x", ids[1])
        assert chain.tail == result.node_id
        assert chain.links(result.node_id) == (ids[1], None)
        _assert_linked(chain)

    def test_behind_tail_near_start_clamped(self) -> None:
        """Inserting behind a tail at 10 would land at -22; it is clamped to 0."""
        chain, ids = _chain(["a"], start=10.0)
        result = chain.handle_hit((0.0, 0.0), "x", ids[0])
        assert chain.node(result.node_id).distance == 0.0


class TestHitResult:
    def test_no_match_removes_nothing(self) -> None:
        chain, ids = _chain(["a", "b", "c"])
        target = chain.node(ids[2])
        result = chain.handle_hit((target.x - 1.0, target.y), "c", ids[2])
        assert result.removed_count == 0
        assert result.score_delta == 0
        assert result.runs == ()
        assert len(chain) == 4

    def test_insertion_completes_run(self) -> None:
        chain, ids = _chain(["g", "r", "r", "b"])
        target = chain.node(ids[1])
        result = chain.handle_hit((target.x + 3.0, target.y), "r", ids[1])
        assert result.removed_count == 3
        assert result.score_delta == 30
        assert result.runs == (3,)
        assert [v.id for v in chain.nodes()] == [ids[0], ids[3]]
        _assert_linked(chain)
        # Different colours either side: the gap stays open.
        assert chain.node(ids[0]).distance == 200.0 + 3 * D

    def test_removed_nodes_wait_for_prune(self) -> None:
        chain, ids = _chain(["g", "r", "r", "b"])
        target = chain.node(ids[2])
        chain.handle_hit((target.x - 3.0, target.y), "r", ids[2])
        assert chain.pending_removal() == 3
        assert chain.prune() == 3
        assert chain.pending_removal() == 0
        assert chain.prune() == 0

    def test_unknown_target(self) -> None:
        chain, _ = _chain(["a"])
        with pytest.raises(UnknownNodeError) as exc:
            chain.handle_hit((0.0, 0.0), "x", 99)
        assert exc.value.node_id == 99
        assert isinstance(exc.value, KeyError)

    def test_removed_target_rejected_before_prune(self) -> None:
        """A flagged node cannot be a hit target even while it is still in the arena."""
        chain, ids = _chain(["g", "r", "r", "b"])
        target = chain.node(ids[1])
        chain.handle_hit((target.x + 3.0, target.y), "r", ids[1])
        with pytest.raises(UnknownNodeError):
            chain.handle_hit((0.0, 0.0), "x", ids[1])

    def test_ids_are_never_reused(self) -> None:
        """Pruning frees arena slots but never hands an old id back out."""
        chain, ids = _chain(["g", "r", "r", "b"])
        target = chain.node(ids[1])
        first = chain.handle_hit((target.x + 3.0, target.y), "r", ids[1])
        chain.prune()
        tail = chain.node(ids[3])
        second = chain.handle_hit((tail.x - 3.0, tail.y), "b", ids[3])
        assert second.node_id > first.node_id
