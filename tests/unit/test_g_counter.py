"""Tests for GCounter CvRDT."""

import pytest

from cvrdt.g_counter import GCounter
from cvrdt.protocol import CvRDT


class TestGCounterCreation:
    """Tests for GCounter construction."""

    def test_bottom_value_is_zero(self):
        assert GCounter.bottom().value == 0

    def test_implements_cvrdt_protocol(self):
        assert isinstance(GCounter.bottom(), CvRDT)

    def test_zero_slots_are_dropped(self):
        assert GCounter({"node-a": 0}) == GCounter.bottom()

    def test_repr(self):
        c = GCounter.bottom().increment("node-a", 2)
        assert "2" in repr(c)


class TestGCounterIncrement:
    """Tests for increment operations."""

    def test_single_increment(self):
        assert GCounter.bottom().increment("node-a").value == 1

    def test_increment_by_n(self):
        assert GCounter.bottom().increment("node-a", 5).value == 5

    def test_increment_returns_new_value(self):
        c = GCounter.bottom()
        c2 = c.increment("node-a")
        assert c.value == 0
        assert c2.value == 1

    def test_increment_non_positive_raises(self):
        with pytest.raises(ValueError, match="positive"):
            GCounter.bottom().increment("node-a", 0)

    def test_replica_value(self):
        c = GCounter.bottom().increment("node-a", 3)
        assert c.replica_value("node-a") == 3
        assert c.replica_value("node-b") == 0


class TestGCounterMerge:
    """Tests for merge operations."""

    def test_two_replicas_sum(self):
        x = GCounter.bottom()
        for _ in range(3):
            x = x.increment("X")
        y = GCounter.bottom().increment("Y").increment("Y")

        assert x.merge(y).value == 5

    def test_merge_takes_max_per_replica(self):
        """Two states of the same replica: the later one wins, nothing is summed."""
        older = GCounter.bottom().increment("node-a", 3)
        newer = older.increment("node-a", 2)

        assert older.merge(newer).value == 5
        assert newer.merge(older) == newer

    def test_merge_is_idempotent(self):
        a = GCounter.bottom().increment("node-a", 5)
        b = GCounter.bottom().increment("node-b", 3)
        assert a.merge(b).merge(b) == a.merge(b)

    def test_merge_is_commutative(self):
        a = GCounter.bottom().increment("node-a", 5)
        b = GCounter.bottom().increment("node-b", 3)
        assert a.merge(b) == b.merge(a)

    def test_merge_is_associative(self):
        a = GCounter.bottom().increment("node-a", 1)
        b = GCounter.bottom().increment("node-b", 2)
        c = GCounter.bottom().increment("node-c", 3)
        assert a.merge(b).merge(c) == a.merge(b.merge(c))
        assert a.merge(b).merge(c).value == 6

    def test_merge_with_other_type_raises(self):
        with pytest.raises(TypeError, match="GCounter"):
            GCounter.bottom().merge(object())


class TestGCounterOrder:
    """Tests for the partial order."""

    def test_increment_moves_up(self):
        c = GCounter.bottom().increment("node-a")
        assert GCounter.bottom().leq(c)
        assert not c.leq(GCounter.bottom())

    def test_concurrent_counters_are_incomparable(self):
        a = GCounter.bottom().increment("node-a")
        b = GCounter.bottom().increment("node-b")
        assert not a.leq(b)
        assert not b.leq(a)

    def test_equality_and_hash(self):
        a = GCounter({"node-a": 2})
        b = GCounter.bottom().increment("node-a", 2)
        assert a == b
        assert hash(a) == hash(b)
