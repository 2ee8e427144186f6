"""Tests for OneWayFlag and VersionVector."""

from cvrdt.one_way_flag import OneWayFlag
from cvrdt.version_vector import VersionVector


class TestOneWayFlag:
    def test_bottom_is_disabled(self):
        assert not OneWayFlag.bottom()

    def test_enable_is_permanent(self):
        on = OneWayFlag.bottom().enable()
        assert on.value
        assert on.merge(OneWayFlag.bottom()) == on
        assert OneWayFlag.bottom().merge(on) == on

    def test_enable_twice_is_same_value(self):
        on = OneWayFlag.bottom().enable()
        assert on.enable() is on

    def test_leq(self):
        assert OneWayFlag(False).leq(OneWayFlag(True))
        assert not OneWayFlag(True).leq(OneWayFlag(False))


class TestVersionVector:
    def test_missing_slots_are_zero(self):
        v = VersionVector({"A": 2})
        assert v.get("A") == 2
        assert v.get("B") == 0
        assert VersionVector({"A": 2, "B": 0}) == v

    def test_increment(self):
        v = VersionVector().increment("A").increment("A").increment("B")
        assert v.to_dict() == {"A": 2, "B": 1}

    def test_pointwise_order(self):
        low = VersionVector({"A": 1})
        high = VersionVector({"A": 1, "B": 1})
        assert low <= high
        assert low < high
        assert high.dominates(low)
        assert not low.dominates(high)
        assert not low < low

    def test_concurrent(self):
        a = VersionVector({"A": 2})
        b = VersionVector({"A": 1, "B": 1})
        assert a.concurrent_with(b)
        assert not a <= b
        assert not b <= a

    def test_merge_is_pointwise_max(self):
        a = VersionVector({"A": 2, "B": 1})
        b = VersionVector({"A": 1, "C": 3})
        assert a.merge(b) == VersionVector({"A": 2, "B": 1, "C": 3})

    def test_hashable(self):
        assert len({VersionVector({"A": 1}), VersionVector({"A": 1, "B": 0})}) == 1
