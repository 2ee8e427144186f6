"""Tests for GSet CvRDT."""

from cvrdt.g_set import GSet
from cvrdt.protocol import CvRDT


class TestGSet:
    def test_bottom_is_empty(self):
        s = GSet.bottom()
        assert len(s) == 0
        assert s.elements == frozenset()

    def test_implements_cvrdt_protocol(self):
        assert isinstance(GSet.bottom(), CvRDT)

    def test_add(self):
        s = GSet.bottom().add("apple")
        assert "apple" in s
        assert s.contains("apple")
        assert not s.contains("banana")

    def test_add_is_idempotent(self):
        s = GSet.bottom().add("apple")
        assert s.add("apple") == s

    def test_merge_is_union(self):
        a = GSet.bottom().add("apple")
        b = GSet.bottom().add("banana")
        assert a.merge(b).elements == frozenset({"apple", "banana"})

    def test_leq_is_subset(self):
        a = GSet(["apple"])
        b = GSet(["apple", "banana"])
        assert a.leq(b)
        assert not b.leq(a)

    def test_iter(self):
        assert set(GSet(["apple", "banana"])) == {"apple", "banana"}
