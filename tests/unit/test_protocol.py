"""Tests for the shared contract helpers."""

import pytest

import cvrdt
from cvrdt import GCounter, GSet, ORSet, merge, merge_all
from cvrdt.protocol import CvRDT, require_same_type


class TestRequireSameType:
    def test_same_type_passes(self):
        require_same_type(GSet.bottom(), GSet.bottom())

    def test_mismatch_names_both_types(self):
        with pytest.raises(TypeError, match="GSet with ORSet"):
            require_same_type(GSet.bottom(), ORSet.bottom())


class TestMergeHelpers:
    def test_merge_function(self):
        a = GSet.bottom().add(1)
        b = GSet.bottom().add(2)
        assert merge(a, b) == a.merge(b)

    def test_merge_all_any_order_and_duplicates(self):
        states = [GCounter.bottom().increment(r, n) for r, n in [("A", 1), ("B", 2), ("C", 3)]]
        forward = merge_all(states)
        shuffled = merge_all([states[2], states[0], states[2], states[1], states[0]])
        assert forward == shuffled
        assert forward.value == 6

    def test_merge_all_empty_uses_bottom(self):
        assert merge_all([], bottom=GSet.bottom) == GSet.bottom()

    def test_merge_all_empty_without_bottom_raises(self):
        with pytest.raises(ValueError):
            merge_all([])

    def test_plain_objects_are_not_cvrdts(self):
        assert not isinstance(object(), CvRDT)


class TestExportedTypes:
    @pytest.mark.parametrize(
        "name",
        [
            "GCounter",
            "PNCounter",
            "GSet",
            "TwoPhaseSet",
            "LWWRegister",
            "LWWFlag",
            "OneWayFlag",
            "VersionVector",
            "MVRegister",
            "ORSet",
            "CRDTMap",
        ],
    )
    def test_value_classes_are_documented(self, name):
        cls = getattr(cvrdt, name)
        assert cls.__doc__ and cls.__doc__.strip()
