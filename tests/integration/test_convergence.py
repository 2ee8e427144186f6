"""Multi-replica convergence tests.

Each test drives several independent replicas, then delivers their
states to each other in shuffled order with duplicates, the way an
unordered at-least-once transport would, and checks that every replica
ends up in the same state.
"""

import random

import pytest

from cvrdt import (
    CRDTMap,
    GCounter,
    LWWRegister,
    MVRegister,
    ORSet,
    PNCounter,
    TwoPhaseSet,
    merge_all,
)

REPLICAS = ("A", "B", "C", "D")


def _deliver(states: dict, rng: random.Random, rounds: int = 3) -> dict:
    """Gossip full states between replicas in random order with duplicates."""
    states = dict(states)
    for _ in range(rounds):
        messages = [(src, dst) for src in states for dst in states if src != dst]
        messages += rng.sample(messages, k=len(messages) // 2)  # duplicates
        rng.shuffle(messages)
        for src, dst in messages:
            states[dst] = states[dst].merge(states[src])
    return states


class TestScenarios:
    """Concrete scenarios from the data type descriptions."""

    def test_grow_counter_sums_replicas(self):
        x = GCounter.bottom()
        for _ in range(3):
            x = x.increment("X")
        y = GCounter.bottom().increment("Y").increment("Y")

        assert x.merge(y).value == 5

    def test_two_phase_set_remove_is_permanent(self):
        replica_a = TwoPhaseSet.bottom().add("foo").remove("foo")
        replica_b = TwoPhaseSet.bottom().add("foo")

        assert replica_a.merge(replica_b).contains("foo") is False

    def test_or_set_add_wins(self):
        replica_a = ORSet.bottom().add("x", "A")
        replica_b = replica_a.remove("x")
        replica_a = replica_a.add("x", "A")

        assert replica_a.merge(replica_b).contains("x") is True
        assert replica_b.merge(replica_a).contains("x") is True

    def test_lww_register_tie_broken_by_replica(self):
        replica_a = LWWRegister.bottom().assign("foo", 5, "A")
        replica_b = LWWRegister.bottom().assign("bar", 5, "B")

        assert replica_a.merge(replica_b).value == "bar"

    def test_mv_register_exposes_concurrent_writes(self):
        shared = MVRegister.bottom().assign("initial", "A")
        assert shared.version.to_dict() == {"A": 1}

        replica_a = shared.assign("from-a", "A")
        replica_b = shared.assign("from-b", "B")

        assert replica_a.merge(replica_b).values == frozenset({"from-a", "from-b"})

    def test_map_keys_are_independent(self):
        replica_a = CRDTMap.bottom(PNCounter).update("apples", PNCounter.increment, "A", 3)
        replica_b = CRDTMap.bottom(PNCounter).update("pears", PNCounter.decrement, "B", 2)

        merged = replica_a.merge(replica_b)
        assert set(merged.keys()) == {"apples", "pears"}
        assert merged.get("apples") == replica_a.get("apples")
        assert merged.get("pears") == replica_b.get("pears")


class TestGossipConvergence:
    """Replicas converge regardless of delivery order or duplication."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_pn_counter(self, seed):
        rng = random.Random(seed)
        states = {r: PNCounter.bottom() for r in REPLICAS}
        expected = 0
        for _ in range(40):
            replica = rng.choice(REPLICAS)
            if rng.random() < 0.6:
                states[replica] = states[replica].increment(replica)
                expected += 1
            else:
                states[replica] = states[replica].decrement(replica)
                expected -= 1

        final = _deliver(states, rng)
        assert len(set(final.values())) == 1
        assert final["A"].value == expected

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_or_set_with_interleaved_gossip(self, seed):
        rng = random.Random(seed)
        states = {r: ORSet.bottom() for r in REPLICAS}
        for _ in range(60):
            replica = rng.choice(REPLICAS)
            roll = rng.random()
            if roll < 0.5:
                states[replica] = states[replica].add(rng.choice("abcde"), replica)
            elif roll < 0.8:
                states[replica] = states[replica].remove(rng.choice("abcde"))
            else:
                source = rng.choice(REPLICAS)
                states[replica] = states[replica].merge(states[source])

        final = _deliver(states, rng)
        assert len(set(final.values())) == 1
        assert final["A"] == merge_all(states.values())

    @pytest.mark.parametrize("seed", [1, 2])
    def test_map_of_or_sets(self, seed):
        rng = random.Random(seed)
        states = {r: CRDTMap.bottom(ORSet) for r in REPLICAS}
        for _ in range(60):
            replica = rng.choice(REPLICAS)
            key = rng.choice(("cart", "wishlist"))
            if rng.random() < 0.7:
                states[replica] = states[replica].update(key, ORSet.add, rng.choice("xyz"), replica)
            else:
                states[replica] = states[replica].update(key, ORSet.remove, rng.choice("xyz"))

        final = _deliver(states, rng)
        assert len(set(final.values())) == 1

    def test_lww_register_with_lamport_stamps(self):
        rng = random.Random(7)
        states = {r: LWWRegister.bottom() for r in REPLICAS}
        clocks = dict.fromkeys(REPLICAS, 0)
        last_write = None
        for step in range(30):
            replica = rng.choice(REPLICAS)
            clocks[replica] = max(clocks[replica], states[replica].timestamp or 0) + 1
            states[replica] = states[replica].assign(f"v{step}", clocks[replica], replica)
            stamp = (clocks[replica], replica)
            if last_write is None or stamp > last_write[0]:
                last_write = (stamp, f"v{step}")

        final = _deliver(states, rng)
        assert len(set(final.values())) == 1
        assert final["A"].value == last_write[1]
