"""Replica Convergence Demo: shopping carts across a partition.

Architecture::

    Writes ──► replica-A          replica-B ◄── Writes
                    ╲  (partition)  ╱
                     ╲            ╱
                      replica-C ◄── Writes

Demonstrates:
1. Every replica accepts writes on its own (no coordination).
2. While partitioned, carts and counters diverge.
3. After the partition heals, states are delivered out of order and with
   duplicates, and every replica still converges to the same value.
4. A concurrent add and remove of the same item resolves as add-wins.
"""

import random

import cvrdt
from cvrdt import CRDTMap, MVRegister, ORSet, PNCounter, merge_all

REPLICAS = ("replica-A", "replica-B", "replica-C")


def main(seed: int = 42):
    cvrdt.configure_from_env()
    rng = random.Random(seed)

    carts = {r: CRDTMap.bottom(ORSet) for r in REPLICAS}
    stock = {r: PNCounter.bottom() for r in REPLICAS}
    title = {r: MVRegister.bottom().assign("Weekly order", REPLICAS[0]) for r in REPLICAS}

    # --- Phase 1: partitioned writes ---
    for _ in range(20):
        replica = rng.choice(REPLICAS)
        item = rng.choice(("milk", "eggs", "bread", "coffee"))
        if rng.random() < 0.75:
            carts[replica] = carts[replica].update("alice", ORSet.add, item, replica)
            stock[replica] = stock[replica].decrement(replica)
        else:
            carts[replica] = carts[replica].update("alice", ORSet.remove, item)
            stock[replica] = stock[replica].increment(replica)

    # Two replicas rename the order without seeing each other
    title["replica-A"] = title["replica-A"].assign("Groceries", "replica-A")
    title["replica-B"] = title["replica-B"].assign("Shopping", "replica-B")

    print("=" * 60)
    print("Replica Convergence Demo")
    print("=" * 60)
    print()
    print("During partition:")
    for replica in REPLICAS:
        print(
            f"  {replica}: cart={sorted(carts[replica].get('alice'))} "
            f"stock delta={stock[replica].value}"
        )

    # --- Phase 2: heal, deliver shuffled states with duplicates ---
    messages = [(src, dst) for src in REPLICAS for dst in REPLICAS if src != dst] * 2
    rng.shuffle(messages)
    for src, dst in messages:
        carts[dst] = carts[dst].merge(carts[src])
        stock[dst] = stock[dst].merge(stock[src])
        title[dst] = title[dst].merge(title[src])

    print()
    print("After healing:")
    for replica in REPLICAS:
        print(
            f"  {replica}: cart={sorted(carts[replica].get('alice'))} "
            f"stock delta={stock[replica].value} titles={sorted(title[replica].values)}"
        )

    converged = (
        len(set(carts.values())) == 1
        and len(set(stock.values())) == 1
        and len(set(title.values())) == 1
    )
    print()
    print(f"Converged: {converged}")
    print(f"Same as a one-shot merge: {carts[REPLICAS[0]] == merge_all(carts.values())}")
    return converged


if __name__ == "__main__":
    main()
