"""Randomized conformance checks for the semilattice contract.

A :class:`Lattice` describes a CvRDT to the checker: how to build its
bottom value and which local mutators exist. :func:`check_laws` then
generates reachable values and verifies, for every trial:

- idempotence: ``a.merge(a) == a``
- commutativity: ``a.merge(b) == b.merge(a)``
- associativity: ``a.merge(b).merge(c) == a.merge(b.merge(c))``
- identity: ``a.merge(bottom) == a == bottom.merge(a)``
- monotonicity: for every mutator, ``a.merge(mutated) == mutated``
- order: ``a.leq(b)`` agrees with ``a.merge(b) == b``

Reachable values come from a simulated history: a few replicas start at
bottom, apply random mutators to their own state and merge each other's
states at random. ``a``, ``b`` and ``c`` are drawn from the same
history, so they respect the invariants a real deployment would (unique
OR-Set tags, unique LWW stamps).

Usage in a test suite::

    @pytest.mark.parametrize("lattice", STANDARD_LATTICES, ids=lambda l: l.name)
    def test_laws(lattice):
        assert_laws(lattice, LawConfig(trials=50, seed=7))
"""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cvrdt.crdt_map import CRDTMap
from cvrdt.g_counter import GCounter
from cvrdt.g_set import GSet
from cvrdt.lww_flag import LWWFlag
from cvrdt.lww_register import LWWRegister
from cvrdt.mv_register import MVRegister
from cvrdt.one_way_flag import OneWayFlag
from cvrdt.or_set import ORSet
from cvrdt.pn_counter import PNCounter
from cvrdt.two_phase_set import TwoPhaseSet
from cvrdt.version_vector import VersionVector

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LawConfig:
    """Knobs for :func:`check_laws`.

    Attributes:
        trials: Number of ``(a, b, c)`` triples checked.
        steps: Local operations and merges per simulated history.
        replicas: Replica identifiers used by the simulation.
        merge_probability: Chance that a step is a merge instead of a mutation.
        seed: Seed for the random generator (None = nondeterministic).
    """

    trials: int = 100
    steps: int = 12
    replicas: tuple[Any, ...] = ("A", "B", "C")
    merge_probability: float = 0.3
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.trials < 1:
            raise ValueError(f"trials must be >= 1, got {self.trials}")
        if self.steps < 0:
            raise ValueError(f"steps must be >= 0, got {self.steps}")
        if not self.replicas:
            raise ValueError("at least one replica is required")
        if not 0.0 <= self.merge_probability <= 1.0:
            raise ValueError(f"merge_probability must be in [0, 1], got {self.merge_probability}")

    @classmethod
    def from_env(cls, **overrides: Any) -> LawConfig:
        """Build a config from ``CVRDT_LAW_TRIALS`` and ``CVRDT_LAW_SEED``.

        Keyword arguments take precedence over the environment.
        """
        values: dict[str, Any] = {}
        if trials := os.environ.get("CVRDT_LAW_TRIALS"):
            values["trials"] = int(trials)
        if seed := os.environ.get("CVRDT_LAW_SEED"):
            values["seed"] = int(seed)
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class Lattice:
    """How to build and mutate one CvRDT type.

    Attributes:
        name: Label used in reports and test ids.
        bottom: Zero-argument factory for the bottom value.
        mutators: name -> ``f(value, replica, rng)`` returning a new value.
            ``replica`` is the replica that owns ``value``.
    """

    name: str
    bottom: Callable[[], Any]
    mutators: Mapping[str, Callable[[Any, Any, random.Random], Any]]


@dataclass(frozen=True)
class LawViolation:
    law: str
    detail: str


@dataclass
class LawReport:
    """Outcome of :func:`check_laws` for one lattice."""

    lattice: str
    trials: int = 0
    checks: int = 0
    violations: list[LawViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def expect(self, law: str, holds: bool, detail: Callable[[], str]) -> None:
        self.checks += 1
        if not holds:
            violation = LawViolation(law, detail())
            logger.warning("[%s] %s violated: %s", self.lattice, law, violation.detail)
            self.violations.append(violation)

    def summary(self) -> str:
        lines = [
            f"{self.lattice}: {self.trials} trials, {self.checks} checks, "
            f"{len(self.violations)} violations"
        ]
        lines.extend(f"  {v.law}: {v.detail}" for v in self.violations)
        return "\n".join(lines)


def simulate_history(lattice: Lattice, rng: random.Random, config: LawConfig) -> dict[Any, Any]:
    """Run one random multi-replica history and return each replica's final state."""
    states = {replica: lattice.bottom() for replica in config.replicas}
    mutators = list(lattice.mutators.values())
    for _ in range(config.steps):
        replica = rng.choice(config.replicas)
        if not mutators or rng.random() < config.merge_probability:
            source = rng.choice(config.replicas)
            states[replica] = states[replica].merge(states[source])
        else:
            mutate = rng.choice(mutators)
            states[replica] = mutate(states[replica], replica, rng)
    return states


def _sample(lattice: Lattice, rng: random.Random, config: LawConfig) -> list[tuple[Any, Any]]:
    """Three (owner, value) pairs from a single history; bottom is a possible pick."""
    states = simulate_history(lattice, rng, config)
    pool = list(states.items())
    pool.append((rng.choice(config.replicas), lattice.bottom()))
    return [rng.choice(pool) for _ in range(3)]


def check_laws(lattice: Lattice, config: LawConfig | None = None) -> LawReport:
    """Check every semilattice law for ``lattice`` over random reachable values."""
    config = config or LawConfig()
    rng = random.Random(config.seed)
    report = LawReport(lattice.name)
    bottom = lattice.bottom()

    for _ in range(config.trials):
        (owner, a), (_, b), (_, c) = _sample(lattice, rng, config)
        report.trials += 1

        report.expect("idempotence", a.merge(a) == a, lambda: f"a={a!r}")
        ab, ba = a.merge(b), b.merge(a)
        report.expect("commutativity", ab == ba, lambda: f"a={a!r} b={b!r}")
        left, right = ab.merge(c), a.merge(b.merge(c))
        report.expect("associativity", left == right, lambda: f"a={a!r} b={b!r} c={c!r}")
        report.expect("right identity", a.merge(bottom) == a, lambda: f"a={a!r}")
        report.expect("left identity", bottom.merge(a) == a, lambda: f"a={a!r}")
        report.expect("order", a.leq(ab) and b.leq(ab), lambda: f"a={a!r} b={b!r}")
        report.expect("order", a.leq(b) == (ab == b), lambda: f"a={a!r} b={b!r}")

        for name, mutate in lattice.mutators.items():
            mutated = mutate(a, owner, rng)
            report.expect(
                f"monotonicity of {name}",
                a.merge(mutated) == mutated,
                lambda: f"a={a!r} -> {mutated!r}",
            )

    logger.info(
        "[%s] %d trials, %d checks, %d violations",
        lattice.name, report.trials, report.checks, len(report.violations),
    )
    return report


def assert_laws(lattice: Lattice, config: LawConfig | None = None) -> LawReport:
    """Like :func:`check_laws`, but raise ``AssertionError`` on any violation."""
    report = check_laws(lattice, config)
    if not report.ok:
        raise AssertionError(report.summary())
    return report


# =============================================================================
# Descriptions of the built-in types
# =============================================================================

_ELEMENTS = ("apple", "banana", "cherry", "date")
_KEYS = ("x", "y", "z")


def _stamp(current: Any, rng: random.Random) -> int:
    # Lamport-style: never behind the stamp this replica has observed.
    # A step of 0 produces cross-replica timestamp ties.
    return (current if current is not None else 0) + rng.randint(0, 2)


def _assign(reg: LWWRegister, replica: Any, rng: random.Random) -> LWWRegister:
    return reg.assign(rng.choice(_ELEMENTS), _stamp(reg.timestamp, rng), replica)


def _toggle(flag: LWWFlag, replica: Any, rng: random.Random) -> LWWFlag:
    stamp = _stamp(flag.timestamp, rng)
    return flag.enable(stamp, replica) if rng.random() < 0.5 else flag.disable(stamp, replica)


STANDARD_LATTICES: list[Lattice] = [
    Lattice(
        "GCounter",
        GCounter.bottom,
        {"increment": lambda c, r, rng: c.increment(r, rng.randint(1, 3))},
    ),
    Lattice(
        "PNCounter",
        PNCounter.bottom,
        {
            "increment": lambda c, r, rng: c.increment(r, rng.randint(1, 3)),
            "decrement": lambda c, r, rng: c.decrement(r, rng.randint(1, 3)),
        },
    ),
    Lattice("GSet", GSet.bottom, {"add": lambda s, r, rng: s.add(rng.choice(_ELEMENTS))}),
    Lattice(
        "TwoPhaseSet",
        TwoPhaseSet.bottom,
        {
            "add": lambda s, r, rng: s.add(rng.choice(_ELEMENTS)),
            "remove": lambda s, r, rng: s.remove(rng.choice(_ELEMENTS)),
        },
    ),
    Lattice("LWWRegister", LWWRegister.bottom, {"assign": _assign}),
    Lattice("LWWFlag", LWWFlag.bottom, {"toggle": _toggle}),
    Lattice("OneWayFlag", OneWayFlag.bottom, {"enable": lambda f, r, rng: f.enable()}),
    Lattice("VersionVector", VersionVector.bottom, {"increment": lambda v, r, rng: v.increment(r)}),
    Lattice(
        "MVRegister",
        MVRegister.bottom,
        {"assign": lambda m, r, rng: m.assign(rng.choice(_ELEMENTS), r)},
    ),
    Lattice(
        "ORSet",
        ORSet.bottom,
        {
            "add": lambda s, r, rng: s.add(rng.choice(_ELEMENTS), r),
            "remove": lambda s, r, rng: s.remove(rng.choice(_ELEMENTS)),
        },
    ),
    Lattice(
        "CRDTMap[PNCounter]",
        CRDTMap.of(PNCounter),
        {
            "increment": lambda m, r, rng: m.update(rng.choice(_KEYS), PNCounter.increment, r),
            "decrement": lambda m, r, rng: m.update(rng.choice(_KEYS), PNCounter.decrement, r),
        },
    ),
    Lattice(
        "CRDTMap[ORSet]",
        CRDTMap.of(ORSet),
        {
            "add": lambda m, r, rng: m.update(rng.choice(_KEYS), ORSet.add, rng.choice(_ELEMENTS), r),
            "remove": lambda m, r, rng: m.update(rng.choice(_KEYS), ORSet.remove, rng.choice(_ELEMENTS)),
        },
    ),
    Lattice(
        "CRDTMap[CRDTMap[PNCounter]]",
        CRDTMap.of(CRDTMap, CRDTMap.of(PNCounter)),
        {
            "increment": lambda m, r, rng: m.update(
                rng.choice(_KEYS), CRDTMap.update, rng.choice(_KEYS), PNCounter.increment, r
            ),
            "decrement": lambda m, r, rng: m.update(
                rng.choice(_KEYS), CRDTMap.update, rng.choice(_KEYS), PNCounter.decrement, r
            ),
        },
    ),
]
