"""State-based convergent replicated data types (CvRDTs).

Every type here is an immutable value with a ``bottom()`` constructor, a
``merge`` that is a semilattice join, and local mutators that return new
values. Replicas exchange whole states and merge them in any order, any
number of times, and converge.

Provided types:

- **GCounter** / **PNCounter**: grow-only and increment/decrement counters
- **GSet** / **TwoPhaseSet** / **ORSet**: grow-only, remove-once, add-wins sets
- **LWWRegister** / **LWWFlag**: last-writer-wins register and flag
- **OneWayFlag**: a flag that can only be enabled
- **MVRegister**: multi-value register exposing concurrent writes
- **CRDTMap**: key -> CvRDT map merged per key
- **VersionVector**: pointwise-ordered causal history

``cvrdt.laws`` checks the semilattice laws for any of them.
"""

import logging

from cvrdt.crdt_map import CRDTMap
from cvrdt.g_counter import GCounter
from cvrdt.g_set import GSet
from cvrdt.laws import (
    STANDARD_LATTICES,
    Lattice,
    LawConfig,
    LawReport,
    LawViolation,
    assert_laws,
    check_laws,
)
from cvrdt.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from cvrdt.lww_flag import LWWFlag
from cvrdt.lww_register import LWWRegister
from cvrdt.mv_register import Entry, MVRegister
from cvrdt.one_way_flag import OneWayFlag
from cvrdt.or_set import ORSet, Tag
from cvrdt.pn_counter import PNCounter
from cvrdt.protocol import CvRDT, merge, merge_all
from cvrdt.two_phase_set import TwoPhaseSet
from cvrdt.version_vector import VersionVector

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Contract
    "CvRDT",
    "merge",
    "merge_all",
    # Counters
    "GCounter",
    "PNCounter",
    # Sets
    "GSet",
    "TwoPhaseSet",
    "ORSet",
    "Tag",
    # Registers and flags
    "LWWRegister",
    "LWWFlag",
    "OneWayFlag",
    "MVRegister",
    "Entry",
    "VersionVector",
    # Composite
    "CRDTMap",
    # Law checking
    "Lattice",
    "LawConfig",
    "LawReport",
    "LawViolation",
    "STANDARD_LATTICES",
    "assert_laws",
    "check_laws",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
