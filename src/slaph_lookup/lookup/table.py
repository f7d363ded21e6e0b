"""
Lookup tables and their entries.

Every table is append-only; the id of an entry is its position at insertion
time. A table is deduplicated on a key derived from each entry, and lookups
return the first entry inserted with that key. The key mirrors exactly the
fields the entry is compared on, so a dictionary gives the same answer a
scan in insertion order would.

The three aggregates (OperatorLookup, QuarklineLookup, CorrelatorLookup) are
what the contraction code consumes.
"""

from dataclasses import dataclass, field
from typing import (
    Callable, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar,
)

from ..config import NOT_FOUND, Momentum


E = TypeVar("E")


class LookupTable(Generic[E]):
    """
    Ordered, deduplicated, append-only table.

    Parameters
    ----------
    name : str
        Used in summaries.
    key : callable
        Maps an entry to the hashable value it is deduplicated on.
    """

    def __init__(self, name: str, key: Callable[[E], Hashable]):
        self.name = name
        self._key = key
        self._entries: List[E] = []
        self._index: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[E]:
        return iter(self._entries)

    def __getitem__(self, i: int) -> E:
        return self._entries[i]

    def __repr__(self) -> str:
        return f"LookupTable({self.name!r}, {len(self)} entries)"

    def find(self, key: Hashable) -> Optional[int]:
        """Id of the first entry with ``key``, or None."""
        return self._index.get(key)

    def add(self, factory: Callable[[int], E]) -> E:
        """Append ``factory(next_id)`` and return it."""
        entry = factory(len(self._entries))
        self._entries.append(entry)
        self._index.setdefault(self._key(entry), len(self._entries) - 1)
        return entry

    def lookup_or_add(self, key: Hashable, factory: Callable[[int], E]) -> int:
        """Id of the entry with ``key``, appending ``factory(next_id)`` if absent."""
        existing = self.find(key)
        if existing is not None:
            return existing
        return self.add(factory).id


# =============================================================================
# Operator entries
# =============================================================================

@dataclass(frozen=True)
class VdaggerVQuantumNumbers:
    """
    A unique V^dagger exp(i(p + d/2)x) V operator.

    The Dirac structure is factored out and applied by the quarklines.
    """
    id: int
    momentum: Momentum
    displacement: Momentum


@dataclass(frozen=True)
class RandomIndexCombinationsQ2:
    """
    Random-vector index pairs for a quarkline with two random vectors.

    ``offset`` holds the first global index of each quark.
    """
    id: int
    id_q1: int
    id_q2: int
    offset: Tuple[int, int]
    rnd_vec_ids: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class RandomIndexCombinationsQ1:
    """All global random-vector indices of one quark."""
    id: int
    id_q1: int
    rnd_vec_ids: Tuple[int, ...]


@dataclass(frozen=True)
class VdaggerVRandomLookup:
    """
    A VdaggerV operator bound to a random index combination.

    Used for both rVdaggerV (bound to RandomIndexCombinationsQ1 ids) and
    rVdaggerVr (bound to RandomIndexCombinationsQ2 ids).
    """
    id: int
    id_vdaggerv: int
    id_ricQ_lookup: int
    need_vdaggerv_daggering: bool


# =============================================================================
# Quarkline entries
# =============================================================================

@dataclass(frozen=True)
class QuarklineQ1Indices:
    """
    Indices of Q1 = rVdaggerV * gamma * peram.

    ``id_ric_lookup`` refers to RandomIndexCombinationsQ2: the first index
    of each pair belongs to rVdaggerV, the second to the perambulator.
    """
    id: int
    id_rvdaggerv: int
    id_peram: int
    id_ric_lookup: int
    gamma: Tuple[int, ...]


@dataclass(frozen=True)
class QuarklineQ2Indices:
    """
    Indices of Q2 = gamma_5 peram1^dagger gamma_5 * VdaggerV * gamma * peram2.
    """
    id: int
    id_vdaggerv: int
    id_peram1: int
    id_peram2: int
    id_ric_lookup: int
    need_vdaggerv_dag: bool
    gamma: Tuple[int, ...]


# =============================================================================
# Correlator entries
# =============================================================================

@dataclass(frozen=True)
class CorrInfo:
    """
    Everything needed to build and write one correlator.

    Shared sub-diagrams (corrC, corr0) leave the output fields empty.
    """
    id: int
    outpath: str
    outfile: str
    hdf5_dataset_name: str
    lookup: Tuple[int, ...]
    gamma: Tuple[int, ...]


def _vdaggerv_key(e: VdaggerVQuantumNumbers):
    return (e.momentum, e.displacement)


def _ricQ1_key(e: RandomIndexCombinationsQ1):
    return e.id_q1


def _ricQ2_key(e: RandomIndexCombinationsQ2):
    return e.rnd_vec_ids


def _random_lookup_key(e: VdaggerVRandomLookup):
    return (e.id_ricQ_lookup, e.id_vdaggerv, e.need_vdaggerv_daggering)


def _Q1_key(e: QuarklineQ1Indices):
    return (e.id_peram, e.gamma, e.id_rvdaggerv, e.id_ric_lookup)


def _Q2_key(e: QuarklineQ2Indices):
    return (e.id_peram1, e.id_peram2, e.gamma, e.need_vdaggerv_dag, e.id_vdaggerv)


def _dataset_key(e: CorrInfo):
    return e.hdf5_dataset_name


def _shared_key(e: CorrInfo):
    return e.lookup


# =============================================================================
# Aggregates
# =============================================================================

@dataclass
class OperatorLookup:
    """Unique operators, random index combinations and their bindings."""
    vdaggerv_lookup: LookupTable = field(
        default_factory=lambda: LookupTable("vdaggerv", _vdaggerv_key))
    ricQ1_lookup: LookupTable = field(
        default_factory=lambda: LookupTable("ricQ1", _ricQ1_key))
    ricQ2_lookup: LookupTable = field(
        default_factory=lambda: LookupTable("ricQ2", _ricQ2_key))
    rvdaggerv_lookuptable: LookupTable = field(
        default_factory=lambda: LookupTable("rvdaggerv", _random_lookup_key))
    rvdaggervr_lookuptable: LookupTable = field(
        default_factory=lambda: LookupTable("rvdaggervr", _random_lookup_key))
    index_of_unity: int = NOT_FOUND


@dataclass
class QuarklineLookup:
    """Unique quarklines; Q2V and Q2L are filled by different diagrams."""
    Q1: LookupTable = field(default_factory=lambda: LookupTable("Q1", _Q1_key))
    Q2V: LookupTable = field(default_factory=lambda: LookupTable("Q2V", _Q2_key))
    Q2L: LookupTable = field(default_factory=lambda: LookupTable("Q2L", _Q2_key))


def _corr_table(name: str):
    return field(default_factory=lambda: LookupTable(name, _dataset_key))


def _shared_table(name: str):
    return field(default_factory=lambda: LookupTable(name, _shared_key))


@dataclass
class CorrelatorLookup:
    """
    One CorrInfo table per diagram, plus the shared sub-diagram tables.

    corrC holds two-propagator blocks reused by C2c, C4cD and C4cV; corr0
    holds one-propagator pairs reused by C20, C40D and C40V.
    """
    C1: LookupTable = _corr_table("C1")
    C1T: LookupTable = _corr_table("C1T")

    corr0: LookupTable = _shared_table("corr0")
    C20: LookupTable = _corr_table("C20")
    C40D: LookupTable = _corr_table("C40D")
    C40V: LookupTable = _corr_table("C40V")

    corrC: LookupTable = _shared_table("corrC")
    C2c: LookupTable = _corr_table("C2c")
    C4cD: LookupTable = _corr_table("C4cD")
    C4cV: LookupTable = _corr_table("C4cV")

    C30: LookupTable = _corr_table("C30")
    C3c: LookupTable = _corr_table("C3c")

    C40C: LookupTable = _corr_table("C40C")
    C4cC: LookupTable = _corr_table("C4cC")
    C40B: LookupTable = _corr_table("C40B")
    C4cB: LookupTable = _corr_table("C4cB")

    def table(self, name: str) -> LookupTable:
        """Table by name, e.g. ``"C2c"``."""
        return getattr(self, name)


@dataclass
class LookupTables:
    """The complete result of one run."""
    operator: OperatorLookup = field(default_factory=OperatorLookup)
    quarkline: QuarklineLookup = field(default_factory=QuarklineLookup)
    correlator: CorrelatorLookup = field(default_factory=CorrelatorLookup)

    def tables(self) -> Iterator[LookupTable]:
        """All tables, in a fixed order."""
        for aggregate in (self.operator, self.quarkline, self.correlator):
            for value in vars(aggregate).values():
                if isinstance(value, LookupTable):
                    yield value

    def summary(self) -> str:
        """One line per non-empty table."""
        lines = [f"  {t.name:>10s}: {len(t)}" for t in self.tables() if len(t)]
        lines.append(f"  index_of_unity: {self.operator.index_of_unity}")
        return "\n".join(lines)
