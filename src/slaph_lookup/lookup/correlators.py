"""
Correlator assembly.

Each function turns the per-row quarkline and operator indices of one
correlator into CorrInfo entries of its diagram table. Rows whose dataset
name is already present are skipped.

Two sub-diagrams are shared between diagram tables:

- corrC: one Q2 quarkline closed with an rVdaggerVr operator, keyed by
  (Q2 id, rVdaggerVr id). Used by C2c, C4cD and C4cV.
- corr0: a pair of Q1 quarklines, keyed by (Q1 id, Q1 id). Used by C20,
  C40D and C40V.

Shared entries carry empty output fields. The Dirac structure of corrC is
that of the closing operator.
"""

from typing import Sequence, Tuple

from ..quantum_numbers.enumeration import QuantumNumberRow
from .table import CorrInfo, CorrelatorLookup, LookupTable


CorrelatorNames = Sequence[Tuple[str, str]]
"""(output directory, output file) per row."""

IndexTable = Sequence[Sequence[int]]


def _is_new(table: LookupTable, dataset: str) -> bool:
    return table.find(dataset) is None


def _add_correlator(table: LookupTable, name: Tuple[str, str], dataset: str,
                    lookup, gamma) -> None:
    outpath, outfile = name
    table.add(lambda i: CorrInfo(
        id=i,
        outpath=outpath,
        outfile=outfile,
        hdf5_dataset_name=dataset,
        lookup=tuple(lookup),
        gamma=tuple(gamma),
    ))


def _shared_id(table: LookupTable, lookup: Tuple[int, ...], gamma) -> int:
    return table.lookup_or_add(
        lookup,
        lambda i: CorrInfo(id=i, outpath="", outfile="", hdf5_dataset_name="",
                           lookup=lookup, gamma=tuple(gamma)),
    )


# =============================================================================
# Single-quarkline diagrams
# =============================================================================

def build_C1_lookup(
    quantum_numbers: Sequence[QuantumNumberRow],
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    Q1_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
    table_name: str = "C1",
) -> None:
    """C1 closes the trace of a single Q1; its gamma is that of leg 0."""
    table = corr_lookup.table(table_name)
    for row, Q1 in enumerate(Q1_indices):
        if _is_new(table, hdf5_dataset_name[row]):
            _add_correlator(table, correlator_names[row], hdf5_dataset_name[row],
                            (Q1[0],), quantum_numbers[row][0].gamma)


# =============================================================================
# Connected diagrams (gamma_5 trick)
# =============================================================================

def build_C2c_lookup(
    quantum_numbers: Sequence[QuantumNumberRow],
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    rvdvr_indices: IndexTable,
    Q2_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """C2c refers to one corrC built from Q2 on leg 0 and rVdaggerVr on leg 1."""
    for row in range(len(correlator_names)):
        if not _is_new(corr_lookup.C2c, hdf5_dataset_name[row]):
            continue
        corrC_id = _shared_id(corr_lookup.corrC,
                              (Q2_indices[row][0], rvdvr_indices[row][1]),
                              quantum_numbers[row][1].gamma)
        _add_correlator(corr_lookup.C2c, correlator_names[row],
                        hdf5_dataset_name[row], (corrC_id,), ())


def build_C3c_lookup(
    quantum_numbers: Sequence[QuantumNumberRow],
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    rvdvr_indices: IndexTable,
    Q1_indices: IndexTable,
    Q2_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """C3c: Q2 on leg 0, Q1 on leg 1, rVdaggerVr on leg 2."""
    for row in range(len(correlator_names)):
        if not _is_new(corr_lookup.C3c, hdf5_dataset_name[row]):
            continue
        indices = (Q2_indices[row][0], Q1_indices[row][1], rvdvr_indices[row][2])
        _add_correlator(corr_lookup.C3c, correlator_names[row],
                        hdf5_dataset_name[row], indices,
                        (quantum_numbers[row][2].gamma[0],))


def build_C4c_factorized_lookup(
    table_name: str,
    quantum_numbers: Sequence[QuantumNumberRow],
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    rvdvr_indices: IndexTable,
    Q2_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """
    C4cD and C4cV: the product of two corrC traces.

    The first corrC is (Q2 leg 0, rVdaggerVr leg 1) with the gamma of leg 1,
    the second (Q2 leg 2, rVdaggerVr leg 3) with the gamma of leg 3.
    """
    table = corr_lookup.table(table_name)
    for row in range(len(correlator_names)):
        if not _is_new(table, hdf5_dataset_name[row]):
            continue
        id1 = _shared_id(corr_lookup.corrC,
                         (Q2_indices[row][0], rvdvr_indices[row][1]),
                         quantum_numbers[row][1].gamma)
        id2 = _shared_id(corr_lookup.corrC,
                         (Q2_indices[row][2], rvdvr_indices[row][3]),
                         quantum_numbers[row][3].gamma)
        _add_correlator(table, correlator_names[row], hdf5_dataset_name[row],
                        (id1, id2), ())


def build_C4c_single_trace_lookup(
    table_name: str,
    quantum_numbers: Sequence[QuantumNumberRow],
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    rvdvr_indices: IndexTable,
    Q2_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """
    C4cC and C4cB: one trace over Q2, rVdaggerVr, Q2, rVdaggerVr.

    Gammas are the first gamma of legs 1 and 3.
    """
    table = corr_lookup.table(table_name)
    for row in range(len(correlator_names)):
        if not _is_new(table, hdf5_dataset_name[row]):
            continue
        indices = (Q2_indices[row][0], rvdvr_indices[row][1],
                   Q2_indices[row][2], rvdvr_indices[row][3])
        gammas = (quantum_numbers[row][1].gamma[0],
                  quantum_numbers[row][3].gamma[0])
        _add_correlator(table, correlator_names[row], hdf5_dataset_name[row],
                        indices, gammas)


# =============================================================================
# Disconnected diagrams
# =============================================================================

def build_C20_lookup(
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    Q1_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """C20 refers to one corr0 built from the Q1 quarklines of legs 0 and 1."""
    for row, Q1 in enumerate(Q1_indices):
        if not _is_new(corr_lookup.C20, hdf5_dataset_name[row]):
            continue
        corr0_id = _shared_id(corr_lookup.corr0, (Q1[0], Q1[1]), ())
        _add_correlator(corr_lookup.C20, correlator_names[row],
                        hdf5_dataset_name[row], (corr0_id,), ())


def build_C40_factorized_lookup(
    table_name: str,
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    Q1_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """C40D and C40V: two corr0 entries, legs (0, 1) and legs (2, 3)."""
    table = corr_lookup.table(table_name)
    for row, Q1 in enumerate(Q1_indices):
        if not _is_new(table, hdf5_dataset_name[row]):
            continue
        id1 = _shared_id(corr_lookup.corr0, (Q1[0], Q1[1]), ())
        id2 = _shared_id(corr_lookup.corr0, (Q1[2], Q1[3]), ())
        _add_correlator(table, correlator_names[row], hdf5_dataset_name[row],
                        (id1, id2), ())


def build_Q1_trace_lookup(
    table_name: str,
    correlator_names: CorrelatorNames,
    hdf5_dataset_name: Sequence[str],
    Q1_indices: IndexTable,
    corr_lookup: CorrelatorLookup,
) -> None:
    """C30, C40C and C40B: one trace over the Q1 row as is."""
    table = corr_lookup.table(table_name)
    for row, Q1 in enumerate(Q1_indices):
        if _is_new(table, hdf5_dataset_name[row]):
            _add_correlator(table, correlator_names[row], hdf5_dataset_name[row],
                            Q1, ())


__all__ = [
    "build_C1_lookup",
    "build_C2c_lookup",
    "build_C3c_lookup",
    "build_C4c_factorized_lookup",
    "build_C4c_single_trace_lookup",
    "build_C20_lookup",
    "build_C40_factorized_lookup",
    "build_Q1_trace_lookup",
]
