"""
Quarkline deduplication.

    Q1 = rVdaggerV * gamma * peram
    Q2 = gamma_5 peram1^dagger gamma_5 * VdaggerV * gamma * peram2

Both builders fill one leg (``operator_id``) of a pre-sized index table, so
several calls can complete the table of a multi-quarkline correlator.
"""

from typing import List, Sequence

from ..infile.descriptors import Quark
from ..quantum_numbers.enumeration import QuantumNumberRow
from .operators import VdvIndex
from .random_index import set_rnd_vec_charged
from .table import LookupTable, QuarklineQ1Indices, QuarklineQ2Indices


def make_index_table(quantum_numbers: Sequence[QuantumNumberRow]) -> List[List[int]]:
    """Zero-filled rows x legs table."""
    return [[0] * len(qn_row) for qn_row in quantum_numbers]


def build_Q1_lookup(
    id_quark_used: int,
    id_quark_connected: int,
    operator_id: int,
    C1: bool,
    quantum_numbers: Sequence[QuantumNumberRow],
    quarks: Sequence[Quark],
    rvdv_indices: Sequence[Sequence[int]],
    ricQ2_lookup: LookupTable,
    Q1: LookupTable,
    Q1_indices: List[List[int]],
) -> None:
    """
    Deduplicate the Q1 quarklines of leg ``operator_id``.

    Parameters
    ----------
    id_quark_used : int
        Quark of the perambulator.
    id_quark_connected : int
        Quark of the random vector in rVdaggerV.
    operator_id : int
        Leg to fill in ``Q1_indices``.
    C1 : bool
        Passed on to ``set_rnd_vec_charged``.
    quantum_numbers : sequence of rows
    quarks : sequence of Quark
    rvdv_indices : list of list of int
        rVdaggerV ids per row and leg.
    ricQ2_lookup : LookupTable
        Extended in place.
    Q1 : LookupTable
        Extended in place.
    Q1_indices : list of list of int
        Filled in place at column ``operator_id``.

    Notes
    -----
    The random index combination is requested as (used, connected) for
    every row, before the table lookup, so a shortage of random vectors is
    reported even when every quarkline already exists.
    """
    for row, qn_row in enumerate(quantum_numbers):
        gamma = qn_row[operator_id].gamma
        rvdv = rvdv_indices[row][operator_id]
        rnd_index = set_rnd_vec_charged(quarks, id_quark_used,
                                        id_quark_connected, C1, ricQ2_lookup)

        Q1_indices[row][operator_id] = Q1.lookup_or_add(
            (id_quark_used, gamma, rvdv, rnd_index),
            lambda i: QuarklineQ1Indices(
                id=i,
                id_rvdaggerv=rvdv,
                id_peram=id_quark_used,
                id_ric_lookup=rnd_index,
                gamma=gamma,
            ),
        )


def build_Q2_lookup(
    id_quark1: int,
    id_quark2: int,
    operator_id: int,
    quantum_numbers: Sequence[QuantumNumberRow],
    quarks: Sequence[Quark],
    vdv_indices: Sequence[Sequence[VdvIndex]],
    ricQ2_lookup: LookupTable,
    Q2: LookupTable,
    Q2_indices: List[List[int]],
) -> None:
    """
    Deduplicate the Q2 quarklines of leg ``operator_id``.

    ``id_quark1`` is the perambulator taken with the gamma_5 trick,
    ``id_quark2`` the one without. The random index combination is only
    requested when a new quarkline is appended; it is not part of the key.
    """
    for row, qn_row in enumerate(quantum_numbers):
        gamma = qn_row[operator_id].gamma
        id_vdaggerv, dagger = vdv_indices[row][operator_id]

        existing = Q2.find((id_quark1, id_quark2, gamma, dagger, id_vdaggerv))
        if existing is not None:
            Q2_indices[row][operator_id] = existing
            continue

        rnd_index = set_rnd_vec_charged(quarks, id_quark1, id_quark2, False,
                                        ricQ2_lookup)
        entry = Q2.add(lambda i: QuarklineQ2Indices(
            id=i,
            id_vdaggerv=id_vdaggerv,
            id_peram1=id_quark1,
            id_peram2=id_quark2,
            id_ric_lookup=rnd_index,
            need_vdaggerv_dag=dagger,
            gamma=gamma,
        ))
        Q2_indices[row][operator_id] = entry.id
