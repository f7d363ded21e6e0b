"""
Operator deduplication.

VdaggerV operators depend only on momentum and displacement. An operator
with zero displacement and momentum -p is the hermitian conjugate of the one
with momentum p, so only one of the two is stored and the other is flagged
for daggering.

rVdaggerV and rVdaggerVr bind a VdaggerV operator to a random index
combination; they are deduplicated on (combination, operator, dagger flag).
"""

from typing import List, Sequence, Tuple

from ..config import NOT_FOUND, ZERO_VECTOR
from ..quantum_numbers.enumeration import QuantumNumberRow
from ..quantum_numbers.momentum import change_sign_array
from .table import LookupTable, VdaggerVQuantumNumbers, VdaggerVRandomLookup


VdvIndex = Tuple[int, bool]
"""(id in vdaggerv_lookup, needs daggering)"""


def find_vdaggerv(vdaggerv_lookup: LookupTable, momentum, displacement):
    """
    Locate an operator or its hermitian conjugate.

    Returns
    -------
    tuple of (int, bool) or None
        The id of the first matching entry and whether it must be daggered.
        An exact match wins over a conjugate match at the same id.
    """
    direct = vdaggerv_lookup.find((momentum, displacement))
    conjugate = None
    if displacement == ZERO_VECTOR:
        conjugate = vdaggerv_lookup.find((change_sign_array(momentum), displacement))

    if direct is not None and (conjugate is None or direct <= conjugate):
        return direct, False
    if conjugate is not None:
        return conjugate, True
    return None


def build_VdaggerV_lookup(
    quantum_numbers: Sequence[QuantumNumberRow],
    vdaggerv_lookup: LookupTable,
) -> List[List[VdvIndex]]:
    """
    Deduplicate the VdaggerV operators of all rows.

    Parameters
    ----------
    quantum_numbers : sequence of rows
        Output of the enumeration for one correlator.
    vdaggerv_lookup : LookupTable
        Shared table, extended in place.

    Returns
    -------
    list of list of (int, bool)
        Per row and leg: operator id and dagger flag. New operators are
        never daggered.
    """
    vdv_indices = []
    for qn_row in quantum_numbers:
        vdv_indices_row = []
        for qn in qn_row:
            found = find_vdaggerv(vdaggerv_lookup, qn.momentum, qn.displacement)
            if found is None:
                entry = vdaggerv_lookup.add(lambda i: VdaggerVQuantumNumbers(
                    id=i, momentum=qn.momentum, displacement=qn.displacement))
                found = (entry.id, False)
            vdv_indices_row.append(found)
        vdv_indices.append(vdv_indices_row)
    return vdv_indices


def _bind_random(table: LookupTable, id_ricQ: int, vdv: VdvIndex) -> int:
    id_vdaggerv, dagger = vdv
    return table.lookup_or_add(
        (id_ricQ, id_vdaggerv, dagger),
        lambda i: VdaggerVRandomLookup(
            id=i,
            id_vdaggerv=id_vdaggerv,
            id_ricQ_lookup=id_ricQ,
            need_vdaggerv_daggering=dagger,
        ),
    )


def build_rVdaggerV_lookup(
    rnd_vec_id: Sequence[int],
    vdv_indices: Sequence[Sequence[VdvIndex]],
    rvdaggerv_lookup: LookupTable,
) -> List[List[int]]:
    """
    Bind every operator to the random index combination of its leg.

    Leg ``i`` uses ``rnd_vec_id[i]``, so ``rnd_vec_id`` needs one entry per
    leg.
    """
    rvdv_indices = []
    for vdv_row in vdv_indices:
        rvdv_indices.append([
            _bind_random(rvdaggerv_lookup, rnd_vec_id[leg], vdv)
            for leg, vdv in enumerate(vdv_row)
        ])
    return rvdv_indices


def build_rVdaggerVr_lookup(
    rnd_vec_id: Sequence[int],
    vdv_indices: Sequence[Sequence[VdvIndex]],
    rvdaggervr_lookup: LookupTable,
) -> List[List[int]]:
    """
    Bind every operator to the random index combination of its quarkline.

    Legs 0 and 1 belong to the first quarkline and use ``rnd_vec_id[0]``;
    legs 2 and 3 belong to the second and use ``rnd_vec_id[1]``.
    """
    rvdvr_indices = []
    for vdv_row in vdv_indices:
        row = []
        for leg, vdv in enumerate(vdv_row):
            rnd_index = 1 if leg in (2, 3) else 0
            row.append(_bind_random(rvdaggervr_lookup, rnd_vec_id[rnd_index], vdv))
        rvdvr_indices.append(row)
    return rvdvr_indices


def find_index_of_unity(vdaggerv_lookup: LookupTable) -> int:
    """Id of the operator with zero momentum and displacement, or -1."""
    found = vdaggerv_lookup.find((ZERO_VECTOR, ZERO_VECTOR))
    return NOT_FOUND if found is None else found
