"""
Random-vector index combinations.

Each quark owns a contiguous block of global random-vector indices, in the
order the quarks are declared: quark k starts at the sum of
``number_of_rnd_vec`` over quarks 0..k-1.

A quarkline between two quarks needs index pairs. Two different random
vectors must carry different indices to avoid bias, so pairs with equal
indices are excluded except in C1 mode, where a single random vector closes
the trace on itself.
"""

from typing import List, Sequence, Tuple

from ..errors import InsufficientRandomVectorsError
from ..infile.descriptors import Quark
from .table import (
    LookupTable, RandomIndexCombinationsQ1, RandomIndexCombinationsQ2,
)


def rnd_vec_offset(quarks: Sequence[Quark], id_q: int) -> int:
    """First global random-vector index of quark ``id_q``."""
    return sum(q.number_of_rnd_vec for q in quarks[:id_q])


def set_rnd_vec_charged(
    quarks: Sequence[Quark],
    id_q1: int,
    id_q2: int,
    C1: bool,
    ricQ2_lookup: LookupTable,
) -> int:
    """
    Index pairs for a quarkline with two random vectors.

    Parameters
    ----------
    quarks : sequence of Quark
        All quarks of the run, in declaration order.
    id_q1, id_q2 : int
        Quarks the first and second index of each pair belong to.
    C1 : bool
        If True only the diagonal pairs (i, i) of ``id_q1`` are produced.
    ricQ2_lookup : LookupTable
        Shared table, extended in place.

    Returns
    -------
    int
        Id of the (possibly pre-existing) combination.

    Raises
    ------
    InsufficientRandomVectorsError
        If either quark has no random vector, or both are the same quark
        with fewer than two. The check applies in C1 mode as well.
    """
    start1 = rnd_vec_offset(quarks, id_q1)
    start2 = rnd_vec_offset(quarks, id_q2)
    end1 = start1 + quarks[id_q1].number_of_rnd_vec
    end2 = start2 + quarks[id_q2].number_of_rnd_vec

    if (quarks[id_q1].number_of_rnd_vec < 1
            or quarks[id_q2].number_of_rnd_vec < 1
            or (id_q1 == id_q2 and quarks[id_q1].number_of_rnd_vec < 2)):
        raise InsufficientRandomVectorsError(
            "There are not enough random vectors for charged correlators"
        )

    if C1:
        combinations = [(i, i) for i in range(start1, end1)]
    else:
        combinations = [
            (i, j)
            for i in range(start1, end1)
            for j in range(start2, end2)
            if i != j
        ]
    combinations = tuple(combinations)

    return ricQ2_lookup.lookup_or_add(
        combinations,
        lambda i: RandomIndexCombinationsQ2(
            id=i,
            id_q1=id_q1,
            id_q2=id_q2,
            offset=(start1, start2),
            rnd_vec_ids=combinations,
        ),
    )


def set_rnd_vec_uncharged(
    quarks: Sequence[Quark],
    id_q1: int,
    ricQ1_lookup: LookupTable,
) -> int:
    """
    All global random-vector indices of one quark.

    An existing entry for ``id_q1`` is returned before anything is checked.

    Raises
    ------
    InsufficientRandomVectorsError
        If the quark has fewer than two random vectors.
    """
    existing = ricQ1_lookup.find(id_q1)
    if existing is not None:
        return existing

    if quarks[id_q1].number_of_rnd_vec < 2:
        raise InsufficientRandomVectorsError(
            "There are not enough random vectors for uncharged correlators"
        )

    start = rnd_vec_offset(quarks, id_q1)
    indices = tuple(range(start, start + quarks[id_q1].number_of_rnd_vec))
    return ricQ1_lookup.add(lambda i: RandomIndexCombinationsQ1(
        id=i, id_q1=id_q1, rnd_vec_ids=indices)).id


def rnd_vec_pairs(entry: RandomIndexCombinationsQ2) -> List[Tuple[int, int]]:
    """Index pairs of an entry relative to each quark's own block."""
    o1, o2 = entry.offset
    return [(i - o1, j - o2) for i, j in entry.rnd_vec_ids]
