"""
Enumeration of the quantum numbers needed for one correlation function.

A correlator names one operator group per leg. Each group expands into a
flat list of QuantumNumbers (gamma, displacement, momentum). The rows of a
correlator are the combinations of one entry per leg that respect momentum
conservation and the momentum cutoffs of its diagram type:

- 1 leg  (C1, C1T):         every entry is a row
- 2 legs (C2+, C20, Check): p0 = -p1
- 3 legs (C3+, C30):        p0 + p2 = -p1, cutoff on the pair (0, 2)
- C4+D, C4+C:               pairs (0, 2) and (1, 3), cutoff on each pair,
                            totals opposite
- C4+B:                     pairs (0, 3) and (1, 2), cutoff keyed by the
                            total momentum vector
- C4+V, C40D/V/C/B:         all combinations

The loop order below fixes the row order, and the row order fixes every id
handed out later. Do not reorder loops.
"""

import itertools
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import (
    MomentumCutoff,
    CUTOFF_C3, CUTOFF_C4D, CUTOFF_C4C, CUTOFF_C4B_SOURCE, CUTOFF_C4B_SINK,
    NUMBER_OF_MOMENTUM_BUCKETS,
    Momentum,
)
from ..errors import ConfigurationError
from ..infile.descriptors import Correlator, OperatorGroup
from .momentum import (
    compute_norm_squ,
    add_momenta,
    change_sign_array,
    is_opposite,
)


# =============================================================================
# Data types
# =============================================================================

@dataclass(frozen=True)
class QuantumNumbers:
    """
    Physical content of one field operator on one leg.

    Attributes
    ----------
    momentum : tuple of int
        3-momentum in lattice units.
    displacement : tuple of int
        Displacement 3-vector.
    gamma : tuple of int
        Gamma structure, in the order given in the infile.
    """
    momentum: Momentum
    displacement: Momentum
    gamma: Tuple[int, ...]

    def describe(self) -> str:
        """One entry per line, digits concatenated as in dataset names."""
        return (
            f"\tmomentum: {''.join(str(p) for p in self.momentum)}\n"
            f"\tdisplacement: {''.join(str(d) for d in self.displacement)}\n"
            f"\tgamma struct: {''.join(str(g) for g in self.gamma)}"
        )


QuantumNumberRow = Tuple[QuantumNumbers, ...]


@dataclass
class EnumerationStats:
    """
    Diagnostic counters of an enumeration.

    Attributes
    ----------
    combinations : int
        Number of rows produced.
    buckets : list of int
        Accepted source-side combinations per momentum frame: index 0 is
        the rest frame, index k the k-th moving frame of the cutoff table.
    """
    combinations: int = 0
    buckets: List[int] = field(
        default_factory=lambda: [0] * NUMBER_OF_MOMENTUM_BUCKETS
    )

    def report(self, tag: str) -> None:
        """Print the counters."""
        print(f"  {tag}: momentum combinations accepted: {self.combinations}")
        for i, count in enumerate(self.buckets):
            print(f"    combination mom{i}: {count}")


# =============================================================================
# Operator expansion
# =============================================================================

def flatten_operator_group(group: OperatorGroup) -> List[QuantumNumbers]:
    """
    Expand an operator group into its (gamma, displacement, momentum) entries.

    Order: operators as listed, then momentum lists, then momenta.
    """
    flat = []
    for op in group:
        gamma = tuple(op.gammas)
        for mom_vec in op.momenta:
            for mom in mom_vec:
                flat.append(QuantumNumbers(
                    momentum=tuple(mom),
                    displacement=tuple(op.displacement),
                    gamma=gamma,
                ))
    return flat


# =============================================================================
# Cutoffs
# =============================================================================

def apply_cutoff(cutoff: MomentumCutoff, p_a: Momentum,
                 p_b: Momentum) -> Optional[int]:
    """
    Check a pair of momenta against a cutoff table.

    Parameters
    ----------
    cutoff : MomentumCutoff
        The table to apply.
    p_a, p_b : tuple of int
        Momenta of the pair. ``p_a`` is the leg checked in the rest frame.

    Returns
    -------
    int or None
        Bucket index of the accepted pair (0 for the rest frame), or None if
        the pair is rejected.

    Examples
    --------
    >>> apply_cutoff(CUTOFF_C3, (0, 0, 1), (0, 0, -1))
    0
    >>> apply_cutoff(CUTOFF_C3, (0, 0, 0), (0, 0, 0)) is None
    True
    """
    total = add_momenta(p_a, p_b)
    mom_a = compute_norm_squ(p_a)

    if compute_norm_squ(total) == 0:
        if mom_a > cutoff.rest_max:
            return None
        if cutoff.rest_excludes_zero and mom_a == 0:
            return None
        return 0

    key = total if cutoff.by_vector else compute_norm_squ(total)
    if key not in cutoff.moving:
        return None
    if mom_a + compute_norm_squ(p_b) > cutoff.moving[key]:
        return None
    return 1 + list(cutoff.moving).index(key)


# =============================================================================
# Per-topology enumeration
# =============================================================================

def enumerate_one_leg(qn_op: Sequence[List[QuantumNumbers]],
                      stats: EnumerationStats) -> List[QuantumNumberRow]:
    """Every entry of leg 0 is its own row."""
    rows = [(op0,) for op0 in qn_op[0]]
    stats.combinations = len(rows)
    return rows


def enumerate_two_leg(qn_op: Sequence[List[QuantumNumbers]],
                      stats: EnumerationStats) -> List[QuantumNumberRow]:
    """Source and sink momenta must be opposite."""
    rows = []
    for op0 in qn_op[0]:
        for op1 in qn_op[1]:
            if is_opposite(op0.momentum, op1.momentum):
                rows.append((op0, op1))
    stats.combinations = len(rows)
    return rows


def enumerate_three_leg(qn_op: Sequence[List[QuantumNumbers]],
                        stats: EnumerationStats,
                        cutoff: MomentumCutoff = CUTOFF_C3) -> List[QuantumNumberRow]:
    """
    Legs 0 and 2 share the source time slice, leg 1 is the sink.

    Requires p0 + p2 = -p1, then applies ``cutoff`` to (p0, p2).
    """
    rows = []
    for op0 in qn_op[0]:
        for op2 in qn_op[2]:
            total = add_momenta(op0.momentum, op2.momentum)
            for op1 in qn_op[1]:
                if total != change_sign_array(op1.momentum):
                    continue
                bucket = apply_cutoff(cutoff, op0.momentum, op2.momentum)
                if bucket is None:
                    continue
                stats.buckets[bucket] += 1
                stats.combinations += 1
                rows.append((op0, op1, op2))
    return rows


def enumerate_four_leg_paired(qn_op: Sequence[List[QuantumNumbers]],
                              stats: EnumerationStats,
                              source: Tuple[int, int],
                              sink: Tuple[int, int],
                              source_cutoff: MomentumCutoff,
                              sink_cutoff: MomentumCutoff) -> List[QuantumNumberRow]:
    """
    Two two-particle states with opposite total momentum.

    Parameters
    ----------
    qn_op : sequence of lists of QuantumNumbers
        Flattened entries per leg.
    stats : EnumerationStats
        Source-side buckets are counted once per accepted source pair.
    source, sink : tuple of int
        Leg indices of the source and sink pairs. The first index of each
        pair is the leg checked in the rest frame.
    source_cutoff, sink_cutoff : MomentumCutoff
        Tables applied to the source and sink pairs.

    Returns
    -------
    list of tuple
        Rows ordered by leg index, whatever the pairing.
    """
    a, b = source
    c, d = sink
    rows = []
    for op_a in qn_op[a]:
        for op_b in qn_op[b]:
            bucket = apply_cutoff(source_cutoff, op_a.momentum, op_b.momentum)
            if bucket is None:
                continue
            stats.buckets[bucket] += 1
            total_source = add_momenta(op_a.momentum, op_b.momentum)

            for op_c in qn_op[c]:
                for op_d in qn_op[d]:
                    total_sink = add_momenta(op_c.momentum, op_d.momentum)
                    if total_sink != change_sign_array(total_source):
                        continue
                    if apply_cutoff(sink_cutoff, op_c.momentum, op_d.momentum) is None:
                        continue

                    row = [None] * 4
                    row[a], row[b], row[c], row[d] = op_a, op_b, op_c, op_d
                    rows.append(tuple(row))
                    stats.combinations += 1
    return rows


def enumerate_four_leg_unrestricted(qn_op: Sequence[List[QuantumNumbers]],
                                    stats: EnumerationStats) -> List[QuantumNumberRow]:
    """All combinations, no conservation law imposed."""
    rows = list(itertools.product(qn_op[0], qn_op[1], qn_op[2], qn_op[3]))
    stats.combinations = len(rows)
    return rows


EnumerationRule = Callable[[Sequence[List[QuantumNumbers]], EnumerationStats],
                           List[QuantumNumberRow]]

ENUMERATION_RULES: Dict[str, EnumerationRule] = {
    "C1": enumerate_one_leg,
    "C1T": enumerate_one_leg,
    "C2+": enumerate_two_leg,
    "C20": enumerate_two_leg,
    "Check": enumerate_two_leg,
    "C3+": enumerate_three_leg,
    "C30": enumerate_three_leg,
    "C4+D": partial(enumerate_four_leg_paired, source=(0, 2), sink=(1, 3),
                    source_cutoff=CUTOFF_C4D, sink_cutoff=CUTOFF_C4D),
    "C4+C": partial(enumerate_four_leg_paired, source=(0, 2), sink=(1, 3),
                    source_cutoff=CUTOFF_C4C, sink_cutoff=CUTOFF_C4C),
    "C4+B": partial(enumerate_four_leg_paired, source=(0, 3), sink=(1, 2),
                    source_cutoff=CUTOFF_C4B_SOURCE,
                    sink_cutoff=CUTOFF_C4B_SINK),
    # TODO: restrict C4+V and C40* like C4+D once they enter a GEVP
    "C4+V": enumerate_four_leg_unrestricted,
    "C40D": enumerate_four_leg_unrestricted,
    "C40V": enumerate_four_leg_unrestricted,
    "C40C": enumerate_four_leg_unrestricted,
    "C40B": enumerate_four_leg_unrestricted,
}
"""Row construction per diagram type."""


def build_quantum_numbers_from_correlator_list(
    correlator: Correlator,
    operator_list: Sequence[OperatorGroup],
    verbose: bool = False,
) -> Tuple[List[QuantumNumberRow], EnumerationStats]:
    """
    Build all rows of quantum numbers for one correlator.

    Parameters
    ----------
    correlator : Correlator
        The requested correlator.
    operator_list : sequence of operator groups
        All operator groups of the run, indexed by
        ``correlator.operator_numbers``.
    verbose : bool
        Print the diagnostic counters.

    Returns
    -------
    rows : list of tuple of QuantumNumbers
        One tuple per accepted combination, one entry per leg.
    stats : EnumerationStats
        Diagnostic counters; they do not influence the result.

    Raises
    ------
    ConfigurationError
        If the diagram type is not known.
    """
    rule = ENUMERATION_RULES.get(correlator.type)
    if rule is None:
        raise ConfigurationError("Correlator type not known!")

    qn_op = [flatten_operator_group(operator_list[op_number])
             for op_number in correlator.operator_numbers]

    stats = EnumerationStats()
    rows = rule(qn_op, stats)

    if verbose:
        stats.report(correlator.type)

    return rows, stats
