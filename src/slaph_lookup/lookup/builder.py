"""
Top-level construction of all lookup tables.

For every requested correlator, in infile order:

1. enumerate its rows of quantum numbers
2. build output file and dataset names
3. deduplicate VdaggerV operators
4. build random index combinations, rVdaggerV / rVdaggerVr, quarklines and
   correlator entries according to the diagram type

All tables are shared between correlators, so ids depend on the order of the
correlators in the infile. After the loop the id of the unit operator is
recorded.

Usage
-----
    python -m slaph_lookup.run infile.ini --verbose
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Sequence, Tuple

from ..config import CORRELATOR_TABLES
from ..errors import ConfigurationError
from ..infile.descriptors import Correlator, GlobalData
from ..quantum_numbers.enumeration import (
    QuantumNumberRow,
    build_quantum_numbers_from_correlator_list,
)
from ..quantum_numbers.naming import build_correlator_names
from .correlators import (
    build_C1_lookup,
    build_C2c_lookup,
    build_C3c_lookup,
    build_C4c_factorized_lookup,
    build_C4c_single_trace_lookup,
    build_C20_lookup,
    build_C40_factorized_lookup,
    build_Q1_trace_lookup,
)
from .operators import (
    VdvIndex,
    build_VdaggerV_lookup,
    build_rVdaggerV_lookup,
    build_rVdaggerVr_lookup,
    find_index_of_unity,
)
from .quarklines import build_Q1_lookup, build_Q2_lookup, make_index_table
from .random_index import set_rnd_vec_charged, set_rnd_vec_uncharged
from .table import LookupTables


@dataclass
class CorrelatorRequest:
    """One correlator after enumeration, naming and VdaggerV deduplication."""
    correlator: Correlator
    quantum_numbers: List[QuantumNumberRow]
    correlator_names: List[Tuple[str, str]]
    hdf5_dataset_name: List[str]
    vdv_indices: List[List[VdvIndex]]

    @property
    def q(self) -> List[int]:
        return self.correlator.quark_numbers


# =============================================================================
# Per-diagram construction
# =============================================================================

def _build_Q1_legs(req: CorrelatorRequest, data: GlobalData, tables: LookupTables,
                   rvdv_indices, legs: Sequence[Tuple[int, int]]):
    """Fill the Q1 indices of each leg from (used, connected) quark pairs."""
    Q1_indices = make_index_table(req.quantum_numbers)
    for operator_id, (used, connected) in enumerate(legs):
        build_Q1_lookup(used, connected, operator_id, False, req.quantum_numbers,
                        data.quarks, rvdv_indices, tables.operator.ricQ2_lookup,
                        tables.quarkline.Q1, Q1_indices)
    return Q1_indices


def _uncharged_rvdv(req: CorrelatorRequest, data: GlobalData,
                    tables: LookupTables, quark_ids: Sequence[int]):
    op = tables.operator
    rnd_vec_id = [set_rnd_vec_uncharged(data.quarks, q, op.ricQ1_lookup)
                  for q in quark_ids]
    return build_rVdaggerV_lookup(rnd_vec_id, req.vdv_indices,
                                  op.rvdaggerv_lookuptable)


def _build_C1(req: CorrelatorRequest, data: GlobalData,
              tables: LookupTables) -> None:
    q = req.q
    op = tables.operator
    rvdv_indices = _uncharged_rvdv(req, data, tables, [q[0]])

    Q1_indices = make_index_table(req.quantum_numbers)
    build_Q1_lookup(q[0], q[0], 0, True, req.quantum_numbers, data.quarks,
                    rvdv_indices, op.ricQ2_lookup, tables.quarkline.Q1,
                    Q1_indices)
    build_C1_lookup(req.quantum_numbers, req.correlator_names,
                    req.hdf5_dataset_name, Q1_indices, tables.correlator,
                    table_name=CORRELATOR_TABLES[req.correlator.type])


def _build_C2(req: CorrelatorRequest, data: GlobalData,
              tables: LookupTables) -> None:
    q = req.q
    op = tables.operator
    rnd_vec_id = [set_rnd_vec_charged(data.quarks, q[0], q[1], False,
                                      op.ricQ2_lookup)]
    rvdvr_indices = build_rVdaggerVr_lookup(rnd_vec_id, req.vdv_indices,
                                            op.rvdaggervr_lookuptable)

    Q2_indices = make_index_table(req.quantum_numbers)
    build_Q2_lookup(q[0], q[1], 0, req.quantum_numbers, data.quarks,
                    req.vdv_indices, op.ricQ2_lookup, tables.quarkline.Q2V,
                    Q2_indices)
    build_C2c_lookup(req.quantum_numbers, req.correlator_names,
                     req.hdf5_dataset_name, rvdvr_indices, Q2_indices,
                     tables.correlator)


def _build_C3(req: CorrelatorRequest, data: GlobalData,
              tables: LookupTables) -> None:
    q = req.q
    op = tables.operator
    # The third combination only pads rnd_vec_id to one entry per leg.
    rnd_vec_id = [
        set_rnd_vec_uncharged(data.quarks, q[1], op.ricQ1_lookup),
        set_rnd_vec_charged(data.quarks, q[2], q[0], False, op.ricQ2_lookup),
        set_rnd_vec_uncharged(data.quarks, q[0], op.ricQ1_lookup),
    ]
    rvdv_indices = build_rVdaggerV_lookup(rnd_vec_id, req.vdv_indices,
                                          op.rvdaggerv_lookuptable)
    rvdvr_indices = build_rVdaggerVr_lookup(rnd_vec_id, req.vdv_indices,
                                            op.rvdaggervr_lookuptable)

    Q1_indices = make_index_table(req.quantum_numbers)
    build_Q1_lookup(q[1], q[2], 1, False, req.quantum_numbers, data.quarks,
                    rvdv_indices, op.ricQ2_lookup, tables.quarkline.Q1,
                    Q1_indices)
    Q2_indices = make_index_table(req.quantum_numbers)
    build_Q2_lookup(q[2], q[0], 0, req.quantum_numbers, data.quarks,
                    req.vdv_indices, op.ricQ2_lookup, tables.quarkline.Q2L,
                    Q2_indices)
    build_C3c_lookup(req.quantum_numbers, req.correlator_names,
                     req.hdf5_dataset_name, rvdvr_indices, Q1_indices,
                     Q2_indices, tables.correlator)


def _build_C4(req: CorrelatorRequest, data: GlobalData, tables: LookupTables,
              Q2_table: str, assemble: Callable) -> None:
    q = req.q
    op = tables.operator
    rnd_vec_id = [
        set_rnd_vec_charged(data.quarks, q[0], q[1], False, op.ricQ2_lookup),
        set_rnd_vec_charged(data.quarks, q[2], q[3], False, op.ricQ2_lookup),
    ]
    rvdvr_indices = build_rVdaggerVr_lookup(rnd_vec_id, req.vdv_indices,
                                            op.rvdaggervr_lookuptable)

    Q2 = getattr(tables.quarkline, Q2_table)
    Q2_indices = make_index_table(req.quantum_numbers)
    build_Q2_lookup(q[0], q[1], 0, req.quantum_numbers, data.quarks,
                    req.vdv_indices, op.ricQ2_lookup, Q2, Q2_indices)
    build_Q2_lookup(q[2], q[3], 2, req.quantum_numbers, data.quarks,
                    req.vdv_indices, op.ricQ2_lookup, Q2, Q2_indices)
    assemble(CORRELATOR_TABLES[req.correlator.type], req.quantum_numbers,
             req.correlator_names, req.hdf5_dataset_name, rvdvr_indices,
             Q2_indices, tables.correlator)


def _build_C20(req: CorrelatorRequest, data: GlobalData,
               tables: LookupTables) -> None:
    q = req.q
    rvdv_indices = _uncharged_rvdv(req, data, tables, q[:2])
    Q1_indices = _build_Q1_legs(req, data, tables, rvdv_indices,
                                [(q[0], q[1]), (q[1], q[0])])
    build_C20_lookup(req.correlator_names, req.hdf5_dataset_name, Q1_indices,
                     tables.correlator)


def _build_C30(req: CorrelatorRequest, data: GlobalData,
               tables: LookupTables) -> None:
    q = req.q
    rvdv_indices = _uncharged_rvdv(req, data, tables, q[:3])
    # TODO: swap to (connected, used) together with the contraction code
    Q1_indices = _build_Q1_legs(req, data, tables, rvdv_indices,
                                [(q[0], q[1]), (q[1], q[2]), (q[2], q[0])])
    build_Q1_trace_lookup("C30", req.correlator_names, req.hdf5_dataset_name,
                          Q1_indices, tables.correlator)


def _build_C40_factorized(req: CorrelatorRequest, data: GlobalData,
                          tables: LookupTables) -> None:
    q = req.q
    rvdv_indices = _uncharged_rvdv(req, data, tables, q[:4])
    Q1_indices = _build_Q1_legs(
        req, data, tables, rvdv_indices,
        [(q[0], q[1]), (q[1], q[0]), (q[2], q[3]), (q[3], q[2])],
    )
    build_C40_factorized_lookup(CORRELATOR_TABLES[req.correlator.type],
                                req.correlator_names, req.hdf5_dataset_name,
                                Q1_indices, tables.correlator)


def _build_C40_single_trace(req: CorrelatorRequest, data: GlobalData,
                            tables: LookupTables) -> None:
    q = req.q
    rvdv_indices = _uncharged_rvdv(req, data, tables, q[:4])
    Q1_indices = _build_Q1_legs(
        req, data, tables, rvdv_indices,
        [(q[0], q[1]), (q[1], q[2]), (q[2], q[3]), (q[3], q[0])],
    )
    build_Q1_trace_lookup(CORRELATOR_TABLES[req.correlator.type],
                          req.correlator_names, req.hdf5_dataset_name,
                          Q1_indices, tables.correlator)


CorrelatorHandler = Callable[[CorrelatorRequest, GlobalData, LookupTables], None]

CORRELATOR_HANDLERS: Dict[str, CorrelatorHandler] = {
    "C1": _build_C1,
    "C1T": _build_C1,
    "C2+": _build_C2,
    "Check": _build_C2,
    "C3+": _build_C3,
    "C4+D": partial(_build_C4, Q2_table="Q2V",
                    assemble=build_C4c_factorized_lookup),
    "C4+V": partial(_build_C4, Q2_table="Q2V",
                    assemble=build_C4c_factorized_lookup),
    "C4+C": partial(_build_C4, Q2_table="Q2V",
                    assemble=build_C4c_single_trace_lookup),
    "C4+B": partial(_build_C4, Q2_table="Q2L",
                    assemble=build_C4c_single_trace_lookup),
    "C20": _build_C20,
    "C30": _build_C30,
    "C40D": _build_C40_factorized,
    "C40V": _build_C40_factorized,
    "C40C": _build_C40_single_trace,
    "C40B": _build_C40_single_trace,
}
"""Table construction per diagram type."""


# =============================================================================
# Driver
# =============================================================================

def prepare_correlator(correlator: Correlator, data: GlobalData,
                       tables: LookupTables) -> CorrelatorRequest:
    """Enumerate, name and deduplicate the operators of one correlator."""
    quantum_numbers, _ = build_quantum_numbers_from_correlator_list(
        correlator, data.operator_list, verbose=data.verbose
    )
    correlator_names, hdf5_dataset_name = build_correlator_names(
        correlator.type, data.start_config, data.path_output, data.overwrite,
        data.quark_types(correlator), quantum_numbers,
    )
    vdv_indices = build_VdaggerV_lookup(quantum_numbers,
                                        tables.operator.vdaggerv_lookup)
    return CorrelatorRequest(
        correlator=correlator,
        quantum_numbers=quantum_numbers,
        correlator_names=correlator_names,
        hdf5_dataset_name=hdf5_dataset_name,
        vdv_indices=vdv_indices,
    )


def init_lookup_tables(data: GlobalData) -> LookupTables:
    """
    Build every lookup table needed for the correlators of a run.

    Parameters
    ----------
    data : GlobalData
        Quarks, operator groups, correlators and output settings.

    Returns
    -------
    LookupTables
        Operator, quarkline and correlator lookups.

    Raises
    ------
    ConfigurationError
        If a correlator has an unknown diagram type. Nothing is added to
        the tables for that correlator.
    InsufficientRandomVectorsError
        If a quark has too few random vectors for the diagrams it enters.
    """
    tables = LookupTables()

    for correlator in data.correlator_list:
        handler = CORRELATOR_HANDLERS.get(correlator.type)
        if handler is None:
            raise ConfigurationError("Correlator type not known!")

        req = prepare_correlator(correlator, data, tables)
        handler(req, data, tables)

        if data.verbose:
            print(f"  {correlator.type}: {len(req.quantum_numbers)} rows, "
                  f"{len(tables.operator.vdaggerv_lookup)} VdaggerV, "
                  f"{len(tables.quarkline.Q1)} Q1, "
                  f"{len(tables.quarkline.Q2V) + len(tables.quarkline.Q2L)} Q2")

    tables.operator.index_of_unity = find_index_of_unity(
        tables.operator.vdaggerv_lookup
    )

    if data.verbose:
        print("Lookup tables:")
        print(tables.summary())

    return tables
