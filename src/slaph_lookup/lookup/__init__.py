"""
Lookup tables for the contraction code.

Implements:
- Append-only deduplicated tables and their entry types
- VdaggerV, rVdaggerV and rVdaggerVr deduplication
- Random-vector index combinations
- Q1 and Q2 quarkline deduplication
- Correlator assembly per diagram type
- The driver that builds everything for one run
- JSON and npz export
"""

from .table import (
    LookupTable,
    VdaggerVQuantumNumbers,
    RandomIndexCombinationsQ1,
    RandomIndexCombinationsQ2,
    VdaggerVRandomLookup,
    QuarklineQ1Indices,
    QuarklineQ2Indices,
    CorrInfo,
    OperatorLookup,
    QuarklineLookup,
    CorrelatorLookup,
    LookupTables,
)

from .operators import (
    build_VdaggerV_lookup,
    build_rVdaggerV_lookup,
    build_rVdaggerVr_lookup,
    find_index_of_unity,
)

from .random_index import (
    set_rnd_vec_charged,
    set_rnd_vec_uncharged,
)

from .quarklines import (
    build_Q1_lookup,
    build_Q2_lookup,
)

from .builder import (
    CORRELATOR_HANDLERS,
    init_lookup_tables,
)

from .export import (
    lookup_tables_to_dict,
    dump_lookup_tables,
    save_index_arrays,
    load_index_arrays,
)

__all__ = [
    # Tables
    "LookupTable",
    "VdaggerVQuantumNumbers",
    "RandomIndexCombinationsQ1",
    "RandomIndexCombinationsQ2",
    "VdaggerVRandomLookup",
    "QuarklineQ1Indices",
    "QuarklineQ2Indices",
    "CorrInfo",
    "OperatorLookup",
    "QuarklineLookup",
    "CorrelatorLookup",
    "LookupTables",
    # Operators
    "build_VdaggerV_lookup",
    "build_rVdaggerV_lookup",
    "build_rVdaggerVr_lookup",
    "find_index_of_unity",
    # Random indices
    "set_rnd_vec_charged",
    "set_rnd_vec_uncharged",
    # Quarklines
    "build_Q1_lookup",
    "build_Q2_lookup",
    # Driver
    "CORRELATOR_HANDLERS",
    "init_lookup_tables",
    # Export
    "lookup_tables_to_dict",
    "dump_lookup_tables",
    "save_index_arrays",
    "load_index_arrays",
]
