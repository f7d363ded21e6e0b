"""
Quantum numbers of correlation functions.

Implements:
- 3-momentum arithmetic on integer tuples
- Enumeration of quantum-number rows per diagram type, with momentum
  conservation and cutoffs
- Output file and dataset names
"""

from .momentum import (
    change_sign_array,
    compute_norm_squ,
    add_momenta,
    add_momenta_squared,
    is_opposite,
)

from .enumeration import (
    QuantumNumbers,
    QuantumNumberRow,
    EnumerationStats,
    flatten_operator_group,
    apply_cutoff,
    ENUMERATION_RULES,
    build_quantum_numbers_from_correlator_list,
)

from .naming import (
    build_hdf5_filename,
    build_dataset_name,
    build_correlator_names,
)

__all__ = [
    # Momentum
    "change_sign_array",
    "compute_norm_squ",
    "add_momenta",
    "add_momenta_squared",
    "is_opposite",
    # Enumeration
    "QuantumNumbers",
    "QuantumNumberRow",
    "EnumerationStats",
    "flatten_operator_group",
    "apply_cutoff",
    "ENUMERATION_RULES",
    "build_quantum_numbers_from_correlator_list",
    # Naming
    "build_hdf5_filename",
    "build_dataset_name",
    "build_correlator_names",
]
