"""
Infile handling.

Implements:
- Descriptor dataclasses for quarks, operator groups and correlators
- Parsing of the compact descriptor strings
- Reading a whole infile into GlobalData
"""

from .descriptors import (
    Quark,
    Operator,
    OperatorGroup,
    Correlator,
    GlobalData,
    make_quark,
    quark_check,
    make_operator,
    make_operator_list,
    make_correlator,
    create_all_momentum_combinations,
)

from .reader import (
    parse_infile_lines,
    build_global_data,
    read_infile,
)

__all__ = [
    # Descriptors
    "Quark",
    "Operator",
    "OperatorGroup",
    "Correlator",
    "GlobalData",
    "make_quark",
    "quark_check",
    "make_operator",
    "make_operator_list",
    "make_correlator",
    "create_all_momentum_combinations",
    # Reader
    "parse_infile_lines",
    "build_global_data",
    "read_infile",
]
