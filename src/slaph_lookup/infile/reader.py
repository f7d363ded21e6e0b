"""
Reader for the contraction infile.

The infile is a plain ``key = value`` file. ``[section]`` headers group
keys; ``#`` starts a comment. The list keys may repeat and are collected in
order of appearance:

    start_config = 714
    output_path = ./correlators
    overwrite = no

    [quarks]
    quark = u:5:TB:2:EI:6:DF:4:/data/peram/light

    [operator_lists]
    operator_list = g5.d0.p0,1

    [correlator_lists]
    correlator_list = C2+:Q0:Op0:Q0:Op0

Keys the lookup tables do not need (lattice extent, eigenvector paths, ...)
are accepted and skipped.
"""

from pathlib import Path
from typing import Dict, List, Tuple, Union

from ..config import NUMBER_OF_LEGS
from ..errors import ConfigurationError
from .descriptors import (
    GlobalData,
    make_quark,
    quark_check,
    make_operator_list,
    make_correlator,
)


LIST_KEYS = ("quark", "operator_list", "correlator_list")
"""Keys that may appear more than once."""

SCALAR_KEYS = ("start_config", "output_path", "overwrite")
"""Run parameters consumed by the lookup tables."""


def parse_infile_lines(lines: List[str]) -> Tuple[Dict[str, List[str]], Dict[str, str]]:
    """
    Split infile lines into repeated list entries and scalar entries.

    Returns
    -------
    lists : dict
        Maps each of LIST_KEYS to its values in order.
    scalars : dict
        Maps every other key (section-less name) to its last value.
    """
    lists = {key: [] for key in LIST_KEYS}
    scalars = {}

    for number, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            continue
        if "=" not in line:
            raise ConfigurationError(f"Line {number} is not 'key = value': '{raw.rstrip()}'")
        key, value = (s.strip() for s in line.split("=", 1))
        if key in lists:
            lists[key].append(value)
        else:
            scalars[key] = value

    return lists, scalars


def check_references(data: GlobalData) -> None:
    """
    Make sure every correlator refers to declared quarks and operator groups.

    Leg counts are only checked for known diagram tags; an unknown tag is
    reported by the lookup-table builder.
    """
    for correlator in data.correlator_list:
        for q in correlator.quark_numbers:
            if not 0 <= q < len(data.quarks):
                raise ConfigurationError(
                    f"Correlator {correlator.type} uses undeclared quark Q{q}"
                )
        for op in correlator.operator_numbers:
            if not 0 <= op < len(data.operator_list):
                raise ConfigurationError(
                    f"Correlator {correlator.type} uses undeclared operator Op{op}"
                )
        legs = NUMBER_OF_LEGS.get(correlator.type)
        if legs is None:
            continue
        if len(correlator.operator_numbers) < legs or len(correlator.quark_numbers) < legs:
            raise ConfigurationError(
                f"Correlator {correlator.type} needs {legs} operators and "
                f"{legs} quarks, got {len(correlator.operator_numbers)} and "
                f"{len(correlator.quark_numbers)}"
            )


def build_global_data(lists: Dict[str, List[str]], scalars: Dict[str, str],
                      verbose: bool = False) -> GlobalData:
    """Construct and validate GlobalData from parsed infile entries."""
    data = GlobalData(verbose=verbose)

    for i, quark_string in enumerate(lists["quark"]):
        quark = make_quark(quark_string)
        quark.id = i
        quark_check(quark, verbose=verbose)
        data.quarks.append(quark)

    data.operator_list = [make_operator_list(s) for s in lists["operator_list"]]
    data.correlator_list = [make_correlator(s) for s in lists["correlator_list"]]

    if "start_config" in scalars:
        try:
            data.start_config = int(scalars["start_config"])
        except ValueError:
            raise ConfigurationError(
                f"start_config must be an integer, got '{scalars['start_config']}'"
            ) from None
    if "output_path" in scalars:
        data.path_output = scalars["output_path"]
    if "overwrite" in scalars:
        data.overwrite = scalars["overwrite"]

    if verbose:
        skipped = sorted(k for k in scalars if k not in SCALAR_KEYS)
        if skipped:
            print(f"Skipping infile keys not needed for lookup tables: {skipped}")

    check_references(data)
    return data


def read_infile(path: Union[str, Path], verbose: bool = False) -> GlobalData:
    """
    Read an infile and return the validated run description.

    Parameters
    ----------
    path : str or Path
        Location of the infile.
    verbose : bool
        Print each quark and skipped keys.

    Raises
    ------
    FileNotFoundError
        If the infile does not exist.
    ConfigurationError
        If any descriptor is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Infile not found: {path}")

    with open(path, "r") as f:
        lines = f.readlines()

    lists, scalars = parse_infile_lines(lines)
    return build_global_data(lists, scalars, verbose=verbose)
