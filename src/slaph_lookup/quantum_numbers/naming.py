"""
Output names for correlators.

Every row of quantum numbers gets

- an output directory: ``<outpath>/``
- an output file shared by the whole diagram type and configuration:
  ``<type>_cnfg<cnfg:04>.h5``
- a dataset name: ``<type>_<flavors>`` followed by
  ``_p<momentum>.d<displacement>.g<gamma>`` for each leg

Integers are concatenated without separators, so p = (-1, 0, 1) reads
``p-101``. The downstream writer uses these strings verbatim.
"""

from typing import List, Sequence, Tuple

from ..config import CONFIG_DIGITS, HDF5_SUFFIX
from .enumeration import QuantumNumberRow


def _digits(values: Sequence[int]) -> str:
    return "".join(str(v) for v in values)


def build_hdf5_filename(corr_type: str, cnfg: int) -> str:
    """
    File name for one diagram type and configuration.

    Examples
    --------
    >>> build_hdf5_filename("C20", 714)
    'C20_cnfg0714.h5'
    """
    return f"{corr_type}_cnfg{str(cnfg).rjust(CONFIG_DIGITS, '0')}{HDF5_SUFFIX}"


def build_dataset_name(corr_type: str, quark_types: Sequence[str],
                       qn_row: QuantumNumberRow) -> str:
    """
    Dataset name for one row of quantum numbers.

    Examples
    --------
    >>> from slaph_lookup.quantum_numbers.enumeration import QuantumNumbers
    >>> qn = QuantumNumbers((0, 0, 1), (0, 0, 0), (5,))
    >>> build_dataset_name("C1", ["u"], (qn,))
    'C1_u_p001.d000.g5'
    """
    name = corr_type + "_" + "".join(quark_types)
    for qn in qn_row:
        name += (f"_p{_digits(qn.momentum)}"
                 f".d{_digits(qn.displacement)}"
                 f".g{_digits(qn.gamma)}")
    return name


def build_correlator_names(
    corr_type: str,
    cnfg: int,
    outpath: str,
    overwrite: str,
    quark_types: Sequence[str],
    quantum_numbers: Sequence[QuantumNumberRow],
) -> Tuple[List[Tuple[str, str]], List[str]]:
    """
    Build output locations and dataset names for all rows of a correlator.

    Parameters
    ----------
    corr_type : str
        Diagram tag.
    cnfg : int
        First gauge configuration of the run.
    outpath : str
        Output directory from the infile.
    overwrite : str
        Overwrite policy. Existing files are not checked, so this has no
        effect.
    quark_types : sequence of str
        Flavor letter of each quark in the correlator.
    quantum_numbers : sequence of rows
        Rows from the enumeration.

    Returns
    -------
    corr_names : list of (str, str)
        (output directory, output file) per row.
    hdf5_dataset_name : list of str
        Dataset name per row.
    """
    pathname = outpath + "/"
    filename = build_hdf5_filename(corr_type, cnfg)

    corr_names = []
    hdf5_dataset_name = []
    for qn_row in quantum_numbers:
        corr_names.append((pathname, filename))
        hdf5_dataset_name.append(build_dataset_name(corr_type, quark_types, qn_row))

    return corr_names, hdf5_dataset_name
