"""
Global configuration and fixed parameters for the sLapH lookup tables.

Everything here is read-only data: the diagram tags the builder knows, the
momentum cutoff tables that limit the enumerated quantum numbers, and the
values accepted in quark descriptors.

Reference: Morningstar et al., Phys. Rev. D 83, 114505 (2011)
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union


# =============================================================================
# Diagram Topologies
# =============================================================================

CORRELATOR_TYPES = (
    "C1", "C1T",
    "C2+", "C20", "Check",
    "C3+", "C30",
    "C4+D", "C4+V", "C4+C", "C4+B",
    "C40D", "C40V", "C40C", "C40B",
)
"""Diagram type tags accepted in correlator descriptors."""

NUMBER_OF_LEGS = {
    "C1": 1, "C1T": 1,
    "C2+": 2, "C20": 2, "Check": 2,
    "C3+": 3, "C30": 3,
    "C4+D": 4, "C4+V": 4, "C4+C": 4, "C4+B": 4,
    "C40D": 4, "C40V": 4, "C40C": 4, "C40B": 4,
}
"""Number of field operators (legs) for each diagram type."""

CORRELATOR_TABLES = {
    "C1": "C1", "C1T": "C1T",
    "C2+": "C2c", "Check": "C2c", "C20": "C20",
    "C3+": "C3c", "C30": "C30",
    "C4+D": "C4cD", "C4+V": "C4cV", "C4+C": "C4cC", "C4+B": "C4cB",
    "C40D": "C40D", "C40V": "C40V", "C40C": "C40C", "C40B": "C40B",
}
"""Name of the CorrInfo table each diagram type writes into."""


# =============================================================================
# Momentum Cutoffs
# =============================================================================

Momentum = Tuple[int, int, int]

ZERO_VECTOR: Momentum = (0, 0, 0)
"""Zero momentum / zero displacement."""


@dataclass(frozen=True)
class MomentumCutoff:
    """
    Acceptance rule for one pair of legs carrying a common total momentum.

    A pair (a, b) with total momentum P = p_a + p_b is accepted if

    - P = 0:  |p_a|^2 <= rest_max, and |p_a|^2 != 0 if rest_excludes_zero
    - P != 0: P is a key of ``moving`` and |p_a|^2 + |p_b|^2 <= moving[P]

    Keys of ``moving`` are |P|^2 when ``by_vector`` is False and the momentum
    3-vector P itself when it is True.
    """
    name: str
    rest_max: int
    rest_excludes_zero: bool
    moving: Dict[Union[int, Momentum], int] = field(default_factory=dict)
    by_vector: bool = False


# Values are physics acceptance criteria and must not be tuned.
CUTOFF_C3 = MomentumCutoff(
    "C3", rest_max=3, rest_excludes_zero=True,
    moving={1: 5, 2: 6, 3: 7, 4: 4},
)
CUTOFF_C4D = MomentumCutoff(
    "C4D", rest_max=3, rest_excludes_zero=False,
    moving={1: 5, 2: 6, 3: 7, 4: 4},
)
CUTOFF_C4C = MomentumCutoff(
    "C4C", rest_max=4, rest_excludes_zero=False,
    moving={1: 5, 2: 6, 3: 7, 4: 4},
)
CUTOFF_C4B_SOURCE = MomentumCutoff(
    "C4B source", rest_max=3, rest_excludes_zero=True,
    moving={(0, 0, 1): 5, (0, 1, 1): 6, (1, 1, 1): 7, (0, 0, 2): 4},
    by_vector=True,
)
CUTOFF_C4B_SINK = MomentumCutoff(
    "C4B sink", rest_max=3, rest_excludes_zero=True,
    moving={(0, 0, -1): 5, (0, -1, -1): 6, (-1, -1, -1): 7, (0, 0, -2): 4},
    by_vector=True,
)

NUMBER_OF_MOMENTUM_BUCKETS = 5
"""Diagnostic counters: one for P = 0 plus one per moving reference frame."""


# =============================================================================
# Quark Descriptors
# =============================================================================

QUARK_FLAVORS = ("u", "d", "s", "c")
"""Allowed quark flavor letters."""

DILUTION_T_TYPES = ("TI", "TB", "TF")
"""Time dilution: interlace, block, full."""

DILUTION_E_TYPES = ("EI", "EB", "EF")
"""Eigenvector-space dilution: interlace, block, full."""

DILUTION_D_TYPES = ("DI", "DB", "DF")
"""Dirac-space dilution: interlace, block, full."""

MAX_DILUTION_D = 4
"""Number of Dirac components, upper bound for Dirac dilution blocks."""

QUARK_DESCRIPTOR_FIELDS = 9
"""flavor:n_rnd:dilT_type:dilT:dilE_type:dilE:dilD_type:dilD:path"""


# =============================================================================
# Run Parameters
# =============================================================================

DEFAULT_START_CONFIG = 0
"""Configuration number used in output file names if none is given."""

DEFAULT_OUTPUT_PATH = "."
"""Output directory if none is given."""

DEFAULT_OVERWRITE = "no"
"""Overwrite policy for output files. Accepted, currently without effect."""

NOT_FOUND = -1
"""Sentinel for index_of_unity when no operator at rest is present."""

HDF5_SUFFIX = ".h5"
"""Suffix of correlator output files."""

CONFIG_DIGITS = 4
"""Zero padding of the configuration number in output file names."""
